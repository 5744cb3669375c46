"""Area and funding: how the applicant will pay."""

from __future__ import annotations

from typing import Any, Dict, List

from intake.logic.pages.base import BasePage, END_OF_TASK, TASK_LIST, require_choice

BENEFITS_HINT = (
    "This includes Housing Benefit and Universal Credit, Disability Living Allowance, "
    "and Employment and Support Allowance"
)


class FundingSource(BasePage):
    name = "funding-source"
    task_name = "funding-information"
    body_properties = ("fundingSource",)
    title_template = "Funding information for {name}"

    def previous(self) -> str:
        return TASK_LIST

    def next(self) -> str:
        return END_OF_TASK

    def errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        require_choice(
            errors, self.body, "fundingSource", self.questions["fundingSource"]["answers"], "Select a funding source"
        )
        return errors

    def items(self) -> List[Dict[str, Any]]:
        selected = self.body.get("fundingSource")
        items = []
        for value, text in self.questions["fundingSource"]["answers"].items():
            item: Dict[str, Any] = {"value": value, "text": text, "checked": value == selected}
            if value == "benefits":
                item["hint"] = {"text": BENEFITS_HINT}
            items.append(item)
        return items
