"""Before you start: eligibility confirmation."""

from __future__ import annotations

from typing import Dict

from intake.logic.pages.base import BasePage, END_OF_TASK, TASK_LIST, require_choice


class ConfirmEligibility(BasePage):
    name = "confirm-eligibility"
    task_name = "confirm-eligibility"
    body_properties = ("isEligible",)
    title_template = "Check {name} is eligible for Short-Term Accommodation (CAS-2)"

    def previous(self) -> str:
        return TASK_LIST

    def next(self) -> str:
        return END_OF_TASK

    def errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        require_choice(
            errors,
            self.body,
            "isEligible",
            ("yes", "no"),
            f"Confirm whether {self.person_name} is eligible or not eligible",
        )
        return errors
