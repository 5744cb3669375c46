"""Offence and licence information: previous convictions."""

from __future__ import annotations

from typing import Any, Dict, List

from intake.logic.pages.base import BasePage, END_OF_TASK, TASK_LIST, require_choice


class AnyPreviousConvictions(BasePage):
    name = "any-previous-convictions"
    task_name = "offending-history"
    body_properties = ("hasAnyPreviousConvictions",)
    title_template = "Does {name} have any previous convictions?"

    def previous(self) -> str:
        return TASK_LIST

    def next(self) -> str:
        return END_OF_TASK

    def errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        require_choice(
            errors,
            self.body,
            "hasAnyPreviousConvictions",
            self.questions["hasAnyPreviousConvictions"]["answers"],
            "Confirm whether the applicant has any previous convictions",
        )
        return errors

    def items(self) -> List[Dict[str, Any]]:
        selected = self.body.get("hasAnyPreviousConvictions")
        answers = self.questions["hasAnyPreviousConvictions"]["answers"]
        return [{"value": value, "text": text, "checked": value == selected} for value, text in answers.items()]
