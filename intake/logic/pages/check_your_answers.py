"""Check answers: final confirmation before submission."""

from __future__ import annotations

from typing import Dict

from intake.logic.pages.base import BasePage, END_OF_TASK, TASK_LIST, require_choice


class CheckYourAnswers(BasePage):
    name = "check-your-answers"
    task_name = "check-your-answers"
    body_properties = ("checkYourAnswers",)
    title_template = "Check your answers before sending {name}'s application"

    def previous(self) -> str:
        return TASK_LIST

    def next(self) -> str:
        return END_OF_TASK

    def errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        require_choice(
            errors,
            self.body,
            "checkYourAnswers",
            ("confirmed",),
            "You must confirm the information provided is complete, accurate and up to date",
        )
        return errors
