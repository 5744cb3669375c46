"""About the person: equality and diversity monitoring pages.

The task opens with a gate: answering "no" on `will-answer` ends the task
immediately, and only an "asian" ethnic group leads on to the background page.
"""

from __future__ import annotations

from typing import Any, Dict, List

from intake.logic.pages.base import (
    BasePage,
    END_OF_TASK,
    TASK_LIST,
    as_list,
    is_answered,
    require_choice,
    without_details,
)


class WillAnswer(BasePage):
    name = "will-answer"
    task_name = "equality-and-diversity-monitoring"
    body_properties = ("willAnswer",)
    title_template = "Equality and diversity questions for {name}"

    def previous(self) -> str:
        return TASK_LIST

    def next(self) -> str:
        if self.body.get("willAnswer") == "yes":
            return "disability"
        return END_OF_TASK

    def errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        require_choice(errors, self.body, "willAnswer", ("yes", "no"), "Choose either Yes or No")
        return errors


class Disability(BasePage):
    name = "disability"
    task_name = "equality-and-diversity-monitoring"
    body_properties = ("hasDisability", "typeOfDisability", "otherDisability")
    title_template = "Equality and diversity questions for {name}"

    def __init__(self, body, application, previous_page: str = ""):
        super().__init__(body, application, previous_page)
        if "typeOfDisability" in self.body:
            self.body["typeOfDisability"] = as_list(self.body["typeOfDisability"])

    def previous(self) -> str:
        return "will-answer"

    def next(self) -> str:
        return "sex-and-gender"

    def errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        require_choice(
            errors,
            self.body,
            "hasDisability",
            ("yes", "no", "preferNotToSay"),
            "Choose either Yes, No or Prefer not to say",
        )
        if self.body.get("hasDisability") == "yes":
            types = as_list(self.body.get("typeOfDisability"))
            if not types:
                errors["typeOfDisability"] = "Select a type of disability"
            elif "other" in types and not is_answered(self.body.get("otherDisability")):
                errors["otherDisability"] = "Enter the other type"
        return errors

    def on_save(self) -> Dict[str, Any]:
        body = without_details(self.body, "hasDisability", "yes", ("typeOfDisability", "otherDisability"))
        if "other" not in as_list(body.get("typeOfDisability")):
            body.pop("otherDisability", None)
        return body


class SexAndGender(BasePage):
    name = "sex-and-gender"
    task_name = "equality-and-diversity-monitoring"
    body_properties = ("sex", "gender", "optionalGenderIdentity")
    title_template = "Equality and diversity questions for {name}"

    def previous(self) -> str:
        return "disability"

    def next(self) -> str:
        return "ethnic-group"

    def errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        require_choice(
            errors, self.body, "sex", ("female", "male", "preferNotToSay"), "Choose either Female, Male or Prefer not to say"
        )
        require_choice(
            errors, self.body, "gender", ("yes", "no", "preferNotToSay"), "Choose either Yes, No or Prefer not to say"
        )
        return errors

    def on_save(self) -> Dict[str, Any]:
        return without_details(self.body, "gender", "no", ("optionalGenderIdentity",))

    def sex_items(self) -> List[Dict[str, Any]]:
        return _radio_items(self.questions["sex"]["answers"], self.body.get("sex"))

    def gender_items(self, optional_gender_identity_html: str = "") -> List[Dict[str, Any]]:
        items = _radio_items(self.questions["gender"]["answers"], self.body.get("gender"))
        for item in items:
            if item["value"] == "no" and optional_gender_identity_html:
                item["conditional"] = {"html": optional_gender_identity_html}
        return items


class EthnicGroup(BasePage):
    name = "ethnic-group"
    task_name = "equality-and-diversity-monitoring"
    body_properties = ("ethnicGroup",)
    title_template = "Equality and diversity questions for {name}"

    def previous(self) -> str:
        return "sex-and-gender"

    def next(self) -> str:
        if self.body.get("ethnicGroup") == "asian":
            return "asian-background"
        return END_OF_TASK

    def errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        require_choice(
            errors, self.body, "ethnicGroup", self.questions["ethnicGroup"]["answers"], "Select an ethnic group"
        )
        return errors


class AsianBackground(BasePage):
    name = "asian-background"
    task_name = "equality-and-diversity-monitoring"
    body_properties = ("asianBackground", "optionalAsianBackground")
    title_template = "Equality and diversity questions for {name}"

    def previous(self) -> str:
        return "ethnic-group"

    def next(self) -> str:
        return END_OF_TASK

    def errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        require_choice(
            errors,
            self.body,
            "asianBackground",
            self.questions["asianBackground"]["answers"],
            "Select an Asian or Asian British background, or 'Prefer not to say'",
        )
        return errors

    def on_save(self) -> Dict[str, Any]:
        return without_details(self.body, "asianBackground", "other", ("optionalAsianBackground",))


def _radio_items(answers: Dict[str, str], selected: Any) -> List[Dict[str, Any]]:
    return [{"value": value, "text": text, "checked": value == selected} for value, text in answers.items()]
