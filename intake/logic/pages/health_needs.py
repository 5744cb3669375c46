"""Risks and needs: health needs pages."""

from __future__ import annotations

from typing import Any, Dict

from intake.logic.pages.base import (
    BasePage,
    END_OF_TASK,
    TASK_LIST,
    require_choice,
    require_detail_when,
    without_details,
)

YES_OR_NO = ("yes", "no")


class SubstanceMisuse(BasePage):
    name = "substance-misuse"
    task_name = "health-needs"
    body_properties = (
        "usesIllegalSubstances",
        "substanceMisuseHistory",
        "substanceMisuseDetail",
        "engagedWithDrugAndAlcoholService",
        "drugAndAlcoholServiceDetail",
        "requiresSubstituteMedication",
        "substituteMedicationDetail",
    )
    title_template = "Health needs for {name}"

    def previous(self) -> str:
        return TASK_LIST

    def next(self) -> str:
        return "communication-and-language"

    def errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        require_choice(
            errors, self.body, "usesIllegalSubstances", YES_OR_NO, "Confirm whether they take any illegal substances"
        )
        require_choice(
            errors,
            self.body,
            "engagedWithDrugAndAlcoholService",
            YES_OR_NO,
            "Confirm whether they are engaged with a drug and alcohol service",
        )
        require_choice(
            errors,
            self.body,
            "requiresSubstituteMedication",
            YES_OR_NO,
            "Confirm whether they require substitute medication",
        )
        require_detail_when(
            errors, self.body, "usesIllegalSubstances", "yes", "substanceMisuseHistory",
            "Name the illegal substances they take",
        )
        require_detail_when(
            errors, self.body, "usesIllegalSubstances", "yes", "substanceMisuseDetail",
            "Describe how often they take substances, by what method and how much",
        )
        require_detail_when(
            errors, self.body, "engagedWithDrugAndAlcoholService", "yes", "drugAndAlcoholServiceDetail",
            "Provide the name of the drug and alcohol service",
        )
        require_detail_when(
            errors, self.body, "requiresSubstituteMedication", "yes", "substituteMedicationDetail",
            "Provide details of their substitute medication",
        )
        return errors

    def on_save(self) -> Dict[str, Any]:
        body = without_details(
            self.body, "usesIllegalSubstances", "yes", ("substanceMisuseHistory", "substanceMisuseDetail")
        )
        body = without_details(body, "engagedWithDrugAndAlcoholService", "yes", ("drugAndAlcoholServiceDetail",))
        return without_details(body, "requiresSubstituteMedication", "yes", ("substituteMedicationDetail",))


class CommunicationAndLanguage(BasePage):
    name = "communication-and-language"
    task_name = "health-needs"
    body_properties = (
        "hasCommunicationNeeds",
        "communicationDetail",
        "requiresInterpreter",
        "interpretationDetail",
        "hasSupportNeeds",
        "supportDetail",
    )
    title_template = "Communication and language needs for {name}"

    def previous(self) -> str:
        return "substance-misuse"

    def next(self) -> str:
        return "other-health"

    def errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        require_choice(
            errors, self.body, "hasCommunicationNeeds", YES_OR_NO,
            "Confirm whether they have additional communication needs",
        )
        require_choice(errors, self.body, "requiresInterpreter", YES_OR_NO, "Confirm whether they need an interpreter")
        require_choice(
            errors, self.body, "hasSupportNeeds", YES_OR_NO,
            "Confirm whether they need support to see, hear, speak or understand",
        )
        require_detail_when(
            errors, self.body, "hasCommunicationNeeds", "yes", "communicationDetail",
            "Describe their additional communication needs",
        )
        require_detail_when(
            errors, self.body, "requiresInterpreter", "yes", "interpretationDetail",
            "Specify the language the interpreter is needed for",
        )
        require_detail_when(errors, self.body, "hasSupportNeeds", "yes", "supportDetail", "Describe their support needs")
        return errors

    def on_save(self) -> Dict[str, Any]:
        body = without_details(self.body, "hasCommunicationNeeds", "yes", ("communicationDetail",))
        body = without_details(body, "requiresInterpreter", "yes", ("interpretationDetail",))
        return without_details(body, "hasSupportNeeds", "yes", ("supportDetail",))


class OtherHealth(BasePage):
    name = "other-health"
    task_name = "health-needs"
    body_properties = (
        "hasLongTermHealthCondition",
        "healthConditionDetail",
        "hasHadStroke",
        "hasSeizures",
        "seizuresDetail",
        "beingTreatedForCancer",
    )
    title_template = "Other health needs for {name}"

    def previous(self) -> str:
        return "communication-and-language"

    def next(self) -> str:
        return END_OF_TASK

    def errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        require_choice(
            errors, self.body, "hasLongTermHealthCondition", YES_OR_NO,
            "Confirm whether they have a long term health condition",
        )
        require_choice(errors, self.body, "hasSeizures", YES_OR_NO, "Confirm whether they have seizures")
        require_choice(
            errors, self.body, "beingTreatedForCancer", YES_OR_NO, "Confirm whether they are receiving cancer treatment"
        )
        require_detail_when(
            errors, self.body, "hasLongTermHealthCondition", "yes", "healthConditionDetail",
            "Provide details of their health conditions",
        )
        if self.body.get("hasLongTermHealthCondition") == "yes":
            require_choice(errors, self.body, "hasHadStroke", YES_OR_NO, "Confirm whether they have had a stroke")
        require_detail_when(
            errors, self.body, "hasSeizures", "yes", "seizuresDetail",
            "Provide details of the seizure type and treatment",
        )
        return errors

    def on_save(self) -> Dict[str, Any]:
        body = without_details(
            self.body, "hasLongTermHealthCondition", "yes", ("healthConditionDetail", "hasHadStroke")
        )
        return without_details(body, "hasSeizures", "yes", ("seizuresDetail",))
