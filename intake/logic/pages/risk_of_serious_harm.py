"""Risks and needs: risk of serious harm (RoSH) pages.

The task usually starts at `oasys-import` (see oasys_import.py), which
pre-fills the risk-to-others, risk-factors and reducing-risk bags from OASys.
Imported bags are marked with `dateOfOasysImport`; the OASys import bag
itself records `oasysImportDate`.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from intake.logic.date_formats import iso_to_ui_date
from intake.logic.pages.base import (
    BasePage,
    END_OF_TASK,
    TASK_LIST,
    as_list,
    is_answered,
    require_choice,
    require_detail_when,
    without_details,
)
from intake.models.application import Application

TASK_NAME = "risk-of-serious-harm"
SUMMARY_DATA = "summary-data"
IMPORTED_PAGES = ("risk-to-others", "risk-factors", "reducing-risk")
CONFIRMATION_ERROR = "Confirm that the information is relevant and up to date"
RISK_RATINGS = (
    ("Over all risk rating", "overallRisk"),
    ("Risk to children", "riskToChildren"),
    ("Risk to known adult", "riskToKnownAdult"),
    ("Risk to public", "riskToPublic"),
    ("Risk to staff", "riskToStaff"),
)
ARRANGEMENT_DETAILS = {"mappa": "mappaDetails", "marac": "maracDetails", "iom": "iomDetails"}


def oasys_import_date(application: Application) -> Optional[str]:
    """Return the stored OASys import date, checking the legacy per-page marker too."""
    rosh = application.task_data(TASK_NAME)
    marker = rosh.get("oasys-import")
    if isinstance(marker, Mapping) and marker.get("oasysImportDate"):
        return str(marker["oasysImportDate"])
    for page_name in IMPORTED_PAGES:
        bag = rosh.get(page_name)
        if isinstance(bag, Mapping) and "dateOfOasysImport" in bag:
            return str(bag["dateOfOasysImport"] or "") or None
    return None


def is_imported_from_oasys(application: Application) -> bool:
    rosh = application.task_data(TASK_NAME)
    marker = rosh.get("oasys-import")
    if isinstance(marker, Mapping) and "oasysImportDate" in marker:
        return True
    return any(isinstance(rosh.get(p), Mapping) and "dateOfOasysImport" in rosh[p] for p in IMPORTED_PAGES)


class RoshPage(BasePage):
    task_name = TASK_NAME

    def __init__(self, body, application, previous_page: str = ""):
        super().__init__(body, application, previous_page)
        imported = oasys_import_date(application)
        self.import_date = iso_to_ui_date(imported, "medium") if imported else None


class Summary(RoshPage):
    """RoSH summary ratings imported from OASys, plus optional comments."""

    name = "summary"
    body_properties = ("additionalComments", "oasysImportDate")
    title_template = "Risk of serious harm (RoSH) summary for {name}"

    def __init__(self, body, application, previous_page: str = ""):
        super().__init__(body, application, previous_page)
        summary = application.page_data(TASK_NAME, SUMMARY_DATA)
        self.risks: Dict[str, Any] = dict(summary) if isinstance(summary, Mapping) else {}
        last_updated = (self.risks.get("value") or {}).get("lastUpdated")
        self.last_updated = iso_to_ui_date(last_updated, "medium") if last_updated else None

    def previous(self) -> str:
        return TASK_LIST

    def next(self) -> str:
        return "risk-to-others"

    def on_save(self) -> Dict[str, Any]:
        body = dict(self.body)
        imported = oasys_import_date(self.application)
        if imported:
            body["oasysImportDate"] = imported
        return body

    def response(self) -> Dict[str, Any]:
        ratings = self.risks.get("value") or {}
        response = {label: ratings.get(key) or "Unknown" for label, key in RISK_RATINGS}
        if is_answered(self.body.get("additionalComments")):
            response[self.question("additionalComments")] = self.body["additionalComments"]
        return response

    def view(self) -> Dict[str, Any]:
        view = super().view()
        view.update({"risks": self.risks, "lastUpdated": self.last_updated, "importDate": self.import_date})
        return view


class RiskToOthers(RoshPage):
    name = "risk-to-others"
    body_properties = ("whoIsAtRisk", "natureOfRisk", "confirmation", "dateOfOasysImport")
    title_template = "Risk to others for {name}"

    def previous(self) -> str:
        if self.previous_page == "summary":
            return "summary"
        return TASK_LIST

    def next(self) -> str:
        return "risk-factors"

    def errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        if not is_answered(self.body.get("whoIsAtRisk")):
            errors["whoIsAtRisk"] = "Enter who is at risk"
        if not is_answered(self.body.get("natureOfRisk")):
            errors["natureOfRisk"] = "Enter the nature of the risk"
        require_choice(errors, self.body, "confirmation", ("confirmed",), CONFIRMATION_ERROR)
        return errors


class RiskFactors(RoshPage):
    name = "risk-factors"
    body_properties = (
        "circumstancesLikelyToIncreaseRisk",
        "whenIsRiskLikelyToBeGreatest",
        "confirmation",
        "dateOfOasysImport",
    )
    title_template = "Risk factors for {name}"

    def previous(self) -> str:
        return "risk-to-others"

    def next(self) -> str:
        return "reducing-risk"

    def errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        if not is_answered(self.body.get("circumstancesLikelyToIncreaseRisk")):
            errors["circumstancesLikelyToIncreaseRisk"] = "Enter the circumstances that are likely to increase risk"
        if not is_answered(self.body.get("whenIsRiskLikelyToBeGreatest")):
            errors["whenIsRiskLikelyToBeGreatest"] = "Enter when the risk is likely to be the greatest"
        require_choice(errors, self.body, "confirmation", ("confirmed",), CONFIRMATION_ERROR)
        return errors


class ReducingRisk(RoshPage):
    name = "reducing-risk"
    body_properties = ("factorsLikelyToReduceRisk", "confirmation", "dateOfOasysImport")
    title_template = "Reducing risk for {name}"

    def previous(self) -> str:
        return "risk-factors"

    def next(self) -> str:
        return "risk-management-arrangements"

    def errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        if not is_answered(self.body.get("factorsLikelyToReduceRisk")):
            errors["factorsLikelyToReduceRisk"] = "Enter the factors that are likely to reduce risk"
        require_choice(errors, self.body, "confirmation", ("confirmed",), CONFIRMATION_ERROR)
        return errors


class RiskManagementArrangements(RoshPage):
    name = "risk-management-arrangements"
    body_properties = ("arrangements", "mappaDetails", "maracDetails", "iomDetails")
    title_template = "Risk management arrangements for {name}"

    def __init__(self, body, application, previous_page: str = ""):
        super().__init__(body, application, previous_page)
        if "arrangements" in self.body:
            self.body["arrangements"] = as_list(self.body["arrangements"])

    def previous(self) -> str:
        return "reducing-risk"

    def next(self) -> str:
        return "additional-risk-information"

    def errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        arrangements = as_list(self.body.get("arrangements"))
        if not arrangements:
            errors["arrangements"] = "Select if they are subject to any multi-agency risk management arrangements"
            return errors
        if "no" in arrangements and len(arrangements) > 1:
            errors["arrangements"] = "Select either the arrangements they are subject to or 'No, they are not'"
        labels = self.questions["arrangements"]["answers"]
        for arrangement, detail in ARRANGEMENT_DETAILS.items():
            if arrangement in arrangements and not is_answered(self.body.get(detail)):
                errors[detail] = f"Provide {labels[arrangement]} details"
        return errors

    def on_save(self) -> Dict[str, Any]:
        arrangements = as_list(self.body.get("arrangements"))
        unselected = [detail for arrangement, detail in ARRANGEMENT_DETAILS.items() if arrangement not in arrangements]
        return {k: v for k, v in self.body.items() if k not in unselected}


class AdditionalRiskInformation(RoshPage):
    name = "additional-risk-information"
    body_properties = ("hasAdditionalInformation", "additionalInformationDetail")
    title_template = "Additional risk information for {name}"

    def previous(self) -> str:
        return "risk-management-arrangements"

    def next(self) -> str:
        return END_OF_TASK

    def errors(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        require_choice(
            errors,
            self.body,
            "hasAdditionalInformation",
            ("yes", "no"),
            "Select whether there is any additional risk information",
        )
        require_detail_when(
            errors,
            self.body,
            "hasAdditionalInformation",
            "yes",
            "additionalInformationDetail",
            "Enter additional information for risk to others",
        )
        return errors

    def on_save(self) -> Dict[str, Any]:
        return without_details(self.body, "hasAdditionalInformation", "yes", ("additionalInformationDetail",))
