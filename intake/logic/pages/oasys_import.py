"""OASys import entry page for the risk of serious harm task.

`initialize` decides which page the user actually lands on:

- nothing stored for the task yet: fetch OASys RoSH answers and the RoSH
  summary, and offer them for import (this page);
- data stored and marked as imported: the `summary` page;
- data stored without the import marker: the `risk-to-others` page.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from intake.logic.date_formats import iso_date, iso_to_ui_date
from intake.logic.errors import ExternalServiceError
from intake.logic.pages.base import BasePage, TASK_LIST
from intake.logic.pages.risk_of_serious_harm import (
    SUMMARY_DATA,
    TASK_NAME,
    RiskToOthers,
    Summary,
    is_imported_from_oasys,
)
from intake.models.application import Application

logger = logging.getLogger(__name__)

# OASys question number -> (page, field)
ROSH_QUESTION_MAP = {
    "R10.1": ("risk-to-others", "whoIsAtRisk"),
    "R10.2": ("risk-to-others", "natureOfRisk"),
    "R10.3": ("risk-factors", "whenIsRiskLikelyToBeGreatest"),
    "R10.4": ("risk-factors", "circumstancesLikelyToIncreaseRisk"),
    "R10.5": ("reducing-risk", "factorsLikelyToReduceRisk"),
}


class OasysImport(BasePage):
    name = "oasys-import"
    task_name = TASK_NAME
    body_properties = ("importSkipped",)
    title_template = "Import {name}'s risk of serious harm (RoSH) data from OASys"

    def __init__(
        self,
        body,
        application: Application,
        previous_page: str = "",
        oasys: Optional[Mapping[str, Any]] = None,
        task_data: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(body, application, previous_page)
        self.task_data = task_data
        self.has_oasys_record = bool(oasys)
        self.oasys_started: Optional[str] = None
        self.oasys_completed: Optional[str] = None
        if oasys:
            if oasys.get("dateStarted"):
                self.oasys_started = iso_to_ui_date(oasys["dateStarted"], "medium")
            if oasys.get("dateCompleted"):
                self.oasys_completed = iso_to_ui_date(oasys["dateCompleted"], "medium")
        self.no_oasys_banner_text = f"No OASys record available to import for {self.person_name}"

    @classmethod
    async def initialize(cls, body, application: Application, token: str, data_services) -> BasePage:
        rosh = application.task_data(TASK_NAME)
        if not rosh:
            crn = application.person.crn
            person_service = data_services.person_service
            try:
                oasys = await person_service.get_oasys_rosh(token, crn)
            except ExternalServiceError as exc:
                if not exc.is_not_found:
                    raise
                logger.info("oasys_fetch_not_found application_id=%s", application.id)
                return cls(body, application, oasys=None, task_data=None)
            try:
                risks = await person_service.get_rosh_risks(token, crn)
            except ExternalServiceError as exc:
                if not exc.is_not_found:
                    raise
                logger.info("rosh_summary_not_found application_id=%s", application.id)
                risks = None
            return cls(body, application, oasys=oasys, task_data=build_task_data(oasys, risks))
        if is_imported_from_oasys(application):
            return Summary(rosh.get("summary") or {}, application)
        return RiskToOthers(rosh.get("risk-to-others") or {}, application)

    def previous(self) -> str:
        return TASK_LIST

    def next(self) -> str:
        if self.body.get("importSkipped"):
            return "risk-to-others"
        return "summary"

    def on_save(self) -> Dict[str, Any]:
        # A plain save from this page means the user chose not to import
        return {"importSkipped": "yes"}

    def response(self) -> Dict[str, Any]:
        return {}

    def view(self) -> Dict[str, Any]:
        view = super().view()
        view.update(
            {
                "hasOasysRecord": self.has_oasys_record,
                "oasysStarted": self.oasys_started,
                "oasysCompleted": self.oasys_completed,
                "taskData": self.task_data,
                "noOasysBannerText": self.no_oasys_banner_text,
            }
        )
        return view


def build_task_data(oasys: Mapping[str, Any], risks: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Map OASys RoSH answers onto importable `risk-of-serious-harm` bags."""
    today = iso_date()
    rosh: Dict[str, Any] = {}
    for answer in oasys.get("rosh") or []:
        target = ROSH_QUESTION_MAP.get(answer.get("questionNumber"))
        if target is None:
            continue
        page_name, field = target
        bag = rosh.setdefault(page_name, {})
        bag[field] = answer.get("answer")
        bag["dateOfOasysImport"] = today
    if risks:
        rosh[SUMMARY_DATA] = {**risks, "dateOfOasysImport": today}
    rosh["oasys-import"] = {"oasysImportDate": today}
    return {TASK_NAME: rosh}


__all__ = ["OasysImport", "build_task_data", "ROSH_QUESTION_MAP"]
