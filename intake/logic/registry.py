"""Schema registry: sections, tasks and their page classes.

The registry is an immutable value built once by `build_registry()` and
handed to whoever needs it (wizard service, task list, routes). There is
no global registration side effect; adding a page means adding it here.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict

from intake.logic.errors import PageNotFoundError, TaskNotFoundError
from intake.logic.pages.about_the_person import (
    AsianBackground,
    Disability,
    EthnicGroup,
    SexAndGender,
    WillAnswer,
)
from intake.logic.pages.area_and_funding import FundingSource
from intake.logic.pages.base import BasePage
from intake.logic.pages.before_you_start import ConfirmEligibility
from intake.logic.pages.check_your_answers import CheckYourAnswers
from intake.logic.pages.health_needs import CommunicationAndLanguage, OtherHealth, SubstanceMisuse
from intake.logic.pages.oasys_import import OasysImport
from intake.logic.pages.offending_history import AnyPreviousConvictions
from intake.logic.pages.risk_of_serious_harm import (
    AdditionalRiskInformation,
    ReducingRisk,
    RiskFactors,
    RiskManagementArrangements,
    RiskToOthers,
    Summary,
)

logger = logging.getLogger(__name__)


class TaskDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    name: str
    pages: Tuple[Type[BasePage], ...]
    requires: Tuple[str, ...] = ()

    @property
    def first_page(self) -> str:
        return self.pages[0].name

    def page_names(self) -> List[str]:
        return [page.name for page in self.pages]

    def page_class(self, page_name: str) -> Optional[Type[BasePage]]:
        for page in self.pages:
            if page.name == page_name:
                return page
        return None


class SectionDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    tasks: Tuple[TaskDefinition, ...]


class SchemaRegistry(BaseModel):
    model_config = ConfigDict(frozen=True)

    sections: Tuple[SectionDefinition, ...]

    def tasks(self) -> Iterator[TaskDefinition]:
        for section in self.sections:
            yield from section.tasks

    def task_names(self) -> List[str]:
        return [task.slug for task in self.tasks()]

    def task(self, task_name: str) -> TaskDefinition:
        for task in self.tasks():
            if task.slug == task_name:
                return task
        raise TaskNotFoundError(task_name)

    def pages_for(self, task_name: str) -> Tuple[Type[BasePage], ...]:
        return self.task(task_name).pages

    def page(self, task_name: str, page_name: str) -> Type[BasePage]:
        page = self.task(task_name).page_class(page_name)
        if page is None:
            raise PageNotFoundError(task_name, page_name)
        return page


def _task(slug: str, name: str, pages: Tuple[Type[BasePage], ...], requires: Tuple[str, ...] = ()) -> TaskDefinition:
    for page in pages:
        if page.task_name != slug:
            raise ValueError(f"page {page.name} declares task {page.task_name}, registered under {slug}")
    return TaskDefinition(slug=slug, name=name, pages=pages, requires=requires)


def build_registry() -> SchemaRegistry:
    """Build the CAS-2 application registry in task-list order."""
    before_you_start = SectionDefinition(
        title="Before you start",
        tasks=(_task("confirm-eligibility", "Confirm eligibility", (ConfirmEligibility,)),),
    )
    about_the_person = SectionDefinition(
        title="About the person",
        tasks=(
            _task(
                "equality-and-diversity-monitoring",
                "Complete equality and diversity monitoring",
                (WillAnswer, Disability, SexAndGender, EthnicGroup, AsianBackground),
            ),
        ),
    )
    area_and_funding = SectionDefinition(
        title="Area and funding",
        tasks=(_task("funding-information", "Add funding information", (FundingSource,)),),
    )
    risks_and_needs = SectionDefinition(
        title="Risks and needs",
        tasks=(
            _task(
                "health-needs",
                "Add health needs",
                (SubstanceMisuse, CommunicationAndLanguage, OtherHealth),
            ),
            _task(
                "risk-of-serious-harm",
                "Add risk of serious harm (RoSH) information",
                (
                    OasysImport,
                    Summary,
                    RiskToOthers,
                    RiskFactors,
                    ReducingRisk,
                    RiskManagementArrangements,
                    AdditionalRiskInformation,
                ),
            ),
        ),
    )
    offence_and_licence = SectionDefinition(
        title="Offence and licence information",
        tasks=(_task("offending-history", "Add offending history", (AnyPreviousConvictions,)),),
    )
    sections = [before_you_start, about_the_person, area_and_funding, risks_and_needs, offence_and_licence]
    prerequisites = tuple(task.slug for section in sections for task in section.tasks)
    check_answers = SectionDefinition(
        title="Check answers",
        tasks=(
            _task(
                "check-your-answers",
                "Check answers before submitting",
                (CheckYourAnswers,),
                requires=prerequisites,
            ),
        ),
    )
    registry = SchemaRegistry(sections=tuple(sections) + (check_answers,))
    logger.debug("registry_built tasks=%s", len(registry.task_names()))
    return registry


__all__ = ["TaskDefinition", "SectionDefinition", "SchemaRegistry", "build_registry"]
