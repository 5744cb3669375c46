"""Functional tests for the page variants: validation, responses, navigation and on_save."""

from __future__ import annotations

import pytest

from intake.logic.pages.about_the_person import (
    AsianBackground,
    Disability,
    EthnicGroup,
    SexAndGender,
    WillAnswer,
)
from intake.logic.pages.area_and_funding import FundingSource
from intake.logic.pages.base import END_OF_TASK, TASK_LIST, BasePage, Page
from intake.logic.pages.before_you_start import ConfirmEligibility
from intake.logic.pages.check_your_answers import CheckYourAnswers
from intake.logic.pages.health_needs import CommunicationAndLanguage, OtherHealth, SubstanceMisuse
from intake.logic.pages.offending_history import AnyPreviousConvictions
from intake.logic.pages.risk_of_serious_harm import (
    AdditionalRiskInformation,
    ReducingRisk,
    RiskFactors,
    RiskManagementArrangements,
    RiskToOthers,
    Summary,
)
from intake.logic.registry import build_registry
from intake.models.application import Person

REGISTERED_PAGES = [page for task in build_registry().tasks() for page in task.pages]


def test_body_is_filtered_to_declared_properties(make_application) -> None:
    page = FundingSource({"fundingSource": "benefits", "csrf": "x", "extra": 1}, make_application())
    assert page.body == {"fundingSource": "benefits"}


def test_non_mapping_body_becomes_empty(make_application) -> None:
    page = FundingSource([{"not": "a bag"}], make_application())  # type: ignore[arg-type]
    assert page.body == {}


def test_pages_satisfy_page_protocol(make_application) -> None:
    page = ConfirmEligibility({}, make_application())
    assert isinstance(page, Page)
    assert isinstance(page, BasePage)


def test_title_uses_placeholder_when_name_unknown(make_application) -> None:
    application = make_application(person=Person(crn="X1"))
    page = FundingSource({}, application)
    assert page.title == "Funding information for the person"


# Before you start

def test_confirm_eligibility_requires_answer(make_application) -> None:
    page = ConfirmEligibility({}, make_application())
    assert page.errors() == {"isEligible": "Confirm whether Roger Smith is eligible or not eligible"}


def test_confirm_eligibility_response_uses_answer_labels(make_application) -> None:
    page = ConfirmEligibility({"isEligible": "yes"}, make_application())
    assert page.errors() == {}
    assert page.response() == {
        "Is Roger Smith eligible for Short-Term Accommodation (CAS-2)?": "Yes, I confirm Roger Smith is eligible"
    }
    assert page.previous() == TASK_LIST
    assert page.next() == END_OF_TASK


# About the person

def test_will_answer_no_ends_the_task(make_application) -> None:
    assert WillAnswer({"willAnswer": "no"}, make_application()).next() == END_OF_TASK
    assert WillAnswer({"willAnswer": "yes"}, make_application()).next() == "disability"


def test_disability_requires_type_when_yes(make_application) -> None:
    page = Disability({"hasDisability": "yes"}, make_application())
    assert page.errors() == {"typeOfDisability": "Select a type of disability"}

    page = Disability({"hasDisability": "yes", "typeOfDisability": "other"}, make_application())
    assert page.body["typeOfDisability"] == ["other"]
    assert page.errors() == {"otherDisability": "Enter the other type"}


def test_disability_on_save_drops_details_when_not_yes(make_application) -> None:
    body = {"hasDisability": "no", "typeOfDisability": ["mentalHealth"], "otherDisability": "x"}
    page = Disability(body, make_application())
    assert page.on_save() == {"hasDisability": "no"}
    # on_save returns a new body
    assert page.body["otherDisability"] == "x"


def test_sex_and_gender_errors(make_application) -> None:
    page = SexAndGender({}, make_application())
    assert page.errors() == {
        "sex": "Choose either Female, Male or Prefer not to say",
        "gender": "Choose either Yes, No or Prefer not to say",
    }


def test_sex_and_gender_questions_and_navigation(make_application) -> None:
    page = SexAndGender({"sex": "female", "gender": "yes"}, make_application())
    assert page.question("sex") == "What is Roger Smith's sex?"
    assert page.question("optionalGenderIdentity") == "What is their gender identity? (optional)"
    assert page.previous() == "disability"
    assert page.next() == "ethnic-group"


def test_sex_and_gender_items_mark_selection(make_application) -> None:
    page = SexAndGender({"sex": "male", "gender": "no"}, make_application())
    sex_items = page.sex_items()
    assert [item["value"] for item in sex_items] == ["female", "male", "preferNotToSay"]
    assert [item["checked"] for item in sex_items] == [False, True, False]
    gender_items = page.gender_items("<input>")
    assert gender_items[1]["conditional"] == {"html": "<input>"}


def test_sex_and_gender_on_save_keeps_identity_only_when_gender_differs(make_application) -> None:
    body = {"sex": "female", "gender": "yes", "optionalGenderIdentity": "non-binary"}
    assert "optionalGenderIdentity" not in SexAndGender(body, make_application()).on_save()
    body["gender"] = "no"
    assert SexAndGender(body, make_application()).on_save()["optionalGenderIdentity"] == "non-binary"


@pytest.mark.parametrize(
    ("ethnic_group", "expected"),
    [("asian", "asian-background"), ("white", END_OF_TASK), ("preferNotToSay", END_OF_TASK)],
)
def test_ethnic_group_branching(make_application, ethnic_group: str, expected: str) -> None:
    assert EthnicGroup({"ethnicGroup": ethnic_group}, make_application()).next() == expected


def test_asian_background_requires_choice(make_application) -> None:
    page = AsianBackground({}, make_application())
    assert "asianBackground" in page.errors()
    assert AsianBackground({"asianBackground": "chinese"}, make_application()).errors() == {}


# Area and funding

def test_funding_source_requires_answer(make_application) -> None:
    assert FundingSource({}, make_application()).errors() == {"fundingSource": "Select a funding source"}
    assert FundingSource({"fundingSource": "crypto"}, make_application()).errors() == {
        "fundingSource": "Select a funding source"
    }


def test_funding_source_items_carry_benefits_hint(make_application) -> None:
    items = FundingSource({"fundingSource": "benefits"}, make_application()).items()
    benefits = [item for item in items if item["value"] == "benefits"][0]
    assert benefits["checked"] is True
    assert "Universal Credit" in benefits["hint"]["text"]


# Health needs

def test_substance_misuse_top_level_errors(make_application) -> None:
    errors = SubstanceMisuse({}, make_application()).errors()
    assert errors["usesIllegalSubstances"] == "Confirm whether they take any illegal substances"
    assert errors["engagedWithDrugAndAlcoholService"] == (
        "Confirm whether they are engaged with a drug and alcohol service"
    )
    assert errors["requiresSubstituteMedication"] == "Confirm whether they require substitute medication"


def test_substance_misuse_details_required_when_yes(make_application) -> None:
    errors = SubstanceMisuse({"usesIllegalSubstances": "yes"}, make_application()).errors()
    assert errors["substanceMisuseHistory"] == "Name the illegal substances they take"
    assert errors["substanceMisuseDetail"] == "Describe how often they take substances, by what method and how much"


def test_substance_misuse_on_save_removes_details_when_no(make_application) -> None:
    body = {
        "usesIllegalSubstances": "no",
        "substanceMisuseHistory": "history",
        "substanceMisuseDetail": "detail",
        "engagedWithDrugAndAlcoholService": "no",
        "drugAndAlcoholServiceDetail": "service",
        "requiresSubstituteMedication": "yes",
        "substituteMedicationDetail": "methadone",
    }
    assert SubstanceMisuse(body, make_application()).on_save() == {
        "usesIllegalSubstances": "no",
        "engagedWithDrugAndAlcoholService": "no",
        "requiresSubstituteMedication": "yes",
        "substituteMedicationDetail": "methadone",
    }


def test_communication_and_language_response_prunes_unanswered(make_application) -> None:
    page = CommunicationAndLanguage(
        {"hasCommunicationNeeds": "no", "requiresInterpreter": "yes", "interpretationDetail": "Welsh"},
        make_application(),
    )
    assert page.response() == {
        "Do they have any additional communication needs?": "No",
        "Do they need an interpreter?": "Yes",
        "What language do they need an interpreter for?": "Welsh",
    }


def test_other_health_errors(make_application) -> None:
    errors = OtherHealth({}, make_application()).errors()
    assert errors["hasLongTermHealthCondition"] == "Confirm whether they have a long term health condition"
    assert errors["hasSeizures"] == "Confirm whether they have seizures"
    assert errors["beingTreatedForCancer"] == "Confirm whether they are receiving cancer treatment"

    errors = OtherHealth({"hasLongTermHealthCondition": "yes", "hasSeizures": "yes"}, make_application()).errors()
    assert errors["healthConditionDetail"] == "Provide details of their health conditions"
    assert errors["hasHadStroke"] == "Confirm whether they have had a stroke"
    assert errors["seizuresDetail"] == "Provide details of the seizure type and treatment"


# Risk of serious harm

def test_summary_response_defaults_unknown_ratings(make_application) -> None:
    page = Summary({}, make_application())
    assert page.response() == {
        "Over all risk rating": "Unknown",
        "Risk to children": "Unknown",
        "Risk to known adult": "Unknown",
        "Risk to public": "Unknown",
        "Risk to staff": "Unknown",
    }


def test_summary_reads_imported_ratings(make_application) -> None:
    data = {
        "risk-of-serious-harm": {
            "summary-data": {
                "status": "retrieved",
                "value": {"overallRisk": "High", "riskToChildren": "Low", "lastUpdated": "2023-08-29"},
            },
            "oasys-import": {"oasysImportDate": "2023-09-01"},
        }
    }
    page = Summary({"additionalComments": "Seen in person"}, make_application(data))
    response = page.response()
    assert response["Over all risk rating"] == "High"
    assert response["Risk to children"] == "Low"
    assert response["Additional comments (optional)"] == "Seen in person"
    assert page.last_updated == "29 August 2023"
    assert page.import_date == "1 September 2023"
    assert page.on_save()["oasysImportDate"] == "2023-09-01"


def test_risk_to_others_previous_follows_previous_page(make_application) -> None:
    assert RiskToOthers({}, make_application(), previous_page="summary").previous() == "summary"
    assert RiskToOthers({}, make_application()).previous() == TASK_LIST


def test_risk_pages_require_confirmation(make_application) -> None:
    page = RiskToOthers({"whoIsAtRisk": "Staff", "natureOfRisk": "Verbal"}, make_application())
    assert page.errors() == {"confirmation": "Confirm that the information is relevant and up to date"}
    assert "confirmation" in RiskFactors({}, make_application()).errors()
    assert "factorsLikelyToReduceRisk" in ReducingRisk({}, make_application()).errors()


def test_risk_management_arrangements_requires_details_for_selected(make_application) -> None:
    page = RiskManagementArrangements({"arrangements": ["mappa", "iom"], "mappaDetails": "Level 2"}, make_application())
    assert page.errors() == {"iomDetails": "Provide IOM details"}


def test_risk_management_arrangements_on_save_drops_unselected_details(make_application) -> None:
    body = {"arrangements": "marac", "mappaDetails": "a", "maracDetails": "b", "iomDetails": "c"}
    page = RiskManagementArrangements(body, make_application())
    assert page.on_save() == {"arrangements": ["marac"], "maracDetails": "b"}
    assert page.response()[
        "Is Roger Smith subject to any of these multi-agency risk management arrangements upon release?"
    ] == "MARAC"


def test_additional_risk_information_errors(make_application) -> None:
    assert AdditionalRiskInformation({}, make_application()).errors() == {
        "hasAdditionalInformation": "Select whether there is any additional risk information"
    }
    assert AdditionalRiskInformation({"hasAdditionalInformation": "yes"}, make_application()).errors() == {
        "additionalInformationDetail": "Enter additional information for risk to others"
    }


# Offending history and check answers

def test_any_previous_convictions(make_application) -> None:
    assert AnyPreviousConvictions({}, make_application()).errors() == {
        "hasAnyPreviousConvictions": "Confirm whether the applicant has any previous convictions"
    }
    page = AnyPreviousConvictions({"hasAnyPreviousConvictions": "yesRelevantRisk"}, make_application())
    assert page.errors() == {}
    assert [item["checked"] for item in page.items()] == [True, False, False]


def test_check_your_answers_requires_confirmation(make_application) -> None:
    assert "checkYourAnswers" in CheckYourAnswers({}, make_application()).errors()
    assert CheckYourAnswers({"checkYourAnswers": "confirmed"}, make_application()).errors() == {}


# Every registered page

def _validates(page_cls) -> bool:
    return page_cls.errors is not BasePage.errors


@pytest.mark.parametrize("page_cls", REGISTERED_PAGES, ids=lambda cls: f"{cls.task_name}/{cls.name}")
def test_empty_page_has_empty_response(make_application, page_cls) -> None:
    response = page_cls({}, make_application()).response()

    if page_cls is Summary:
        # risk ratings are always listed
        assert set(response.values()) == {"Unknown"}
    else:
        assert response == {}


@pytest.mark.parametrize("page_cls", REGISTERED_PAGES, ids=lambda cls: f"{cls.task_name}/{cls.name}")
def test_empty_page_reports_missing_fields(make_application, page_cls) -> None:
    errors = page_cls({}, make_application()).errors()

    if _validates(page_cls):
        assert errors
        assert set(errors) <= set(page_cls.body_properties)
    else:
        assert errors == {}


@pytest.mark.parametrize("page_cls", REGISTERED_PAGES, ids=lambda cls: f"{cls.task_name}/{cls.name}")
def test_list_values_are_validated_not_raised(make_application, page_cls) -> None:
    body = {field: ["first", "second"] for field in page_cls.body_properties}

    page = page_cls(body, make_application())

    assert isinstance(page.errors(), dict)
    assert isinstance(page.response(), dict)


def test_single_choice_rejects_a_list(make_application) -> None:
    page = ConfirmEligibility({"isEligible": ["yes", "no"]}, make_application())

    assert page.errors() == {"isEligible": "Confirm whether Roger Smith is eligible or not eligible"}
