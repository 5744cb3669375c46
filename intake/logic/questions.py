"""Question catalog for every registered page.

Single source of truth for question text and answer labels, personalised by
the applicant's display name. Pages read their question text from here and
the review projection translates stored values with the same labels, so the
two never drift.

Shape: task -> page -> field -> {"question": str, "hint"?: str, "answers"?: {value: label}}
"""

from __future__ import annotations

from typing import Any, Dict

YES_NO = {"yes": "Yes", "no": "No"}
YES_NO_PREFER_NOT_TO_SAY = {"yes": "Yes", "no": "No", "preferNotToSay": "Prefer not to say"}
CONFIRMED = {"confirmed": "Confirmed"}

Questions = Dict[str, Dict[str, Dict[str, Dict[str, Any]]]]


def get_questions(name: str) -> Questions:
    """Return the full catalog with `name` substituted into question text."""
    return {
        "confirm-eligibility": {
            "confirm-eligibility": {
                "isEligible": {
                    "question": f"Is {name} eligible for Short-Term Accommodation (CAS-2)?",
                    "answers": {
                        "yes": f"Yes, I confirm {name} is eligible",
                        "no": f"No, {name} is not eligible",
                    },
                },
            },
        },
        "equality-and-diversity-monitoring": {
            "will-answer": {
                "willAnswer": {
                    "question": "Equality and diversity questions",
                    "answers": {
                        "yes": "Yes, answer the equality questions (takes 2 minutes)",
                        "no": "No, skip the equality questions",
                    },
                },
            },
            "disability": {
                "hasDisability": {
                    "question": f"Does {name} have a disability?",
                    "answers": YES_NO_PREFER_NOT_TO_SAY,
                },
                "typeOfDisability": {
                    "question": "What type of disability?",
                    "answers": {
                        "sensoryImpairment": "Sensory impairment",
                        "physicalImpairment": "Physical impairment",
                        "learningDisability": "Learning disability or difficulty",
                        "mentalHealth": "Mental health condition",
                        "illness": "Long-standing illness",
                        "other": "Other",
                    },
                },
                "otherDisability": {"question": "What is the disability?"},
            },
            "sex-and-gender": {
                "sex": {
                    "question": f"What is {name}'s sex?",
                    "answers": {"female": "Female", "male": "Male", "preferNotToSay": "Prefer not to say"},
                },
                "gender": {
                    "question": f"Is the gender {name} identifies with the same as the sex registered at birth?",
                    "answers": YES_NO_PREFER_NOT_TO_SAY,
                },
                "optionalGenderIdentity": {"question": "What is their gender identity? (optional)"},
            },
            "ethnic-group": {
                "ethnicGroup": {
                    "question": f"What is {name}'s ethnic group?",
                    "answers": {
                        "white": "White",
                        "mixed": "Mixed or multiple ethnic groups",
                        "asian": "Asian or Asian British",
                        "black": "Black, African, Caribbean or Black British",
                        "other": "Other ethnic group",
                        "preferNotToSay": "Prefer not to say",
                    },
                },
            },
            "asian-background": {
                "asianBackground": {
                    "question": f"Which of the following best describes {name}'s Asian or Asian British background?",
                    "answers": {
                        "indian": "Indian",
                        "pakistani": "Pakistani",
                        "chinese": "Chinese",
                        "bangladeshi": "Bangladeshi",
                        "other": "Any other Asian background",
                        "preferNotToSay": "Prefer not to say",
                    },
                },
                "optionalAsianBackground": {"question": "How would they describe their background? (optional)"},
            },
        },
        "funding-information": {
            "funding-source": {
                "fundingSource": {
                    "question": f"How will {name} pay for their accommodation and service charge?",
                    "answers": {
                        "personalSavings": "Personal money or savings",
                        "benefits": "Benefits",
                    },
                },
            },
        },
        "health-needs": {
            "substance-misuse": {
                "usesIllegalSubstances": {"question": "Do they take any illegal substances?", "answers": YES_NO},
                "substanceMisuseHistory": {
                    "question": "What substances do they take?",
                    "hint": "Please describe their recent history of substance misuse.",
                },
                "substanceMisuseDetail": {
                    "question": "How often do they take these substances, by what method, and how much?",
                },
                "engagedWithDrugAndAlcoholService": {
                    "question": "Are they engaged with a drug and alcohol service?",
                    "answers": YES_NO,
                },
                "drugAndAlcoholServiceDetail": {"question": "Name the drug and alcohol service"},
                "requiresSubstituteMedication": {
                    "question": "Do they require any substitute medication for misused substances?",
                    "answers": YES_NO,
                },
                "substituteMedicationDetail": {"question": "What substitute medication do they take?"},
            },
            "communication-and-language": {
                "hasCommunicationNeeds": {
                    "question": "Do they have any additional communication needs?",
                    "answers": YES_NO,
                },
                "communicationDetail": {"question": "Please describe their communication needs."},
                "requiresInterpreter": {"question": "Do they need an interpreter?", "answers": YES_NO},
                "interpretationDetail": {"question": "What language do they need an interpreter for?"},
                "hasSupportNeeds": {
                    "question": "Do they need any support to see, hear, speak, or understand?",
                    "answers": YES_NO,
                },
                "supportDetail": {"question": "Please describe their support needs."},
            },
            "other-health": {
                "hasLongTermHealthCondition": {
                    "question": "Are they managing any long term health conditions?",
                    "hint": "For example, diabetes, arthritis or high blood pressure.",
                    "answers": YES_NO,
                },
                "healthConditionDetail": {"question": "Please describe the long term health conditions."},
                "hasHadStroke": {"question": "Have they experienced a stroke?", "answers": YES_NO},
                "hasSeizures": {"question": "Do they experience seizures?", "answers": YES_NO},
                "seizuresDetail": {"question": "Please describe the type and any treatment."},
                "beingTreatedForCancer": {
                    "question": "Are they currently receiving regular treatment for cancer?",
                    "answers": YES_NO,
                },
            },
        },
        "risk-of-serious-harm": {
            "oasys-import": {},
            "summary": {
                "additionalComments": {"question": "Additional comments (optional)"},
            },
            "risk-to-others": {
                "whoIsAtRisk": {"question": f"Who is at risk from {name}?"},
                "natureOfRisk": {"question": "What is the nature of the risk?"},
                "confirmation": {
                    "question": "I confirm this information is relevant and up to date.",
                    "answers": CONFIRMED,
                },
            },
            "risk-factors": {
                "circumstancesLikelyToIncreaseRisk": {
                    "question": "What circumstances are likely to increase risk?",
                },
                "whenIsRiskLikelyToBeGreatest": {"question": "When is the risk likely to be the greatest?"},
                "confirmation": {
                    "question": "I confirm this information is relevant and up to date.",
                    "answers": CONFIRMED,
                },
            },
            "reducing-risk": {
                "factorsLikelyToReduceRisk": {"question": "What factors are likely to reduce risk?"},
                "confirmation": {
                    "question": "I confirm this information is relevant and up to date.",
                    "answers": CONFIRMED,
                },
            },
            "risk-management-arrangements": {
                "arrangements": {
                    "question": (
                        f"Is {name} subject to any of these multi-agency risk management "
                        "arrangements upon release?"
                    ),
                    "answers": {"mappa": "MAPPA", "marac": "MARAC", "iom": "IOM", "no": "No, they are not"},
                },
                "mappaDetails": {"question": "Provide MAPPA details"},
                "maracDetails": {"question": "Provide MARAC details"},
                "iomDetails": {"question": "Provide IOM details"},
            },
            "additional-risk-information": {
                "hasAdditionalInformation": {
                    "question": f"Is there any other risk information for {name}?",
                    "answers": YES_NO,
                },
                "additionalInformationDetail": {"question": "Additional information"},
            },
        },
        "offending-history": {
            "any-previous-convictions": {
                "hasAnyPreviousConvictions": {
                    "question": f"Does {name} have any previous convictions?",
                    "answers": {
                        "yesRelevantRisk": "Yes, and they have relevant risk",
                        "yesNoRelevantRisk": "Yes, but they do not have relevant risk",
                        "no": "No",
                    },
                },
            },
        },
        "check-your-answers": {
            "check-your-answers": {
                "checkYourAnswers": {
                    "question": "I confirm the information provided is complete, accurate and up to date.",
                    "answers": CONFIRMED,
                },
            },
        },
    }


__all__ = ["get_questions", "Questions", "YES_NO", "YES_NO_PREFER_NOT_TO_SAY", "CONFIRMED"]
