"""Answer formatting for the check-your-answers review and submission.

Stored values are translated to display text through the question catalog,
so the review screen shows the same labels the pages offered.
"""

from __future__ import annotations

import html
from typing import Any, Dict, List, Mapping, Sequence

from intake.logic.pages.base import is_answered, name_or_placeholder
from intake.logic.questions import Questions, get_questions
from intake.logic.registry import SchemaRegistry
from intake.models.application import Application

# Repeating-group pages store a list of records; "0" selects the whole list
WHOLE_RECORD_KEY = "0"
CHECK_YOUR_ANSWERS_TASK = "check-your-answers"


def _stored(application: Application, task: str, page: str) -> Any:
    return application.page_data(task, page)


def _labels(questions: Questions, task: str, page: str, key: str) -> Mapping[str, str]:
    return questions.get(task, {}).get(page, {}).get(key, {}).get("answers") or {}


def array_answers_as_string(application: Application, questions: Questions, task: str, page: str, key: str) -> str:
    bag = _stored(application, task, page) or {}
    labels = _labels(questions, task, page, key)
    return ",".join(str(labels.get(value, value)) for value in bag.get(key) or [])


def get_answer(application: Application, questions: Questions, task: str, page: str, key: str) -> Any:
    stored = _stored(application, task, page)
    if key == WHOLE_RECORD_KEY:
        return stored
    if not isinstance(stored, Mapping):
        return None
    value = stored.get(key)
    if isinstance(value, (list, tuple)):
        return array_answers_as_string(application, questions, task, page, key)
    labels = _labels(questions, task, page, key)
    if isinstance(value, str) and value in labels:
        return labels[value]
    return value


def format_lines(text: str) -> str:
    """Escape free text and keep its line breaks."""
    return "<br>".join(html.escape(line) for line in str(text).splitlines())


def embedded_summary_list_item(records: Sequence[Mapping[str, Any]]) -> str:
    blocks = []
    for record in records:
        rows = "".join(
            '<div class="govuk-summary-list__row govuk-summary-list__row--embedded">'
            f'<dt class="govuk-summary-list__key govuk-summary-list__key--embedded">{html.escape(str(key))}</dt>'
            f'<dd class="govuk-summary-list__value govuk-summary-list__value--embedded">{html.escape(str(value))}</dd>'
            "</div>"
            for key, value in record.items()
        )
        blocks.append(f'<dl class="govuk-summary-list govuk-summary-list--embedded">{rows}</dl>')
    return "".join(blocks)


def summary_list_item_for_question(
    application: Application, questions: Questions, task: str, key: str, page: str
) -> Dict[str, Any]:
    question = questions[task][page][key]["question"] if key != WHOLE_RECORD_KEY else page
    answer = get_answer(application, questions, task, page, key)
    if isinstance(answer, (list, tuple)):
        value = embedded_summary_list_item(answer)
    else:
        value = format_lines(answer if answer is not None else "")
    return {
        "key": {"text": question},
        "value": {"html": value},
        "actions": {
            "items": [
                {
                    "href": f"/applications/{application.id}/tasks/{task}/pages/{page}",
                    "text": "Change",
                    "visuallyHiddenText": question,
                }
            ]
        },
    }


def check_your_answers_sections(application: Application, registry: SchemaRegistry) -> List[Dict[str, Any]]:
    """Ordered review projection: one section per task, unanswered questions omitted."""
    questions = get_questions(name_or_placeholder(application.person))
    sections = []
    for task in registry.tasks():
        if task.slug == CHECK_YOUR_ANSWERS_TASK:
            continue
        rows = []
        for page_name in task.page_names():
            stored = _stored(application, task.slug, page_name)
            if isinstance(stored, list) and stored:
                rows.append(
                    summary_list_item_for_question(application, questions, task.slug, WHOLE_RECORD_KEY, page_name)
                )
                continue
            if not isinstance(stored, Mapping):
                continue
            for key in questions.get(task.slug, {}).get(page_name, {}):
                if is_answered(stored.get(key)):
                    rows.append(summary_list_item_for_question(application, questions, task.slug, key, page_name))
        sections.append({"title": task.name, "task": task.slug, "questionsAndAnswers": rows})
    return sections


def get_responses(application: Application, registry: SchemaRegistry) -> Dict[str, List[Dict[str, Any]]]:
    """Task name -> list of page responses, in registry order."""
    responses: Dict[str, List[Dict[str, Any]]] = {}
    for task in registry.tasks():
        task_data = application.task_data(task.slug)
        if not task_data:
            continue
        pages = []
        for page_cls in task.pages:
            bag = task_data.get(page_cls.name)
            if not isinstance(bag, Mapping):
                continue
            pages.append(page_cls(bag, application).response())
        responses[task.name] = pages
    return responses


__all__ = [
    "array_answers_as_string",
    "get_answer",
    "format_lines",
    "embedded_summary_list_item",
    "summary_list_item_for_question",
    "check_your_answers_sections",
    "get_responses",
]
