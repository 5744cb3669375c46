"""Page contract shared by every wizard screen.

A page holds one screen's partial answers (its *body*), validates them,
projects them into human-readable question/answer pairs and names its
neighbours within the owning task. Pages are constructed fresh for every
request; nothing here keeps state between requests.

Optional capabilities are duck-typed:
- `initialize` (async classmethod) may return a different page instance;
- `on_save()` returns a new body with now-irrelevant answers removed.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Iterable, Mapping, Optional, Protocol, Tuple, runtime_checkable

from intake.logic.questions import get_questions
from intake.models.application import Application, Person

# Navigation tokens that are not page names
TASK_LIST = "taskList"
END_OF_TASK = ""


def name_or_placeholder(person: Optional[Person]) -> str:
    """Return the person's display name, or a neutral placeholder when unknown."""
    if person is not None and person.name:
        return person.name
    return "the person"


def is_answered(value: Any) -> bool:
    """True when a stored/submitted value carries an answer."""
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return True


def prune_empty(response: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in response.items() if is_answered(v)}


def as_list(value: Any) -> list:
    """Checkbox answers arrive as a bare string when a single box is ticked."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [v for v in value if is_answered(v)]
    return [value] if is_answered(value) else []


@runtime_checkable
class Page(Protocol):
    name: str
    task_name: str
    body: Dict[str, Any]

    def errors(self) -> Dict[str, str]: ...

    def response(self) -> Dict[str, Any]: ...

    def previous(self) -> str: ...

    def next(self) -> str: ...


class BasePage:
    """Default implementation of the page contract.

    Subclasses declare `name`, `task_name` and `body_properties`; the body is
    filtered to those properties at construction so stray form fields never
    reach the application store.
    """

    name: ClassVar[str] = ""
    task_name: ClassVar[str] = ""
    body_properties: ClassVar[Tuple[str, ...]] = ()
    title_template: ClassVar[str] = ""

    def __init__(self, body: Optional[Mapping[str, Any]], application: Application, previous_page: str = ""):
        self.application = application
        self.previous_page = previous_page or ""
        self.person_name = name_or_placeholder(application.person)
        source = body if isinstance(body, Mapping) else {}
        self.body: Dict[str, Any] = {k: source[k] for k in self.body_properties if k in source}
        self.questions: Dict[str, Dict[str, Any]] = get_questions(self.person_name)[self.task_name][self.name]

    @property
    def title(self) -> str:
        return self.title_template.format(name=self.person_name)

    def question(self, field: str) -> str:
        return self.questions[field]["question"]

    def answer_label(self, field: str, value: Any) -> Any:
        answers = self.questions.get(field, {}).get("answers")
        if not answers:
            return value
        if isinstance(value, (list, tuple)):
            return ", ".join(str(answers.get(v, v)) if isinstance(v, str) else str(v) for v in value)
        return answers.get(value, value) if isinstance(value, str) else value

    def response_for(self, fields: Iterable[str]) -> Dict[str, Any]:
        """Translate the given fields into question -> answer, skipping unanswered ones."""
        response: Dict[str, Any] = {}
        for field in fields:
            if field not in self.questions:
                continue
            value = self.body.get(field)
            if not is_answered(value):
                continue
            response[self.question(field)] = self.answer_label(field, value)
        return response

    def errors(self) -> Dict[str, str]:
        return {}

    def response(self) -> Dict[str, Any]:
        return self.response_for(self.body_properties)

    def previous(self) -> str:
        return TASK_LIST

    def next(self) -> str:
        return END_OF_TASK

    def view(self) -> Dict[str, Any]:
        """Serializable snapshot used by the HTTP layer."""
        return {
            "task": self.task_name,
            "page": self.name,
            "title": self.title,
            "body": dict(self.body),
            "questions": self.questions,
            "previous": self.previous(),
            "next": self.next(),
        }


def require_choice(errors: Dict[str, str], body: Mapping[str, Any], field: str, allowed: Iterable[str], message: str) -> None:
    """Record `message` when `field` is missing or not exactly one of `allowed`."""
    value = body.get(field)
    if not isinstance(value, str) or value not in set(allowed):
        errors[field] = message


def require_detail_when(
    errors: Dict[str, str],
    body: Mapping[str, Any],
    parent: str,
    parent_value: str,
    detail: str,
    message: str,
) -> None:
    """Make `detail` mandatory when `parent` has `parent_value`."""
    if body.get(parent) == parent_value and not is_answered(body.get(detail)):
        errors[detail] = message


def without_details(body: Mapping[str, Any], parent: str, parent_value: str, details: Iterable[str]) -> Dict[str, Any]:
    """Return a copy of `body` without `details` unless `parent` equals `parent_value`."""
    if body.get(parent) == parent_value:
        return dict(body)
    dropped = set(details)
    return {k: v for k, v in body.items() if k not in dropped}


__all__ = [
    "TASK_LIST",
    "END_OF_TASK",
    "Page",
    "BasePage",
    "name_or_placeholder",
    "is_answered",
    "prune_empty",
    "as_list",
    "require_choice",
    "require_detail_when",
    "without_details",
]
