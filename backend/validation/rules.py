"""
Form evaluation on top of WTForms.

Each catalog form is a wtforms.Form subclass. Evaluating one binds the
submitted body, runs every validator on every field (trimmed values), and
returns HTML-escaped values together with the ordered list of field errors.
Nothing here performs I/O, so forms can be tested against literal inputs.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Mapping, Sequence, Tuple, Type

from dateutil.parser import isoparse
from starlette.datastructures import FormData
from wtforms import Form, StringField
from wtforms.validators import ValidationError


@dataclass(frozen=True)
class FieldError:
    """A single failed check on a submitted field"""

    field: str
    message: str
    value: Any = None


@dataclass(frozen=True)
class ValidationResult:
    """Sanitized values plus every error raised while producing them"""

    values: Dict[str, Any]
    errors: Tuple[FieldError, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def with_errors(self, extra: Sequence[FieldError]) -> "ValidationResult":
        """Return a copy with additional errors appended."""
        return ValidationResult(values=self.values, errors=self.errors + tuple(extra))


def strip_text(value: Any) -> str:
    """Filter: trimmed text; an absent value becomes ''."""
    if value is None:
        return ""
    return str(value).strip()


def strip_items(values: Any) -> List[str]:
    """Filter for repeatable fields: trim every item and drop blanks."""
    items = (strip_text(value) for value in values or ())
    return [item for item in items if item]


class StoredLength:
    """
    Upper bound on the text as stored.

    Values are persisted HTML-escaped, so the bound applies to the escaped
    form of the trimmed input.
    """

    def __init__(self, maximum: int, message: str):
        self.maximum = maximum
        self.message = message

    def __call__(self, form: Form, field) -> None:
        if len(html.escape(field.data or "")) > self.maximum:
            raise ValidationError(self.message)


class IsoDateField(StringField):
    """
    An ISO-8601 calendar date that may be left blank.

    An empty submission skips parsing and leaves the field None. Anything
    else must parse; otherwise the field is None and carries invalid_message.
    """

    def __init__(self, label=None, validators=None, invalid_message: str = "Invalid date", **kwargs):
        super().__init__(label, validators, **kwargs)
        self.invalid_message = invalid_message

    def process_formdata(self, valuelist):
        self.data = None
        if not valuelist or not valuelist[0]:
            return
        raw = valuelist[0]
        if isinstance(raw, date):
            self.data = raw
            return
        try:
            self.data = isoparse(strip_text(raw)).date()
        except (ValueError, OverflowError):
            raise ValueError(self.invalid_message)


def as_formdata(submitted: Mapping[str, Any]) -> FormData:
    """
    Multi-dict view of a submitted body.

    Starlette FormData passes through. A plain mapping is expanded: list
    values become repeated keys and None values are treated as absent.
    """
    if hasattr(submitted, "getlist"):
        return submitted
    items: List[Tuple[str, Any]] = []
    for name, value in submitted.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            items.extend((name, item) for item in value)
        else:
            items.append((name, value))
    return FormData(items)


def _escape(value: Any) -> Any:
    if isinstance(value, str):
        return html.escape(value)
    if isinstance(value, list):
        return [html.escape(item) for item in value]
    return value


def _submitted_value(field) -> Any:
    if isinstance(field.data, str):
        return field.data
    if field.raw_data:
        return strip_text(field.raw_data[0])
    return None


def evaluate(form_class: Type[Form], submitted: Mapping[str, Any]) -> ValidationResult:
    """
    Bind a submitted body to a form and run all of its validators.

    Only declared fields are read; anything else in the body (including an
    id) is ignored.

    Args:
        form_class: Catalog form declaring fields and checks
        submitted: Starlette FormData or a plain mapping of field values

    Returns:
        ValidationResult with escaped values for declared fields only and
        errors in field declaration order
    """
    form = form_class(formdata=as_formdata(submitted))
    form.validate()

    errors = [
        FieldError(field.name, message, _submitted_value(field))
        for field in form
        for message in field.errors
    ]
    values = {field.name: _escape(field.data) for field in form}
    return ValidationResult(values=values, errors=tuple(errors))
