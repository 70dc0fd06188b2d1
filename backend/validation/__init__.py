"""
Form validation and sanitization.

WTForms form classes plus the evaluate step that turns a submitted body into
escaped values and field errors. No storage access, no request handling.
"""

from .rules import FieldError, ValidationResult, evaluate
from .catalog_forms import (
    AuthorForm,
    BookForm,
    BookInstanceCreateForm,
    BookInstanceUpdateForm,
    GenreCreateForm,
    GenreUpdateForm,
)

__all__ = [
    "FieldError",
    "ValidationResult",
    "evaluate",
    "AuthorForm",
    "BookForm",
    "BookInstanceCreateForm",
    "BookInstanceUpdateForm",
    "GenreCreateForm",
    "GenreUpdateForm",
]
