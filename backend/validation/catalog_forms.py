"""
Catalog forms: fields, checks and messages for every submitted form.
"""

from wtforms import Form, SelectMultipleField, StringField
from wtforms.validators import DataRequired, Length, Regexp, ValidationError

from constants import FieldLimits
from .rules import IsoDateField, StoredLength, strip_items, strip_text

ALPHANUMERIC = r"^[0-9A-Za-z]+$"


def _name_field(label: str) -> StringField:
    # Every check runs, so an empty name is also reported as non-alphanumeric
    return StringField(label, filters=[strip_text], validators=[
        Length(min=1, message=f"{label} must be specified"),
        StoredLength(FieldLimits.NAME_MAX, f"{label} must not exceed {FieldLimits.NAME_MAX} characters."),
        Regexp(ALPHANUMERIC, message=f"{label} has non-alphanumeric characters."),
    ])


def _required_text(label: str, message: str) -> StringField:
    return StringField(label, filters=[strip_text], validators=[DataRequired(message=message)])


class AuthorForm(Form):
    first_name = _name_field("First name")
    family_name = _name_field("Family name")
    date_of_birth = IsoDateField("Date of birth", invalid_message="Invalid date of birth")
    date_of_death = IsoDateField("Date of death", invalid_message="Invalid date of death")

    def validate_date_of_death(self, field):
        born, died = self.date_of_birth.data, field.data
        if born and died and died < born:
            raise ValidationError("Date of death must not precede date of birth")


class GenreCreateForm(Form):
    name = StringField("Name", filters=[strip_text], validators=[
        Length(
            min=FieldLimits.GENRE_NAME_MIN_CREATE,
            message=f"Genre name must contain at least {FieldLimits.GENRE_NAME_MIN_CREATE} characters",
        ),
        StoredLength(
            FieldLimits.GENRE_NAME_MAX,
            f"Genre name must contain at least {FieldLimits.GENRE_NAME_MIN_CREATE} characters",
        ),
    ])


class GenreUpdateForm(Form):
    name = StringField("Name", filters=[strip_text], validators=[
        Length(min=FieldLimits.GENRE_NAME_MIN_UPDATE, message="Genre not specified"),
        StoredLength(FieldLimits.GENRE_NAME_MAX, "Genre not specified"),
    ])


class BookForm(Form):
    title = _required_text("Title", "Title must not be empty.")
    author = _required_text("Author", "Author must not be empty.")
    summary = _required_text("Summary", "Summary must not be empty.")
    isbn = _required_text("ISBN", "ISBN must not be empty")
    # Membership is checked against storage by the book service
    genre = SelectMultipleField("Genre", choices=[], validate_choice=False, filters=[strip_items])


class BookInstanceCreateForm(Form):
    book = _required_text("Book", "Book must be specified")
    imprint = _required_text("Imprint", "Imprint must be specified")
    status = StringField("Status", filters=[strip_text])
    due_back = IsoDateField("Due back", invalid_message="Invalid date")


class BookInstanceUpdateForm(Form):
    book = _required_text("Book", "Book must not be empty")
    imprint = _required_text("Imprint", "Imprint must not be empty")
    status = _required_text("Status", "Please select a status for the BookInstance")
    due_back = IsoDateField("Due back", invalid_message="Select a valid future date")
