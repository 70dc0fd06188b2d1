"""
Identifier generation for catalog records.

Ids are opaque strings; routes and redirects embed them in record paths.
"""
import uuid


def generate_uuid() -> str:
    """
    Generate a new record id.

    Returns:
        str: A random UUID4 in its canonical hyphenated form
    """
    return str(uuid.uuid4())
