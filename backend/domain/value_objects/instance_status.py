"""
InstanceStatus Value Object

Immutable representation of a physical copy's circulation status.
"""

from enum import Enum
from typing import List, Optional


class InstanceStatus(str, Enum):
    """
    Circulation status of a book instance.

    The stored value is the human-readable label, so forms and storage share
    one vocabulary.
    """

    AVAILABLE = "Available"
    MAINTENANCE = "Maintenance"
    LOANED = "Loaned"
    RESERVED = "Reserved"

    @classmethod
    def default(cls) -> "InstanceStatus":
        """Status assigned when a form leaves the field blank."""
        return cls.MAINTENANCE

    @classmethod
    def choices(cls) -> List[str]:
        """All status labels, in display order."""
        return [status.value for status in cls]

    @classmethod
    def from_form(cls, value: Optional[str]) -> Optional["InstanceStatus"]:
        """
        Resolve a submitted status label.

        Args:
            value: Sanitized form value

        Returns:
            The matching status, the default status when blank,
            or None if the label is not a known status
        """
        if not value:
            return cls.default()
        try:
            return cls(value)
        except ValueError:
            return None
