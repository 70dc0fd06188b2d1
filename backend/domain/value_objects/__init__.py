"""
Domain Value Objects

Value objects are immutable types that represent descriptive aspects of the domain.
They have no conceptual identity and are compared by their values, not by ID.

Examples:
- EntityKind: Catalog entity type with its canonical paths
- InstanceStatus: Circulation status of a physical copy
"""

from .entity_kind import EntityKind
from .instance_status import InstanceStatus

__all__ = ["EntityKind", "InstanceStatus"]
