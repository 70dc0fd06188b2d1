"""
Internal Outcome DTOs

What an orchestrator flow hands back to the HTTP layer: either a view to
render or a location to redirect to.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple, Union

from constants import HTTPStatus


@dataclass(frozen=True)
class RenderView:
    """
    Internal DTO for a view to render.

    The context is passed through to the renderer untouched.
    """

    view: str
    context: Dict[str, Any] = field(default_factory=dict)
    status_code: int = HTTPStatus.OK


@dataclass(frozen=True)
class Redirect:
    """Internal DTO for a navigation to another page."""

    location: str
    status_code: int = HTTPStatus.FOUND


Outcome = Union[RenderView, Redirect]


@dataclass(frozen=True)
class DeletionCheck:
    """
    Result of consulting the integrity guard before a delete.

    blockers holds summaries of the dependent records that prevent deletion.
    """

    allowed: bool
    blockers: Tuple[Any, ...] = ()
