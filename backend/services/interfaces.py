"""
Service Interfaces

Abstract base classes for the seams the application is wired through.
This allows for dependency injection and easier testing/mocking.
"""

from abc import ABC, abstractmethod
from starlette.responses import Response

from dtos.internal.outcomes import RenderView


class IViewRenderer(ABC):
    """
    Interface for turning a view outcome into an HTTP response.

    Implementations decide the representation (JSON, HTML templates, ...);
    orchestrators only name the view and hand over its context.
    """

    @abstractmethod
    def render(self, view: RenderView) -> Response:
        """
        Render a view.

        Args:
            view: View name, context and status code

        Returns:
            HTTP response carrying the rendered view
        """
        pass
