"""
Conversion of orchestrator outcomes into HTTP responses.
"""

from fastapi.responses import RedirectResponse
from starlette.responses import Response

from dtos.internal.outcomes import Outcome, Redirect
from services.interfaces import IViewRenderer


def to_response(outcome: Outcome, renderer: IViewRenderer) -> Response:
    """
    Build the response for a flow's outcome.

    Args:
        outcome: RenderView or Redirect returned by an orchestrator
        renderer: Renderer used for views

    Returns:
        A redirect response, or the rendered view
    """
    if isinstance(outcome, Redirect):
        return RedirectResponse(url=outcome.location, status_code=outcome.status_code)
    return renderer.render(outcome)
