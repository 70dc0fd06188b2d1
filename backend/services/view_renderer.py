"""
JSON view renderer.

Serializes a view's context as the response body, with the view name under
"view". Value objects are encoded with their derived fields (name, url,
formatted dates).
"""

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from dtos.internal.outcomes import RenderView
from .interfaces import IViewRenderer


class JSONViewRenderer(IViewRenderer):
    """Default renderer: one JSON document per view."""

    def render(self, view: RenderView) -> JSONResponse:
        body = jsonable_encoder({"view": view.view, **view.context})
        return JSONResponse(content=body, status_code=view.status_code)
