"""
Catalog API endpoints

Home page plus list, detail, create, update and delete routes for every
catalog entity. Routes only decode the request and hand the outcome of a
service flow to the renderer; all decisions live in the services.
"""

from typing import Callable
from fastapi import APIRouter, Depends, Request
from starlette.responses import Response

from dependencies import (
    get_author_service,
    get_book_instance_service,
    get_book_service,
    get_catalog_index_service,
    get_genre_service,
    get_renderer,
)
from domain.value_objects import EntityKind
from services.catalog_index_service import CatalogIndexService
from services.crud_service import CrudService
from services.interfaces import IViewRenderer
from utils.error_handlers import handle_api_errors
from utils.responses import to_response

router = APIRouter()


@router.get("")
@router.get("/")
@handle_api_errors("Catalog home")
async def catalog_home(
    service: CatalogIndexService = Depends(get_catalog_index_service),
    renderer: IViewRenderer = Depends(get_renderer),
) -> Response:
    """Record counts for the whole catalog."""
    return to_response(await service.index(), renderer)


def build_entity_router(kind: EntityKind, get_service: Callable[..., CrudService]) -> APIRouter:
    """
    Routes for one entity type.

    The create routes are registered before the detail route so that
    '/{entity}/create' is never read as an id.

    Args:
        kind: Entity type; its value is the path segment
        get_service: Dependency providing the entity's service

    Returns:
        Router to mount under the catalog prefix
    """
    entity_router = APIRouter()
    label = kind.label.capitalize()
    detail = f"/{kind.value}/{{entity_id}}"

    @entity_router.get(f"/{kind.value}s")
    @handle_api_errors(f"{label} list")
    async def list_entities(
        service: CrudService = Depends(get_service),
        renderer: IViewRenderer = Depends(get_renderer),
    ) -> Response:
        return to_response(await service.list_all(), renderer)

    @entity_router.get(f"/{kind.value}/create")
    @handle_api_errors(f"{label} create form")
    async def create_form(
        service: CrudService = Depends(get_service),
        renderer: IViewRenderer = Depends(get_renderer),
    ) -> Response:
        return to_response(await service.create_form(), renderer)

    @entity_router.post(f"/{kind.value}/create")
    @handle_api_errors(f"{label} create")
    async def create(
        request: Request,
        service: CrudService = Depends(get_service),
        renderer: IViewRenderer = Depends(get_renderer),
    ) -> Response:
        form = await request.form()
        return to_response(await service.create(form), renderer)

    @entity_router.get(detail)
    @handle_api_errors(f"{label} detail")
    async def show(
        entity_id: str,
        service: CrudService = Depends(get_service),
        renderer: IViewRenderer = Depends(get_renderer),
    ) -> Response:
        return to_response(await service.detail(entity_id), renderer)

    @entity_router.get(f"{detail}/delete")
    @handle_api_errors(f"{label} delete form")
    async def delete_form(
        entity_id: str,
        service: CrudService = Depends(get_service),
        renderer: IViewRenderer = Depends(get_renderer),
    ) -> Response:
        return to_response(await service.delete_form(entity_id), renderer)

    @entity_router.post(f"{detail}/delete")
    @handle_api_errors(f"{label} delete")
    async def delete(
        entity_id: str,
        service: CrudService = Depends(get_service),
        renderer: IViewRenderer = Depends(get_renderer),
    ) -> Response:
        return to_response(await service.delete(entity_id), renderer)

    @entity_router.get(f"{detail}/update")
    @handle_api_errors(f"{label} update form")
    async def update_form(
        entity_id: str,
        service: CrudService = Depends(get_service),
        renderer: IViewRenderer = Depends(get_renderer),
    ) -> Response:
        return to_response(await service.update_form(entity_id), renderer)

    @entity_router.post(f"{detail}/update")
    @handle_api_errors(f"{label} update")
    async def update(
        entity_id: str,
        request: Request,
        service: CrudService = Depends(get_service),
        renderer: IViewRenderer = Depends(get_renderer),
    ) -> Response:
        form = await request.form()
        return to_response(await service.update(entity_id, form), renderer)

    return entity_router


authors_router = build_entity_router(EntityKind.AUTHOR, get_author_service)
genres_router = build_entity_router(EntityKind.GENRE, get_genre_service)
books_router = build_entity_router(EntityKind.BOOK, get_book_service)
book_instances_router = build_entity_router(EntityKind.BOOK_INSTANCE, get_book_instance_service)
