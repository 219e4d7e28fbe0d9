"""
Noteful API — Folder & Tag Route Handlers
==========================================

What:  CRUD endpoints for /api/folders and /api/tags.
How:   Both resources are plain {id, name} rows, so one router factory builds
       the five endpoints for each, bound to its service and schemas.

Endpoints (per resource):
    GET    /api/{resources}        → 200 [{id, name}]
    GET    /api/{resources}/{id}   → 200 {id, name} | 404
    POST   /api/{resources}        → 201 {id, name} + Location | 400
    PUT    /api/{resources}/{id}   → 200 {id, name} | 400 | 404
    DELETE /api/{resources}/{id}   → 204
"""

from typing import List, Type

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.config import settings
from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse
from noteful.schemas.folder import FolderResponse, FolderWrite
from noteful.schemas.tag import TagResponse, TagWrite
from noteful.services.catalog_service import (
    NamedEntityService,
    folder_service,
    tag_service,
)


def create_catalog_router(
    resource: str,
    service: NamedEntityService,
    write_model: Type[BaseModel],
    response_model: Type[BaseModel],
) -> APIRouter:
    """
    Build the CRUD router for one {id, name} resource.

    Route names are `list_{resource}s`, `get_{resource}`, ... so
    request.url_for("get_folder", ...) resolves the Location header.
    """
    plural = f"{resource}s"
    router = APIRouter(prefix=f"{settings.api_prefix}/{plural}", tags=[plural.capitalize()])
    not_found = {404: {"description": f"{resource.capitalize()} not found", "model": ErrorResponse}}
    bad_request = {400: {"description": "Missing name", "model": ErrorResponse}}

    @router.get(
        "",
        response_model=List[response_model],
        name=f"list_{plural}",
        summary=f"List {plural}",
    )
    async def list_entities(db: AsyncSession = Depends(get_db_session)):
        return await service.list_all(db)

    @router.get(
        "/{entity_id}",
        response_model=response_model,
        responses=not_found,
        name=f"get_{resource}",
        summary=f"Get a single {resource} by ID",
    )
    async def get_entity(entity_id: int, db: AsyncSession = Depends(get_db_session)):
        return await service.get(db, entity_id)

    @router.post(
        "",
        response_model=response_model,
        status_code=status.HTTP_201_CREATED,
        responses=bad_request,
        name=f"create_{resource}",
        summary=f"Create a {resource}",
    )
    async def create_entity(
        payload: write_model,
        request: Request,
        response: Response,
        db: AsyncSession = Depends(get_db_session),
    ):
        entity = await service.create(db, payload.name)
        response.headers["Location"] = str(
            request.url_for(f"get_{resource}", entity_id=entity.id)
        )
        return entity

    @router.put(
        "/{entity_id}",
        response_model=response_model,
        responses={**bad_request, **not_found},
        name=f"update_{resource}",
        summary=f"Rename a {resource}",
    )
    async def update_entity(
        entity_id: int,
        payload: write_model,
        db: AsyncSession = Depends(get_db_session),
    ):
        return await service.update(db, entity_id, payload.name)

    @router.delete(
        "/{entity_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        name=f"delete_{resource}",
        summary=f"Delete a {resource}",
        description="Always 204, whether or not the row existed.",
    )
    async def delete_entity(entity_id: int, db: AsyncSession = Depends(get_db_session)):
        await service.delete(db, entity_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router


folders_router = create_catalog_router("folder", folder_service, FolderWrite, FolderResponse)
tags_router = create_catalog_router("tag", tag_service, TagWrite, TagResponse)
