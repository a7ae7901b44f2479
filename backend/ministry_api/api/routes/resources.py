"""Resource Routes — router factory producing the uniform CRUD surface for one resource.

Invariants:
    - Paths: /api/{path} and /api/{path}/{record_id}, one parameter syntax everywhere
    - Routes never contain business logic: parse/validate body, delegate to CrudResource
    - record_id is passed through as text; CrudResource rejects non-integers with 400

Design Decisions:
    - Factory over seven copy-pasted modules; routers are still included one
      by one in main.py
"""

from fastapi import APIRouter, Depends, Query, status

from ministry_api.infrastructure.query_executor import QueryExecutor, get_executor
from ministry_api.schemas.records import (
    CreatedResponse, MessageResponse, payload_model,
)
from ministry_api.services.crud_resource import CrudResource


def build_resource_router(resource: CrudResource) -> APIRouter:
    """APIRouter exposing List/Get/Create/Update/Delete for ``resource``."""
    descriptor = resource.descriptor
    payload = payload_model(descriptor)
    slug = descriptor.name.lower()
    router = APIRouter(prefix=f"/api/{descriptor.path}", tags=[descriptor.name])

    @router.get("", name=f"list_{slug}")
    async def list_records(
        limit: int | None = Query(None, ge=1, le=1000),
        offset: int = Query(0, ge=0),
        executor: QueryExecutor = Depends(get_executor),
    ):
        return await resource.list_all(executor, limit=limit, offset=offset)

    @router.get("/{record_id}", name=f"get_{slug}")
    async def get_record(
        record_id: str, executor: QueryExecutor = Depends(get_executor),
    ):
        return await resource.get(executor, record_id)

    @router.post(
        "", name=f"create_{slug}", response_model=CreatedResponse,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_record(
        body: payload, executor: QueryExecutor = Depends(get_executor),
    ):
        return await resource.create(executor, body.to_values())

    @router.put(
        "/{record_id}", name=f"update_{slug}", response_model=MessageResponse,
    )
    async def update_record(
        record_id: str, body: payload,
        executor: QueryExecutor = Depends(get_executor),
    ):
        return await resource.update(executor, record_id, body.to_values())

    @router.delete(
        "/{record_id}", name=f"delete_{slug}", response_model=MessageResponse,
    )
    async def delete_record(
        record_id: str, executor: QueryExecutor = Depends(get_executor),
    ):
        return await resource.delete(executor, record_id)

    return router
