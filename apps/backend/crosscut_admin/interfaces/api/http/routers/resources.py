"""
===============================================================================
TARJETA CRC — crosscut_admin/interfaces/api/http/routers/resources.py
===============================================================================

Name:
    Resources Router

Responsibilities:
    - Exponer el Resource Access Facade con el contrato del data provider del
      admin UI: list / get-one / get-many / reference / create.
    - Aplicar del lado del borde HTTP búsqueda, filtros, orden y paginación.
    - Responder 405 UNSUPPORTED_OPERATION a update/delete (sistema append-only).
    - Devolver X-Total-Count en listados.

Collaborators:
    - application.resource_facade.ResourceFacade
    - application.listing (ListQuery, apply_list_query)
    - application.resource_records.as_record
    - container.get_resource_facade
    - schemas.resources

Notas:
    - Las rutas /many y /reference se declaran ANTES de /{resource_id}.
    - Los ResourceError se traducen en api/exception_handlers.py.
===============================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List

from crosscut_admin.application.listing import SORT_ASC, SORT_DESC, ListQuery, apply_list_query
from crosscut_admin.application.resource_facade import ResourceFacade, ResourceKind
from crosscut_admin.application.resource_records import Record, as_record
from crosscut_admin.container import get_resource_facade
from crosscut_admin.crosscutting.error_responses import validation_error
from crosscut_admin.crosscutting.pagination import DEFAULT_LIMIT, MAX_LIMIT
from fastapi import APIRouter, Body, Depends, Query, Response

from ..schemas.resources import (
    AuditEntryRes,
    CreateWorkflowReq,
    ProductRes,
    ResourceListRes,
    ResourceRes,
    WorkflowCreatedRes,
    WorkflowRes,
)

router = APIRouter()

TOTAL_COUNT_HEADER = "X-Total-Count"

_RESPONSE_MODELS = {
    ResourceKind.WORKFLOWS: WorkflowRes,
    ResourceKind.AUDIT: AuditEntryRes,
    ResourceKind.PRODUCTS: ProductRes,
}


def _to_res(kind: ResourceKind, record: Record) -> ResourceRes:
    return _RESPONSE_MODELS[kind].model_validate(record)


def _list_query(
    q: str | None = Query(None, description="Búsqueda libre sobre campos de texto"),
    workflow_id: str | None = Query(None),
    status: str | None = Query(None),
    action: str | None = Query(None),
    product_name: str | None = Query(None),
    name: str | None = Query(None),
    sort: str | None = Query(None, description="Campo de orden"),
    order: str = Query(SORT_ASC, description="ASC | DESC"),
    offset: int = Query(0, ge=0),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
) -> ListQuery:
    order = order.upper()
    if order not in (SORT_ASC, SORT_DESC):
        raise validation_error("order debe ser ASC o DESC")

    filters = {
        key: value
        for key, value in {
            "workflow_id": workflow_id,
            "status": status,
            "action": action,
            "product_name": product_name,
            "name": name,
        }.items()
        if value
    }
    return ListQuery(
        q=q,
        filters=filters,
        sort=sort,
        order=order,
        offset=offset,
        limit=limit,
    )


def _page_response(
    kind: ResourceKind, items: List[Any], query: ListQuery, response: Response
) -> ResourceListRes:
    page = apply_list_query((as_record(item) for item in items), query)
    total = page.page_info.total
    response.headers[TOTAL_COUNT_HEADER] = str(total)
    return ResourceListRes(
        items=[_to_res(kind, record) for record in page.items],
        total=total,
    )


# =============================================================================
# Lectura
# =============================================================================


@router.get(
    "/{collection}",
    response_model=ResourceListRes,
    tags=["resources"],
)
async def list_resources(
    collection: str,
    response: Response,
    query: ListQuery = Depends(_list_query),
    facade: ResourceFacade = Depends(get_resource_facade),
):
    kind = ResourceKind.parse(collection)
    result = await facade.list(kind)
    return _page_response(kind, result.items, query, response)


@router.get(
    "/{collection}/many",
    response_model=ResourceListRes,
    tags=["resources"],
)
async def get_many_resources(
    collection: str,
    response: Response,
    ids: List[str] = Query(..., min_length=1),
    facade: ResourceFacade = Depends(get_resource_facade),
):
    kind = ResourceKind.parse(collection)
    items = await facade.get_many(kind, ids)
    response.headers[TOTAL_COUNT_HEADER] = str(len(items))
    return ResourceListRes(
        items=[_to_res(kind, as_record(item)) for item in items],
        total=len(items),
    )


@router.get(
    "/{collection}/reference",
    response_model=ResourceListRes,
    tags=["resources"],
)
async def get_many_reference(
    collection: str,
    response: Response,
    target: str = Query(..., min_length=1, description="Campo de referencia"),
    target_id: str = Query(..., alias="id", min_length=1),
    query: ListQuery = Depends(_list_query),
    facade: ResourceFacade = Depends(get_resource_facade),
):
    kind = ResourceKind.parse(collection)
    result = await facade.get_many_reference(kind, target, target_id)
    return _page_response(kind, result.items, query, response)


@router.get(
    "/{collection}/{resource_id}",
    response_model=ResourceRes,
    tags=["resources"],
)
async def get_resource(
    collection: str,
    resource_id: str,
    facade: ResourceFacade = Depends(get_resource_facade),
):
    kind = ResourceKind.parse(collection)
    item = await facade.get_one(kind, resource_id)
    return _to_res(kind, as_record(item))


# =============================================================================
# Escritura
# =============================================================================


@router.post(
    "/workflows",
    response_model=WorkflowCreatedRes,
    status_code=201,
    tags=["resources"],
)
async def create_workflow(
    req: CreateWorkflowReq,
    facade: ResourceFacade = Depends(get_resource_facade),
):
    created = await facade.create(
        ResourceKind.WORKFLOWS, req.model_dump(exclude_none=True)
    )
    return WorkflowCreatedRes.model_validate(as_record(created))


@router.post("/{collection}", tags=["resources"])
async def create_resource(
    collection: str,
    data: Dict[str, Any] | None = Body(None),
    facade: ResourceFacade = Depends(get_resource_facade),
):
    # Solo workflows admite create; el facade rechaza el resto.
    await facade.create(ResourceKind.parse(collection), data or {})


@router.put("/{collection}/{resource_id}", tags=["resources"])
@router.patch("/{collection}/{resource_id}", tags=["resources"])
async def update_resource(
    collection: str,
    resource_id: str,
    facade: ResourceFacade = Depends(get_resource_facade),
):
    await facade.update(collection, resource_id)


@router.put("/{collection}", tags=["resources"])
@router.patch("/{collection}", tags=["resources"])
async def update_many_resources(
    collection: str,
    facade: ResourceFacade = Depends(get_resource_facade),
):
    await facade.update_many(collection)


@router.delete("/{collection}/{resource_id}", tags=["resources"])
async def delete_resource(
    collection: str,
    resource_id: str,
    facade: ResourceFacade = Depends(get_resource_facade),
):
    await facade.delete(collection, resource_id)


@router.delete("/{collection}", tags=["resources"])
async def delete_many_resources(
    collection: str,
    facade: ResourceFacade = Depends(get_resource_facade),
):
    await facade.delete_many(collection)
