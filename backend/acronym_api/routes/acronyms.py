"""
Acronym API: Acronym Route Handlers
======================================

What:  GET/POST /acronym and PATCH/DELETE /acronym/{acronymID}.
How:   Extract query/path/body values, delegate to AcronymService, wrap
       the result in the {status, message, data} envelope.
Who:   Called by the frontend acronym list, search box and edit forms.

Errors are raised by the service and rendered by the handlers registered
in main.py; nothing here catches exceptions.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Query, Request, Response

from acronym_api.database import AcronymStore, get_acronym_store
from acronym_api.schemas.acronym import (
    AcronymCreate,
    AcronymListEnvelope,
    AcronymUpdate,
    Envelope,
)
from acronym_api.services.acronym_service import acronym_service

router = APIRouter(tags=["Acronyms"])

MORE_RESULTS_HEADER = "More-Acronyms-Matched"

_error_responses = {
    400: {"description": "Invalid input", "model": Envelope},
    500: {"description": "Storage error", "model": Envelope},
}


@router.get(
    "/acronym",
    response_model=AcronymListEnvelope,
    # search results carry no _id; keep it out rather than emit null
    response_model_exclude_none=True,
    responses=_error_responses,
    summary="List or fuzzy-search acronyms, one page at a time",
)
async def get_acronyms(
    request: Request,
    response: Response,
    page: Optional[str] = Query(default=None, description="Page number, starting at 1"),
    limit: Optional[str] = Query(default=None, description="Records per page, at least 1"),
    search: Optional[str] = Query(
        default=None, description="Fuzzy search over acronym and definition"
    ),
    store: AcronymStore = Depends(get_acronym_store),
) -> AcronymListEnvelope:
    """
    Example client usage:
        GET /acronym?page=1&limit=10
        GET /acronym?page=2&limit=10&search=procesing

    The `More-Acronyms-Matched` header says whether a next page exists.
    """
    settings = request.app.state.settings
    result = await acronym_service.list_acronyms(
        store,
        page=page,
        limit=limit,
        search=search,
        search_index=settings.search_index,
        search_max_edits=settings.search_max_edits,
    )

    response.headers[MORE_RESULTS_HEADER] = "true" if result.more_results else "false"

    return AcronymListEnvelope(
        status=200,
        message="Search for acronym complete.",
        data=result.records,
    )


@router.post(
    "/acronym",
    status_code=201,
    response_model=Envelope,
    responses={**_error_responses, 409: {"description": "Duplicate entry", "model": Envelope}},
    summary="Add an acronym/definition pair",
)
async def add_acronym(
    payload: Optional[AcronymCreate] = Body(default=None),
    store: AcronymStore = Depends(get_acronym_store),
) -> Envelope:
    payload = payload or AcronymCreate()
    new_id = await acronym_service.add_acronym(
        store, acronym=payload.acronym, definition=payload.definition
    )
    return Envelope(status=201, message="Acronym added successfully.", data={"_id": new_id})


@router.patch(
    "/acronym/{acronymID}",
    status_code=204,
    response_class=Response,
    responses={**_error_responses, 404: {"description": "No such entry", "model": Envelope}},
    summary="Change either the acronym or the definition of an entry",
)
async def update_acronym(
    acronymID: str,
    payload: Optional[AcronymUpdate] = Body(default=None),
    store: AcronymStore = Depends(get_acronym_store),
) -> Response:
    payload = payload or AcronymUpdate()
    await acronym_service.update_acronym(
        store,
        acronymID,
        acronym=payload.acronym,
        definition=payload.definition,
    )
    # 204 carries no body
    return Response(status_code=204)


@router.delete(
    "/acronym/{acronymID}",
    status_code=204,
    response_class=Response,
    responses={
        404: {"description": "No such entry", "model": Envelope},
        500: {"description": "Storage error", "model": Envelope},
    },
    summary="Delete an entry",
)
async def delete_acronym(
    acronymID: str,
    store: AcronymStore = Depends(get_acronym_store),
) -> Response:
    await acronym_service.delete_acronym(store, acronymID)
    return Response(status_code=204)
