"""
Records Service - Record Route Handlers
========================================

What:  The five /records endpoints.
How:   Dependencies parse the path id and the JSON body before a session is
       opened; the handler makes one RecordService call and picks the status.

Status codes:
    GET    /records        200 [Record, ...]              500
    GET    /records/{id}   200 Record                     400, 404, 500
    POST   /records        200 {"id": "<generated id>"}   400, 500
    PUT    /records/{id}   200 (empty)                    400, 404, 500
    DELETE /records/{id}   200 (empty)                    400, 404, 500

Error statuses carry no body; see the handlers registered in main.py.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from records_service.database import get_db_session
from records_service.exceptions import ValidationError
from records_service.schemas.record import (
    RecordCreatedResponse,
    RecordPayload,
    RecordResponse,
)
from records_service.services.record_service import record_service

logger = logging.getLogger(__name__)

# Largest id a BIGINT identity column can hold
MAX_RECORD_ID = 2**63 - 1


class UTF8JSONResponse(JSONResponse):
    """JSON response that states its charset in the Content-Type header."""
    media_type = "application/json; charset=utf-8"


# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(tags=["Records"], default_response_class=UTF8JSONResponse)


# ══════════════════════════════════════════════════════════════════════════
# Request Parsing Dependencies
# ══════════════════════════════════════════════════════════════════════════

def parse_record_id(record_id: str) -> int:
    """
    Parse the `{record_id}` path segment.

    Accepts a non-empty run of ASCII digits that fits a BIGINT. Signs,
    whitespace and anything else are rejected with a 400 before any
    storage access.
    """
    if not (record_id.isascii() and record_id.isdigit()):
        raise ValidationError(message=f"Invalid record id '{record_id}'", field="id")
    value = int(record_id)
    if value > MAX_RECORD_ID:
        raise ValidationError(message=f"Record id {record_id} is out of range", field="id")
    return value


async def read_record_payload(request: Request) -> RecordPayload:
    """
    Decode the request body into a RecordPayload.

    The body is parsed as JSON whatever Content-Type the client sent. Invalid
    JSON, a non-object, missing or non-string `name`/`type`, and unknown
    fields all raise ValidationError (→ 400).
    """
    body = await request.body()
    try:
        return RecordPayload.model_validate_json(body)
    except PydanticValidationError as e:
        raise ValidationError(
            message="Malformed record body",
            field="body",
            context={"errors": [err["type"] for err in e.errors()]},
        ) from e


# ══════════════════════════════════════════════════════════════════════════
# Handlers
# ══════════════════════════════════════════════════════════════════════════

@router.get(
    "/records",
    response_model=List[RecordResponse],
    summary="List every record",
)
async def list_records(
    db: AsyncSession = Depends(get_db_session),
) -> List[RecordResponse]:
    """An empty table yields 200 with an empty array."""
    return await record_service.list_records(db)


@router.get(
    "/records/{record_id}",
    response_model=RecordResponse,
    summary="Get a single record by id",
)
async def get_record(
    record_id: int = Depends(parse_record_id),
    db: AsyncSession = Depends(get_db_session),
) -> RecordResponse:
    return await record_service.get_record(db, record_id)


@router.post(
    "/records",
    response_model=RecordCreatedResponse,
    summary="Create a record",
)
async def create_record(
    payload: RecordPayload = Depends(read_record_payload),
    db: AsyncSession = Depends(get_db_session),
) -> RecordCreatedResponse:
    """Returns the generated id as a decimal string: {"id": "42"}."""
    return await record_service.create_record(db, payload)


@router.put(
    "/records/{record_id}",
    response_class=Response,
    summary="Replace name and type of a record",
)
async def replace_record(
    record_id: int = Depends(parse_record_id),
    payload: RecordPayload = Depends(read_record_payload),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await record_service.replace_record(db, record_id, payload)
    return Response(status_code=200)


@router.delete(
    "/records/{record_id}",
    response_class=Response,
    summary="Delete a record",
)
async def delete_record(
    record_id: int = Depends(parse_record_id),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await record_service.delete_record(db, record_id)
    return Response(status_code=200)
