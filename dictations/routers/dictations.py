import logging

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import ValidationError

from dictations.errors import ClientInputError
from dictations.models.schemas import DictationIn
from dictations.templates.listing import render_listing

logger = logging.getLogger(__name__)
router = APIRouter(tags=["dictations"])


@router.post("/{source:path}", response_class=PlainTextResponse)
async def ingest_dictation(source: str, request: Request):
    """Classify and store a dictation. The request path names the source."""
    try:
        payload = DictationIn.model_validate_json(await request.body())
    except ValidationError:
        raise ClientInputError("Invalid JSON")

    ingestion = request.app.state.ingestion
    ack = await ingestion.ingest(payload, source=source.strip("/"))
    return PlainTextResponse(ack.message)


@router.get("/{path:path}", response_class=HTMLResponse)
async def list_dictations(
    request: Request,
    user: str | None = Query(None),
    limit: str | None = Query(None),
):
    retrieval = request.app.state.retrieval
    entries = await retrieval.list_recent(user, _parse_limit(limit))
    logger.info("Listing %d dictations for %s", len(entries), user)
    return HTMLResponse(render_listing(user, entries, retrieval.settings.local_tz))


def _parse_limit(limit: str | None) -> int | None:
    if limit is None:
        return None
    try:
        value = int(limit)
    except ValueError:
        raise ClientInputError("Invalid 'limit' query parameter.")
    if value < 1:
        raise ClientInputError("Invalid 'limit' query parameter.")
    return value
