"""Stremio addon API endpoints (manifest, stream)."""

from __future__ import annotations

from typing import Any, cast

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from easystream.domain.entities.errors import (
    InvalidIdentifier,
    NotFound,
    StreamError,
    UpstreamUnavailable,
)
from easystream.domain.entities.stremio import ContentRef
from easystream.infrastructure.config.schema import StremioConfig
from easystream.infrastructure.stremio.stream_mapper import stream_to_dict
from easystream.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["stremio"])

_ERROR_STATUS: dict[type[StreamError], int] = {
    InvalidIdentifier: 400,
    NotFound: 404,
    UpstreamUnavailable: 502,
}


def _build_manifest(config: StremioConfig) -> dict[str, Any]:
    """Build the Stremio addon manifest."""
    return {
        "id": config.addon_id,
        "version": config.addon_version,
        "name": config.addon_name,
        "description": config.description,
        "resources": ["stream"],
        "types": ["movie", "series"],
        "catalogs": [],
        "idPrefixes": ["tt"],
        "behaviorHints": {
            "configurable": False,
            "configurationRequired": False,
        },
    }


def _error_response(exc: StreamError) -> JSONResponse:
    status = _ERROR_STATUS.get(type(exc), 500)
    return JSONResponse(
        status_code=status,
        content={"error": exc.message, "kind": exc.kind},
    )


@router.get("/manifest.json")
async def stremio_manifest(request: Request) -> JSONResponse:
    """Serve the Stremio addon manifest."""
    state = cast(AppState, request.app.state)
    return JSONResponse(content=_build_manifest(state.config.stremio))


@router.get("/stream/{content_type}/{stream_id}")
async def stremio_stream(
    request: Request,
    content_type: str,
    stream_id: str,
) -> JSONResponse:
    """Resolve Easynews streams for a movie, season or episode.

    *stream_id* is ``tt1234567[:season[:episode]]``, optionally with a
    ``.json`` suffix. The resolved title type, not *content_type*, decides
    how the search term is built.
    """
    state = cast(AppState, request.app.state)

    if content_type not in ("movie", "series"):
        return JSONResponse(content={"streams": []})

    try:
        ref = ContentRef.parse(stream_id)
        streams = await state.stremio_stream_uc.execute(ref)
    except StreamError as exc:
        log.warning(
            "stremio_stream_failed",
            stream_id=stream_id,
            kind=exc.kind,
            error=exc.message,
        )
        return _error_response(exc)

    return JSONResponse(content={"streams": [stream_to_dict(s) for s in streams]})
