from __future__ import annotations

import logging
import re
import time
import uuid
from typing import Callable, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"

_GAME_PATH = re.compile(r"^/api/games/([^/]+)")


def game_id_from_path(path: str) -> Optional[str]:
    """Return the game id of a ``/api/games/{id}/...`` path, if any."""
    m = _GAME_PATH.match(path)
    return m.group(1) if m else None


class RequestIDLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID and log one line on the way in and out.

    A caller-supplied ``x-request-id`` is reused so client and server logs
    line up; otherwise a uuid4 is assigned. The ID is stored on
    ``request.state`` for the error handlers and echoed on the response.
    Requests against a game carry its ``game_id`` in the log record too.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        fields: Dict[str, object] = {"request_id": request_id}
        game_id = game_id_from_path(request.url.path)
        if game_id is not None:
            fields["game_id"] = game_id
        logger.info(
            "request %s %s",
            request.method,
            request.url.path,
            extra={**fields, "method": request.method, "path": request.url.path},
        )

        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "request failed",
                extra={**fields, "duration_ms": _elapsed_ms(start)},
            )
            raise

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.log(
            logging.WARNING if response.status_code >= 500 else logging.INFO,
            "response %d",
            response.status_code,
            extra={
                **fields,
                "status_code": response.status_code,
                "duration_ms": _elapsed_ms(start),
            },
        )
        return response


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)
