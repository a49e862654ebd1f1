import logging
import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.logging import request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id and logs its outcome and duration.

    A caller supplied ``X-Request-ID`` is reused so ids can be followed
    across services; it is echoed back on every response.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        method = request.method
        path = request.url.path
        client_host = request.client.host if request.client else None
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"{method} {path} failed after {self._elapsed_ms(started)}ms",
                extra={
                    "method": method,
                    "path": path,
                    "client": client_host,
                    "duration_ms": self._elapsed_ms(started),
                    "error": str(exc),
                },
            )
            raise
        finally:
            request_id_var.reset(token)

        duration_ms = self._elapsed_ms(started)
        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(
            level,
            f"{method} {path} - {response.status_code} ({duration_ms}ms)",
            extra={
                "request_id": request_id,
                "method": method,
                "path": path,
                "client": client_host,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return round((time.perf_counter() - started) * 1000, 2)
