"""LoggingMiddleware -- 请求级日志

- request_id：客户端通过 X-Request-ID 传入合法 ULID 时沿用，否则新生成；
  绑定到 structlog contextvars 并写回响应头
- request_completed 带 duration_ms，按状态码分级（4xx warning，5xx error）
- 未处理异常记录 request_failed 后继续上抛
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

REQUEST_ID_HEADER = "X-Request-ID"


def resolve_request_id(header_value: str | None) -> str:
    """沿用上游传入的 ULID，缺失或非法时生成新的"""
    if header_value:
        try:
            return str(ULID.from_str(header_value.strip()))
        except ValueError:
            return str(ULID())
    return str(ULID())


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class LoggingMiddleware(BaseHTTPMiddleware):
    """请求级日志中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        log = structlog.get_logger()
        await log.ainfo("request_started")
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            await log.aerror(
                "request_failed",
                error_type=type(e).__name__,
                duration_ms=_elapsed_ms(started),
            )
            raise

        status_code = response.status_code
        if status_code >= 500:
            emit = log.aerror
        elif status_code >= 400:
            emit = log.awarning
        else:
            emit = log.ainfo
        await emit(
            "request_completed",
            status_code=status_code,
            duration_ms=_elapsed_ms(started),
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
