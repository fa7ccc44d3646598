"""TraceMiddleware -- 实体级追踪

从路径 /orders/{id} 或 /tasks/{id} 中提取实体 id，
绑定 order_id / task_id 到 structlog contextvars，贯穿该请求的业务日志。
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# 路径段 -> contextvar 名称
_TRACED_SEGMENTS = {
    "orders": "order_id",
    "tasks": "task_id",
}


def extract_trace_ids(path: str) -> dict[str, str]:
    """从请求路径中提取需要绑定的实体 id"""
    parts = [part for part in path.split("/") if part]
    trace_ids: dict[str, str] = {}
    for i, part in enumerate(parts[:-1]):
        key = _TRACED_SEGMENTS.get(part)
        if key is not None:
            trace_ids[key] = parts[i + 1]
    return trace_ids


class TraceMiddleware(BaseHTTPMiddleware):
    """实体级追踪中间件"""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        trace_ids = extract_trace_ids(request.url.path)
        if trace_ids:
            structlog.contextvars.bind_contextvars(**trace_ids)

        return await call_next(request)
