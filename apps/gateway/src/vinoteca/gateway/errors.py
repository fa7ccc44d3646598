"""业务异常 -> HTTP 响应

ValidationError -> 400，NotFoundError -> 404，响应体统一为 {"error": message}。
"""

from starlette.responses import JSONResponse
from vinoteca.core.exceptions import NotFoundError, VinotecaError


def error_response(exc: VinotecaError) -> JSONResponse:
    """将业务异常转换为 JSONResponse"""
    status_code = 404 if isinstance(exc, NotFoundError) else 400
    return JSONResponse(status_code=status_code, content={"error": exc.message})
