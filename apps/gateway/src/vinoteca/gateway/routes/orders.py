"""订单路由

POST  /orders: 组装并持久化订单，201 返回完整订单
GET   /orders: 订单列表，支持 status 筛选
GET   /orders/{order_id}: 订单详情
PATCH /orders/{order_id}: 更新订单状态（仅接受 status 字段）
"""

from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from starlette.responses import JSONResponse
from vinoteca.core.exceptions import ValidationError, VinotecaError

from ..deps import get_pricing_config, get_store_group
from ..errors import error_response
from ..services.order_service import OrderService

router = APIRouter()


async def _read_json(request: Request) -> Any:
    """读取请求体 JSON，无法解析时按非法请求处理"""
    try:
        return await request.json()
    except ValueError:
        raise ValidationError("invalid order payload") from None


@router.post("/orders")
async def create_order(
    request: Request,
    store_group=Depends(get_store_group),
    pricing_config=Depends(get_pricing_config),
):
    """创建订单

    - 成功返回 201 Created
    - 校验失败返回 400 {"error": message}
    """
    service = OrderService(store_group, pricing_config)
    try:
        payload = await _read_json(request)
        order = await service.create_order(payload)
    except VinotecaError as e:
        return error_response(e)

    return JSONResponse(status_code=201, content=order.to_wire())


@router.get("/orders")
async def list_orders(
    status: str | None = Query(default=None, description="按状态筛选"),
    store_group=Depends(get_store_group),
):
    """查询订单列表，按 createdAt 正序"""
    service = OrderService(store_group)
    try:
        orders = await service.list_orders(status)
    except VinotecaError as e:
        return error_response(e)

    return {"orders": [order.to_wire() for order in orders]}


@router.get("/orders/{order_id}")
async def get_order(
    order_id: str,
    store_group=Depends(get_store_group),
):
    """查询订单详情"""
    service = OrderService(store_group)
    try:
        order = await service.get_order(order_id)
    except VinotecaError as e:
        return error_response(e)

    return order.to_wire()


@router.patch("/orders/{order_id}")
async def update_order_status(
    order_id: str,
    request: Request,
    store_group=Depends(get_store_group),
):
    """更新订单状态

    请求体 {"status": "..."}；其余字段忽略。
    """
    service = OrderService(store_group)
    try:
        payload = await _read_json(request)
        if not isinstance(payload, dict) or payload.get("status") in (None, ""):
            raise ValidationError("status required")
        order = await service.update_status(order_id, payload["status"])
    except VinotecaError as e:
        return error_response(e)

    return order.to_wire()
