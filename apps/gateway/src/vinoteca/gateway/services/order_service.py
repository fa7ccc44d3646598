"""OrderService -- 订单创建/查询/状态更新业务逻辑

订单创建流程（持有 StoreGroup.order_lock）：
1. 读取目录与当年已有订单
2. 定价引擎组装订单（校验失败直接抛出，不落盘）
3. 写入订单并提交；任何持久化失败回滚后上抛
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import aiosqlite
import structlog
from vinoteca.core.config import PricingConfig
from vinoteca.core.exceptions import NotFoundError, ValidationError
from vinoteca.core.models import Order, parse_order_status
from vinoteca.core.pricing import build_order, update_status
from vinoteca.core.store import StoreGroup

log = structlog.get_logger()


class OrderService:
    """订单业务服务"""

    def __init__(self, store_group: StoreGroup, config: PricingConfig | None = None) -> None:
        self._stores = store_group
        self._config = config or PricingConfig()

    async def create_order(
        self,
        request: Mapping[str, Any],
        now: datetime | None = None,
    ) -> Order:
        """组装并持久化订单

        Raises:
            ValidationError: 请求非法，或 id/code 与已有订单冲突
        """
        created_at = now or datetime.now(UTC)

        async with self._stores.order_lock:
            catalog = {item.id: item for item in await self._stores.catalog_store.list_items()}
            existing = await self._stores.order_store.list_orders(
                year=created_at.astimezone(UTC).year,
            )

            try:
                order = build_order(
                    request,
                    catalog,
                    existing,
                    now=created_at,
                    config=self._config,
                )
            except ValidationError as e:
                log.warning("order_rejected", reason=e.message)
                raise

            try:
                await self._stores.order_store.create_order(order)
                await self._stores.conn.commit()
            except aiosqlite.IntegrityError as e:
                await self._stores.conn.rollback()
                if self._is_duplicate_order(e):
                    log.warning("order_conflict", order_id=order.id, code=order.code)
                    raise ValidationError("order already exists") from e
                raise
            except Exception as e:
                await self._stores.conn.rollback()
                log.error(
                    "order_persist_failed",
                    order_id=order.id,
                    error_type=type(e).__name__,
                )
                raise

        log.info(
            "order_created",
            order_id=order.id,
            code=order.code,
            item_count=len(order.items),
            total=order.total,
        )
        return order

    async def get_order(self, order_id: str) -> Order:
        """查询订单

        Raises:
            NotFoundError: 订单不存在
        """
        order = await self._stores.order_store.get_order(order_id)
        if order is None:
            raise NotFoundError("order not found")
        return order

    async def list_orders(self, status: str | None = None) -> list[Order]:
        """查询订单列表，可按状态筛选"""
        if not status:
            return await self._stores.order_store.list_orders()
        parsed = parse_order_status(status)
        if parsed is None:
            raise ValidationError(f"invalid status {status}")
        return await self._stores.order_store.list_orders(status=parsed.value)

    async def update_status(self, order_id: str, new_status: Any) -> Order:
        """更新订单状态并持久化

        Raises:
            NotFoundError: 订单不存在
            ValidationError: 状态值非法
        """
        async with self._stores.order_lock:
            order = await self.get_order(order_id)
            updated = update_status(order, new_status)

            try:
                replaced = await self._stores.order_store.replace_order(updated)
                await self._stores.conn.commit()
            except Exception:
                await self._stores.conn.rollback()
                raise

        if not replaced:
            raise NotFoundError("order not found")

        log.info(
            "order_status_updated",
            order_id=order_id,
            from_status=order.status.value,
            to_status=updated.status.value,
        )
        return updated

    @staticmethod
    def _is_duplicate_order(error: Exception) -> bool:
        if not isinstance(error, aiosqlite.IntegrityError):
            return False
        text = str(error)
        return "orders.id" in text or "orders.code" in text or "idx_orders_code" in text
