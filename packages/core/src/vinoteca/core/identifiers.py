"""订单标识与编码生成

- 订单 ID：ULID，时间有序且无需碰撞检查
- 订单编码：{prefix}-{year}-{seq}，seq 在同一自然年内递增，至少 3 位
- 年份一律取 UTC 日历年：createdAt 先换算到 UTC，再与已有订单的 UTC 年份比较；
  服务器本地时区不参与，跨年时刻的订单归属与部署时区无关

编码生成是"读最大值再写入"，并发安全依赖调用方串行化订单创建。
"""

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from ulid import ULID

from .config import DEFAULT_ORDER_CODE_PREFIX


def generate_order_id() -> str:
    """生成订单 ID（ULID，26 字符）"""
    return str(ULID())


def extract_sequential(code: Any) -> int | None:
    """提取编码最后一段的序号

    Returns:
        最后一段为纯数字时返回整数，否则 None
    """
    if not isinstance(code, str):
        return None
    segment = code.split("-")[-1].strip()
    if not segment.isascii() or not segment.isdigit():
        return None
    return int(segment)


def _to_utc(value: Any) -> datetime | None:
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _field(order: Any, name: str, alias: str) -> Any:
    if isinstance(order, Mapping):
        return order.get(alias, order.get(name))
    return getattr(order, name, None)


def generate_order_code(
    existing_orders: Iterable[Any],
    created_at: datetime,
    prefix: str = DEFAULT_ORDER_CODE_PREFIX,
) -> str:
    """生成下一个订单编码

    只统计 createdAt 与新订单处于同一自然年（UTC）的订单；
    无法解析的编码不参与计算。

    Args:
        existing_orders: 已有订单（Order 或 camelCase 字典）
        created_at: 新订单创建时间
        prefix: 编码前缀

    Returns:
        形如 WI-2025-008 的编码
    """
    year = _to_utc(created_at).year
    last_sequential = 0
    for order in existing_orders:
        order_created = _to_utc(_field(order, "created_at", "createdAt"))
        if order_created is None or order_created.year != year:
            continue
        sequential = extract_sequential(_field(order, "code", "code"))
        if sequential is not None:
            last_sequential = max(last_sequential, sequential)
    return f"{prefix}-{year}-{last_sequential + 1:03d}"
