"""订单定价引擎 -- 订单行解析、合计计算、订单组装与状态更新

服务端网关与客户端调用方共用同一实现。所有函数均为纯函数：
不做持久化，失败时抛出 ValidationError，不返回部分结果。

金额以 float 表示，统一使用 round2（四舍五入到分，half-up，非银行家舍入）。
"""

import math
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime, timedelta
from typing import Any

from .config import PricingConfig
from .exceptions import ValidationError
from .identifiers import generate_order_code, generate_order_id
from .lookup import Lookup, find_in
from .models import CatalogItem, Order, OrderItem, OrderStatus, parse_order_status

CatalogSource = Mapping[str, CatalogItem] | Lookup[CatalogItem]


def round2(value: float) -> float:
    """四舍五入到两位小数（half-up）

    放大 100 倍后溢出的值（含 inf/nan）原样返回：此量级的 float 已没有小数部分。
    """
    scaled = value * 100 + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / 100


def _pick(payload: Mapping[str, Any], alias: str, name: str) -> Any:
    """同时接受 camelCase（对外 JSON）和 snake_case（Python 调用方）键名"""
    if alias in payload:
        return payload[alias]
    return payload.get(name)


def _as_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def normalize_quantity(value: Any) -> int:
    """数量归一化：非数字、非有限或 <= 0 视为 1；小数向下取整，结果至少为 1"""
    quantity = _as_number(value)
    if quantity is None or quantity <= 0:
        return 1
    return max(1, math.floor(quantity))


def resolve_catalog_item_id(raw_item: Any) -> str | None:
    """解析订单行的目录 ID：catalogItemId 或嵌套 catalogItem.id"""
    if not isinstance(raw_item, Mapping):
        return None
    item_id = _pick(raw_item, "catalogItemId", "catalog_item_id")
    if not item_id:
        nested = _pick(raw_item, "catalogItem", "catalog_item")
        if isinstance(nested, Mapping):
            item_id = nested.get("id")
        elif isinstance(nested, CatalogItem):
            item_id = nested.id
    if item_id is None or isinstance(item_id, bool):
        return None
    item_id = str(item_id).strip()
    return item_id or None


def resolve_unit_price(override: Any, catalog_item: CatalogItem) -> float:
    """单价：合法的显式覆盖值优先，否则取目录价，再否则 0"""
    price = _as_number(override)
    if price is not None and price >= 0:
        return price
    return float(catalog_item.price or 0)


def build_order_items(
    raw_items: Any,
    catalog: CatalogSource,
    order_id: str,
) -> list[OrderItem]:
    """根据原始订单行构建 OrderItem 列表

    Raises:
        ValidationError: 订单行为空、目录引用缺失或目录中不存在
    """
    if not isinstance(raw_items, (list, tuple)) or not raw_items:
        raise ValidationError("items required")

    items: list[OrderItem] = []
    for position, raw_item in enumerate(raw_items, start=1):
        catalog_item_id = resolve_catalog_item_id(raw_item)
        if catalog_item_id is None:
            raise ValidationError(f"invalid catalog reference at position {position}")

        catalog_item = find_in(catalog, catalog_item_id)
        if catalog_item is None:
            raise ValidationError(f"catalog item {catalog_item_id} not found")

        quantity = normalize_quantity(raw_item.get("quantity"))
        unit_price = resolve_unit_price(_pick(raw_item, "unitPrice", "unit_price"), catalog_item)
        line_total = round2(unit_price * quantity)
        if not math.isfinite(line_total):
            raise ValidationError(f"line total out of range at position {position}")
        items.append(
            OrderItem(
                id=f"{order_id}-item-{position}",
                catalog_item=catalog_item.model_copy(deep=True),
                quantity=quantity,
                unit_price=unit_price,
                line_total=line_total,
            )
        )
    return items


def calculate_totals(
    items: Iterable[OrderItem],
    tax_rate: float = PricingConfig().tax_rate,
) -> tuple[float, float, float]:
    """计算 (subtotal, tax, total)

    subtotal 为各行 line_total 直接累加（不再舍入）。

    Raises:
        ValidationError: 合计超出 float 可表示范围
    """
    subtotal = sum((item.line_total for item in items), 0.0)
    tax = round2(subtotal * tax_rate)
    total = round2(subtotal + tax)
    if not math.isfinite(total):
        raise ValidationError("order total out of range")
    return subtotal, tax, total


def parse_timestamp(value: Any) -> datetime:
    """解析时间戳并转换为 UTC

    接受 datetime、ISO-8601 字符串（无时区信息视为 UTC）以及
    epoch 毫秒数（int/float，与 JSON 客户端的 Date.now() 一致）。

    Raises:
        ValidationError: 无法解析或超出可表示范围
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, UTC)
        except (OverflowError, ValueError, OSError):
            raise ValidationError("invalid date") from None
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            raise ValidationError("invalid date") from None
    else:
        raise ValidationError("invalid date")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _optional_text(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def build_order(
    request: Any,
    catalog: CatalogSource,
    existing_orders: Sequence[Order] | Iterable[Any] = (),
    now: datetime | None = None,
    config: PricingConfig | None = None,
) -> Order:
    """根据原始订单请求组装完整订单

    校验顺序：客户名称 -> 订单行 -> 目录引用 -> 状态 -> 交付日期。
    第一个失败即抛出，不返回部分订单。

    Args:
        request: 原始请求（customerName、items、可选 customerEmail/notes/code/
            status/expectedDelivery/id）。expectedDelivery 可为 ISO-8601
            字符串或 epoch 毫秒数
        catalog: 目录映射或 Lookup
        existing_orders: 已有订单，用于生成同年序号
        now: 创建时间，默认当前 UTC 时间
        config: 定价配置

    Returns:
        组装完成、尚未持久化的 Order

    Raises:
        ValidationError: 任一校验失败
    """
    if not isinstance(request, Mapping):
        raise ValidationError("invalid order payload")

    config = config or PricingConfig()
    created_at = now or datetime.now(UTC)
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)

    raw_name = _pick(request, "customerName", "customer_name")
    customer_name = raw_name.strip() if isinstance(raw_name, str) else ""
    if not customer_name:
        raise ValidationError("customer name required")

    order_id = _optional_text(request.get("id")) or generate_order_id()
    items = build_order_items(request.get("items"), catalog, order_id)
    subtotal, tax, total = calculate_totals(items, config.tax_rate)

    raw_status = request.get("status")
    if raw_status in (None, ""):
        status = OrderStatus.PENDING
    else:
        status = parse_order_status(raw_status)
        if status is None:
            raise ValidationError(f"invalid status {raw_status}")

    raw_delivery = _pick(request, "expectedDelivery", "expected_delivery")
    if raw_delivery:
        expected_delivery = parse_timestamp(raw_delivery)
    else:
        expected_delivery = created_at + timedelta(days=config.delivery_offset_days)

    code = _optional_text(request.get("code")) or generate_order_code(
        existing_orders, created_at, config.code_prefix
    )

    return Order(
        id=order_id,
        code=code,
        customer_name=customer_name,
        customer_email=_optional_text(_pick(request, "customerEmail", "customer_email")),
        status=status,
        created_at=created_at,
        expected_delivery=expected_delivery,
        notes=_optional_text(request.get("notes")),
        items=items,
        subtotal=subtotal,
        tax=tax,
        total=total,
    )


def update_status(order: Order, new_status: Any) -> Order:
    """更新订单状态，返回新的 Order（其余字段不变）

    Raises:
        ValidationError: 状态值不属于 pending/processing/completed/cancelled
    """
    status = parse_order_status(new_status)
    if status is None:
        raise ValidationError(f"invalid status {new_status}")
    return order.model_copy(update={"status": status})
