"""Order Domain Model

Order 是聚合根，OrderItem 只属于一个 Order。
不变式：subtotal == Σ lineTotal，tax == round2(subtotal * 税率)，
total == round2(subtotal + tax)。创建后仅 status 可变。
"""

from datetime import datetime

from pydantic import Field

from .base import CamelModel
from .catalog import CatalogItem
from .enums import OrderStatus


class OrderItem(CamelModel):
    """订单行"""

    id: str = Field(description="{orderId}-item-{position}，position 从 1 开始")
    catalog_item: CatalogItem = Field(description="下单时的目录快照")
    quantity: int = Field(ge=1, description="数量")
    unit_price: float = Field(ge=0, description="单价")
    line_total: float = Field(description="round2(unit_price * quantity)")


class Order(CamelModel):
    """订单"""

    id: str = Field(description="唯一标识")
    code: str = Field(description="可读编码，WI-{year}-{seq}")
    customer_name: str = Field(min_length=1, description="客户名称")
    customer_email: str | None = Field(default=None, description="客户邮箱")
    status: OrderStatus = Field(default=OrderStatus.PENDING, description="订单状态")
    created_at: datetime = Field(description="创建时间（UTC）")
    expected_delivery: datetime = Field(description="预计交付时间（UTC）")
    notes: str | None = Field(default=None, description="备注")
    items: list[OrderItem] = Field(min_length=1, description="订单行")
    subtotal: float = Field(description="小计")
    tax: float = Field(description="税额")
    total: float = Field(description="总额")
