"""CatalogItem Domain Model

只读参考数据。订单创建时 OrderItem 持有其快照副本，
之后的价格调整不会回溯影响历史订单。
"""

from pydantic import Field

from .base import CamelModel


class CatalogItem(CamelModel):
    """可售酒品"""

    id: str = Field(description="唯一标识")
    name: str = Field(description="名称")
    price: float = Field(ge=0, description="参考单价")
    winery: str = Field(default="", description="酒庄")
    region: str = Field(default="", description="产区")
    varietal: str = Field(default="", description="葡萄品种")
    vintage: int | None = Field(default=None, description="年份")
    stock: int = Field(default=0, ge=0, description="库存瓶数")
