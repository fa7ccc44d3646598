"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store 实例与定价配置

两者都通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from fastapi import Request
from vinoteca.core.config import PricingConfig
from vinoteca.core.store import StoreGroup


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_pricing_config(request: Request) -> PricingConfig:
    """从 app.state 获取 PricingConfig"""
    return request.app.state.pricing_config
