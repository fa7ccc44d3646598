"""配置模块 -- 可通过环境变量覆盖

包含数据库路径、启动种子数据开关，以及定价相关配置（税率、交付天数、订单编码前缀）。
"""

import math
import os
from pathlib import Path

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()

DEFAULT_TAX_RATE = 0.19
DEFAULT_DELIVERY_OFFSET_DAYS = 4
MAX_DELIVERY_OFFSET_DAYS = 3650
DEFAULT_ORDER_CODE_PREFIX = "WI"


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("VINOTECA_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "VINOTECA_DB_PATH",
        str(_get_base_dir() / "sqlite" / "vinoteca.db"),
    )


def seed_on_startup() -> bool:
    """启动时是否在空库中写入种子数据"""
    return os.environ.get("VINOTECA_SEED_ON_STARTUP", "true").lower() == "true"


class PricingConfig(BaseModel):
    """订单定价配置

    环境变量:
        VINOTECA_TAX_RATE: 税率（默认 0.19）
        VINOTECA_DELIVERY_OFFSET_DAYS: 默认交付天数（默认 4）
        VINOTECA_ORDER_CODE_PREFIX: 订单编码前缀（默认 WI）
    """

    tax_rate: float = Field(
        default=DEFAULT_TAX_RATE, ge=0, allow_inf_nan=False, description="税率"
    )
    delivery_offset_days: int = Field(
        default=DEFAULT_DELIVERY_OFFSET_DAYS,
        ge=0,
        le=MAX_DELIVERY_OFFSET_DAYS,
        description="createdAt 之后的默认交付天数",
    )
    code_prefix: str = Field(
        default=DEFAULT_ORDER_CODE_PREFIX,
        min_length=1,
        description="订单编码前缀",
    )


def load_pricing_config() -> PricingConfig:
    """从环境变量加载定价配置

    数值非法（无法解析、负数、nan/inf 或超出上限）时记录 warning 并回退默认值，
    不阻塞启动。
    """
    kwargs: dict = {}

    if val := os.environ.get("VINOTECA_TAX_RATE"):
        try:
            rate = float(val)
            if not math.isfinite(rate) or rate < 0:
                raise ValueError(val)
            kwargs["tax_rate"] = rate
        except ValueError:
            log.warning(
                "invalid_pricing_config",
                env_var="VINOTECA_TAX_RATE",
                value=val,
                fallback=DEFAULT_TAX_RATE,
            )

    if val := os.environ.get("VINOTECA_DELIVERY_OFFSET_DAYS"):
        try:
            days = int(val)
            if not 0 <= days <= MAX_DELIVERY_OFFSET_DAYS:
                raise ValueError(val)
            kwargs["delivery_offset_days"] = days
        except ValueError:
            log.warning(
                "invalid_pricing_config",
                env_var="VINOTECA_DELIVERY_OFFSET_DAYS",
                value=val,
                fallback=DEFAULT_DELIVERY_OFFSET_DAYS,
            )

    if val := os.environ.get("VINOTECA_ORDER_CODE_PREFIX"):
        kwargs["code_prefix"] = val.strip() or DEFAULT_ORDER_CODE_PREFIX

    return PricingConfig(**kwargs)
