"""Vinoteca Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .base import CamelModel
from .catalog import CatalogItem
from .enums import (
    AgentModel,
    AgentRole,
    AgentStatus,
    CrewStatus,
    OrderStatus,
    TaskStatus,
    parse_order_status,
)
from .order import Order, OrderItem
from .workforce import Agent, CreateTaskCommand, Crew, NextTask, Task, TaskKpi

__all__ = [
    # 枚举
    "OrderStatus",
    "TaskStatus",
    "CrewStatus",
    "AgentRole",
    "AgentModel",
    "AgentStatus",
    "parse_order_status",
    # 基类
    "CamelModel",
    # 订单
    "CatalogItem",
    "Order",
    "OrderItem",
    # 编排
    "Agent",
    "Crew",
    "Task",
    "CreateTaskCommand",
    "TaskKpi",
    "NextTask",
]
