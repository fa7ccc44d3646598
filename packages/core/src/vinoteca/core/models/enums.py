"""枚举定义

订单状态、任务状态、Crew 状态以及 Agent 的角色/模型/可用性枚举。
"""

from enum import StrEnum


class OrderStatus(StrEnum):
    """订单状态 -- 创建后唯一可变的字段"""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TaskStatus(StrEnum):
    """任务状态 -- 创建时固定为 PENDING，后续由执行侧推进"""

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    FAILED = "FAILED"
    COMPLETED = "COMPLETED"


class CrewStatus(StrEnum):
    """Crew 状态 -- 仅 ACTIVE 的 Crew 可以登记新任务"""

    PLANNED = "PLANNED"
    ACTIVE = "ACTIVE"
    FINISHED = "FINISHED"


class AgentRole(StrEnum):
    PLANNER = "PLANNER"
    ANALYST = "ANALYST"
    RESEARCHER = "RESEARCHER"
    CODER = "CODER"


class AgentModel(StrEnum):
    """Agent 使用的模型，声明顺序即看板 KPI 的展示顺序"""

    GPT_5 = "GPT-5"
    CLAUDE_4_5 = "CLAUDE-4.5"
    LLAMA_4 = "LLAMA-4"
    GEMINI_2_5 = "GEMINI-2.5"


class AgentStatus(StrEnum):
    AVAILABLE = "AVAILABLE"
    BUSY = "BUSY"
    OFFLINE = "OFFLINE"


def parse_order_status(value: object) -> OrderStatus | None:
    """将任意输入解析为 OrderStatus

    Returns:
        合法时返回 OrderStatus，否则 None
    """
    if isinstance(value, OrderStatus):
        return value
    if not isinstance(value, str):
        return None
    try:
        return OrderStatus(value.strip().lower())
    except ValueError:
        return None
