"""任务编排域模型 -- Agent / Crew / Task

Agent 与 Crew 为只读参考数据；Task 在校验通过后创建一次，
之后由执行侧推进状态与 actual_tokens_used。
"""

from datetime import datetime

from pydantic import Field

from .base import CamelModel
from .enums import AgentModel, AgentRole, AgentStatus, CrewStatus, TaskStatus


class Agent(CamelModel):
    """执行任务的 Agent"""

    id: int = Field(description="唯一标识")
    name: str = Field(description="名称")
    role: AgentRole = Field(description="角色")
    model_used: AgentModel = Field(description="使用的模型")
    max_tokens_per_task: int = Field(gt=0, description="单任务 token 上限")
    status: AgentStatus = Field(default=AgentStatus.AVAILABLE, description="可用性")


class Crew(CamelModel):
    """Agent 小组"""

    id: int = Field(description="唯一标识")
    name: str = Field(description="名称")
    objective: str = Field(default="", description="目标")
    lead_agent_id: int = Field(description="负责人 Agent ID")
    status: CrewStatus = Field(default=CrewStatus.PLANNED, description="状态")
    started_at: datetime | None = Field(default=None, description="启动时间")
    finished_at: datetime | None = Field(default=None, description="结束时间")


class Task(CamelModel):
    """登记给 Agent 的任务

    id 由 TaskStore 在写入时分配，校验阶段为 None。
    """

    id: int | None = Field(default=None, description="唯一标识（存储分配）")
    crew_id: int = Field(description="所属 Crew")
    agent_id: int = Field(description="执行 Agent")
    description: str = Field(description="任务描述")
    estimated_tokens: int = Field(gt=0, description="预估 token")
    actual_tokens_used: int | None = Field(default=None, description="实际 token，完成时写入")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="状态")
    registered_at: datetime = Field(description="登记时间（UTC）")
    finished_at: datetime | None = Field(default=None, description="结束时间")


class CreateTaskCommand(CamelModel):
    """任务创建请求"""

    agent_id: int = Field(description="Agent ID")
    crew_id: int = Field(description="Crew ID")
    description: str = Field(min_length=1, description="任务描述")
    estimated_tokens: int = Field(gt=0, description="预估 token")


class TaskKpi(CamelModel):
    """按模型聚合的任务 KPI"""

    model: AgentModel
    completion_rate: float = Field(description="完成率（%），completed / (completed + failed)")
    token_efficiency: float | None = Field(
        default=None,
        description="actual / estimated 的均值，无样本时为 None",
    )
    open_backlog: int = Field(default=0, description="PENDING 任务数")


class NextTask(CamelModel):
    """下一个待执行任务的摘要"""

    task_id: int | None
    title: str
    description: str
    crew_name: str
    agent_name: str
    estimated_tokens: int
    registered_at: datetime
