"""任务创建校验

校验按固定顺序执行，第一个失败即停止：
1. Agent 存在
2. Crew 存在
3. Crew 处于 ACTIVE
4. estimated_tokens 不超过 Agent 上限
5. 同一 Agent 在同一自然日（本地时间）内未登记过任务

同日去重是"先读后写"，并发安全依赖调用方串行化任务创建。
"""

from collections.abc import Iterable, Mapping
from datetime import UTC, date, datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .exceptions import NotFoundError, ValidationError
from .lookup import Lookup, find_in
from .models import Agent, CreateTaskCommand, Crew, CrewStatus, Task, TaskStatus


def _local_date(value: datetime) -> date:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone().date()


def has_same_day_task(
    existing_tasks: Iterable[Task],
    agent_id: int,
    when: datetime,
) -> bool:
    """同一 Agent 是否已在 when 所在的本地自然日登记过任务"""
    target = _local_date(when)
    return any(
        task.agent_id == agent_id and _local_date(task.registered_at) == target
        for task in existing_tasks
    )


def create_task(
    command: CreateTaskCommand | Mapping[str, Any],
    agent_lookup: Mapping[int, Agent] | Lookup[Agent],
    crew_lookup: Mapping[int, Crew] | Lookup[Crew],
    existing_tasks: Iterable[Task],
    now: datetime | None = None,
) -> Task:
    """校验任务创建请求并构建 PENDING 任务

    Args:
        command: 创建请求（模型或 camelCase/snake_case 字典）
        agent_lookup: Agent 映射或 Lookup
        crew_lookup: Crew 映射或 Lookup
        existing_tasks: 已有任务
        now: 登记时间，默认当前 UTC 时间

    Returns:
        尚未持久化的 Task（id 为 None）

    Raises:
        NotFoundError: Agent 或 Crew 不存在
        ValidationError: 请求非法或违反业务规则
    """
    if not isinstance(command, CreateTaskCommand):
        try:
            command = CreateTaskCommand.model_validate(command)
        except PydanticValidationError:
            raise ValidationError("invalid task request") from None

    registered_at = now or datetime.now(UTC)

    agent = find_in(agent_lookup, command.agent_id)
    if agent is None:
        raise NotFoundError("agent not found")

    crew = find_in(crew_lookup, command.crew_id)
    if crew is None:
        raise NotFoundError("crew not found")

    if crew.status != CrewStatus.ACTIVE:
        raise ValidationError("crew not active")

    if command.estimated_tokens > agent.max_tokens_per_task:
        raise ValidationError("tokens exceed agent limit")

    if has_same_day_task(existing_tasks, command.agent_id, registered_at):
        raise ValidationError("duplicate same-day task")

    return Task(
        crew_id=command.crew_id,
        agent_id=command.agent_id,
        description=command.description,
        estimated_tokens=command.estimated_tokens,
        actual_tokens_used=None,
        status=TaskStatus.PENDING,
        registered_at=registered_at,
        finished_at=None,
    )
