"""WorkforceService -- Agent/Crew 查询、任务登记与看板统计

任务登记持有 StoreGroup.task_lock：读取 Agent/Crew 与该 Agent 的已有任务，
校验通过后写入并提交，保证同日去重在并发下成立。
"""

from datetime import UTC, datetime

import structlog
from vinoteca.core.analytics import compute_task_kpis, select_next_task
from vinoteca.core.exceptions import NotFoundError, VinotecaError
from vinoteca.core.models import Agent, CreateTaskCommand, Crew, NextTask, Task, TaskKpi
from vinoteca.core.store import StoreGroup
from vinoteca.core.tasks import create_task

log = structlog.get_logger()


class WorkforceService:
    """任务编排业务服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def list_agents(self) -> list[Agent]:
        return await self._stores.agent_store.list_agents()

    async def get_agent(self, agent_id: int) -> Agent:
        agent = await self._stores.agent_store.get_agent(agent_id)
        if agent is None:
            raise NotFoundError("agent not found")
        return agent

    async def list_crews(self) -> list[Crew]:
        return await self._stores.crew_store.list_crews()

    async def get_crew(self, crew_id: int) -> Crew:
        crew = await self._stores.crew_store.get_crew(crew_id)
        if crew is None:
            raise NotFoundError("crew not found")
        return crew

    async def list_tasks(self, agent_id: int | None = None) -> list[Task]:
        return await self._stores.task_store.list_tasks(agent_id=agent_id)

    async def create_task(
        self,
        command: CreateTaskCommand,
        now: datetime | None = None,
    ) -> Task:
        """校验并登记任务

        Raises:
            NotFoundError: Agent 或 Crew 不存在
            ValidationError: 违反业务规则
        """
        registered_at = now or datetime.now(UTC)

        async with self._stores.task_lock:
            agent = await self._stores.agent_store.get_agent(command.agent_id)
            crew = await self._stores.crew_store.get_crew(command.crew_id)
            existing = await self._stores.task_store.list_tasks(agent_id=command.agent_id)

            try:
                task = create_task(
                    command,
                    {agent.id: agent} if agent else {},
                    {crew.id: crew} if crew else {},
                    existing,
                    now=registered_at,
                )
            except VinotecaError as e:
                log.warning(
                    "task_rejected",
                    agent_id=command.agent_id,
                    crew_id=command.crew_id,
                    reason=e.message,
                )
                raise

            try:
                task = await self._stores.task_store.create_task(task)
                await self._stores.conn.commit()
            except Exception as e:
                await self._stores.conn.rollback()
                log.error(
                    "task_persist_failed",
                    agent_id=command.agent_id,
                    error_type=type(e).__name__,
                )
                raise

        log.info(
            "task_created",
            task_id=task.id,
            agent_id=task.agent_id,
            crew_id=task.crew_id,
            estimated_tokens=task.estimated_tokens,
        )
        return task

    async def task_analytics(self) -> tuple[list[TaskKpi], NextTask | None]:
        """按模型聚合 KPI，并选出下一个待执行任务"""
        agents = await self._stores.agent_store.list_agents()
        crews = await self._stores.crew_store.list_crews()
        tasks = await self._stores.task_store.list_tasks()
        return compute_task_kpis(agents, tasks), select_next_task(tasks, agents, crews)
