"""Store Protocol 接口定义

定义目录、订单、Agent、Crew、任务存储的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
写操作均不自动提交，由服务层管理事务。
"""

from typing import Protocol, runtime_checkable

from ..models.catalog import CatalogItem
from ..models.order import Order
from ..models.workforce import Agent, Crew, Task


@runtime_checkable
class CatalogStore(Protocol):
    """目录存储接口"""

    async def add_item(self, item: CatalogItem) -> None:
        """写入目录项（种子数据）"""
        ...

    async def get_item(self, item_id: str) -> CatalogItem | None:
        """根据 id 查询目录项"""
        ...

    async def list_items(self) -> list[CatalogItem]:
        """查询全部目录项"""
        ...

    async def count(self) -> int:
        ...


@runtime_checkable
class OrderStore(Protocol):
    """订单存储接口"""

    async def create_order(self, order: Order) -> None:
        """追加订单"""
        ...

    async def get_order(self, order_id: str) -> Order | None:
        """根据 id 查询订单"""
        ...

    async def list_orders(
        self,
        status: str | None = None,
        year: int | None = None,
    ) -> list[Order]:
        """查询订单列表，可按状态 / 创建年份筛选"""
        ...

    async def replace_order(self, order: Order) -> bool:
        """按 id 替换订单（状态更新）"""
        ...


@runtime_checkable
class AgentStore(Protocol):
    """Agent 存储接口"""

    async def add_agent(self, agent: Agent) -> None:
        ...

    async def get_agent(self, agent_id: int) -> Agent | None:
        ...

    async def list_agents(self) -> list[Agent]:
        ...


@runtime_checkable
class CrewStore(Protocol):
    """Crew 存储接口"""

    async def add_crew(self, crew: Crew) -> None:
        ...

    async def get_crew(self, crew_id: int) -> Crew | None:
        ...

    async def list_crews(self) -> list[Crew]:
        ...


@runtime_checkable
class TaskStore(Protocol):
    """任务存储接口"""

    async def create_task(self, task: Task) -> Task:
        """追加任务，返回带 id 的任务"""
        ...

    async def get_task(self, task_id: int) -> Task | None:
        ...

    async def list_tasks(
        self,
        agent_id: int | None = None,
        status: str | None = None,
    ) -> list[Task]:
        """查询任务列表"""
        ...
