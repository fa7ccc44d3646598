"""Vinoteca Core Store -- SQLite 持久化实现

提供工厂函数创建共享数据库连接的 Store 实例组。
"""

import asyncio
from pathlib import Path

import aiosqlite

from .catalog_store import SqliteCatalogStore
from .order_store import SqliteOrderStore
from .protocols import AgentStore, CatalogStore, CrewStore, OrderStore, TaskStore
from .sqlite_init import init_db
from .task_store import SqliteTaskStore
from .workforce_store import SqliteAgentStore, SqliteCrewStore


class StoreGroup:
    """Store 实例组 -- 共享同一个数据库连接

    order_lock / task_lock 用于串行化"先读后写"的订单编码生成与任务同日去重，
    同一 StoreGroup 内每个可写集合同一时刻只有一个创建操作。
    """

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self.conn = conn
        self.catalog_store: CatalogStore = SqliteCatalogStore(conn)
        self.order_store: OrderStore = SqliteOrderStore(conn)
        self.agent_store: AgentStore = SqliteAgentStore(conn)
        self.crew_store: CrewStore = SqliteCrewStore(conn)
        self.task_store: TaskStore = SqliteTaskStore(conn)
        self.order_lock = asyncio.Lock()
        self.task_lock = asyncio.Lock()


async def create_store_group(db_path: str) -> StoreGroup:
    """创建 Store 实例组

    Args:
        db_path: SQLite 数据库文件路径

    Returns:
        StoreGroup 实例
    """
    # 确保数据库目录存在
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    conn = await aiosqlite.connect(db_path)
    conn.row_factory = aiosqlite.Row
    await init_db(conn)

    return StoreGroup(conn=conn)


__all__ = [
    "StoreGroup",
    "create_store_group",
    "SqliteCatalogStore",
    "SqliteOrderStore",
    "SqliteAgentStore",
    "SqliteCrewStore",
    "SqliteTaskStore",
    "init_db",
]
