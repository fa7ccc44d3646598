"""TaskStore SQLite 实现

任务 id 由 SQLite AUTOINCREMENT 分配；写入后返回带 id 的 Task。
"""

from datetime import UTC, datetime

import aiosqlite

from ..models.workforce import Task

_COLUMNS = (
    "id, crew_id, agent_id, description, estimated_tokens, actual_tokens_used, "
    "status, registered_at, finished_at"
)


def _iso_or_none(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_task(self, task: Task) -> Task:
        """追加任务记录

        注意：此方法不自动提交事务，需由调用方管理事务。

        Returns:
            带存储分配 id 的 Task
        """
        cursor = await self._conn.execute(
            """
            INSERT INTO tasks (id, crew_id, agent_id, description, estimated_tokens,
                               actual_tokens_used, status, registered_at, finished_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                task.id,
                task.crew_id,
                task.agent_id,
                task.description,
                task.estimated_tokens,
                task.actual_tokens_used,
                task.status.value,
                _iso_or_none(task.registered_at),
                _iso_or_none(task.finished_at),
            ),
        )
        return task.model_copy(update={"id": cursor.lastrowid})

    async def get_task(self, task_id: int) -> Task | None:
        """根据 id 查询任务"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM tasks WHERE id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    async def list_tasks(
        self,
        agent_id: int | None = None,
        status: str | None = None,
    ) -> list[Task]:
        """查询任务列表，支持按 Agent / 状态筛选，按 registered_at 正序"""
        clauses: list[str] = []
        params: list = []
        if agent_id is not None:
            clauses.append("agent_id = ?")
            params.append(agent_id)
        if status:
            clauses.append("status = ?")
            params.append(status)

        sql = f"SELECT {_COLUMNS} FROM tasks"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY registered_at ASC, id ASC"

        cursor = await self._conn.execute(sql, params)
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            id=row[0],
            crew_id=row[1],
            agent_id=row[2],
            description=row[3],
            estimated_tokens=row[4],
            actual_tokens_used=row[5],
            status=row[6],
            registered_at=datetime.fromisoformat(row[7]),
            finished_at=datetime.fromisoformat(row[8]) if row[8] else None,
        )
