"""AgentStore / CrewStore SQLite 实现

Agent 与 Crew 为只读参考数据，写入仅用于种子数据加载。
"""

from datetime import UTC, datetime

import aiosqlite

from ..models.workforce import Agent, Crew

_AGENT_COLUMNS = "id, name, role, model_used, max_tokens_per_task, status"
_CREW_COLUMNS = "id, name, objective, lead_agent_id, status, started_at, finished_at"


def _iso_or_none(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()


def _parse_or_none(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class SqliteAgentStore:
    """AgentStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def add_agent(self, agent: Agent) -> None:
        """写入 Agent（不自动提交）"""
        await self._conn.execute(
            f"INSERT INTO agents ({_AGENT_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
            (
                agent.id,
                agent.name,
                agent.role.value,
                agent.model_used.value,
                agent.max_tokens_per_task,
                agent.status.value,
            ),
        )

    async def get_agent(self, agent_id: int) -> Agent | None:
        """根据 id 查询 Agent"""
        cursor = await self._conn.execute(
            f"SELECT {_AGENT_COLUMNS} FROM agents WHERE id = ?",
            (agent_id,),
        )
        row = await cursor.fetchone()
        return self._row_to_agent(row) if row else None

    async def list_agents(self) -> list[Agent]:
        """查询全部 Agent，按 id 正序"""
        cursor = await self._conn.execute(f"SELECT {_AGENT_COLUMNS} FROM agents ORDER BY id ASC")
        rows = await cursor.fetchall()
        return [self._row_to_agent(row) for row in rows]

    @staticmethod
    def _row_to_agent(row: aiosqlite.Row) -> Agent:
        return Agent(
            id=row[0],
            name=row[1],
            role=row[2],
            model_used=row[3],
            max_tokens_per_task=row[4],
            status=row[5],
        )


class SqliteCrewStore:
    """CrewStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def add_crew(self, crew: Crew) -> None:
        """写入 Crew（不自动提交）"""
        await self._conn.execute(
            f"INSERT INTO crews ({_CREW_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
            (
                crew.id,
                crew.name,
                crew.objective,
                crew.lead_agent_id,
                crew.status.value,
                _iso_or_none(crew.started_at),
                _iso_or_none(crew.finished_at),
            ),
        )

    async def get_crew(self, crew_id: int) -> Crew | None:
        """根据 id 查询 Crew"""
        cursor = await self._conn.execute(
            f"SELECT {_CREW_COLUMNS} FROM crews WHERE id = ?",
            (crew_id,),
        )
        row = await cursor.fetchone()
        return self._row_to_crew(row) if row else None

    async def list_crews(self) -> list[Crew]:
        """查询全部 Crew，按 id 正序"""
        cursor = await self._conn.execute(f"SELECT {_CREW_COLUMNS} FROM crews ORDER BY id ASC")
        rows = await cursor.fetchall()
        return [self._row_to_crew(row) for row in rows]

    @staticmethod
    def _row_to_crew(row: aiosqlite.Row) -> Crew:
        return Crew(
            id=row[0],
            name=row[1],
            objective=row[2],
            lead_agent_id=row[3],
            status=row[4],
            started_at=_parse_or_none(row[5]),
            finished_at=_parse_or_none(row[6]),
        )
