"""packages/core 测试配置 -- 核心层 fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from vinoteca.core.models import (
    Agent,
    AgentModel,
    AgentRole,
    CatalogItem,
    Crew,
    CrewStatus,
)
from vinoteca.core.store import StoreGroup, create_store_group


@pytest_asyncio.fixture
async def core_db_path(tmp_path: Path) -> Path:
    """核心层临时数据库路径"""
    return tmp_path / "core_test.db"


@pytest_asyncio.fixture
async def store_group(core_db_path: Path) -> AsyncGenerator[StoreGroup, None]:
    """核心层已初始化的 StoreGroup"""
    group = await create_store_group(str(core_db_path))
    yield group
    await group.conn.close()


@pytest.fixture
def catalog() -> dict[str, CatalogItem]:
    """两条目录项：cat-a 10.0，cat-b 5.0"""
    items = [
        CatalogItem(id="cat-a", name="Tinto Joven", price=10.0, stock=50),
        CatalogItem(id="cat-b", name="Blanco Seco", price=5.0, stock=20),
    ]
    return {item.id: item for item in items}


@pytest.fixture
def agents() -> dict[int, Agent]:
    items = [
        Agent(
            id=1, name="Atlas", role=AgentRole.PLANNER,
            model_used=AgentModel.GPT_5, max_tokens_per_task=1000,
        ),
        Agent(
            id=2, name="Sage", role=AgentRole.ANALYST,
            model_used=AgentModel.CLAUDE_4_5, max_tokens_per_task=5000,
        ),
    ]
    return {agent.id: agent for agent in items}


@pytest.fixture
def crews() -> dict[int, Crew]:
    items = [
        Crew(id=10, name="Harvest", lead_agent_id=1, status=CrewStatus.ACTIVE),
        Crew(id=20, name="Cellar", lead_agent_id=2, status=CrewStatus.PLANNED),
        Crew(id=30, name="Labels", lead_agent_id=2, status=CrewStatus.FINISHED),
    ]
    return {crew.id: crew for crew in items}
