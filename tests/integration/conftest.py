"""集成测试共享 fixture"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from vinoteca.core.config import load_pricing_config
from vinoteca.core.seed import load_seed_data
from vinoteca.core.store import create_store_group


@pytest_asyncio.fixture
async def integration_app(tmp_path: Path):
    """集成测试用 FastAPI app（完整中间件 + 种子数据）"""
    os.environ["VINOTECA_DB_PATH"] = str(tmp_path / "test.db")
    os.environ["LOGFIRE_SEND_TO_LOGFIRE"] = "false"

    from vinoteca.gateway.main import create_app

    app = create_app()

    store_group = await create_store_group(str(tmp_path / "test.db"))
    pricing_config = load_pricing_config()
    await load_seed_data(store_group, config=pricing_config)
    app.state.store_group = store_group
    app.state.pricing_config = pricing_config

    yield app

    await store_group.conn.close()
    os.environ.pop("VINOTECA_DB_PATH", None)
    os.environ.pop("LOGFIRE_SEND_TO_LOGFIRE", None)


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac
