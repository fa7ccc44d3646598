"""FastAPI 应用主文件

app 创建 + lifespan 管理：DB 初始化/关闭、可选种子数据、定价配置加载、路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from vinoteca.core.config import get_db_path, load_pricing_config, seed_on_startup
from vinoteca.core.seed import load_seed_data
from vinoteca.core.store import create_store_group

from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import catalog, health, orders, workforce

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时初始化 DB 与配置，关闭时清理连接"""
    db_path = get_db_path()
    store_group = await create_store_group(db_path)
    app.state.store_group = store_group

    pricing_config = load_pricing_config()
    app.state.pricing_config = pricing_config

    if seed_on_startup():
        await load_seed_data(store_group, config=pricing_config)

    log.info(
        "gateway_started",
        db_path=db_path,
        tax_rate=pricing_config.tax_rate,
        code_prefix=pricing_config.code_prefix,
    )

    yield

    if hasattr(app.state, "store_group") and app.state.store_group:
        await app.state.store_group.conn.close()


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="Vinoteca Gateway",
        version="0.1.0",
        description="Vinoteca 订单与任务编排 API",
        lifespan=lifespan,
    )

    # 注册中间件（顺序：先 Trace 后 Logging）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)

    logging_settings = setup_logging()
    setup_logfire(app, logging_settings)

    app.include_router(orders.router, tags=["orders"])
    app.include_router(catalog.router, tags=["catalog"])
    app.include_router(workforce.router, tags=["workforce"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
