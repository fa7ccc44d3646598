"""种子数据 -- 演示目录、订单、Agent、Crew、任务

演示订单通过定价引擎组装，金额与线上创建的订单遵循同一套规则。
时间戳相对 now 生成，保证演示数据始终"新鲜"。
"""

from datetime import UTC, datetime, timedelta

import structlog

from .config import PricingConfig
from .models import (
    Agent,
    AgentModel,
    AgentRole,
    AgentStatus,
    CatalogItem,
    Crew,
    CrewStatus,
    Order,
    Task,
    TaskStatus,
)
from .pricing import build_order
from .store import StoreGroup

log = structlog.get_logger()

SEED_CATALOG: list[CatalogItem] = [
    CatalogItem(
        id="cat-001", name="Reserva Cabernet Sauvignon 2018", price=24.9,
        winery="Viña Los Andes", region="Maipo", varietal="Cabernet Sauvignon",
        vintage=2018, stock=120,
    ),
    CatalogItem(
        id="cat-002", name="Malbec 2019", price=18.5,
        winery="Bodega Altamira", region="Mendoza", varietal="Malbec",
        vintage=2019, stock=240,
    ),
    CatalogItem(
        id="cat-003", name="Rioja Gran Reserva 2015", price=42.0,
        winery="Marqués del Ebro", region="Rioja", varietal="Tempranillo",
        vintage=2015, stock=36,
    ),
    CatalogItem(
        id="cat-004", name="Albariño Rías Baixas 2022", price=16.75,
        winery="Adega do Mar", region="Rías Baixas", varietal="Albariño",
        vintage=2022, stock=90,
    ),
    CatalogItem(
        id="cat-005", name="Carmenère Gran Reserva 2020", price=21.3,
        winery="Viña Colchagua", region="Colchagua", varietal="Carmenère",
        vintage=2020, stock=150,
    ),
    CatalogItem(
        id="cat-006", name="Brut Nature Cava", price=13.4,
        winery="Caves Penedès", region="Penedès", varietal="Macabeo",
        vintage=None, stock=200,
    ),
]

SEED_AGENTS: list[Agent] = [
    Agent(
        id=1, name="Atlas", role=AgentRole.PLANNER, model_used=AgentModel.GPT_5,
        max_tokens_per_task=8000, status=AgentStatus.AVAILABLE,
    ),
    Agent(
        id=2, name="Sage", role=AgentRole.ANALYST, model_used=AgentModel.CLAUDE_4_5,
        max_tokens_per_task=12000, status=AgentStatus.BUSY,
    ),
    Agent(
        id=3, name="Scout", role=AgentRole.RESEARCHER, model_used=AgentModel.LLAMA_4,
        max_tokens_per_task=4000, status=AgentStatus.AVAILABLE,
    ),
    Agent(
        id=4, name="Forge", role=AgentRole.CODER, model_used=AgentModel.GEMINI_2_5,
        max_tokens_per_task=6000, status=AgentStatus.OFFLINE,
    ),
]


def seed_crews(now: datetime) -> list[Crew]:
    return [
        Crew(
            id=1, name="Harvest Forecast", objective="Predecir la demanda de la temporada",
            lead_agent_id=1, status=CrewStatus.ACTIVE, started_at=now - timedelta(days=14),
        ),
        Crew(
            id=2, name="Cellar Audit", objective="Conciliar inventario físico y sistema",
            lead_agent_id=2, status=CrewStatus.PLANNED,
        ),
        Crew(
            id=3, name="Label Refresh", objective="Actualizar fichas técnicas del catálogo",
            lead_agent_id=4, status=CrewStatus.FINISHED,
            started_at=now - timedelta(days=40), finished_at=now - timedelta(days=5),
        ),
    ]


def seed_tasks(now: datetime) -> list[Task]:
    return [
        Task(
            id=1, crew_id=3, agent_id=4, description="Redactar fichas de la línea reserva",
            estimated_tokens=5000, actual_tokens_used=4600, status=TaskStatus.COMPLETED,
            registered_at=now - timedelta(days=20), finished_at=now - timedelta(days=19),
        ),
        Task(
            id=2, crew_id=1, agent_id=1, description="Consolidar ventas del último trimestre",
            estimated_tokens=6000, actual_tokens_used=6600, status=TaskStatus.COMPLETED,
            registered_at=now - timedelta(days=6), finished_at=now - timedelta(days=5),
        ),
        Task(
            id=3, crew_id=1, agent_id=3, description="Buscar tendencias de consumo por región",
            estimated_tokens=3500, status=TaskStatus.FAILED,
            registered_at=now - timedelta(days=4), finished_at=now - timedelta(days=4),
        ),
        Task(
            id=4, crew_id=1, agent_id=2, description="Modelar escenarios de demanda",
            estimated_tokens=9000, status=TaskStatus.PENDING,
            registered_at=now - timedelta(days=2),
        ),
    ]


def seed_orders(now: datetime, config: PricingConfig | None = None) -> list[Order]:
    """三张演示订单，编码按创建时间依次生成"""
    catalog = {item.id: item for item in SEED_CATALOG}
    requests = [
        {
            "id": "ord-0002",
            "customerName": "Bodega El Roble",
            "customerEmail": "contacto@elroble.ar",
            "status": "completed",
            "notes": "Pedido recurrente mensual.",
            "expectedDelivery": (now - timedelta(days=3)).isoformat(),
            "items": [
                {"catalogItemId": "cat-002", "quantity": 12},
                {"catalogItemId": "cat-005", "quantity": 8},
            ],
            "_created": now - timedelta(days=10),
        },
        {
            "id": "ord-0001",
            "customerName": "Restaurante La Vid",
            "customerEmail": "compras@lavid.com",
            "status": "processing",
            "notes": "Entrega en horario matutino.",
            "expectedDelivery": (now + timedelta(days=2)).isoformat(),
            "items": [
                {"catalogItemId": "cat-001", "quantity": 6},
                {"catalogItemId": "cat-003", "quantity": 3},
            ],
            "_created": now - timedelta(days=3),
        },
        {
            "id": "ord-0003",
            "customerName": "Wine Lovers Club",
            "customerEmail": "compras@wineloversclub.es",
            "notes": "Confirmar disponibilidad del Malbec 2019.",
            "expectedDelivery": (now + timedelta(days=5)).isoformat(),
            "items": [{"catalogItemId": "cat-002", "quantity": 20}],
            "_created": now - timedelta(days=1),
        },
    ]

    orders: list[Order] = []
    for request in requests:
        created = request.pop("_created")
        orders.append(build_order(request, catalog, orders, now=created, config=config))
    return orders


async def load_seed_data(
    store_group: StoreGroup,
    now: datetime | None = None,
    config: PricingConfig | None = None,
) -> bool:
    """向空库写入种子数据（单事务）

    Returns:
        True 如果写入了数据；目录非空时跳过并返回 False
    """
    if await store_group.catalog_store.count() > 0:
        log.info("seed_skipped", reason="catalog_not_empty")
        return False

    now = now or datetime.now(UTC)
    try:
        for item in SEED_CATALOG:
            await store_group.catalog_store.add_item(item)
        for agent in SEED_AGENTS:
            await store_group.agent_store.add_agent(agent)
        for crew in seed_crews(now):
            await store_group.crew_store.add_crew(crew)
        for task in seed_tasks(now):
            await store_group.task_store.create_task(task)
        for order in seed_orders(now, config):
            await store_group.order_store.create_order(order)
        await store_group.conn.commit()
    except Exception:
        await store_group.conn.rollback()
        raise

    log.info(
        "seed_loaded",
        catalog=len(SEED_CATALOG),
        agents=len(SEED_AGENTS),
    )
    return True
