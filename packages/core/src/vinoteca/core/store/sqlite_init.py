"""SQLite 数据库初始化

PRAGMA 配置 + 五张表 DDL + 索引创建。
使用 aiosqlite 异步操作。
"""

import aiosqlite

# catalog 表 DDL
_CATALOG_DDL = """
CREATE TABLE IF NOT EXISTS catalog (
    id        TEXT PRIMARY KEY,
    name      TEXT NOT NULL,
    price     REAL NOT NULL DEFAULT 0,
    winery    TEXT NOT NULL DEFAULT '',
    region    TEXT NOT NULL DEFAULT '',
    varietal  TEXT NOT NULL DEFAULT '',
    vintage   INTEGER,
    stock     INTEGER NOT NULL DEFAULT 0
);
"""

# orders 表 DDL（订单行以 JSON 快照存储）
_ORDERS_DDL = """
CREATE TABLE IF NOT EXISTS orders (
    id                 TEXT PRIMARY KEY,
    code               TEXT NOT NULL,
    customer_name      TEXT NOT NULL,
    customer_email     TEXT,
    status             TEXT NOT NULL DEFAULT 'pending',
    created_at         TEXT NOT NULL,
    expected_delivery  TEXT NOT NULL,
    notes              TEXT,
    items              TEXT NOT NULL DEFAULT '[]',
    subtotal           REAL NOT NULL,
    tax                REAL NOT NULL,
    total              REAL NOT NULL
);
"""

_ORDERS_INDEXES = [
    # 编码含年份，全局唯一
    "CREATE UNIQUE INDEX IF NOT EXISTS idx_orders_code ON orders(code);",
    "CREATE INDEX IF NOT EXISTS idx_orders_created_at ON orders(created_at);",
    "CREATE INDEX IF NOT EXISTS idx_orders_status ON orders(status);",
]

_AGENTS_DDL = """
CREATE TABLE IF NOT EXISTS agents (
    id                   INTEGER PRIMARY KEY,
    name                 TEXT NOT NULL,
    role                 TEXT NOT NULL,
    model_used           TEXT NOT NULL,
    max_tokens_per_task  INTEGER NOT NULL,
    status               TEXT NOT NULL DEFAULT 'AVAILABLE'
);
"""

_CREWS_DDL = """
CREATE TABLE IF NOT EXISTS crews (
    id             INTEGER PRIMARY KEY,
    name           TEXT NOT NULL,
    objective      TEXT NOT NULL DEFAULT '',
    lead_agent_id  INTEGER NOT NULL,
    status         TEXT NOT NULL DEFAULT 'PLANNED',
    started_at     TEXT,
    finished_at    TEXT
);
"""

_TASKS_DDL = """
CREATE TABLE IF NOT EXISTS tasks (
    id                  INTEGER PRIMARY KEY AUTOINCREMENT,
    crew_id             INTEGER NOT NULL,
    agent_id            INTEGER NOT NULL,
    description         TEXT NOT NULL,
    estimated_tokens    INTEGER NOT NULL,
    actual_tokens_used  INTEGER,
    status              TEXT NOT NULL DEFAULT 'PENDING',
    registered_at       TEXT NOT NULL,
    finished_at         TEXT,

    FOREIGN KEY (crew_id) REFERENCES crews(id),
    FOREIGN KEY (agent_id) REFERENCES agents(id)
);
"""

_TASKS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_agent_registered ON tasks(agent_id, registered_at);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status);",
]


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 创建表 + 创建索引

    Args:
        conn: aiosqlite 数据库连接
    """
    # 设置 PRAGMA
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA foreign_keys = ON;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    # 创建表
    for ddl in (_CATALOG_DDL, _ORDERS_DDL, _AGENTS_DDL, _CREWS_DDL, _TASKS_DDL):
        await conn.execute(ddl)

    # 创建索引
    for idx_sql in _ORDERS_INDEXES + _TASKS_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()


async def verify_wal_mode(conn: aiosqlite.Connection) -> bool:
    """验证 WAL 模式是否生效

    Returns:
        True 如果 WAL 模式已启用
    """
    cursor = await conn.execute("PRAGMA journal_mode;")
    row = await cursor.fetchone()
    return row is not None and row[0].lower() == "wal"
