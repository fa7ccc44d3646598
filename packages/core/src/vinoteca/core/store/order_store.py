"""OrderStore SQLite 实现

订单行以 JSON 快照存储在 items 列中；时间戳统一以 UTC ISO-8601 存储，
因此 created_at 前 4 个字符即为自然年。
"""

import json
from datetime import UTC, datetime

import aiosqlite

from ..models.order import Order, OrderItem

_COLUMNS = (
    "id, code, customer_name, customer_email, status, created_at, "
    "expected_delivery, notes, items, subtotal, tax, total"
)


def _iso(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()


class SqliteOrderStore:
    """OrderStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_order(self, order: Order) -> None:
        """追加订单记录

        注意：此方法不自动提交事务，需由调用方管理事务。
        """
        await self._conn.execute(
            f"INSERT INTO orders ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            self._order_to_params(order),
        )

    async def get_order(self, order_id: str) -> Order | None:
        """根据 id 查询订单"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM orders WHERE id = ?",
            (order_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_order(row)

    async def list_orders(
        self,
        status: str | None = None,
        year: int | None = None,
    ) -> list[Order]:
        """查询订单列表，支持按状态和创建年份筛选，按 created_at 正序"""
        clauses: list[str] = []
        params: list[str] = []
        if status:
            clauses.append("status = ?")
            params.append(status)
        if year is not None:
            clauses.append("substr(created_at, 1, 4) = ?")
            params.append(f"{year:04d}")

        sql = f"SELECT {_COLUMNS} FROM orders"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY created_at ASC"

        cursor = await self._conn.execute(sql, params)
        rows = await cursor.fetchall()
        return [self._row_to_order(row) for row in rows]

    async def replace_order(self, order: Order) -> bool:
        """按 id 整体替换订单记录（不自动提交）

        Returns:
            True 如果存在并已替换
        """
        params = self._order_to_params(order)
        cursor = await self._conn.execute(
            """
            UPDATE orders
            SET code = ?, customer_name = ?, customer_email = ?, status = ?,
                created_at = ?, expected_delivery = ?, notes = ?, items = ?,
                subtotal = ?, tax = ?, total = ?
            WHERE id = ?
            """,
            (*params[1:], params[0]),
        )
        return cursor.rowcount > 0

    @staticmethod
    def _order_to_params(order: Order) -> tuple:
        items_json = json.dumps(
            [item.model_dump(mode="json") for item in order.items],
            ensure_ascii=False,
        )
        return (
            order.id,
            order.code,
            order.customer_name,
            order.customer_email,
            order.status.value,
            _iso(order.created_at),
            _iso(order.expected_delivery),
            order.notes,
            items_json,
            order.subtotal,
            order.tax,
            order.total,
        )

    @staticmethod
    def _row_to_order(row: aiosqlite.Row) -> Order:
        """将数据库行转换为 Order 模型"""
        items_data = json.loads(row[8]) if row[8] else []
        return Order(
            id=row[0],
            code=row[1],
            customer_name=row[2],
            customer_email=row[3],
            status=row[4],
            created_at=datetime.fromisoformat(row[5]),
            expected_delivery=datetime.fromisoformat(row[6]),
            notes=row[7],
            items=[OrderItem(**item) for item in items_data],
            subtotal=row[9],
            tax=row[10],
            total=row[11],
        )
