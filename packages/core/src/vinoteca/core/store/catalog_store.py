"""CatalogStore SQLite 实现

目录为只读参考数据，写入仅用于种子数据加载。
"""

import aiosqlite

from ..models.catalog import CatalogItem

_COLUMNS = "id, name, price, winery, region, varietal, vintage, stock"


class SqliteCatalogStore:
    """CatalogStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def add_item(self, item: CatalogItem) -> None:
        """写入目录项（不自动提交）"""
        await self._conn.execute(
            f"INSERT INTO catalog ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                item.id,
                item.name,
                item.price,
                item.winery,
                item.region,
                item.varietal,
                item.vintage,
                item.stock,
            ),
        )

    async def get_item(self, item_id: str) -> CatalogItem | None:
        """根据 id 查询目录项"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM catalog WHERE id = ?",
            (item_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_item(row)

    async def list_items(self) -> list[CatalogItem]:
        """查询全部目录项，按名称排序"""
        cursor = await self._conn.execute(f"SELECT {_COLUMNS} FROM catalog ORDER BY name ASC")
        rows = await cursor.fetchall()
        return [self._row_to_item(row) for row in rows]

    async def count(self) -> int:
        cursor = await self._conn.execute("SELECT COUNT(*) FROM catalog")
        row = await cursor.fetchone()
        return row[0] if row else 0

    @staticmethod
    def _row_to_item(row: aiosqlite.Row) -> CatalogItem:
        """将数据库行转换为 CatalogItem 模型"""
        return CatalogItem(
            id=row[0],
            name=row[1],
            price=row[2],
            winery=row[3],
            region=row[4],
            varietal=row[5],
            vintage=row[6],
            stock=row[7],
        )
