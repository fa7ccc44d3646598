"""目录路由 -- 只读

GET /catalog: 全部目录项
GET /catalog/{item_id}: 单个目录项
"""

from fastapi import APIRouter, Depends
from vinoteca.core.exceptions import NotFoundError

from ..deps import get_store_group
from ..errors import error_response

router = APIRouter()


@router.get("/catalog")
async def list_catalog(store_group=Depends(get_store_group)):
    """查询目录，按名称排序"""
    items = await store_group.catalog_store.list_items()
    return {"items": [item.to_wire() for item in items]}


@router.get("/catalog/{item_id}")
async def get_catalog_item(item_id: str, store_group=Depends(get_store_group)):
    item = await store_group.catalog_store.get_item(item_id)
    if item is None:
        return error_response(NotFoundError("catalog item not found"))
    return item.to_wire()
