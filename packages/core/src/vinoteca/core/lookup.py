"""同步查找接口

定价与任务校验是纯函数，参考数据由调用方预先加载：
可以是 ``{id: entity}`` 映射，也可以是任何提供 ``find_by_id`` 的对象。
"""

from collections.abc import Mapping
from typing import Any, Protocol, TypeVar

T = TypeVar("T", covariant=True)


class Lookup(Protocol[T]):
    """按 id 同步查找实体"""

    def find_by_id(self, entity_id: Any) -> T | None:
        ...


def find_in(lookup: "Mapping[Any, T] | Lookup[T]", entity_id: Any) -> T | None:
    """从映射或 Lookup 对象中查找实体，不存在返回 None"""
    if isinstance(lookup, Mapping):
        return lookup.get(entity_id)
    return lookup.find_by_id(entity_id)
