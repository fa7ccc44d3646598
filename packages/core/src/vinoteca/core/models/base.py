"""公共模型基类 -- 对外 JSON 使用 camelCase，Python 侧使用 snake_case"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase 别名基类

    构造时同时接受字段名与别名；序列化请使用 ``to_wire()``。
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
    )

    def to_wire(self) -> dict:
        """序列化为对外 JSON 结构（camelCase + ISO 时间戳）"""
        return self.model_dump(mode="json", by_alias=True)
