"""Domain Models 单元测试

测试内容：
1. 枚举值
2. camelCase 别名序列化/反序列化
3. Pydantic 字段约束
"""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError as PydanticValidationError
from vinoteca.core.exceptions import NotFoundError, ValidationError, VinotecaError
from vinoteca.core.models import (
    Agent,
    AgentModel,
    CatalogItem,
    CreateTaskCommand,
    CrewStatus,
    OrderItem,
    OrderStatus,
    Task,
    TaskStatus,
)


class TestEnums:
    def test_order_status_values(self):
        assert [s.value for s in OrderStatus] == [
            "pending",
            "processing",
            "completed",
            "cancelled",
        ]

    def test_task_status_values(self):
        assert TaskStatus.PENDING == "PENDING"
        assert TaskStatus.COMPLETED == "COMPLETED"

    def test_agent_model_order(self):
        assert [m.value for m in AgentModel] == ["GPT-5", "CLAUDE-4.5", "LLAMA-4", "GEMINI-2.5"]

    def test_crew_status_from_string(self):
        assert CrewStatus("ACTIVE") == CrewStatus.ACTIVE


class TestCamelCase:
    def test_wire_uses_camel_case(self):
        item = CatalogItem(id="cat-a", name="Tinto", price=10.0)
        line = OrderItem(
            id="ord-1-item-1",
            catalog_item=item,
            quantity=2,
            unit_price=10.0,
            line_total=20.0,
        )
        wire = line.to_wire()
        assert set(wire) == {"id", "catalogItem", "quantity", "unitPrice", "lineTotal"}

    def test_accepts_both_key_styles(self):
        by_alias = CreateTaskCommand.model_validate(
            {"agentId": 1, "crewId": 2, "description": "x", "estimatedTokens": 5}
        )
        by_name = CreateTaskCommand(agent_id=1, crew_id=2, description="x", estimated_tokens=5)
        assert by_alias == by_name

    def test_task_wire_timestamps(self):
        task = Task(
            id=1,
            crew_id=1,
            agent_id=1,
            description="x",
            estimated_tokens=10,
            registered_at=datetime(2025, 3, 1, 9, 0, tzinfo=UTC),
        )
        wire = task.to_wire()
        assert wire["registeredAt"].startswith("2025-03-01T09:00:00")
        assert wire["finishedAt"] is None
        assert wire["status"] == "PENDING"


class TestConstraints:
    def test_negative_price_rejected(self):
        with pytest.raises(PydanticValidationError):
            CatalogItem(id="cat-a", name="Tinto", price=-1)

    def test_agent_limit_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            Agent(
                id=1, name="Atlas", role="PLANNER", model_used="GPT-5",
                max_tokens_per_task=0,
            )

    def test_unknown_agent_model_rejected(self):
        with pytest.raises(PydanticValidationError):
            Agent(
                id=1, name="Atlas", role="PLANNER", model_used="GPT-3",
                max_tokens_per_task=10,
            )


class TestExceptions:
    def test_hierarchy(self):
        assert issubclass(ValidationError, VinotecaError)
        assert issubclass(NotFoundError, VinotecaError)

    def test_message_and_recoverable(self):
        error = NotFoundError("agent not found")
        assert error.message == "agent not found"
        assert str(error) == "agent not found"
        assert error.recoverable is True
        assert VinotecaError("boom").recoverable is False
