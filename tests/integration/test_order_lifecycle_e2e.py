"""订单端到端集成测试

POST /orders -> 落盘 -> GET 详情 -> PATCH 状态推进 -> 列表筛选完整链路
"""

import pytest
from httpx import AsyncClient


class TestOrderLifecycle:
    """订单从创建到完成"""

    async def test_create_progress_complete(self, client: AsyncClient):
        """创建订单 -> processing -> completed，金额与编码保持不变"""
        resp = await client.post(
            "/orders",
            json={
                "customerName": "Vinoteca Central",
                "notes": "Cliente nuevo",
                "items": [
                    {"catalogItem": {"id": "cat-003"}, "quantity": 2},
                    {"catalogItemId": "cat-006", "quantity": "3"},
                ],
            },
        )
        assert resp.status_code == 201
        created = resp.json()
        order_id = created["id"]
        assert created["subtotal"] == pytest.approx(124.2)

        for status in ("processing", "completed"):
            resp = await client.patch(f"/orders/{order_id}", json={"status": status})
            assert resp.status_code == 200

        stored = (await client.get(f"/orders/{order_id}")).json()
        assert stored["status"] == "completed"
        assert stored["code"] == created["code"]
        assert stored["total"] == created["total"]

        completed = (await client.get("/orders", params={"status": "completed"})).json()
        assert {o["id"] for o in completed["orders"]} == {"ord-0002", order_id}

    async def test_catalog_snapshot_survives(self, client: AsyncClient, integration_app):
        """订单行保存目录快照，目录变化不影响已下订单"""
        created = (
            await client.post(
                "/orders",
                json={"customerName": "Snapshot", "items": [{"catalogItemId": "cat-001"}]},
            )
        ).json()

        conn = integration_app.state.store_group.conn
        await conn.execute("UPDATE catalog SET price = 99 WHERE id = 'cat-001'")
        await conn.commit()

        stored = (await client.get(f"/orders/{created['id']}")).json()
        assert stored["items"][0]["unitPrice"] == pytest.approx(24.9)
        assert stored["items"][0]["catalogItem"]["price"] == pytest.approx(24.9)


class TestTaskLifecycle:
    async def test_register_then_analytics(self, client: AsyncClient):
        """登记任务后出现在列表与看板 backlog 中"""
        resp = await client.post(
            "/tasks",
            json={"agentId": 3, "crewId": 1, "description": "Scout", "estimatedTokens": 4000},
        )
        assert resp.status_code == 201
        task_id = resp.json()["id"]

        tasks = (await client.get("/tasks")).json()["tasks"]
        assert task_id in [t["id"] for t in tasks]

        kpis = {k["model"]: k for k in (await client.get("/analytics/tasks")).json()["kpis"]}
        assert kpis["LLAMA-4"]["openBacklog"] == 1
