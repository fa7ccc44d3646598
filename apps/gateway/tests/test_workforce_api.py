"""任务编排 API 测试

测试内容：
1. Agent/Crew 参考数据查询
2. POST /tasks 成功 201、404/400/422 错误映射
3. 同日去重
4. GET /analytics/tasks 看板统计
"""

import pytest
from httpx import AsyncClient


def _task(**overrides) -> dict:
    body = {
        "agentId": 1,
        "crewId": 1,
        "description": "Revisar precios de la temporada",
        "estimatedTokens": 1000,
    }
    body.update(overrides)
    return body


class TestReferenceData:
    async def test_list_agents(self, client: AsyncClient):
        resp = await client.get("/agents")
        assert resp.status_code == 200
        models = [agent["modelUsed"] for agent in resp.json()["agents"]]
        assert models == ["GPT-5", "CLAUDE-4.5", "LLAMA-4", "GEMINI-2.5"]

    async def test_get_agent(self, client: AsyncClient):
        resp = await client.get("/agents/3")
        assert resp.status_code == 200
        assert resp.json()["maxTokensPerTask"] == 4000

    async def test_get_missing_agent(self, client: AsyncClient):
        resp = await client.get("/agents/99")
        assert resp.status_code == 404
        assert resp.json() == {"error": "agent not found"}

    async def test_crews(self, client: AsyncClient):
        resp = await client.get("/crews")
        statuses = [crew["status"] for crew in resp.json()["crews"]]
        assert statuses == ["ACTIVE", "PLANNED", "FINISHED"]

        resp = await client.get("/crews/99")
        assert resp.status_code == 404
        assert resp.json() == {"error": "crew not found"}


class TestCreateTask:
    async def test_create_returns_201(self, client: AsyncClient):
        resp = await client.post("/tasks", json=_task())
        assert resp.status_code == 201

        data = resp.json()
        assert data["id"] == 5
        assert data["status"] == "PENDING"
        assert data["actualTokensUsed"] is None
        assert data["finishedAt"] is None

        tasks = (await client.get("/tasks", params={"agentId": 1})).json()["tasks"]
        assert [t["id"] for t in tasks][-1] == 5

    async def test_snake_case_body(self, client: AsyncClient):
        resp = await client.post(
            "/tasks",
            json={"agent_id": 2, "crew_id": 1, "description": "x", "estimated_tokens": 10},
        )
        assert resp.status_code == 201

    async def test_duplicate_same_day(self, client: AsyncClient):
        assert (await client.post("/tasks", json=_task())).status_code == 201

        resp = await client.post("/tasks", json=_task(description="Otra cosa"))
        assert resp.status_code == 400
        assert resp.json() == {"error": "duplicate same-day task"}

    @pytest.mark.parametrize(
        ("body", "status_code", "message"),
        [
            (_task(agentId=99), 404, "agent not found"),
            (_task(crewId=99), 404, "crew not found"),
            (_task(crewId=2), 400, "crew not active"),
            (_task(crewId=3), 400, "crew not active"),
            (_task(agentId=3, estimatedTokens=5000), 400, "tokens exceed agent limit"),
        ],
    )
    async def test_rejections(self, client: AsyncClient, body, status_code, message):
        resp = await client.post("/tasks", json=body)
        assert resp.status_code == status_code
        assert resp.json() == {"error": message}

    @pytest.mark.parametrize(
        "body",
        [
            {"agentId": 1, "crewId": 1},
            _task(estimatedTokens=0),
            _task(estimatedTokens="lots"),
            _task(description=""),
        ],
    )
    async def test_malformed_body(self, client: AsyncClient, body):
        resp = await client.post("/tasks", json=body)
        assert resp.status_code == 422

    async def test_rejected_task_not_persisted(self, client: AsyncClient):
        before = len((await client.get("/tasks")).json()["tasks"])
        await client.post("/tasks", json=_task(crewId=2))
        after = len((await client.get("/tasks")).json()["tasks"])
        assert after == before


class TestTaskAnalytics:
    async def test_seeded_kpis(self, client: AsyncClient):
        resp = await client.get("/analytics/tasks")
        assert resp.status_code == 200

        data = resp.json()
        kpis = {kpi["model"]: kpi for kpi in data["kpis"]}
        assert list(kpis) == ["GPT-5", "CLAUDE-4.5", "LLAMA-4", "GEMINI-2.5"]
        assert kpis["GPT-5"]["completionRate"] == 100.0
        assert kpis["GPT-5"]["tokenEfficiency"] == 1.1
        assert kpis["CLAUDE-4.5"]["openBacklog"] == 1
        assert kpis["CLAUDE-4.5"]["tokenEfficiency"] is None
        assert kpis["LLAMA-4"]["completionRate"] == 0.0
        assert kpis["GEMINI-2.5"]["tokenEfficiency"] == 0.92

        assert data["nextTask"]["title"] == "Sage • Harvest Forecast"
        assert data["nextTask"]["taskId"] == 4

    async def test_new_task_counts_in_backlog(self, client: AsyncClient):
        await client.post("/tasks", json=_task())
        kpis = (await client.get("/analytics/tasks")).json()["kpis"]
        assert kpis[0]["openBacklog"] == 1
