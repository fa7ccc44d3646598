"""任务编排路由

GET  /agents, /agents/{agent_id}: Agent 参考数据
GET  /crews, /crews/{crew_id}: Crew 参考数据
GET  /tasks: 任务列表，支持 agentId 筛选
POST /tasks: 登记任务（404 实体不存在 / 400 违反规则 / 422 请求体格式错误）
GET  /analytics/tasks: 按模型 KPI + 下一个待执行任务
"""

from fastapi import APIRouter, Depends, Query
from starlette.responses import JSONResponse
from vinoteca.core.exceptions import VinotecaError
from vinoteca.core.models import CreateTaskCommand

from ..deps import get_store_group
from ..errors import error_response
from ..services.workforce_service import WorkforceService

router = APIRouter()


@router.get("/agents")
async def list_agents(store_group=Depends(get_store_group)):
    agents = await WorkforceService(store_group).list_agents()
    return {"agents": [agent.to_wire() for agent in agents]}


@router.get("/agents/{agent_id}")
async def get_agent(agent_id: int, store_group=Depends(get_store_group)):
    try:
        agent = await WorkforceService(store_group).get_agent(agent_id)
    except VinotecaError as e:
        return error_response(e)
    return agent.to_wire()


@router.get("/crews")
async def list_crews(store_group=Depends(get_store_group)):
    crews = await WorkforceService(store_group).list_crews()
    return {"crews": [crew.to_wire() for crew in crews]}


@router.get("/crews/{crew_id}")
async def get_crew(crew_id: int, store_group=Depends(get_store_group)):
    try:
        crew = await WorkforceService(store_group).get_crew(crew_id)
    except VinotecaError as e:
        return error_response(e)
    return crew.to_wire()


@router.get("/tasks")
async def list_tasks(
    agent_id: int | None = Query(default=None, alias="agentId", description="按 Agent 筛选"),
    store_group=Depends(get_store_group),
):
    """查询任务列表，按 registeredAt 正序"""
    tasks = await WorkforceService(store_group).list_tasks(agent_id)
    return {"tasks": [task.to_wire() for task in tasks]}


@router.post("/tasks")
async def create_task(
    body: CreateTaskCommand,
    store_group=Depends(get_store_group),
):
    """登记任务

    - 成功返回 201 Created
    - Agent/Crew 不存在返回 404，违反业务规则返回 400
    """
    try:
        task = await WorkforceService(store_group).create_task(body)
    except VinotecaError as e:
        return error_response(e)

    return JSONResponse(status_code=201, content=task.to_wire())


@router.get("/analytics/tasks")
async def task_analytics(store_group=Depends(get_store_group)):
    """看板统计"""
    kpis, next_task = await WorkforceService(store_group).task_analytics()
    return {
        "kpis": [kpi.to_wire() for kpi in kpis],
        "nextTask": next_task.to_wire() if next_task else None,
    }
