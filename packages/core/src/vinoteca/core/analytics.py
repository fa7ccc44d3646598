"""任务看板统计 -- 按模型聚合 KPI，选出下一个待执行任务"""

from collections.abc import Iterable

from .models import Agent, AgentModel, Crew, NextTask, Task, TaskKpi, TaskStatus
from .pricing import round2


def compute_task_kpis(agents: Iterable[Agent], tasks: Iterable[Task]) -> list[TaskKpi]:
    """按 AgentModel 声明顺序计算每个模型的 KPI

    - completion_rate: COMPLETED / (COMPLETED + FAILED) * 100，无已结束任务为 0
    - token_efficiency: 已完成任务 actual / estimated 的均值，无样本为 None
    - open_backlog: PENDING 任务数
    """
    model_by_agent = {agent.id: agent.model_used for agent in agents}
    tasks = list(tasks)

    kpis: list[TaskKpi] = []
    for model in AgentModel:
        model_tasks = [t for t in tasks if model_by_agent.get(t.agent_id) == model]
        completed = [t for t in model_tasks if t.status == TaskStatus.COMPLETED]
        failed = sum(1 for t in model_tasks if t.status == TaskStatus.FAILED)
        backlog = sum(1 for t in model_tasks if t.status == TaskStatus.PENDING)

        closed = len(completed) + failed
        completion_rate = round2(len(completed) / closed * 100) if closed else 0.0

        ratios = [
            t.actual_tokens_used / t.estimated_tokens
            for t in completed
            if t.estimated_tokens > 0 and t.actual_tokens_used is not None
        ]
        token_efficiency = round2(sum(ratios) / len(ratios)) if ratios else None

        kpis.append(
            TaskKpi(
                model=model,
                completion_rate=completion_rate,
                token_efficiency=token_efficiency,
                open_backlog=backlog,
            )
        )
    return kpis


def select_next_task(
    tasks: Iterable[Task],
    agents: Iterable[Agent],
    crews: Iterable[Crew],
) -> NextTask | None:
    """选出最早登记、且 Agent/Crew 均存在并未超出 token 上限的 PENDING 任务"""
    agent_by_id = {agent.id: agent for agent in agents}
    crew_by_id = {crew.id: crew for crew in crews}

    candidates = []
    for task in tasks:
        if task.status != TaskStatus.PENDING:
            continue
        agent = agent_by_id.get(task.agent_id)
        crew = crew_by_id.get(task.crew_id)
        if agent is None or crew is None:
            continue
        if task.estimated_tokens > agent.max_tokens_per_task:
            continue
        candidates.append((task, agent, crew))

    if not candidates:
        return None

    task, agent, crew = min(candidates, key=lambda c: c[0].registered_at)
    return NextTask(
        task_id=task.id,
        title=f"{agent.name} • {crew.name}",
        description=task.description,
        crew_name=crew.name,
        agent_name=agent.name,
        estimated_tokens=task.estimated_tokens,
        registered_at=task.registered_at,
    )
