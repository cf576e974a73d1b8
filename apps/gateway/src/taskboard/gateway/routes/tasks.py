"""任务 CRUD 路由

GET    /api/tasks        任务列表
GET    /api/tasks/{id}   任务详情
POST   /api/tasks        创建任务（201 + Location）
PUT    /api/tasks/{id}   整体替换（204）
DELETE /api/tasks/{id}   删除（204）

请求体以原始 JSON 读取后交给 TaskService 校验，
保证 PUT 在载荷非法时仍先返回 404。
"""

import json
from typing import Any

from fastapi import APIRouter, Depends, Request
from starlette.responses import JSONResponse, Response
from taskboard.core.models import Task

from ..deps import get_task_service
from ..services.task_service import TaskService

router = APIRouter()


async def _read_json(request: Request) -> Any:
    """读取 JSON 请求体，为空或无法解析时返回 None"""
    body = await request.body()
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return None


@router.get("/api/tasks", response_model=list[Task])
async def list_tasks(service: TaskService = Depends(get_task_service)):
    """查询全部任务"""
    return await service.list_tasks()


@router.get("/api/tasks/{task_id}", response_model=Task)
async def get_task(task_id: int, service: TaskService = Depends(get_task_service)):
    """查询单个任务，不存在返回 404"""
    return await service.get_task(task_id)


@router.post("/api/tasks", status_code=201, response_model=Task)
async def create_task(request: Request, service: TaskService = Depends(get_task_service)):
    """创建任务，返回 201 + Location 头"""
    task = await service.create_task(await _read_json(request))
    return JSONResponse(
        status_code=201,
        content=task.model_dump(mode="json"),
        headers={"Location": f"/api/tasks/{task.id}"},
    )


@router.put("/api/tasks/{task_id}", status_code=204)
async def update_task(
    task_id: int,
    request: Request,
    service: TaskService = Depends(get_task_service),
):
    """整体替换任务字段，成功返回 204"""
    await service.update_task(task_id, await _read_json(request))
    return Response(status_code=204)


@router.delete("/api/tasks/{task_id}", status_code=204)
async def delete_task(task_id: int, service: TaskService = Depends(get_task_service)):
    """删除任务，成功返回 204"""
    await service.delete_task(task_id)
    return Response(status_code=204)
