from typing import Optional

from fastapi import APIRouter, Depends, Request, Response

from tasks_api.domain.errors import TaskValidationError
from tasks_api.domain.task_models import TITLE_REQUIRED, Task, TaskCreate, TaskPage, TaskUpdate
from tasks_api.services.task_query import parse_task_query
from tasks_api.services.task_service import TaskService, parse_task_id

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_service(request: Request) -> TaskService:
    # Wired in main.create_app
    return request.app.state.task_service


def path_task_id(task_id: str) -> int:
    # resolved before the body is validated: a bad id wins over a bad body
    return parse_task_id(task_id)


@router.get("", response_model=TaskPage)
async def list_tasks(
    done: Optional[str] = None,
    search: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
    limit: Optional[str] = None,
    page: Optional[str] = None,
    svc: TaskService = Depends(get_service),
):
    query = parse_task_query(done=done, search=search, sort=sort, order=order, limit=limit, page=page)
    return await svc.list_tasks(query)


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: int = Depends(path_task_id), svc: TaskService = Depends(get_service)):
    return await svc.get_task(task_id)


@router.post("", response_model=Task, status_code=201)
async def create_task(payload: Optional[TaskCreate] = None, svc: TaskService = Depends(get_service)):
    # no body at all is the same as a body without a title
    if payload is None:
        raise TaskValidationError(TITLE_REQUIRED)
    return await svc.create_task(payload)


@router.patch("/{task_id}", response_model=Task)
async def update_task(
    task_id: int = Depends(path_task_id),
    payload: Optional[TaskUpdate] = None,
    svc: TaskService = Depends(get_service),
):
    return await svc.update_task(task_id, payload if payload is not None else TaskUpdate())


@router.delete("/{task_id}", status_code=204, response_class=Response)
async def delete_task(task_id: int = Depends(path_task_id), svc: TaskService = Depends(get_service)):
    await svc.delete_task(task_id)
    return Response(status_code=204)
