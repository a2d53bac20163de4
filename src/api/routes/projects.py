"""Project and employee endpoints."""

from fastapi import APIRouter, Depends, Response, status

from api.dependencies import get_repository, not_found
from core.repository import NotFoundError, ProjectRepository
from models.projects import EmployeeCreate, Project, ProjectCreate, ProjectUpdate

router = APIRouter(prefix="/v1/projects", tags=["projects"])


@router.get("", response_model=list[Project])
def list_projects(repository: ProjectRepository = Depends(get_repository)):
    return repository.list_projects()


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
def create_project(data: ProjectCreate, repository: ProjectRepository = Depends(get_repository)):
    """Create a project. Currency defaults to EUR and status to active."""
    return repository.create_project(data)


@router.get("/{project_id}", response_model=Project)
def get_project(project_id: str, repository: ProjectRepository = Depends(get_repository)):
    try:
        return repository.get_project(project_id)
    except NotFoundError as e:
        raise not_found(e)


@router.put("/{project_id}", response_model=Project)
def update_project(
    project_id: str,
    data: ProjectUpdate,
    repository: ProjectRepository = Depends(get_repository),
):
    """Partial update; a supplied employee list replaces the stored one."""
    try:
        return repository.update_project(project_id, data)
    except NotFoundError as e:
        raise not_found(e)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(project_id: str, repository: ProjectRepository = Depends(get_repository)):
    try:
        repository.delete_project(project_id)
    except NotFoundError as e:
        raise not_found(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{project_id}/employees", response_model=Project, status_code=status.HTTP_201_CREATED)
def add_employee(
    project_id: str,
    employee: EmployeeCreate,
    repository: ProjectRepository = Depends(get_repository),
):
    try:
        return repository.add_employee(project_id, employee)
    except NotFoundError as e:
        raise not_found(e)


@router.delete("/{project_id}/employees/{employee_id}", response_model=Project)
def remove_employee(
    project_id: str,
    employee_id: str,
    repository: ProjectRepository = Depends(get_repository),
):
    try:
        return repository.remove_employee(project_id, employee_id)
    except NotFoundError as e:
        raise not_found(e)
