from typing import List, Optional

from fastapi import APIRouter, Query

from studio_site.data.projects import PROJECTS
from studio_site.domain.schemas import Project, ProjectKind

router = APIRouter()


@router.get("/projects", response_model=List[Project], response_model_by_alias=True)
async def list_projects(
    kind: Optional[ProjectKind] = Query(None, description="Filter by project kind"),
):
    """Portfolio entries for the work section, optionally filtered by kind"""
    if kind is None:
        return PROJECTS
    return [project for project in PROJECTS if project.kind == kind]
