from __future__ import annotations

from core.models import Project
from infra.db.models import ProjectORM


def project_to_orm(project: Project) -> ProjectORM:
    return ProjectORM(
        id=project.id,
        name=project.name,
        description=project.description,
        client_name=project.client_name,
        budget=project.budget,
    )


def project_from_orm(obj: ProjectORM) -> Project:
    return Project(
        id=obj.id,
        name=obj.name,
        description=obj.description or "",
        client_name=obj.client_name,
        budget=obj.budget,
    )
