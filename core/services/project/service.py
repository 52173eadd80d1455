from __future__ import annotations

import logging
from typing import List

from sqlalchemy.orm import Session

from core.events.domain_events import domain_events
from core.exceptions import NotFoundError, ValidationError
from core.interfaces import ProjectRepository
from core.models import Project

logger = logging.getLogger(__name__)


class ProjectService:
    """Registry of the projects financial records are booked against."""

    def __init__(self, session: Session, project_repo: ProjectRepository):
        self._session: Session = session
        self._project_repo: ProjectRepository = project_repo

    def create_project(
        self,
        name: str,
        description: str = "",
        client_name: str | None = None,
        budget: float | None = None,
    ) -> Project:
        if not name or not name.strip():
            raise ValidationError("Project name cannot be empty.", code="PROJECT_NAME_REQUIRED")
        if budget is not None and budget < 0:
            raise ValidationError("Project budget cannot be negative.", code="INVALID_BUDGET")

        project = Project.create(
            name=name.strip(),
            description=description.strip(),
            client_name=(client_name or "").strip() or None,
            budget=budget,
        )
        try:
            self._project_repo.add(project)
            self._session.commit()
        except Exception as e:
            self._session.rollback()
            logger.error("Error creating project: %s", e)
            raise

        logger.info("Created project %s - %s", project.id, project.name)
        domain_events.project_changed.emit(project.id)
        return project

    def get_project(self, project_id: str) -> Project:
        project = self._project_repo.get(project_id)
        if not project:
            raise NotFoundError("Project not found.", code="PROJECT_NOT_FOUND")
        return project

    def list_projects(self) -> List[Project]:
        return self._project_repo.list_all()


__all__ = ["ProjectService"]
