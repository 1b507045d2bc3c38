from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional

from jobsite.services.logger import get_logger
from jobsite.services.models import Contact, Project
from jobsite.services.seed import Workspace, sample_workspace

logger = get_logger("store")


class ProjectStore:
    """Process-local project state, rebuilt from seed data on reset.

    Stored projects are replaced on update, never mutated, so a snapshot
    returned by ``get`` stays consistent while a report runs over it.
    """

    def __init__(self, loader: Callable[[], Workspace] = sample_workspace) -> None:
        self._loader = loader
        self._projects: dict[str, Project] = {}
        self._contacts: list[Contact] = []
        self._lock = asyncio.Lock()
        self._load()

    def _load(self) -> None:
        workspace = self._loader()
        self._projects = {project.id: project for project in workspace.projects}
        self._contacts = list(workspace.contacts)

    async def list_projects(self) -> list[Project]:
        async with self._lock:
            return list(self._projects.values())

    async def get(self, project_id: str) -> Optional[Project]:
        async with self._lock:
            return self._projects.get(project_id)

    async def contacts(self) -> list[Contact]:
        async with self._lock:
            return list(self._contacts)

    async def update(self, project_id: str, **changes: Any) -> Optional[Project]:
        async with self._lock:
            current = self._projects.get(project_id)
            if current is None:
                return None
            updated = current.model_copy(update=changes)
            self._projects[project_id] = updated
            logger.info("project %s updated: %s", project_id, ", ".join(sorted(changes)))
            return updated

    async def reset(self) -> None:
        async with self._lock:
            self._load()
            logger.info("project store reset to seed data (%d projects)", len(self._projects))


project_store = ProjectStore()
