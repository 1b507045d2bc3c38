from __future__ import annotations

import asyncio
from typing import Any, Callable

import pytest

from jobsite.services.models import Contact, Project
from jobsite.services.project_store import project_store
from jobsite.services.seed import sample_project, sample_workspace


@pytest.fixture
def project() -> Project:
    return Project.model_validate(sample_project())


@pytest.fixture
def contacts() -> list[Contact]:
    return sample_workspace().contacts


@pytest.fixture
def make_project() -> Callable[..., Project]:
    def _make(**collections: Any) -> Project:
        return Project.model_validate({"id": "proj-test", "name": "Test Project", **collections})

    return _make


@pytest.fixture
def fresh_store():
    asyncio.run(project_store.reset())
    yield project_store
    asyncio.run(project_store.reset())
