# SPDX-License-Identifier: MIT

import pytest

from projectboard.service.store import ProjectStore
from tests.support import FailingBackend, InMemoryBackend


@pytest.fixture
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def failing_backend() -> FailingBackend:
    return FailingBackend()


@pytest.fixture
def store(backend: InMemoryBackend) -> ProjectStore:
    project_store = ProjectStore(backend)
    project_store.load()
    return project_store
