# SPDX-License-Identifier: MIT

import logging

from projectboard import configuration
from projectboard.repository.configuration import ConfigurationRepository
from projectboard.repository.project import ProjectRepository
from projectboard.repository.timeline import TimelineRepository
from projectboard.repository.user import UserRepository
from projectboard.service.backend import LocalBackend
from projectboard.service.store import ProjectStore

logger = logging.getLogger(__name__)


class Session:
    """
    Repositories, backend and store for one CLI invocation.

    The store is loaded lazily so commands that only touch configuration
    never read the data directory.
    """

    def __init__(self, configuration_repository: ConfigurationRepository) -> None:
        self.configuration_repository = configuration_repository
        config = configuration_repository.get_config()

        self.project_repository = ProjectRepository(configuration.DATA_PROJECTS_DIR)
        self.timeline_repository = TimelineRepository(configuration.DATA_TIMELINE_DIR)
        self.user_repository = UserRepository(configuration.DATA_USERS_PATH)
        self.backend = LocalBackend(
            self.project_repository,
            self.timeline_repository,
            self.user_repository,
            current_user_id=config["current_user_id"],
        )
        self._store = ProjectStore(self.backend)

    @property
    def store(self) -> ProjectStore:
        if not self._store.is_loaded:
            self._store.load()
        return self._store

    def flush(self) -> None:
        self.configuration_repository.flush()
        self.backend.flush()
        logger.debug("flushed session data to %s", configuration.DATA_PATH)
