# SPDX-License-Identifier: MIT

from typing import Any

from yaml import dump

try:
    from yaml import CSafeDumper as Dumper
except ImportError:
    from yaml import SafeDumper as Dumper  # type: ignore[assignment]

from projectboard import configuration


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_file()
    __ensure_data_files()


def __ensure_config_file() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        config = configuration.get_default_configuration()
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))


def __ensure_data_files() -> None:
    if not configuration.DATA_USERS_PATH.is_file():
        users: dict[str, Any] = {"users": []}
        configuration.DATA_USERS_PATH.write_text(dump(users, Dumper=Dumper))

    # One file per entity
    for directory in (configuration.DATA_PROJECTS_DIR, configuration.DATA_TIMELINE_DIR):
        if not directory.is_dir():
            directory.mkdir(parents=True, exist_ok=True)
            (directory / ".gitkeep").touch()
