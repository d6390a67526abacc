# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Optional, cast

from yaml import dump, load

try:
    from yaml import CSafeDumper as Dumper
    from yaml import CSafeLoader as Loader
except ImportError:
    from yaml import SafeDumper as Dumper  # type: ignore[assignment]
    from yaml import SafeLoader as Loader  # type: ignore[assignment]

from projectboard import configuration
from projectboard.model.view_mode import ViewMode


class ConfigurationRepository:
    def __init__(self, config_path: Optional[Path] = None) -> None:
        self.config_path = config_path or configuration.APP_CONFIG_PATH
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        loaded = None
        if self.config_path.is_file():
            loaded = load(self.config_path.read_text(), Loader=Loader)

        # Back-fill keys added after the file was written
        config = configuration.get_default_configuration()
        if loaded is not None:
            config.update(loaded)
        self._config = cast(configuration.Configuration, config)

    def __save_data(self, config: configuration.Configuration) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False
            return True
        return False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        current_user_id: Optional[str] = None,
        remove_current_user_id: bool = False,
        default_view_mode: Optional[ViewMode] = None,
        split_panel_padding_days: Optional[int] = None,
        simple_timeline_padding_days: Optional[int] = None,
        chart_buffer_days: Optional[int] = None,
        min_day_width: Optional[int] = None,
        show_header: Optional[bool] = None,
        log_level: Optional[str] = None,
    ) -> None:
        self.is_dirty = True

        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if current_user_id is not None:
            self.config["current_user_id"] = current_user_id
        if remove_current_user_id:
            self.config["current_user_id"] = None
        if default_view_mode is not None:
            self.config["default_view_mode"] = default_view_mode
        if split_panel_padding_days is not None:
            self.config["split_panel_padding_days"] = split_panel_padding_days
        if simple_timeline_padding_days is not None:
            self.config["simple_timeline_padding_days"] = simple_timeline_padding_days
        if chart_buffer_days is not None:
            self.config["chart_buffer_days"] = chart_buffer_days
        if min_day_width is not None:
            self.config["min_day_width"] = min_day_width
        if show_header is not None:
            self.config["show_header"] = show_header
        if log_level is not None:
            self.config["log_level"] = log_level
