# SPDX-License-Identifier: MIT

from copy import deepcopy
from pathlib import Path
from typing import Optional

from yaml import dump, load

try:
    from yaml import CSafeDumper as Dumper
    from yaml import CSafeLoader as Loader
except ImportError:
    from yaml import SafeDumper as Dumper  # type: ignore[assignment]
    from yaml import SafeLoader as Loader  # type: ignore[assignment]

from projectboard.model.entity_id import EntityId, generate_entity_id
from projectboard.model.user import User


class UserRepository:
    def __init__(self, users_path: Path) -> None:
        self.users_path = users_path
        self._users: Optional[list[User]] = None
        self.is_dirty = False

    @property
    def users(self) -> list[User]:
        if self._users is None:
            self.__load_data()
        if self._users is None:
            raise ValueError()
        return self._users

    def __load_data(self) -> None:
        if not self.users_path.is_file():
            self._users = []
            return
        users_data = load(self.users_path.read_text(), Loader=Loader)
        self._users = list((users_data or {}).get("users") or [])

    def __save_data(self, users: list[User]) -> None:
        self.users_path.parent.mkdir(parents=True, exist_ok=True)
        self.users_path.write_text(
            dump({"users": users}, Dumper=Dumper, allow_unicode=True)
        )

    def flush(self) -> bool:
        if self._users is not None and self.is_dirty:
            self.__save_data(self._users)
            self.is_dirty = False
            return True
        return False

    def save_new_user(self, user: User) -> EntityId:
        self.is_dirty = True
        user["id"] = generate_entity_id()
        self.users.append(deepcopy(user))
        return user["id"]

    def get_all_users(self) -> list[User]:
        return deepcopy(self.users)

    def get_user(self, id: Optional[EntityId]) -> Optional[User]:
        if id is None:
            return None
        for user in self.users:
            if user["id"] == id:
                return deepcopy(user)
        return None
