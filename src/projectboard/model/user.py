# SPDX-License-Identifier: MIT

from typing import Literal, Optional, TypedDict

from projectboard.model.entity_id import EntityId

UserRole = Literal["admin", "user"]


class User(TypedDict):
    id: Optional[EntityId]
    name: str
    role: UserRole
    email: Optional[str]
