# SPDX-License-Identifier: MIT

from typing import Literal

ViewMode = Literal["day", "week", "month", "quarter"]

VIEW_MODES: tuple[ViewMode, ...] = ("day", "week", "month", "quarter")
