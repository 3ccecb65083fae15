from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Literal

Level = Literal["success", "error"]


@dataclass(frozen=True)
class Notification:
    level: Level
    message: str


class Notifications:
    """Transient messages queued by a controller until the view reads them."""

    def __init__(self) -> None:
        self._items: list[Notification] = []

    def success(self, message: str) -> None:
        self._items.append(Notification("success", message))

    def error(self, message: str) -> None:
        self._items.append(Notification("error", message))

    def drain(self) -> list[dict[str, str]]:
        items, self._items = self._items, []
        return [asdict(n) for n in items]

    def __len__(self) -> int:
        return len(self._items)
