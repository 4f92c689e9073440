"""Region filters of the ``send`` command."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SendOptions:
    all: bool = False
    name: str | None = None
    tag: list[str] | None = None
    line: int | None = None

    def has_filters(self) -> bool:
        return bool(self.name) or bool(self.tag) or self.line is not None
