"""Request file model shared by the parser and the selection resolver."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


class YacsendError(Exception):
    """Base class for errors reported to the user by the CLI."""


class RequestFileError(YacsendError):
    """A request file could not be read."""


@dataclass
class HttpSymbol:
    """Display name and 1-based inclusive line span of a region."""

    name: str
    start_line: int
    end_line: int


@dataclass
class HttpRegion:
    """One independently executable unit of a request file."""

    symbol: HttpSymbol
    meta_data: dict[str, Any] = field(default_factory=dict)
    request_line: str | None = None

    def is_global(self) -> bool:
        """Regions without a request only carry setup for the rest of the file."""
        return self.request_line is None


@dataclass
class HttpFile:
    """A parsed request file."""

    file_name: str
    http_regions: list[HttpRegion] = field(default_factory=list)

    def fs_path(self) -> str:
        return str(Path(self.file_name).expanduser().resolve())


@dataclass
class SelectedFile:
    """One entry of a resolved selection; ``http_regions=None`` means every region."""

    http_file: HttpFile
    http_regions: list[HttpRegion] | None = None
