"""Minimal request file parser.

Format::

    @host = https://example.com      <- variables, no request: global region

    ###
    # @name getUsers
    # @tag read, users
    GET {{host}}/users

    ###
    POST {{host}}/users               <- unnamed: symbol name is the request line

Regions are separated by lines starting with ``###``. Metadata lines are
comments of the form ``# @key value`` or ``// @key value``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from yacsend.models import HttpFile, HttpRegion, HttpSymbol, RequestFileError

logger = logging.getLogger(__name__)

_DELIMITER = re.compile(r"^\s*###")
_META = re.compile(r"^\s*(?:#|//)\s*@(?P<key>[\w-]+)\s*(?P<value>.*?)\s*$")
_COMMENT = re.compile(r"^\s*(?:#|//)")
_VARIABLE = re.compile(r"^\s*@[\w-]+\s*=")
_REQUEST = re.compile(
    r"^\s*(?:(?:GET|POST|PUT|PATCH|DELETE|HEAD|OPTIONS|TRACE|CONNECT)\s+\S+|https?://\S+)",
    re.IGNORECASE,
)


def parse_http_text(text: str, file_name: str) -> HttpFile:
    """Split text into regions. Line numbers are 1-based."""
    http_file = HttpFile(file_name=file_name)
    lines = text.splitlines()

    start = 1
    meta: dict[str, str] = {}
    request_line: str | None = None
    has_content = False

    def close(end: int) -> None:
        if not has_content:
            return
        name = meta.get("name") or request_line or f"region {len(http_file.http_regions) + 1}"
        http_file.http_regions.append(
            HttpRegion(
                symbol=HttpSymbol(name=name, start_line=start, end_line=end),
                meta_data=dict(meta),
                request_line=request_line,
            )
        )

    for lineno, line in enumerate(lines, start=1):
        if _DELIMITER.match(line):
            close(lineno - 1)
            start = lineno + 1
            meta = {}
            request_line = None
            has_content = False
            continue

        if line.strip():
            has_content = True
        if request_line is not None:
            continue  # headers and body

        match = _META.match(line)
        if match:
            meta[match.group("key")] = match.group("value")
        elif _COMMENT.match(line) or _VARIABLE.match(line) or not line.strip():
            continue
        elif _REQUEST.match(line):
            request_line = line.strip()

    close(len(lines))

    logger.debug("Parsed %s: %d region(s)", file_name, len(http_file.http_regions))
    return http_file


def parse_http_file(path: Path) -> HttpFile:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RequestFileError(f"Cannot read request file {path}: {e}") from e
    return parse_http_text(text, str(path))


def load_http_files(paths: Iterable[Path], extensions: Iterable[str]) -> list[HttpFile]:
    """Parse every path, expanding directories to the request files below them."""
    suffixes = {ext.lower() for ext in extensions}
    files: list[HttpFile] = []
    for path in paths:
        if path.is_dir():
            for child in sorted(path.rglob("*")):
                if child.is_file() and child.suffix.lower() in suffixes:
                    files.append(parse_http_file(child))
        else:
            files.append(parse_http_file(path))
    return files
