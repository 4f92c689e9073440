"""Decide which regions of which request files a ``send`` invocation runs.

Precedence, first match wins:

1. ``--all``: every file in full.
2. ``--name`` / ``--tag`` / ``--line``: regions matching any filter.
3. Exactly one non-global region overall: run it without asking.
4. Interactive choice, with each file's last choice offered first.

Only the interactive path reads or writes the recency store.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from yacsend.models import HttpFile, HttpRegion, SelectedFile
from yacsend.send.options import SendOptions
from yacsend.send.recent_store import ALL_REGIONS, RecencyStore, RecentSelectionsData

logger = logging.getLogger(__name__)

DEFAULT_PROMPT_MESSAGE = "please choose which region to use"

# (choices, message) -> chosen label, or None when the user picked nothing
Prompter = Callable[[list[str], str], Awaitable["str | None"]]


@dataclass
class _Choice:
    label: str
    http_file: HttpFile
    http_regions: list[HttpRegion] | None
    remembered_name: str


class SelectionResolver:
    """Resolve CLI filters, auto-selection and prompting into a selection."""

    def __init__(
        self,
        store: RecencyStore,
        prompter: Prompter,
        *,
        message: str = DEFAULT_PROMPT_MESSAGE,
        cwd: Path | None = None,
    ) -> None:
        self.store = store
        self.prompter = prompter
        self.message = message
        self.cwd = cwd

    async def resolve(
        self, http_files: list[HttpFile], options: SendOptions
    ) -> list[SelectedFile]:
        if options.all:
            logger.debug("Selecting all %d file(s)", len(http_files))
            return [SelectedFile(http_file) for http_file in http_files]

        if options.has_filters():
            result = select_with_filters(http_files, options)
            if result:
                logger.debug("Filters matched regions in %d file(s)", len(result))
                return result
            logger.debug("Filters matched nothing, falling back to manual selection")

        candidates = [
            (http_file, region)
            for http_file in http_files
            for region in http_file.http_regions
            if not region.is_global()
        ]
        if len(candidates) == 1:
            http_file, region = candidates[0]
            logger.debug("Auto-selecting sole region %s", region.symbol.name)
            return [SelectedFile(http_file, [region])]

        return await self._select_interactive(http_files)

    # ── Interactive selection ────────────────────────────────

    async def _select_interactive(self, http_files: list[HttpFile]) -> list[SelectedFile]:
        data = await self.store.load()
        choices = self._build_choices(http_files, data)
        if not choices:
            return []

        label = await self.prompter([c.label for c in choices], self.message)
        choice = next((c for c in choices if c.label == label), None) if label else None
        if choice is None:
            logger.debug("No region chosen")
            return []

        self.store.set(data, choice.http_file.fs_path(), choice.remembered_name)
        await self.store.save(data)
        return [SelectedFile(choice.http_file, choice.http_regions)]

    def _build_choices(
        self, http_files: list[HttpFile], data: RecentSelectionsData
    ) -> list[_Choice]:
        choices: list[_Choice] = []
        seen: set[str] = set()
        has_many_files = len(http_files) > 1

        def add(
            label: str,
            http_file: HttpFile,
            regions: list[HttpRegion] | None,
            remembered_name: str,
        ) -> None:
            if has_many_files:
                label = f"{self._display_name(http_file)}: {label}"
            if label in seen:
                return
            seen.add(label)
            choices.append(_Choice(label, http_file, regions, remembered_name))

        for http_file in http_files:
            regions = [r for r in http_file.http_regions if not r.is_global()]

            recent = self.store.get(data, http_file.fs_path())
            if recent == ALL_REGIONS:
                add(f"recent({recent})", http_file, None, recent)
            elif recent:
                region = next((r for r in regions if r.symbol.name == recent), None)
                if region is not None:
                    add(f"recent({recent})", http_file, [region], recent)

            # a region literally named "all" is shadowed by this choice
            add(ALL_REGIONS, http_file, None, ALL_REGIONS)
            for region in regions:
                add(region.symbol.name, http_file, [region], region.symbol.name)
        return choices

    def _display_name(self, http_file: HttpFile) -> str:
        cwd = self.cwd or Path.cwd()
        path = Path(http_file.fs_path())
        try:
            return os.path.join(".", str(path.relative_to(cwd.resolve())))
        except ValueError:
            return str(path)


# ── CLI filters ──────────────────────────────────────────────


def select_with_filters(http_files: list[HttpFile], options: SendOptions) -> list[SelectedFile]:
    """Regions matching the name, any tag, or the line; files without matches are left out."""
    result: list[SelectedFile] = []
    for http_file in http_files:
        regions = [
            r
            for r in http_file.http_regions
            if _has_name(r, options.name) or _has_tag(r, options.tag) or _is_line(r, options.line)
        ]
        if regions:
            result.append(SelectedFile(http_file, regions))
    return result


def _has_name(region: HttpRegion, name: str | None) -> bool:
    if not name:
        return False
    return region.meta_data.get("name") == name


def _has_tag(region: HttpRegion, tags: list[str] | None) -> bool:
    tag = region.meta_data.get("tag")
    if not tags or not isinstance(tag, str):
        return False
    region_tags = {t.strip() for t in tag.split(",")}
    return any(t in region_tags for t in tags)


def _is_line(region: HttpRegion, line: int | None) -> bool:
    if line is None:
        return False
    return region.symbol.start_line <= line <= region.symbol.end_line
