"""Entry point: python -m yacsend <command>

- "send":        Select regions of request files (filters, sole region, or prompt)
- "shell-init":  Print a shell completion script
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from yacsend.config import YacsendConfig, load_config
from yacsend.models import SelectedFile, YacsendError


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="yacsend", description="Send regions of request files")
    subparsers = parser.add_subparsers(dest="command", required=True)

    send_parser = subparsers.add_parser("send", help="select and send regions of request files")
    send_parser.add_argument("paths", nargs="+", type=Path, help="request files or directories")
    send_parser.add_argument("-a", "--all", action="store_true", help="send all regions")
    send_parser.add_argument("-n", "--name", help="send region with this @name")
    send_parser.add_argument(
        "-t", "--tag", action="extend", nargs="+", help="send regions with any of these tags"
    )
    send_parser.add_argument("-l", "--line", type=int, help="send region containing this line")

    shell_parser = subparsers.add_parser("shell-init", help="generate shell completion script")
    shell_parser.add_argument("shell", help="shell type (zsh, bash)")
    return parser


async def _send(args: argparse.Namespace, config: YacsendConfig) -> list[SelectedFile]:
    from yacsend.parser import load_http_files
    from yacsend.prompt import RichPrompter
    from yacsend.send.options import SendOptions
    from yacsend.send.recent_store import RecencyStore
    from yacsend.send.select import SelectionResolver

    http_files = load_http_files(args.paths, config.send.extensions)
    options = SendOptions(all=args.all, name=args.name, tag=args.tag, line=args.line)
    resolver = SelectionResolver(
        RecencyStore(config.recent_file),
        RichPrompter(),
        message=config.prompt.message,
    )
    return await resolver.resolve(http_files, options)


def _run_send(args: argparse.Namespace, config: YacsendConfig) -> int:
    selection = asyncio.run(_send(args, config))
    if not selection:
        print("Nothing to execute.", file=sys.stderr)
        return 1

    console = Console()
    for selected in selection:
        if selected.http_regions is None:
            names = "all"
        else:
            names = ", ".join(r.symbol.name for r in selected.http_regions)
        console.print(f"[bold]{escape(selected.http_file.file_name)}[/]: {escape(names)}", highlight=False)
    return 0


def _run_shell_init(args: argparse.Namespace) -> int:
    from yacsend.shell_init import completion_script

    print(completion_script(args.shell))
    return 0


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    config = load_config()
    _setup_logging(config.log_level)

    try:
        if args.command == "send":
            code = _run_send(args, config)
        else:
            code = _run_shell_init(args)
    except YacsendError as e:
        print(str(e), file=sys.stderr)
        code = 1
    except KeyboardInterrupt:
        code = 130

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
