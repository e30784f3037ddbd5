"""Line-oriented command loop.

Reads ``<verb> <param> ...`` lines, dispatches them to the operations and
writes each result line followed by a ``.`` sentinel line.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from typing import IO, Callable, Dict, Iterable, List, Optional

import click
from rich.console import Console
from rich.markup import escape

from .config import Config
from .errors import CommandError, InvalidInput, UnknownCommand
from .operations import collect_cells, parse_identifier

SENTINEL = "."
EXIT_PREFIX = "exit"
ERROR_PREFIX = "! "

_SEPARATOR_RE = re.compile(r"\s")


@dataclass
class Command:
    """A single parsed input line."""

    verb: str
    params: List[str] = field(default_factory=list)


def parse_command(line: str) -> Command:
    """Tokenize a command line.

    Raises:
        InvalidInput: If the line has no whitespace separator or no verb.
    """
    if not _SEPARATOR_RE.search(line):
        raise InvalidInput("Parameters must be separated by spaces")
    tokens = line.split()
    if not tokens:
        raise InvalidInput("Empty command line")
    return Command(verb=tokens[0].lower(), params=tokens[1:])


def format_error(error: CommandError) -> str:
    """Structured error line written in keep-going mode."""
    return f"{ERROR_PREFIX}{error.kind}: {error}"


class CommandLoop:
    """Dispatches command lines to the operations.

    In the default mode the first ``CommandError`` propagates out of
    ``run``. With ``keep_going`` it is written as an error line, followed
    by the sentinel, and the loop continues.
    """

    def __init__(self, config: Optional[Config] = None, console: Optional[Console] = None):
        self.config = config or Config()
        self.console = console or Console(stderr=True)
        self.handlers: Dict[str, Callable[[List[str]], List[str]]] = {
            "cells": self._cells,
            "glob": self._glob,
        }

    def _cells(self, params: List[str]) -> List[str]:
        return collect_cells(params, level=self.config.level, max_cells=self.config.max_cells)

    def _glob(self, params: List[str]) -> List[str]:
        return parse_identifier(params, allow_overlap=self.config.allow_overlapping_amount).lines()

    def execute(self, line: str) -> List[str]:
        """Parse and run one command line, returning its output lines."""
        command = parse_command(line)
        handler = self.handlers.get(command.verb)
        if handler is None:
            raise UnknownCommand(f"Unknown command: {command.verb}")

        t0 = time.time()
        result = handler(command.params)
        if self.config.verbose:
            self.console.print(
                f"[dim]{command.verb}[/dim] {escape(' '.join(command.params))} "
                f"-> {len(result)} line(s) in {time.time() - t0:.3f}s",
                highlight=False,
            )
        return result

    def run(self, lines: Iterable[str], out: Optional[IO[str]] = None) -> int:
        """Process lines until end of input or an ``exit`` line.

        Returns:
            Number of commands answered (including reported errors).
        """
        answered = 0
        for raw in lines:
            line = raw.rstrip("\r\n")
            if line.startswith(EXIT_PREFIX):
                break

            try:
                output = self.execute(line)
            except CommandError as e:
                if not self.config.keep_going:
                    raise
                self.console.print(f"[red]{e.kind}[/red]: {escape(str(e))}", highlight=False)
                output = [format_error(e)]

            for value in output:
                click.echo(value, file=out)
            click.echo(SENTINEL, file=out)
            answered += 1
        return answered
