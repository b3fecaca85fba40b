# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# ruff: noqa: ANN401

"""IO and argument helpers shared by CLI commands."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Protocol

from typetally.error_codes import error_code_for

if TYPE_CHECKING:
    import argparse
    from collections.abc import Iterator
    from pathlib import Path

    from typetally.exceptions import TypetallyError


class _TextStream(Protocol):
    def write(self, s: str, /) -> int: ...


class ArgumentRegistrar(Protocol):
    """Anything exposing ``ArgumentParser.add_argument`` (parsers, groups)."""

    def add_argument(self, *args: Any, **kwargs: Any) -> argparse.Action: ...


def _select_stream(*, err: bool = False) -> _TextStream:
    return sys.stderr if err else sys.stdout


def echo(message: str, *, newline: bool = True, err: bool = False) -> None:
    """Write a message to stdout or stderr."""
    stream = _select_stream(err=err)
    _ = stream.write(message)
    if newline:
        _ = stream.write("\n")


def register_argument(registrar: ArgumentRegistrar, *args: Any, **kwargs: Any) -> None:
    """Register an argument on a parser or argument group, discarding the action handle."""
    _ = registrar.add_argument(*args, **kwargs)


def emit_output(text: str, output: Path | None) -> None:
    """Print `text` to stdout, or write it to `output` when a path is given."""
    if output is None:
        echo(text, newline=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    _ = output.write_text(text, encoding="utf-8")
    echo(f"[typetally] Wrote {output}", err=True)


@contextmanager
def open_output(output: Path | None) -> Iterator[_TextStream]:
    """Yield stdout, or a text stream writing to `output` when a path is given.

    Anything written before an error is kept: the file is closed on exit
    either way, and the ``Wrote`` notice is only printed on success.
    """
    if output is None:
        yield _select_stream()
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8") as handle:
        yield handle
    echo(f"[typetally] Wrote {output}", err=True)


def report_error(exc: TypetallyError) -> int:
    """Print a fatal error with its stable code to stderr.

    Returns:
        Exit code ``1``.
    """
    echo(f"[typetally] ({error_code_for(exc)}) {exc}", err=True)
    return 1


__all__ = ["ArgumentRegistrar", "echo", "emit_output", "open_output", "register_argument", "report_error"]
