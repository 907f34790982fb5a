# Copyright 2026 Google LLC
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
#
# SPDX-License-Identifier: Apache-2.0

"""Structured error system for rangekit.

Every error has a unique ``RK-NAMED-KEY`` code, a human-readable message
that names the pattern or revision that failed, and an optional hint.

Code categories::

    RK-CONFIG-*       Configuration errors
    RK-RANGE-*        Range pattern syntax errors
    RK-REVISION-*     Revision resolution errors
    RK-TAG-*          Tag lookup errors
    RK-HISTORY-*      Commit history errors
    RK-PACKAGE-*      Mono-repo package errors
    RK-BACKEND-*      Version-control backend failures

Each category with a recovery story has its own subclass so callers
can catch precisely::

    try:
        tag = locator.latest_tag_before(sha)
    except NoTagFoundError:
        lower = vcs.first_commit()

All subclasses still carry the code, so generic handlers can switch on
``exc.code`` and :func:`render_error` works for every one of them.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from rich.console import Console
from rich.markup import escape as rich_escape


class ErrorCode(str, Enum):
    """Enumeration of all rangekit diagnostic codes."""

    # Configuration
    CONFIG_INVALID_KEY = 'RK-CONFIG-INVALID-KEY'
    CONFIG_INVALID_VALUE = 'RK-CONFIG-INVALID-VALUE'
    CONFIG_PARSE_ERROR = 'RK-CONFIG-PARSE-ERROR'

    # Resolution
    RANGE_INVALID_SYNTAX = 'RK-RANGE-INVALID-SYNTAX'
    REVISION_NOT_FOUND = 'RK-REVISION-NOT-FOUND'
    TAG_NOT_FOUND = 'RK-TAG-NOT-FOUND'
    HISTORY_EMPTY = 'RK-HISTORY-EMPTY'

    # Mono-repo
    PACKAGE_NOT_FOUND = 'RK-PACKAGE-NOT-FOUND'

    # Backend
    BACKEND_FAILURE = 'RK-BACKEND-FAILURE'


# Convenience alias for shorter imports.
E = ErrorCode


@dataclass(frozen=True)
class ErrorInfo:
    """Metadata for a single error code.

    Attributes:
        code: The ``RK-NAMED-KEY`` error code.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    code: ErrorCode
    message: str
    hint: str = ''


class RangeKitError(Exception):
    """Base exception for all rangekit errors.

    Args:
        code: The error code from :class:`ErrorCode`.
        message: Human-readable description of what went wrong.
        hint: Optional suggestion for how to fix the error.
    """

    def __init__(self, code: ErrorCode, message: str, hint: str = '') -> None:
        """Initialize with an error code, message, and optional hint."""
        self.info = ErrorInfo(code=code, message=message, hint=hint)
        super().__init__(f'[{code.value}] {message}')

    @property
    def code(self) -> ErrorCode:
        """The error code."""
        return self.info.code

    @property
    def hint(self) -> str:
        """Suggestion for fixing this error, or empty string."""
        return self.info.hint


class _CodedError(RangeKitError):
    """A :class:`RangeKitError` whose code is fixed by the subclass."""

    default_code: ErrorCode

    def __init__(self, message: str, hint: str = '') -> None:
        """Initialize with the subclass code."""
        super().__init__(self.default_code, message, hint)


class InvalidRangeSyntaxError(_CodedError):
    """A range pattern is missing the ``..`` separator."""

    default_code = E.RANGE_INVALID_SYNTAX


class RevisionNotFoundError(_CodedError):
    """An endpoint text resolves to nothing in the repository."""

    default_code = E.REVISION_NOT_FOUND


class NoTagFoundError(_CodedError):
    """No qualifying tag exists where one was required.

    Recoverable: callers fall back to the repository's first commit.
    """

    default_code = E.TAG_NOT_FOUND


class EmptyHistoryError(_CodedError):
    """The branch has no commits at all."""

    default_code = E.HISTORY_EMPTY


class PackageNotFoundError(_CodedError):
    """A mono-repo package name is not configured."""

    default_code = E.PACKAGE_NOT_FOUND


class BackendFailureError(_CodedError):
    """A lower-level version-control failure (corrupt object, I/O, timeout)."""

    default_code = E.BACKEND_FAILURE


ERRORS: dict[ErrorCode, ErrorInfo] = {
    E.CONFIG_INVALID_KEY: ErrorInfo(
        code=E.CONFIG_INVALID_KEY,
        message='rangekit.toml contains a key rangekit does not know.',
        hint='Valid top-level keys: tag_prefix, max_commits, git_timeout, packages.',
    ),
    E.CONFIG_INVALID_VALUE: ErrorInfo(
        code=E.CONFIG_INVALID_VALUE,
        message='A rangekit.toml value has the wrong type or is out of range.',
        hint='tag_prefix is a string, max_commits an integer >= 0 and git_timeout an integer >= 1.',
    ),
    E.CONFIG_PARSE_ERROR: ErrorInfo(
        code=E.CONFIG_PARSE_ERROR,
        message='rangekit.toml is not valid TOML.',
        hint='Check the line reported in the error for a syntax mistake.',
    ),
    E.RANGE_INVALID_SYNTAX: ErrorInfo(
        code=E.RANGE_INVALID_SYNTAX,
        message='Commit range pattern does not contain the ".." separator.',
        hint="Use 'FROM..TO'; either side may be empty, e.g. '1.0.0..' or '..HEAD'.",
    ),
    E.REVISION_NOT_FOUND: ErrorInfo(
        code=E.REVISION_NOT_FOUND,
        message='A range endpoint does not name a tag or a commit.',
        hint="Check the spelling, or run 'git fetch --tags' if the tag lives on a remote.",
    ),
    E.TAG_NOT_FOUND: ErrorInfo(
        code=E.TAG_NOT_FOUND,
        message='No semantic-version tag is reachable from the requested commit.',
        hint='Tags must be named <tag_prefix><major>.<minor>.<patch>.',
    ),
    E.HISTORY_EMPTY: ErrorInfo(
        code=E.HISTORY_EMPTY,
        message='The current branch has no commits.',
        hint='Create an initial commit first.',
    ),
    E.PACKAGE_NOT_FOUND: ErrorInfo(
        code=E.PACKAGE_NOT_FOUND,
        message='The named package is not declared in rangekit.toml.',
        hint='Add a [packages.<name>] table with a path, or use a configured name.',
    ),
    E.BACKEND_FAILURE: ErrorInfo(
        code=E.BACKEND_FAILURE,
        message='A git command failed unexpectedly.',
        hint="Run 'git fsck' to check the repository for corruption.",
    ),
}


def explain(code: str) -> str | None:
    """Return a detailed explanation for an error code.

    Args:
        code: The error code string, e.g. ``"RK-TAG-NOT-FOUND"``.

    Returns:
        A formatted explanation string, or ``None`` if the code is unknown.
    """
    try:
        error_code = ErrorCode(code)
    except ValueError:
        return None

    info = ERRORS.get(error_code)
    if info is None:
        return f'{code}: No detailed explanation available.'

    lines = [f'{code}: {info.message}']
    if info.hint:
        lines.append(f'  Hint: {info.hint}')
    return '\n'.join(lines)


def render_error(exc: RangeKitError, *, file: TextIO | None = None) -> None:
    """Render an error in Rust-compiler style with color.

    Output format::

        error[RK-REVISION-NOT-FOUND]: Revision '1.9.0' not found.
          |
          = hint: Check the spelling, ...

    Args:
        exc: The error to render.
        file: Output stream (defaults to ``sys.stderr``).
    """
    out = file or sys.stderr

    if out.isatty():
        console = Console(file=out, highlight=False)
        msg = rich_escape(exc.info.message)
        console.print(
            f'[bold red]error[/bold red][bold red]\\[{exc.code.value}][/bold red][bold]: {msg}[/bold]',
        )
        if exc.hint:
            hint = rich_escape(exc.hint)
            console.print('  [dim]|[/dim]')
            console.print(f'  [dim]=[/dim] [cyan]hint[/cyan]: {hint}')
        console.print()
    else:
        print(f'error[{exc.code.value}]: {exc.info.message}', file=out)  # noqa: T201 - CLI output
        if exc.hint:
            print('  |', file=out)  # noqa: T201 - CLI output
            print(f'  = hint: {exc.hint}', file=out)  # noqa: T201 - CLI output
        print(file=out)  # noqa: T201 - CLI output


__all__ = [
    'E',
    'ERRORS',
    'BackendFailureError',
    'EmptyHistoryError',
    'ErrorCode',
    'ErrorInfo',
    'InvalidRangeSyntaxError',
    'NoTagFoundError',
    'PackageNotFoundError',
    'RangeKitError',
    'RevisionNotFoundError',
    'explain',
    'render_error',
]
