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

"""Structured logging for rangekit.

rangekit runs inside other tools (changelog renderers, version-bump
engines) that own the process's logging setup. Its events therefore go
to the ``rangekit`` stdlib logger tree and nowhere else: the tree carries
a :class:`logging.NullHandler`, so nothing is printed until the host
attaches a handler or calls :func:`configure_logging`. Loggers are
wrapped individually with :func:`structlog.wrap_logger`, which leaves the
host's own ``structlog.configure`` untouched.

Events are snake_case with key/value context::

    event                           level    module
    ──────────────────────────────  ───────  ───────────────────────
    run_command, command_ok         debug    backends._run
    command_failed                  warning  backends._run
    command_timeout                 error    backends._run
    tag_skip_not_commit             debug    backends.vcs.git
    tag_skip_not_semver             debug    tags
    latest_tag_before               debug    tags
    commit_walk_truncated           warning  walker
    range_resolved                  debug    resolver
    lower_bound_first_commit        debug    resolver
    release_chain_link              debug    release
    release_chain_built             debug    release
    release_target_unreachable      warning  release
    package_filtered                debug    monorepo
    global_filtered                 debug    monorepo

Usage::

    from rangekit.logging import configure_logging

    configure_logging(verbose=True)  # every git call on stderr
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

LOGGER_NAME = 'rangekit'

_PROCESSORS: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt='iso'),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]

_root_logger = logging.getLogger(LOGGER_NAME)
_root_logger.addHandler(logging.NullHandler())

# The handler installed by the last configure_logging() call.
_handler: logging.Handler | None = None


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Print rangekit's events, for command-line use and debugging.

    Only the ``rangekit`` logger is touched. Its events stop propagating
    to the root logger so they are not printed twice. Calling this again
    replaces the handler installed by the previous call.

    Args:
        verbose: Include debug events, among them every git invocation.
        quiet: Only warnings and errors. Takes precedence over ``verbose``.
        json_log: One JSON object per line instead of console output.
        stream: Destination, ``sys.stderr`` when omitted, so stdout stays
            free for the host's own output.

    Returns:
        The installed handler.
    """
    global _handler

    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    out = stream or sys.stderr
    if json_log:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=out.isatty())

    handler = logging.StreamHandler(out)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    if _handler is not None:
        _root_logger.removeHandler(_handler)
    _root_logger.addHandler(handler)
    _root_logger.setLevel(level)
    _root_logger.propagate = False
    _handler = handler
    return handler


def get_logger(name: str = LOGGER_NAME) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger over the stdlib logger ``name``.

    Args:
        name: Logger name, usually the calling module's ``__name__``;
            anything under ``rangekit.`` shares the library's handlers.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


__all__ = [
    'LOGGER_NAME',
    'configure_logging',
    'get_logger',
]
