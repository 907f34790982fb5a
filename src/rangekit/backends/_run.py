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

"""Central subprocess abstraction for rangekit.

Every ``git`` invocation goes through :func:`run_command`, which gives:

- Structured logging of each call (debug) and each failure (warning).
- A per-call timeout; expiry is logged and re-raised.
- A single return type (:class:`CommandResult`) for all backends.
- Lossless text: output is decoded as UTF-8 with ``surrogateescape``, so
  file names and commit messages in other encodings decode without
  error and encode back to the original bytes.

rangekit only ever reads history, so unlike a publishing tool there is
no dry-run mode here: every command is safe to execute.
"""

from __future__ import annotations

import os
import subprocess  # noqa: S404 - subprocess is the core purpose of this module
import time
from dataclasses import dataclass
from pathlib import Path

from rangekit.logging import get_logger

log = get_logger('rangekit.backends.run')

# Default timeout for subprocess calls (5 minutes).
DEFAULT_TIMEOUT_SECONDS = 300


@dataclass(frozen=True)
class CommandResult:
    """Result of a subprocess invocation.

    Attributes:
        command: The command that was executed (as a list of strings).
        return_code: Process exit code (0 = success).
        stdout: Captured standard output.
        stderr: Captured standard error.
        duration: Wall-clock duration in milliseconds.
    """

    command: list[str]
    return_code: int
    stdout: str = ''
    stderr: str = ''
    duration: float = 0.0

    @property
    def ok(self) -> bool:
        """Whether the command succeeded."""
        return self.return_code == 0

    @property
    def command_str(self) -> str:
        """The command as a single shell-style string."""
        return ' '.join(self.command)


def run_command(
    cmd: list[str],
    *,
    cwd: Path | str | None = None,
    env: dict[str, str] | None = None,
    timeout: int = DEFAULT_TIMEOUT_SECONDS,
) -> CommandResult:
    """Execute a subprocess command with logging.

    Args:
        cmd: Command and arguments as a list of strings.
        cwd: Working directory for the command.
        env: Extra environment variables to set (merged with current env).
        timeout: Maximum seconds to wait before killing the process.

    Returns:
        A :class:`CommandResult` with the command output and metadata.

    Raises:
        subprocess.TimeoutExpired: If the command exceeds ``timeout``.
    """
    cmd_str = ' '.join(cmd)
    log.debug('run_command', cmd=cmd_str, cwd=str(cwd or '.'))

    full_env: dict[str, str] | None = None
    if env:
        full_env = {**os.environ, **env}

    start = time.monotonic()
    try:
        result = subprocess.run(  # noqa: S603 -- arguments are built by the backends
            cmd,
            cwd=cwd,
            env=full_env,
            capture_output=True,
            encoding='utf-8',
            errors='surrogateescape',
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        duration = (time.monotonic() - start) * 1000
        log.error('command_timeout', cmd=cmd_str, timeout=timeout, duration=duration)
        raise

    duration = (time.monotonic() - start) * 1000
    cmd_result = CommandResult(
        command=cmd,
        return_code=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
        duration=duration,
    )

    if result.returncode != 0:
        log.warning(
            'command_failed',
            cmd=cmd_str,
            return_code=result.returncode,
            stderr=result.stderr[:500],
            duration=duration,
        )
    else:
        log.debug('command_ok', cmd=cmd_str, duration=duration)

    return cmd_result


__all__ = [
    'CommandResult',
    'DEFAULT_TIMEOUT_SECONDS',
    'TimeoutExpired',
    'run_command',
]

# Re-exported so backends need not import subprocess (S404).
TimeoutExpired = subprocess.TimeoutExpired
