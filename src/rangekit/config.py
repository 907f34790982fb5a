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

"""Configuration reader for rangekit.

Reads ``rangekit.toml`` from the repository root and returns a validated
:class:`RangeConfig`. A missing file means defaults.

Example::

    tag_prefix  = "v"
    max_commits = 0
    git_timeout = 300

    [packages.core]
    path = "packages/core"

    [packages.web]
    path = "packages/web"

Validation Pipeline::

    rangekit.toml
    ┌──────────────────┐
    │ tag_prefx = "v"  │  ← typo!
    └────────┬─────────┘
             │
             ▼
    ┌──────────────────┐     ┌──────────────────────────────┐
    │ 1. Unknown key   │────→│ RK-CONFIG-INVALID-KEY:       │
    │    detection     │     │ hint: "Did you mean          │
    └────────┬─────────┘     │       'tag_prefix'?"         │
             │               └──────────────────────────────┘
             ▼
    ┌──────────────────┐     ┌──────────────────────────────┐
    │ 2. Type check    │────→│ RK-CONFIG-INVALID-VALUE:     │
    │    each value    │     │ 'max_commits' must be int    │
    └────────┬─────────┘     └──────────────────────────────┘
             │
             ▼
    ┌──────────────────┐
    │ 3. [packages.*]  │
    │    sections      │
    └──────────────────┘
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomlkit
import tomlkit.exceptions

from rangekit.backends._run import DEFAULT_TIMEOUT_SECONDS
from rangekit.errors import E, RangeKitError
from rangekit.logging import get_logger
from rangekit.monorepo import MonoRepoPackage

logger = get_logger(__name__)

CONFIG_FILENAME = 'rangekit.toml'

VALID_KEYS: frozenset[str] = frozenset({
    'tag_prefix',
    'max_commits',
    'git_timeout',
    'packages',
})

VALID_PACKAGE_KEYS: frozenset[str] = frozenset({
    'path',
})

_GLOBAL_TYPE_MAP: dict[str, type | tuple[type, ...]] = {
    'tag_prefix': str,
    'max_commits': int,
    'git_timeout': int,
    'packages': dict,
}

_PACKAGE_TYPE_MAP: dict[str, type | tuple[type, ...]] = {
    'path': str,
}


@dataclass(frozen=True)
class RangeConfig:
    """Validated rangekit configuration.

    Attributes:
        tag_prefix: Prefix before the version in tag names (``"v"`` for
            ``v1.2.3``). Empty by default.
        max_commits: Cap on commits enumerated per walk. 0 means no cap.
        git_timeout: Timeout in seconds for each git subprocess.
        packages: Mono-repo packages by name.
        config_path: The file this was read from, or ``None`` for
            defaults.
    """

    tag_prefix: str = ''
    max_commits: int = 0
    git_timeout: int = DEFAULT_TIMEOUT_SECONDS
    packages: dict[str, MonoRepoPackage] = field(default_factory=dict)
    config_path: Path | None = None


def _invalid_key(key: str, valid: frozenset[str], context: str) -> RangeKitError:
    suggestion = difflib.get_close_matches(key, valid, n=1, cutoff=0.6)
    hint = f"Did you mean '{suggestion[0]}'?" if suggestion else f'Valid keys: {", ".join(sorted(valid))}.'
    return RangeKitError(
        code=E.CONFIG_INVALID_KEY,
        message=f"Unknown key '{key}' in {context}",
        hint=hint,
    )


def _validate_value_type(
    key: str,
    value: Any,  # noqa: ANN401 - dynamic config values
    type_map: dict[str, type | tuple[type, ...]],
    *,
    context: str = CONFIG_FILENAME,
) -> None:
    """Raise if a config value has the wrong type."""
    expected = type_map.get(key)
    if expected is None:
        return
    # bool is an int subclass.
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        type_name = expected.__name__ if isinstance(expected, type) else str(expected)
        raise RangeKitError(
            code=E.CONFIG_INVALID_VALUE,
            message=f"'{key}' must be {type_name}, got {type(value).__name__}",
            hint=f'Check the value of {key} in {context}.',
        )


def _validate_non_negative(key: str, value: int, *, minimum: int = 0) -> None:
    if value < minimum:
        raise RangeKitError(
            code=E.CONFIG_INVALID_VALUE,
            message=f"'{key}' must be >= {minimum}, got {value}",
            hint=f'Check the value of {key} in {CONFIG_FILENAME}.',
        )


def _parse_package_section(name: str, raw: Any) -> MonoRepoPackage:  # noqa: ANN401
    """Parse and validate a single ``[packages.<name>]`` section."""
    context = f'[packages.{name}]'
    if not isinstance(raw, dict):
        raise RangeKitError(
            code=E.CONFIG_INVALID_VALUE,
            message=f'{context} must be a table, got {type(raw).__name__}',
            hint=f'Write it as {context} with a path = "..." entry.',
        )
    for key in raw:
        if key not in VALID_PACKAGE_KEYS:
            raise _invalid_key(key, VALID_PACKAGE_KEYS, context)
    for key, value in raw.items():
        _validate_value_type(key, value, _PACKAGE_TYPE_MAP, context=context)

    path = raw.get('path', '').strip()
    if not path:
        raise RangeKitError(
            code=E.CONFIG_INVALID_VALUE,
            message=f'{context} needs a non-empty path',
            hint='Set path to the package directory relative to the repository root.',
        )
    return MonoRepoPackage(name=name, path=path)


def load_config(repo_root: Path) -> RangeConfig:
    """Load and validate configuration from ``rangekit.toml``.

    Args:
        repo_root: Directory containing ``rangekit.toml``.

    Returns:
        A validated :class:`RangeConfig`; defaults if the file is absent.

    Raises:
        RangeKitError: If the file cannot be read or holds invalid config.
    """
    config_path = repo_root / CONFIG_FILENAME

    if not config_path.is_file():
        logger.debug('no_rangekit_config', path=str(config_path))
        return RangeConfig(config_path=None)

    try:
        text = config_path.read_text(encoding='utf-8')
    except OSError as exc:
        raise RangeKitError(
            code=E.CONFIG_PARSE_ERROR,
            message=f'Failed to read {config_path}: {exc}',
        ) from exc

    try:
        doc = tomlkit.parse(text)
    except tomlkit.exceptions.TOMLKitError as exc:
        raise RangeKitError(
            code=E.CONFIG_PARSE_ERROR,
            message=f'Failed to parse {config_path}: {exc}',
            hint='Check the file for TOML syntax errors.',
        ) from exc

    raw: dict[str, Any] = doc.unwrap()  # noqa: ANN401

    for key in raw:
        if key not in VALID_KEYS:
            raise _invalid_key(key, VALID_KEYS, CONFIG_FILENAME)
    for key, value in raw.items():
        _validate_value_type(key, value, _GLOBAL_TYPE_MAP)

    if 'max_commits' in raw:
        _validate_non_negative('max_commits', raw['max_commits'])
    if 'git_timeout' in raw:
        _validate_non_negative('git_timeout', raw['git_timeout'], minimum=1)

    packages = {name: _parse_package_section(name, section) for name, section in raw.pop('packages', {}).items()}

    logger.debug('config_loaded', path=str(config_path), packages=sorted(packages))
    return RangeConfig(**raw, packages=packages, config_path=config_path)


__all__ = [
    'CONFIG_FILENAME',
    'VALID_KEYS',
    'VALID_PACKAGE_KEYS',
    'RangeConfig',
    'load_config',
]
