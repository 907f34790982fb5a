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

"""Semantic versions and bump increments.

Key Concepts (ELI5)::

    ┌─────────────────────┬────────────────────────────────────────────────┐
    │ Concept             │ ELI5 Explanation                               │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ SemanticVersion     │ ``MAJOR.MINOR.PATCH`` with optional            │
    │                     │ ``-prerelease`` and ``+build`` labels. Only    │
    │                     │ the three numbers take part in ordering.       │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Increment           │ Which number a release bumps. MAJOR beats      │
    │                     │ MINOR beats PATCH.                             │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ max_increment()     │ Many commits, many suggested bumps: keep the   │
    │                     │ strongest one.                                 │
    └─────────────────────┴────────────────────────────────────────────────┘

Usage::

    from rangekit.versions import Increment, max_increment, parse_version

    v = parse_version('1.4.2')
    assert v.bump(max_increment([Increment.PATCH, Increment.MINOR])) == parse_version('1.5.0')
"""

from __future__ import annotations

import functools
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

# MAJOR.MINOR.PATCH with optional semver pre-release and build metadata.
_SEMVER_RE = re.compile(
    r'^(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)'
    r'(?:-(?P<prerelease>[0-9A-Za-z.-]+))?'
    r'(?:\+(?P<build>[0-9A-Za-z.-]+))?$'
)

# (core, is_release, pre-release identifiers); see SemanticVersion.precedence.
Precedence = tuple[tuple[int, int, int], bool, tuple[tuple[int, int | str], ...]]


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class SemanticVersion:
    """A semantic version.

    Ordering and equality use ``(major, minor, patch)`` only: two versions
    that differ solely in pre-release or build labels compare equal.
    :attr:`precedence` gives the full semver order when labels matter.

    Attributes:
        major: Major version number.
        minor: Minor version number.
        patch: Patch version number.
        prerelease: Pre-release label without the leading ``-``.
        build: Build metadata without the leading ``+``.
    """

    major: int
    minor: int
    patch: int
    prerelease: str = field(default='')
    build: str = field(default='')

    @property
    def core(self) -> tuple[int, int, int]:
        """The ``(major, minor, patch)`` triple."""
        return (self.major, self.minor, self.patch)

    @property
    def precedence(self) -> Precedence:
        """Full semver precedence key, pre-release labels included.

        A release ranks above any pre-release of the same triple. Numeric
        identifiers compare numerically and rank below alphanumeric ones.
        Build metadata is ignored.

        Examples::

            >>> v = parse_version
            >>> v('2.0.0-rc.2').precedence < v('2.0.0-rc.10').precedence < v('2.0.0').precedence
            True
        """
        if not self.prerelease:
            return (self.core, True, ())
        identifiers = tuple(
            (0, int(part)) if part.isdigit() else (1, part) for part in self.prerelease.split('.')
        )
        return (self.core, False, identifiers)

    def __eq__(self, other: object) -> bool:
        """Compare the version triple."""
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.core == other.core

    def __lt__(self, other: object) -> bool:
        """Order by major, then minor, then patch."""
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self.core < other.core

    def __hash__(self) -> int:
        """Hash consistently with :meth:`__eq__`."""
        return hash(self.core)

    def __str__(self) -> str:
        """Render as ``MAJOR.MINOR.PATCH[-prerelease][+build]``."""
        text = f'{self.major}.{self.minor}.{self.patch}'
        if self.prerelease:
            text += f'-{self.prerelease}'
        if self.build:
            text += f'+{self.build}'
        return text

    def bump(self, increment: Increment) -> SemanticVersion:
        """Return the next version for ``increment``.

        Lower fields reset to zero and labels are dropped.
        """
        if increment is Increment.MAJOR:
            return SemanticVersion(self.major + 1, 0, 0)
        if increment is Increment.MINOR:
            return SemanticVersion(self.major, self.minor + 1, 0)
        return SemanticVersion(self.major, self.minor, self.patch + 1)


def parse_version(text: str) -> SemanticVersion | None:
    """Parse ``text`` as a semantic version.

    Args:
        text: A version string such as ``"1.2.3"`` or ``"2.0.0-rc.1"``.

    Returns:
        The parsed version, or ``None`` if ``text`` is not semver.

    Examples::

        >>> str(parse_version('1.2.3-rc.1+build.5'))
        '1.2.3-rc.1+build.5'
        >>> parse_version('v1.2') is None
        True
    """
    m = _SEMVER_RE.match(text.strip())
    if m is None:
        return None
    return SemanticVersion(
        major=int(m.group('major')),
        minor=int(m.group('minor')),
        patch=int(m.group('patch')),
        prerelease=m.group('prerelease') or '',
        build=m.group('build') or '',
    )


class Increment(Enum):
    """Version increments, ordered ``MAJOR > MINOR > PATCH``.

    The order exists so that the bump chooser can take the maximum when
    several commits each ask for a different increment.
    """

    MAJOR = 'major'
    MINOR = 'minor'
    PATCH = 'patch'

    @property
    def rank(self) -> int:
        """Numeric rank; higher wins."""
        return _INCREMENT_RANK[self]

    def __lt__(self, other: object) -> bool:
        """Order by rank."""
        if not isinstance(other, Increment):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        """Order by rank."""
        if not isinstance(other, Increment):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        """Order by rank."""
        if not isinstance(other, Increment):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        """Order by rank."""
        if not isinstance(other, Increment):
            return NotImplemented
        return self.rank >= other.rank


_INCREMENT_RANK: dict[Increment, int] = {
    Increment.PATCH: 0,
    Increment.MINOR: 1,
    Increment.MAJOR: 2,
}


def max_increment(increments: Iterable[Increment]) -> Increment | None:
    """Return the strongest increment, or ``None`` if there are none.

    >>> max_increment([Increment.PATCH, Increment.MAJOR, Increment.MINOR])
    <Increment.MAJOR: 'major'>
    """
    return max(increments, default=None)


__all__ = [
    'Increment',
    'Precedence',
    'SemanticVersion',
    'max_increment',
    'parse_version',
]
