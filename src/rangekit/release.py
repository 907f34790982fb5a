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

"""Release chains: history split at tag boundaries.

Key Concepts (ELI5)::

    ┌─────────────────────┬────────────────────────────────────────────────┐
    │ Concept             │ ELI5 Explanation                               │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Release             │ One changelog section: the commits between a   │
    │                     │ tag and the tag before it. Points at the       │
    │                     │ previous (older) release.                      │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Target              │ The oldest commit the caller cares about. The  │
    │                     │ chain stops at the release containing it, and │
    │                     │ that release is cut just below it.             │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Unreleased          │ A release whose upper bound is not tagged yet  │
    │                     │ (``version`` is ``None``).                     │
    └─────────────────────┴────────────────────────────────────────────────┘

Building the chain for ``"X.."`` with ``X`` between 1.0.0 and 2.0.0::

    first ── a ── 1.0.0 ── X ── b ── 2.0.0 ── c ── d(HEAD)

    ..HEAD     → Unreleased  [d, c]            target not here
    ..2.0.0    → 2.0.0       [2.0.0, b, X]     target here, stop
    drain(X)   → 2.0.0       [2.0.0, b, X]     cut below X, previous = None

Each step resolves ``..<previous lower bound>``, whose upper bound is
strictly older than the last one, so the loop ends after at most one
step per tag.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from rangekit.endpoints import CommitRange, ResolvedEndpoint
from rangekit.logging import get_logger
from rangekit.models import Commit
from rangekit.resolver import RangeResolver, RevisionResolver
from rangekit.revspec import RangePattern
from rangekit.versions import SemanticVersion

logger = get_logger(__name__)

UNRELEASED_TITLE = 'Unreleased'


@dataclass(eq=False)
class Release:
    """One link of a release chain.

    Attributes:
        version: Version of the tag at :attr:`range`'s upper bound, or
            ``None`` when the upper bound is untagged.
        range: The commits of this release.
        previous: The next older release, owned by this one.
    """

    version: SemanticVersion | None
    range: CommitRange
    previous: Release | None = None

    @classmethod
    def from_range(cls, commit_range: CommitRange) -> Release:
        """Wrap a range, taking the version from its upper tag."""
        tag = commit_range.to.tag
        return cls(version=tag.version if tag is not None else None, range=commit_range)

    @property
    def title(self) -> str:
        """Section title: the tag name, or ``Unreleased``."""
        tag = self.range.to.tag
        return tag.name if tag is not None else UNRELEASED_TITLE

    @property
    def commits(self) -> list[Commit]:
        """Commits of this release only, newest first."""
        return self.range.commits

    def contains(self, sha: str) -> bool:
        """Whether ``sha`` is one of this release's commits."""
        return self.range.contains(sha)

    def __iter__(self) -> Iterator[Release]:
        """Iterate over the chain, starting with this release."""
        release: Release | None = self
        while release is not None:
            yield release
            release = release.previous

    def drain_to_target(self, sha: str) -> bool:
        """Cut the chain at the first release containing ``sha``.

        Commits older than ``sha`` are dropped from that release
        (``sha`` itself is kept) and its :attr:`previous` is cleared.

        Returns:
            Whether a release containing ``sha`` was found.
        """
        for release in self:
            if release.contains(sha):
                index = release.range.shas.index(sha)
                release.range.commits = release.range.commits[: index + 1]
                release.previous = None
                return True
        return False

    def __str__(self) -> str:
        return f'{self.title} ({self.range}, {len(self.range)} commits)'


class ReleaseChainBuilder:
    """Build release chains from range patterns.

    Args:
        resolver: Resolves the explicit target text.
        ranges: Resolves the per-release ranges.
    """

    def __init__(self, resolver: RevisionResolver, ranges: RangeResolver) -> None:
        """Initialize with an endpoint resolver and a range resolver."""
        self._resolver = resolver
        self._ranges = ranges

    def build_chain(self, pattern: RangePattern) -> Release:
        """Build the chain for ``pattern``.

        The upper bound is ``pattern.to`` (``HEAD`` when omitted). The
        target is ``pattern.from_``, or the first commit when omitted.

        Returns:
            The newest release; older ones follow through
            :attr:`Release.previous`.
        """
        if pattern.from_ is not None:
            target = self._resolver.resolve(pattern.from_)
        else:
            target = self._ranges.first_commit()
        return self.build_chain_to(pattern, target)

    def build_chain_to(self, pattern: RangePattern, target: ResolvedEndpoint) -> Release:
        """Build the chain from ``pattern.to`` back to ``target``."""
        links = [Release.from_range(self._ranges.resolve_range(RangePattern.upper_bound(pattern.to)))]

        if not links[0].contains(target.oid):
            while True:
                lower = links[-1].range.from_
                next_range = self._ranges.resolve_range(RangePattern.upper_bound(str(lower)))
                if next_range.to.oid == target.oid:
                    break
                if next_range.contains(target.oid):
                    if next_range.from_ != next_range.to:
                        links.append(Release.from_range(next_range))
                    break
                if next_range.from_ == next_range.to:
                    logger.warning('release_target_unreachable', target=target.short, stopped_at=next_range.to.short)
                    break
                links.append(Release.from_range(next_range))
                logger.debug('release_chain_link', title=links[-1].title, range=str(next_range))

        for newer, older in zip(links, links[1:]):
            newer.previous = older

        head = links[0]
        head.drain_to_target(target.oid)
        logger.debug('release_chain_built', target=target.short, releases=len(list(head)))
        return head


__all__ = [
    'UNRELEASED_TITLE',
    'Release',
    'ReleaseChainBuilder',
]
