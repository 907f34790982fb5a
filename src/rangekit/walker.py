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

"""Two-dot commit range enumeration.

``walk(from, to)`` lists the commits reachable from ``to`` and not from
``from``, every commit before its parents::

    first ── a ── b(from) ── c ── d ── e(to)

    walk(b, e) → [e, d, c]      b excluded, e included
    walk(e, e) → []             a valid, empty range
"""

from __future__ import annotations

from rangekit.backends.vcs import VCS
from rangekit.errors import EmptyHistoryError
from rangekit.logging import get_logger
from rangekit.models import Commit

logger = get_logger(__name__)


class CommitRangeWalker:
    """Enumerate commit ranges through a :class:`VCS` backend.

    Args:
        vcs: VCS backend.
        max_commits: Stop each walk after this many commits. 0 means no
            limit. A truncated walk is logged as a warning.
    """

    def __init__(self, vcs: VCS, *, max_commits: int = 0) -> None:
        """Initialize with a backend and an optional commit cap."""
        self._vcs = vcs
        self._max_commits = max_commits

    def walk(self, from_sha: str | None, to_sha: str) -> list[Commit]:
        """Return the commits of ``from_sha..to_sha``.

        Args:
            from_sha: Lower bound (excluded). ``None`` walks the whole
                ancestry of ``to_sha``.
            to_sha: Upper bound (included unless equal to ``from_sha``).

        Returns:
            Commits in topological order, descendants first. Empty when
            ``to_sha`` is reachable from ``from_sha``.
        """
        if from_sha == to_sha:
            return []
        commits = self._vcs.log(include=to_sha, exclude=from_sha, max_count=self._max_commits)
        self._warn_if_truncated(commits, from_sha, to_sha)
        return commits

    def walk_all(self) -> list[Commit]:
        """Return every commit reachable from ``HEAD``.

        Raises:
            EmptyHistoryError: If the branch has no commits.
        """
        head = self._vcs.head_sha()
        if head is None:
            raise EmptyHistoryError(
                'Cannot walk history: the current branch has no commits',
                hint='Create an initial commit first.',
            )
        commits = self._vcs.log(include=head, max_count=self._max_commits)
        self._warn_if_truncated(commits, None, head)
        return commits

    def _warn_if_truncated(self, commits: list[Commit], from_sha: str | None, to_sha: str) -> None:
        if self._max_commits > 0 and len(commits) >= self._max_commits:
            logger.warning(
                'commit_walk_truncated',
                from_sha=from_sha[:7] if from_sha else None,
                to_sha=to_sha[:7],
                max_commits=self._max_commits,
            )


__all__ = [
    'CommitRangeWalker',
]
