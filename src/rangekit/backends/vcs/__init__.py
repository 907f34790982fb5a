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

"""VCS protocol for rangekit.

The :class:`VCS` protocol is the read-only history capability the range
resolver is built on: revision parsing, commit walks, tag listing and
tree diffs. Implementations:

- :class:`~rangekit.backends.vcs.git.GitCLIBackend`: ``git`` CLI

Methods are synchronous: each public rangekit operation runs to
completion before returning, and the graph is treated as immutable for
its duration.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from rangekit.backends.vcs._types import TagRef
from rangekit.backends.vcs.git import GitCLIBackend as GitCLIBackend
from rangekit.models import Commit

__all__ = [
    'GitCLIBackend',
    'TagRef',
    'VCS',
]


@runtime_checkable
class VCS(Protocol):
    """Protocol for read-only version control queries.

    Every method either returns a value or raises a
    :class:`~rangekit.errors.RangeKitError`; preconditions such as "no
    commits yet" are reported as ``None`` so that callers decide which
    typed error applies.
    """

    def head_sha(self) -> str | None:
        """Return the commit sha of ``HEAD``, or ``None`` on an unborn branch."""
        ...

    def resolve_commit(self, rev: str) -> str | None:
        """Resolve any revision expression to a commit sha.

        Tags are peeled, so an annotated tag resolves to the commit it
        annotates rather than to the tag object.

        Args:
            rev: Revision text (full or abbreviated sha, ref name,
                ``HEAD~2``, ...).

        Returns:
            The full commit sha, or ``None`` if ``rev`` names nothing.
        """
        ...

    def first_commit(self) -> str | None:
        """Return the root commit of ``HEAD``'s history, or ``None`` if empty.

        With several root commits (merged unrelated histories), the one
        listed last by the backend's walk is returned.
        """
        ...

    def log(
        self,
        *,
        include: str,
        exclude: str | None = None,
        max_count: int = 0,
    ) -> list[Commit]:
        """Return commits reachable from ``include`` but not from ``exclude``.

        Args:
            include: Sha (or revision) whose ancestry is walked.
            exclude: Sha whose ancestry is hidden. ``None`` hides nothing.
            max_count: Stop after this many commits. 0 means no limit.

        Returns:
            Commits in topological order, every commit before its parents.
        """
        ...

    def ancestry(self, sha: str) -> set[str]:
        """Return the shas of ``sha`` and all of its ancestors."""
        ...

    def commit(self, sha: str) -> Commit:
        """Look up a single commit.

        Raises:
            RevisionNotFoundError: If ``sha`` is not a commit.
        """
        ...

    def list_tag_refs(self) -> list[TagRef]:
        """Return every tag that peels to a commit, with its peeled target."""
        ...

    def changed_paths(self, commit: Commit) -> list[str]:
        """Return the paths touched by ``commit`` relative to its first parent.

        Both the old and new side of every entry are included; a root
        commit is compared against the empty tree.
        """
        ...
