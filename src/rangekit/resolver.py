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

"""Endpoint and range resolution.

Key Concepts (ELI5)::

    ┌─────────────────────┬────────────────────────────────────────────────┐
    │ Concept             │ ELI5 Explanation                               │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ RevisionResolver    │ Turns one word ("1.2.0", "HEAD~3", "a1b2c3")   │
    │                     │ into a pinned commit, remembering if a tag     │
    │                     │ sits there so output can show its name.        │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ RangeResolver       │ Turns "from..to" into a CommitRange, filling   │
    │                     │ in the blanks: no "to" means the branch tip,   │
    │                     │ no "from" means the previous tag (or the very  │
    │                     │ first commit when there is none).              │
    └─────────────────────┴────────────────────────────────────────────────┘

Defaulting rules::

    pattern        from_                               to
    ─────────────  ──────────────────────────────────  ─────────────────────
    "A..B"         resolve(A)                          resolve(B)
    "A.."          resolve(A)                          HEAD (TAG if tagged)
    "..B"          latest_tag_before(B) or first       resolve(B)
    ".."           latest_tag_before(HEAD) or first    HEAD (TAG if tagged)
"""

from __future__ import annotations

from rangekit.backends.vcs import VCS
from rangekit.endpoints import CommitRange, ResolvedEndpoint
from rangekit.errors import EmptyHistoryError, NoTagFoundError, RevisionNotFoundError
from rangekit.logging import get_logger
from rangekit.models import Commit
from rangekit.revspec import RangePattern
from rangekit.tags import LatestTagLocator, Tag, list_tags
from rangekit.walker import CommitRangeWalker

logger = get_logger(__name__)


class RevisionResolver:
    """Resolve revision text to :class:`ResolvedEndpoint` values.

    The tag list is read once per resolver and cached; create a new
    resolver after changing the repository's tags.

    Args:
        vcs: VCS backend.
        tag_prefix: Prefix expected before the version in tag names.
    """

    def __init__(self, vcs: VCS, *, tag_prefix: str = '') -> None:
        """Initialize with a backend and tag prefix."""
        self._vcs = vcs
        self._tag_prefix = tag_prefix
        self._tags: list[Tag] | None = None

    @property
    def vcs(self) -> VCS:
        """The backend this resolver reads from."""
        return self._vcs

    @property
    def tag_prefix(self) -> str:
        """Prefix expected before the version in tag names."""
        return self._tag_prefix

    def tags(self) -> list[Tag]:
        """Return all version tags, sorted ascending."""
        if self._tags is None:
            self._tags = list_tags(self._vcs, self._tag_prefix)
        return self._tags

    def resolve_tag(self, name: str) -> Tag:
        """Look up a version tag by its exact name.

        Raises:
            NoTagFoundError: If no version tag has that name.
        """
        for tag in self.tags():
            if tag.name == name:
                return tag
        raise NoTagFoundError(f"Tag '{name}' not found")

    def tag_for(self, sha: str) -> Tag | None:
        """Return the highest tag whose target is ``sha``, or ``None``."""
        matches = [tag for tag in self.tags() if tag.target == sha]
        return max(matches) if matches else None

    def resolve(self, text: str) -> ResolvedEndpoint:
        """Resolve ``text`` to an endpoint.

        A tag name wins over any other interpretation. Anything else is
        handed to the backend's revision syntax, and the resulting
        commit is reported as a tag endpoint when a tag targets it.

        Args:
            text: Tag name, sha (full or abbreviated), ref or revision
                expression.

        Raises:
            RevisionNotFoundError: If ``text`` names no commit.
        """
        for tag in self.tags():
            if tag.name == text:
                return ResolvedEndpoint.of_tag(tag)

        sha = self._vcs.resolve_commit(text)
        if sha is None:
            raise RevisionNotFoundError(
                f"Revision '{text}' not found",
                hint='Use a tag name, a commit sha or any git revision expression.',
            )

        tag = self.tag_for(sha)
        if tag is not None:
            return ResolvedEndpoint.of_tag(tag)
        return ResolvedEndpoint.bare(sha)


class RangeResolver:
    """Resolve :class:`RangePattern` values to :class:`CommitRange` values.

    Args:
        revisions: Resolver for explicit endpoint text.
        walker: Commit enumerator. Defaults to an uncapped walker over
            ``revisions.vcs``.
    """

    def __init__(self, revisions: RevisionResolver, walker: CommitRangeWalker | None = None) -> None:
        """Initialize with an endpoint resolver and a walker."""
        self._revisions = revisions
        self._vcs = revisions.vcs
        self._walker = walker or CommitRangeWalker(revisions.vcs)
        self._locator = LatestTagLocator(revisions.vcs, tag_prefix=revisions.tag_prefix, tag_source=revisions.tags)

    @property
    def revisions(self) -> RevisionResolver:
        """The endpoint resolver."""
        return self._revisions

    @property
    def walker(self) -> CommitRangeWalker:
        """The commit enumerator."""
        return self._walker

    def head(self) -> ResolvedEndpoint:
        """Resolve the branch tip: a tag endpoint when tagged, else HEAD.

        Raises:
            EmptyHistoryError: If the branch has no commits.
        """
        sha = self._vcs.head_sha()
        if sha is None:
            raise EmptyHistoryError(
                'Cannot resolve HEAD: the current branch has no commits',
                hint='Create an initial commit first.',
            )
        tag = self._revisions.tag_for(sha)
        if tag is not None:
            return ResolvedEndpoint.of_tag(tag)
        return ResolvedEndpoint.head(sha)

    def first_commit(self) -> ResolvedEndpoint:
        """Resolve the repository's first commit as a bare endpoint.

        Raises:
            EmptyHistoryError: If the branch has no commits.
        """
        sha = self._vcs.first_commit()
        if sha is None:
            raise EmptyHistoryError(
                'Cannot find the first commit: the current branch has no commits',
                hint='Create an initial commit first.',
            )
        return ResolvedEndpoint.bare(sha)

    def lower_bound(self, to: ResolvedEndpoint) -> ResolvedEndpoint:
        """Default lower bound for ``to``: the previous tag, else the first commit."""
        try:
            return ResolvedEndpoint.of_tag(self._locator.latest_tag_before(to.oid))
        except NoTagFoundError:
            logger.debug('lower_bound_first_commit', to=to.short)
            return self.first_commit()

    def resolve_range(self, pattern: RangePattern) -> CommitRange:
        """Resolve ``pattern`` to a range of commits.

        Args:
            pattern: The range pattern. Missing sides are defaulted (see
                the module docstring).

        Returns:
            The resolved range, commits newest first.

        Raises:
            RevisionNotFoundError: If an explicit side names no commit.
            EmptyHistoryError: If a side must be defaulted on an empty
                branch.
        """
        to = self._revisions.resolve(pattern.to) if pattern.to is not None else self.head()
        from_ = self._revisions.resolve(pattern.from_) if pattern.from_ is not None else self.lower_bound(to)
        commits = self._walker.walk(from_.oid, to.oid)
        commit_range = CommitRange(from_=from_, to=to, commits=commits)
        logger.debug(
            'range_resolved',
            pattern=str(pattern),
            range=str(commit_range),
            from_kind=from_.kind.value,
            to_kind=to.kind.value,
            commits=len(commits),
        )
        return commit_range

    def all_commits(self) -> CommitRange:
        """Return the whole branch as a range.

        ``from_`` is the first commit (bare) and ``to`` is the branch tip as
        :meth:`head` reports it, so a tagged tip is a tag endpoint. Unlike
        :meth:`resolve_range`, the first commit is part of ``commits``.

        Raises:
            EmptyHistoryError: If the branch has no commits.
        """
        commits: list[Commit] = self._walker.walk_all()
        return CommitRange(from_=self.first_commit(), to=self.head(), commits=commits)


__all__ = [
    'RangeResolver',
    'RevisionResolver',
]
