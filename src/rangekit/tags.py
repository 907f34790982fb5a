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

r"""Version tags and latest-tag lookup.

A :class:`Tag` is a tag ref whose name parses as
``<tag_prefix><semver>``; other tag refs are invisible to rangekit.
Tags order by semver precedence (a release outranks its own
pre-releases), then by name, so the "latest" tag is always well defined
even when two tags carry the same version.

Latest tag before a commit::

    first ─── a ─── b(1.0.0) ─── c ─── d(1.1.0) ─── e ─── HEAD(2.0.0)
                                                            │
    latest_tag_before(HEAD)                                 │
         │                                                  │
         ├── ancestry of HEAD's *first parent* (e … first)  │
         ├── tags targeting that ancestry: 1.0.0, 1.1.0     │
         └── max → 1.1.0  (2.0.0 sits on HEAD itself and    │
                           is never its own predecessor) ◄──┘

Usage::

    from rangekit.tags import LatestTagLocator

    locator = LatestTagLocator(vcs, tag_prefix='v')
    tag = locator.latest_tag_before(head_sha)
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass

from rangekit.backends.vcs import VCS, TagRef
from rangekit.errors import NoTagFoundError
from rangekit.logging import get_logger
from rangekit.versions import Precedence, SemanticVersion, parse_version

logger = get_logger(__name__)


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Tag:
    """A semantic-version tag.

    Attributes:
        name: Full tag name (including any prefix).
        target: Commit sha the tag resolves to, annotated tags peeled.
        version: Version parsed from the name.
        annotated: Whether the tag is an annotated tag object.
    """

    name: str
    target: str
    version: SemanticVersion
    annotated: bool = False

    def _key(self) -> tuple[Precedence, str]:
        return (self.version.precedence, self.name)

    def __eq__(self, other: object) -> bool:
        """Tags are equal when version and name are equal."""
        if not isinstance(other, Tag):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        """Order by semver precedence, then by name."""
        if not isinstance(other, Tag):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        """Hash consistently with :meth:`__eq__`."""
        return hash(self._key())

    def __str__(self) -> str:
        """Render as the tag name."""
        return self.name


def parse_tag(ref: TagRef, tag_prefix: str = '') -> Tag | None:
    """Build a :class:`Tag` from a ref, or ``None`` if its name is not a version.

    Args:
        ref: The tag ref from the backend.
        tag_prefix: Prefix expected before the version (e.g. ``"v"``).

    Examples::

        >>> ref = TagRef(name='v1.2.0', object_sha='t', target='c')
        >>> str(parse_tag(ref, 'v').version)
        '1.2.0'
        >>> parse_tag(ref) is None
        True
    """
    if not ref.name.startswith(tag_prefix):
        return None
    version = parse_version(ref.name[len(tag_prefix) :])
    if version is None:
        return None
    return Tag(name=ref.name, target=ref.target, version=version, annotated=ref.annotated)


def list_tags(vcs: VCS, tag_prefix: str = '') -> list[Tag]:
    """Return all version tags in the repository, sorted ascending.

    Args:
        vcs: VCS backend.
        tag_prefix: Prefix expected before the version.
    """
    tags: list[Tag] = []
    for ref in vcs.list_tag_refs():
        tag = parse_tag(ref, tag_prefix)
        if tag is None:
            logger.debug('tag_skip_not_semver', tag=ref.name, tag_prefix=tag_prefix)
            continue
        tags.append(tag)
    return sorted(tags)


class LatestTagLocator:
    """Find the most recent version tag preceding a commit.

    Args:
        vcs: VCS backend.
        tag_prefix: Prefix expected before the version in tag names.
        tag_source: Callable returning the version tags, for sharing a
            cached tag list. Defaults to listing them on every lookup.
    """

    def __init__(
        self,
        vcs: VCS,
        *,
        tag_prefix: str = '',
        tag_source: Callable[[], list[Tag]] | None = None,
    ) -> None:
        """Initialize with a backend and tag prefix."""
        self._vcs = vcs
        self._tag_source = tag_source or (lambda: list_tags(vcs, tag_prefix))

    def latest_tag_before(self, sha: str) -> Tag:
        """Return the highest tag in the ancestry of ``sha``'s first parent.

        A tag pointing at ``sha`` itself is never selected.

        Args:
            sha: The commit whose predecessor tag is wanted.

        Returns:
            The highest-versioned qualifying tag (ties broken by name).

        Raises:
            NoTagFoundError: If ``sha`` is a root commit or no tag
                targets its first parent's ancestry.
        """
        commit = self._vcs.commit(sha)
        if commit.first_parent is None:
            raise NoTagFoundError(f'No tag before root commit {commit.short_sha}')

        ancestry = self._vcs.ancestry(commit.first_parent)
        candidates = [tag for tag in self._tag_source() if tag.target in ancestry]
        if not candidates:
            raise NoTagFoundError(f'No tag found before commit {commit.short_sha}')

        latest = max(candidates)
        logger.debug('latest_tag_before', commit=commit.short_sha, tag=latest.name, candidates=len(candidates))
        return latest

    def latest_tag(self) -> Tag:
        """Return the highest tag reachable from ``HEAD`` (``HEAD`` included).

        Raises:
            NoTagFoundError: If no tag is reachable from ``HEAD``.
        """
        head = self._vcs.head_sha()
        if head is None:
            raise NoTagFoundError('No tag found: the branch has no commits')
        ancestry = self._vcs.ancestry(head)
        candidates = [tag for tag in self._tag_source() if tag.target in ancestry]
        if not candidates:
            raise NoTagFoundError('No tag found in the history of HEAD')
        return max(candidates)


__all__ = [
    'LatestTagLocator',
    'Tag',
    'list_tags',
    'parse_tag',
]
