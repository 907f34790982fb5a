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

"""Resolved range endpoints and commit ranges.

Key Concepts (ELI5)::

    ┌─────────────────────┬────────────────────────────────────────────────┐
    │ Concept             │ ELI5 Explanation                               │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ ResolvedEndpoint    │ One end of a range, pinned to a commit. Knows  │
    │                     │ whether it came from a tag, the branch tip, or │
    │                     │ a plain hash, but compares by hash only.       │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ CommitRange         │ ``from..to`` with its commits, newest first.   │
    │                     │ ``from`` itself is excluded, ``to`` included.  │
    └─────────────────────┴────────────────────────────────────────────────┘
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from rangekit.models import Commit
from rangekit.tags import Tag


class EndpointKind(Enum):
    """How a range endpoint was identified."""

    HEAD = 'head'
    TAG = 'tag'
    BARE = 'bare'


@dataclass(frozen=True, eq=False)
class ResolvedEndpoint:
    """A range endpoint resolved to a commit.

    Equality and hashing use :attr:`oid` only, so a tag endpoint and a
    bare endpoint on the same commit compare equal. Use :attr:`kind`
    when the distinction matters for display.

    Attributes:
        kind: Which variant this endpoint is.
        oid: Commit sha the endpoint resolves to.
        tag: The tag for :attr:`EndpointKind.TAG` endpoints.
    """

    kind: EndpointKind
    oid: str
    tag: Tag | None = None

    def __post_init__(self) -> None:
        """Check the variant invariant."""
        if self.kind is EndpointKind.TAG and self.tag is None:
            raise ValueError('TAG endpoint requires a tag')
        if self.kind is not EndpointKind.TAG and self.tag is not None:
            raise ValueError(f'{self.kind.name} endpoint cannot carry a tag')

    @classmethod
    def head(cls, oid: str) -> ResolvedEndpoint:
        """An untagged branch tip."""
        return cls(EndpointKind.HEAD, oid)

    @classmethod
    def of_tag(cls, tag: Tag) -> ResolvedEndpoint:
        """A tag, pinned to its peeled target."""
        return cls(EndpointKind.TAG, tag.target, tag)

    @classmethod
    def bare(cls, oid: str) -> ResolvedEndpoint:
        """An arbitrary commit with no tag."""
        return cls(EndpointKind.BARE, oid)

    @property
    def is_tag(self) -> bool:
        """Whether this endpoint is a tag."""
        return self.kind is EndpointKind.TAG

    @property
    def short(self) -> str:
        """Short display form: tag name or abbreviated sha."""
        return self.tag.name if self.tag is not None else self.oid[:7]

    def __eq__(self, other: object) -> bool:
        """Compare by commit sha."""
        if not isinstance(other, ResolvedEndpoint):
            return NotImplemented
        return self.oid == other.oid

    def __hash__(self) -> int:
        """Hash by commit sha."""
        return hash(self.oid)

    def __str__(self) -> str:
        """Tag name for tags, full sha otherwise; always valid revision text."""
        return self.tag.name if self.tag is not None else self.oid


@dataclass
class CommitRange:
    """Commits reachable from :attr:`to` but not from :attr:`from_`.

    Attributes:
        from_: Lower endpoint (excluded).
        to: Upper endpoint (included).
        commits: Commits, every commit before its parents.
    """

    from_: ResolvedEndpoint
    to: ResolvedEndpoint
    commits: list[Commit] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.commits)

    def __iter__(self) -> Iterator[Commit]:
        return iter(self.commits)

    @property
    def is_empty(self) -> bool:
        """Whether the range holds no commits."""
        return not self.commits

    @property
    def shas(self) -> list[str]:
        """Commit shas in range order."""
        return [commit.sha for commit in self.commits]

    def contains(self, sha: str) -> bool:
        """Whether ``sha`` is one of the range's commits."""
        return any(commit.sha == sha for commit in self.commits)

    def __str__(self) -> str:
        return f'{self.from_.short}..{self.to.short}'


__all__ = [
    'CommitRange',
    'EndpointKind',
    'ResolvedEndpoint',
]
