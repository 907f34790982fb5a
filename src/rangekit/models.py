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

"""Read-only projections of version-control objects.

This module has **zero** runtime dependencies beyond the standard library.
Values here are rebuilt from the backend on every query and never hold
state across calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Commit:
    """A commit as seen by the range resolver.

    Attributes:
        sha: The full commit object name.
        parents: Parent object names; the first one is the first parent.
        tree: Object name of the commit's root tree.
        message: The full commit message.
        author_name: Author name.
        author_email: Author email.
        committer_name: Committer name.
        committer_email: Committer email.
        timestamp: Committer date (timezone-aware).
    """

    sha: str
    parents: tuple[str, ...] = ()
    tree: str = ''
    message: str = ''
    author_name: str = ''
    author_email: str = ''
    committer_name: str = ''
    committer_email: str = ''
    timestamp: datetime | None = None

    @property
    def first_parent(self) -> str | None:
        """The first parent's sha, or ``None`` for a root commit."""
        return self.parents[0] if self.parents else None

    @property
    def is_root(self) -> bool:
        """Whether the commit has no parents."""
        return not self.parents

    @property
    def is_merge(self) -> bool:
        """Whether the commit has more than one parent."""
        return len(self.parents) > 1

    @property
    def summary(self) -> str:
        """The first line of the message."""
        return self.message.split('\n', 1)[0].strip()

    @property
    def short_sha(self) -> str:
        """Abbreviated sha for display."""
        return self.sha[:7]


__all__ = [
    'Commit',
]
