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

"""Narrow commit ranges to the packages of a mono-repo.

A commit belongs to a package when any path it touches (old or new side
of its diff against the first parent) lies under the package path.
Matching is per path component::

    package path "pkg"
        pkg/a.py     ✓
        pkg/sub/b    ✓
        pkg2/a.py    ✗
        docs/pkg     ✗

The global filter keeps the complement: commits touching at least one
path outside every package.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import PurePosixPath

from rangekit.backends.vcs import VCS
from rangekit.endpoints import CommitRange
from rangekit.logging import get_logger

logger = get_logger(__name__)


def _parts(path: str) -> tuple[str, ...]:
    return tuple(part for part in PurePosixPath(path).parts if part not in ('.', '/'))


@dataclass(frozen=True)
class MonoRepoPackage:
    """A package directory inside the repository.

    Attributes:
        name: Package name.
        path: Directory relative to the repository root, ``/``-separated.
    """

    name: str
    path: str

    def owns(self, path: str) -> bool:
        """Whether the repository-relative ``path`` lies under this package."""
        prefix = _parts(self.path)
        return _parts(path)[: len(prefix)] == prefix


def filter_for_package(vcs: VCS, commit_range: CommitRange, package: MonoRepoPackage) -> CommitRange:
    """Keep the commits of ``commit_range`` that touched ``package``.

    Order and endpoints are preserved.
    """
    commits = [
        commit for commit in commit_range.commits if any(package.owns(path) for path in vcs.changed_paths(commit))
    ]
    logger.debug('package_filtered', package=package.name, kept=len(commits), total=len(commit_range))
    return CommitRange(from_=commit_range.from_, to=commit_range.to, commits=commits)


def filter_global(vcs: VCS, commit_range: CommitRange, packages: Iterable[MonoRepoPackage]) -> CommitRange:
    """Keep the commits of ``commit_range`` that touched a path outside all ``packages``.

    Order and endpoints are preserved.
    """
    packages = list(packages)
    commits = [
        commit
        for commit in commit_range.commits
        if any(not _owned_by_any(path, packages) for path in vcs.changed_paths(commit))
    ]
    logger.debug('global_filtered', packages=len(packages), kept=len(commits), total=len(commit_range))
    return CommitRange(from_=commit_range.from_, to=commit_range.to, commits=commits)


def _owned_by_any(path: str, packages: Sequence[MonoRepoPackage]) -> bool:
    return any(package.owns(path) for package in packages)


__all__ = [
    'MonoRepoPackage',
    'filter_for_package',
    'filter_global',
]
