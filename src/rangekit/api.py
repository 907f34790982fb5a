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

"""Programmatic Python API for rangekit.

The entry point for changelog renderers, version-bump engines and
mono-repo release drivers that need commit ranges out of a repository.

Key Concepts (ELI5)::

    ┌─────────────────────────┬─────────────────────────────────────────────┐
    │ Concept                 │ Plain-English                               │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ RangeKit                │ One repository, its rangekit.toml, and the  │
    │                         │ resolvers wired together. Create one per    │
    │                         │ query session.                              │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ resolve_range()         │ "1.0.0..2.0.0" → the commits in between.    │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ resolve_release_chain() │ "X.." → one Release per tag since X.        │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ resolve_package_range() │ Same as resolve_range, but only commits     │
    │                         │ that touched one package's directory.       │
    └─────────────────────────┴─────────────────────────────────────────────┘

Usage::

    from rangekit.api import RangeKit

    rk = RangeKit('/path/to/repo')

    commits = rk.resolve_range('1.0.0..')
    for commit in commits:
        print(commit.short_sha, commit.summary)

    for release in rk.resolve_release_chain('..'):
        print(release.title, len(release.commits))

The tag list is cached per instance; create a new :class:`RangeKit`
after the repository's tags change.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from rangekit.backends.vcs import VCS, GitCLIBackend
from rangekit.config import RangeConfig, load_config
from rangekit.endpoints import CommitRange
from rangekit.errors import PackageNotFoundError
from rangekit.logging import get_logger
from rangekit.monorepo import MonoRepoPackage, filter_for_package, filter_global
from rangekit.release import Release, ReleaseChainBuilder
from rangekit.resolver import RangeResolver, RevisionResolver
from rangekit.revspec import RangePattern, parse_range
from rangekit.walker import CommitRangeWalker

logger = get_logger(__name__)


def _pattern(pattern: RangePattern | str) -> RangePattern:
    return parse_range(pattern) if isinstance(pattern, str) else pattern


class RangeKit:
    """High-level programmatic API for rangekit.

    Args:
        repo_root: Path to the repository (containing ``rangekit.toml``
            when there is one).
        vcs: Backend to read history from. Defaults to a
            :class:`GitCLIBackend` on ``repo_root``.
        config: Configuration to use instead of loading
            ``rangekit.toml``.
    """

    def __init__(
        self,
        repo_root: str | Path,
        *,
        vcs: VCS | None = None,
        config: RangeConfig | None = None,
    ) -> None:
        """Initialize with the repository root and optional overrides."""
        self._root = Path(repo_root).resolve()
        self._config = config
        self._vcs = vcs
        self._ranges: RangeResolver | None = None

    @property
    def root(self) -> Path:
        """Repository root."""
        return self._root

    @property
    def config(self) -> RangeConfig:
        """Loaded configuration (lazy)."""
        if self._config is None:
            self._config = load_config(self._root)
        return self._config

    @property
    def vcs(self) -> VCS:
        """History backend (lazy)."""
        if self._vcs is None:
            self._vcs = GitCLIBackend(self._root, timeout=self.config.git_timeout)
        return self._vcs

    @property
    def ranges(self) -> RangeResolver:
        """Range resolver wired to this repository (lazy)."""
        if self._ranges is None:
            revisions = RevisionResolver(self.vcs, tag_prefix=self.config.tag_prefix)
            walker = CommitRangeWalker(self.vcs, max_commits=self.config.max_commits)
            self._ranges = RangeResolver(revisions, walker)
        return self._ranges

    @property
    def packages(self) -> dict[str, MonoRepoPackage]:
        """Configured mono-repo packages by name."""
        return self.config.packages

    def package(self, name: str) -> MonoRepoPackage:
        """Look up a configured package.

        Raises:
            PackageNotFoundError: If ``name`` is not configured.
        """
        try:
            return self.packages[name]
        except KeyError:
            known = ', '.join(sorted(self.packages)) or 'none'
            raise PackageNotFoundError(
                f"Package '{name}' is not configured",
                hint=f'Add a [packages.{name}] section to rangekit.toml. Configured: {known}.',
            ) from None

    def resolve_range(self, pattern: RangePattern | str) -> CommitRange:
        """Resolve a range pattern (or its text) to commits."""
        return self.ranges.resolve_range(_pattern(pattern))

    def resolve_release_chain(self, pattern: RangePattern | str) -> Release:
        """Split the history of a range pattern into releases, newest first."""
        builder = ReleaseChainBuilder(self.ranges.revisions, self.ranges)
        return builder.build_chain(_pattern(pattern))

    def all_commits(self) -> CommitRange:
        """Return every commit on the current branch as one range."""
        return self.ranges.all_commits()

    def filter_for_package(self, commit_range: CommitRange, package: MonoRepoPackage) -> CommitRange:
        """Keep the commits of a range that touched ``package``."""
        return filter_for_package(self.vcs, commit_range, package)

    def filter_global(
        self,
        commit_range: CommitRange,
        packages: Iterable[MonoRepoPackage] | None = None,
    ) -> CommitRange:
        """Keep the commits of a range that touched a path outside all packages.

        ``packages`` defaults to the configured packages.
        """
        if packages is None:
            packages = self.packages.values()
        return filter_global(self.vcs, commit_range, packages)

    def resolve_package_range(self, pattern: RangePattern | str, package_name: str) -> CommitRange:
        """Resolve a pattern and keep the commits touching one configured package."""
        package = self.package(package_name)
        return self.filter_for_package(self.resolve_range(pattern), package)

    def resolve_global_range(self, pattern: RangePattern | str) -> CommitRange:
        """Resolve a pattern and keep the commits touching no configured package."""
        return self.filter_global(self.resolve_range(pattern))


def resolve_range(repo_root: str | Path, pattern: RangePattern | str) -> CommitRange:
    """Resolve ``pattern`` in the repository at ``repo_root``."""
    return RangeKit(repo_root).resolve_range(pattern)


def resolve_release_chain(repo_root: str | Path, pattern: RangePattern | str) -> Release:
    """Build the release chain of ``pattern`` in the repository at ``repo_root``."""
    return RangeKit(repo_root).resolve_release_chain(pattern)


__all__ = [
    'RangeKit',
    'resolve_range',
    'resolve_release_chain',
]
