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

"""Tests for rangekit.monorepo module."""

from __future__ import annotations

import pytest
from rangekit.endpoints import CommitRange
from rangekit.monorepo import MonoRepoPackage, filter_for_package, filter_global
from rangekit.resolver import RangeResolver, RevisionResolver
from rangekit.revspec import RangePattern

from tests._fakes import FakeVCS

PKG_A = MonoRepoPackage(name='a', path='pkgA')
PKG_B = MonoRepoPackage(name='b', path='packages/b')


class TestOwns:
    """Tests for MonoRepoPackage.owns()."""

    @pytest.mark.parametrize(
        ('path', 'expected'),
        [
            ('pkgA/file', True),
            ('pkgA/sub/dir/file.py', True),
            ('pkgA', True),
            ('pkgA2/file', False),
            ('docs/pkgA/file', False),
            ('pkg', False),
        ],
    )
    def test_component_prefix(self, path: str, expected: bool) -> None:
        """Matching is per path component."""
        assert PKG_A.owns(path) is expected

    def test_nested_package_path(self) -> None:
        """Multi-component package paths match their subtree only."""
        assert PKG_B.owns('packages/b/src/x.py')
        assert not PKG_B.owns('packages/bb/x.py')
        assert not PKG_B.owns('packages/x.py')

    def test_normalized_spelling(self) -> None:
        """Leading './' and trailing '/' in the package path are ignored."""
        assert MonoRepoPackage(name='a', path='./pkgA/').owns('pkgA/file')


@pytest.fixture()
def mono() -> tuple[FakeVCS, CommitRange, dict[str, str]]:
    """A range over commits touching pkgA, shared code, both, and nothing."""
    vcs = FakeVCS()
    base = vcs.add_commit('init', paths=['README.md'])
    shas = {
        'a_only': vcs.add_commit('feat(a): one', paths=['pkgA/file']),
        'shared': vcs.add_commit('chore: shared', paths=['shared/file']),
        'both': vcs.add_commit('feat: both', paths=['pkgA/x', 'packages/b/y', 'shared/z']),
        'b_only': vcs.add_commit('fix(b): two', paths=['packages/b/y']),
        'empty': vcs.add_commit('chore: empty'),
        'moved': vcs.add_commit('refactor: move into a', paths=['shared/old.py', 'pkgA/new.py']),
    }
    commit_range = RangeResolver(RevisionResolver(vcs)).resolve_range(RangePattern.between(base, 'HEAD'))
    return vcs, commit_range, shas


class TestFilterForPackage:
    """Tests for filter_for_package()."""

    def test_keeps_package_commits(self, mono: tuple[FakeVCS, CommitRange, dict[str, str]]) -> None:
        """Commits touching the package path survive, in order."""
        vcs, commit_range, shas = mono
        filtered = filter_for_package(vcs, commit_range, PKG_A)
        assert filtered.shas == [shas['moved'], shas['both'], shas['a_only']]

    def test_other_package(self, mono: tuple[FakeVCS, CommitRange, dict[str, str]]) -> None:
        """Each package sees only its own commits."""
        vcs, commit_range, shas = mono
        filtered = filter_for_package(vcs, commit_range, PKG_B)
        assert filtered.shas == [shas['b_only'], shas['both']]

    def test_shared_only_commit_excluded(self, mono: tuple[FakeVCS, CommitRange, dict[str, str]]) -> None:
        """A commit touching only shared code belongs to no package."""
        vcs, commit_range, shas = mono
        for package in (PKG_A, PKG_B):
            assert shas['shared'] not in filter_for_package(vcs, commit_range, package).shas

    def test_endpoints_preserved(self, mono: tuple[FakeVCS, CommitRange, dict[str, str]]) -> None:
        """Only commits are narrowed; endpoints are untouched."""
        vcs, commit_range, _ = mono
        filtered = filter_for_package(vcs, commit_range, PKG_A)
        assert filtered.from_ is commit_range.from_
        assert filtered.to is commit_range.to
        assert len(commit_range) == 6

    def test_root_commit_paths(self) -> None:
        """A root commit is filtered by everything it adds."""
        vcs = FakeVCS()
        root = vcs.add_commit('init', paths=['pkgA/file'])
        commit_range = RangeResolver(RevisionResolver(vcs)).all_commits()
        assert filter_for_package(vcs, commit_range, PKG_A).shas == [root]


class TestFilterGlobal:
    """Tests for filter_global()."""

    def test_keeps_commits_outside_packages(self, mono: tuple[FakeVCS, CommitRange, dict[str, str]]) -> None:
        """Commits touching something outside every package survive."""
        vcs, commit_range, shas = mono
        filtered = filter_global(vcs, commit_range, [PKG_A, PKG_B])
        assert filtered.shas == [shas['moved'], shas['both'], shas['shared']]

    def test_package_only_commits_excluded(self, mono: tuple[FakeVCS, CommitRange, dict[str, str]]) -> None:
        """Commits confined to packages, or touching nothing, are dropped."""
        vcs, commit_range, shas = mono
        filtered = filter_global(vcs, commit_range, iter([PKG_A, PKG_B]))
        for name in ('a_only', 'b_only', 'empty'):
            assert shas[name] not in filtered.shas

    def test_no_packages(self, mono: tuple[FakeVCS, CommitRange, dict[str, str]]) -> None:
        """With no packages every commit with changes is global."""
        vcs, commit_range, shas = mono
        filtered = filter_global(vcs, commit_range, [])
        assert shas['empty'] not in filtered.shas
        assert len(filtered) == 5
