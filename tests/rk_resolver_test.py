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

"""Tests for rangekit.resolver module."""

from __future__ import annotations

import pytest
from rangekit.endpoints import EndpointKind
from rangekit.errors import E, EmptyHistoryError, NoTagFoundError, RevisionNotFoundError
from rangekit.resolver import RangeResolver, RevisionResolver
from rangekit.revspec import RangePattern, parse_range
from rangekit.walker import CommitRangeWalker

from tests._fakes import FakeVCS


def _ranges(vcs: FakeVCS, tag_prefix: str = '') -> RangeResolver:
    return RangeResolver(RevisionResolver(vcs, tag_prefix=tag_prefix))


@pytest.fixture()
def linear() -> tuple[FakeVCS, list[str]]:
    """first ── 1.0.0 ── a ── 2.0.0 ── 2.1.1 ── b ── 3.0.0 ── c(HEAD)."""
    vcs = FakeVCS()
    shas = vcs.linear('first', 'one', 'a', 'two', 'two-one-one', 'b', 'three', 'c')
    vcs.add_tag('1.0.0', shas[1])
    vcs.add_tag('2.0.0', shas[3])
    vcs.add_tag('2.1.1', shas[4])
    vcs.add_tag('3.0.0', shas[6])
    return vcs, shas


class TestRevisionResolver:
    """Tests for RevisionResolver."""

    def test_tag_name(self, linear: tuple[FakeVCS, list[str]]) -> None:
        """A tag name resolves to a TAG endpoint on its target."""
        vcs, shas = linear
        endpoint = RevisionResolver(vcs).resolve('2.0.0')
        assert endpoint.kind is EndpointKind.TAG
        assert endpoint.oid == shas[3]
        assert str(endpoint) == '2.0.0'

    def test_bare_sha(self, linear: tuple[FakeVCS, list[str]]) -> None:
        """An untagged sha stays BARE."""
        vcs, shas = linear
        endpoint = RevisionResolver(vcs).resolve(shas[2])
        assert endpoint.kind is EndpointKind.BARE
        assert endpoint.oid == shas[2]
        assert str(endpoint) == shas[2]

    def test_sha_upgraded_to_tag(self, linear: tuple[FakeVCS, list[str]]) -> None:
        """A sha that a tag points at is reported as that tag."""
        vcs, shas = linear
        endpoint = RevisionResolver(vcs).resolve(shas[6][:10])
        assert endpoint.kind is EndpointKind.TAG
        assert endpoint.tag is not None
        assert endpoint.tag.name == '3.0.0'

    def test_annotated_tag(self) -> None:
        """Annotated tags resolve to the commit, by name or by tag object."""
        vcs = FakeVCS()
        _, a = vcs.linear('first', 'a')
        ref = vcs.add_tag('1.0.0', a, annotated=True)
        resolver = RevisionResolver(vcs)
        assert resolver.resolve('1.0.0').oid == a
        by_object = resolver.resolve(ref.object_sha)
        assert by_object.oid == a
        assert by_object.kind is EndpointKind.TAG

    def test_highest_tag_wins_on_shared_commit(self) -> None:
        """Several tags on one commit: the highest version is reported."""
        vcs = FakeVCS()
        (a,) = vcs.linear('a')
        vcs.add_tag('1.0.0', a)
        vcs.add_tag('1.0.1', a)
        assert RevisionResolver(vcs).resolve(a).short == '1.0.1'
        assert RevisionResolver(vcs).tag_for(a).name == '1.0.1'  # type: ignore[union-attr]

    def test_not_found(self, linear: tuple[FakeVCS, list[str]]) -> None:
        """Unknown text raises RevisionNotFoundError naming the text."""
        vcs, _ = linear
        with pytest.raises(RevisionNotFoundError, match="'9.9.9'") as exc_info:
            RevisionResolver(vcs).resolve('9.9.9')
        assert exc_info.value.code == E.REVISION_NOT_FOUND

    def test_resolve_tag(self, linear: tuple[FakeVCS, list[str]]) -> None:
        """resolve_tag() looks a tag up by exact name."""
        vcs, shas = linear
        resolver = RevisionResolver(vcs)
        assert resolver.resolve_tag('2.1.1').target == shas[4]
        with pytest.raises(NoTagFoundError):
            resolver.resolve_tag('2.1')

    def test_tag_for_untagged(self, linear: tuple[FakeVCS, list[str]]) -> None:
        """tag_for() is None for untagged commits."""
        vcs, shas = linear
        assert RevisionResolver(vcs).tag_for(shas[0]) is None

    def test_tags_cached(self, linear: tuple[FakeVCS, list[str]]) -> None:
        """The tag list is read once per resolver."""
        vcs, shas = linear
        resolver = RevisionResolver(vcs)
        resolver.resolve('1.0.0')
        resolver.resolve(shas[2])
        assert vcs.calls.count('list_tag_refs') == 1

    def test_prefix(self) -> None:
        """With a prefix, unprefixed version-like tags are plain refs."""
        vcs = FakeVCS()
        (a,) = vcs.linear('a')
        vcs.add_tag('v1.0.0', a)
        endpoint = RevisionResolver(vcs, tag_prefix='v').resolve('v1.0.0')
        assert endpoint.is_tag
        assert endpoint.tag.version.core == (1, 0, 0)  # type: ignore[union-attr]


class TestResolveRange:
    """Tests for RangeResolver.resolve_range()."""

    def test_tag_to_tag(self, linear: tuple[FakeVCS, list[str]]) -> None:
        """Both endpoints are tags and the lower tag's commit is excluded."""
        vcs, shas = linear
        commit_range = _ranges(vcs).resolve_range(parse_range('1.0.0..3.0.0'))
        assert commit_range.from_.kind is EndpointKind.TAG
        assert commit_range.from_.short == '1.0.0'
        assert commit_range.to.kind is EndpointKind.TAG
        assert commit_range.to.short == '3.0.0'
        assert commit_range.shas == [shas[6], shas[5], shas[4], shas[3], shas[2]]
        assert not commit_range.contains(shas[1])
        assert str(commit_range) == '1.0.0..3.0.0'

    def test_open_upper_bound_untagged_head(self, linear: tuple[FakeVCS, list[str]]) -> None:
        """An untagged branch tip is a HEAD endpoint."""
        vcs, shas = linear
        commit_range = _ranges(vcs).resolve_range(parse_range('3.0.0..'))
        assert commit_range.to.kind is EndpointKind.HEAD
        assert commit_range.to.oid == shas[7]
        assert commit_range.shas == [shas[7]]

    def test_open_upper_bound_tagged_head(self) -> None:
        """A tagged branch tip is reported as its tag."""
        vcs = FakeVCS()
        _, one, _, head = vcs.linear('first', 'one', 'x', 'two')
        vcs.add_tag('1.0.0', one)
        vcs.add_tag('2.0.0', head)
        commit_range = _ranges(vcs).resolve_range(parse_range('1.0.0..'))
        assert commit_range.to.kind is EndpointKind.TAG
        assert commit_range.to.short == '2.0.0'

    def test_open_lower_bound_previous_tag(self, linear: tuple[FakeVCS, list[str]]) -> None:
        """A missing lower bound defaults to the previous tag."""
        vcs, shas = linear
        commit_range = _ranges(vcs).resolve_range(parse_range('..3.0.0'))
        assert commit_range.from_.short == '2.1.1'
        assert commit_range.shas == [shas[6], shas[5]]

    def test_open_both_sides(self, linear: tuple[FakeVCS, list[str]]) -> None:
        """'..' is everything since the latest tag below HEAD."""
        vcs, shas = linear
        commit_range = _ranges(vcs).resolve_range(parse_range('..'))
        assert commit_range.from_.short == '3.0.0'
        assert commit_range.shas == [shas[7]]

    def test_open_lower_bound_no_tags(self) -> None:
        """Without tags the lower bound is the first commit, excluded."""
        vcs = FakeVCS()
        first, a, b = vcs.linear('first', 'a', 'b')
        commit_range = _ranges(vcs).resolve_range(parse_range('..'))
        assert commit_range.from_.kind is EndpointKind.BARE
        assert commit_range.from_.oid == first
        assert commit_range.shas == [b, a]

    def test_release_tag_preferred_over_prerelease(self) -> None:
        """Commits released in 2.0.0 do not leak into the unreleased range."""
        vcs = FakeVCS()
        _, candidate, _, release, tip = vcs.linear('first', 'rc', 'fix: y', 'release', 'fix: z')
        vcs.add_tag('2.0.0-rc.1', candidate)
        vcs.add_tag('2.0.0', release)
        commit_range = _ranges(vcs).resolve_range(parse_range('..'))
        assert commit_range.from_.short == '2.0.0'
        assert commit_range.shas == [tip]

    def test_single_commit_repository(self) -> None:
        """A lone root commit gives an empty range."""
        vcs = FakeVCS()
        (first,) = vcs.linear('first')
        commit_range = _ranges(vcs).resolve_range(RangePattern())
        assert commit_range.from_ == commit_range.to
        assert commit_range.is_empty

    def test_endpoint_equality_ignores_kind(self, linear: tuple[FakeVCS, list[str]]) -> None:
        """A tag endpoint equals a bare endpoint on the same commit."""
        vcs, shas = linear
        ranges = _ranges(vcs)
        by_tag = ranges.resolve_range(parse_range('1.0.0..2.0.0'))
        by_sha = ranges.resolve_range(RangePattern.between(shas[1], shas[3]))
        assert by_tag.from_ == by_sha.from_
        assert by_tag.to == by_sha.to

    def test_idempotent(self, linear: tuple[FakeVCS, list[str]]) -> None:
        """Resolving twice against the same history gives the same range."""
        vcs, _ = linear
        ranges = _ranges(vcs)
        assert ranges.resolve_range(parse_range('1.0.0..')) == ranges.resolve_range(parse_range('1.0.0..'))

    def test_unknown_endpoint(self, linear: tuple[FakeVCS, list[str]]) -> None:
        """An unknown side raises RevisionNotFoundError."""
        vcs, _ = linear
        with pytest.raises(RevisionNotFoundError, match="'nope'"):
            _ranges(vcs).resolve_range(parse_range('nope..'))

    def test_empty_history(self) -> None:
        """Defaulting HEAD on an unborn branch raises EmptyHistoryError."""
        with pytest.raises(EmptyHistoryError):
            _ranges(FakeVCS()).resolve_range(RangePattern())

    def test_walker_cap_applies(self, linear: tuple[FakeVCS, list[str]]) -> None:
        """A capped walker limits the resolved commits."""
        vcs, _ = linear
        ranges = RangeResolver(RevisionResolver(vcs), CommitRangeWalker(vcs, max_commits=2))
        assert len(ranges.resolve_range(parse_range('1.0.0..3.0.0'))) == 2


class TestAllCommits:
    """Tests for RangeResolver.all_commits()."""

    def test_whole_branch(self, linear: tuple[FakeVCS, list[str]]) -> None:
        """Every commit, first commit included, from a bare first commit to HEAD."""
        vcs, shas = linear
        commit_range = _ranges(vcs).all_commits()
        assert commit_range.from_.kind is EndpointKind.BARE
        assert commit_range.from_.oid == shas[0]
        assert commit_range.to.kind is EndpointKind.HEAD
        assert commit_range.shas == list(reversed(shas))

    def test_empty_history(self) -> None:
        """An unborn branch raises EmptyHistoryError."""
        with pytest.raises(EmptyHistoryError):
            _ranges(FakeVCS()).all_commits()

    def test_tagged_head(self) -> None:
        """A tagged tip is reported as its tag, like every other upper bound."""
        vcs = FakeVCS()
        first, tip = vcs.linear('first', 'tip')
        vcs.add_tag('1.0.0', tip)
        commit_range = _ranges(vcs).all_commits()
        assert commit_range.to.kind is EndpointKind.TAG
        assert commit_range.to.short == '1.0.0'
        assert commit_range.shas == [tip, first]
