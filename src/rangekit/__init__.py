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

"""rangekit: commit ranges and release chains for semantic-versioned repos."""

from rangekit.api import RangeKit
from rangekit.endpoints import CommitRange, EndpointKind, ResolvedEndpoint
from rangekit.errors import (
    BackendFailureError,
    EmptyHistoryError,
    InvalidRangeSyntaxError,
    NoTagFoundError,
    PackageNotFoundError,
    RangeKitError,
    RevisionNotFoundError,
)
from rangekit.models import Commit
from rangekit.monorepo import MonoRepoPackage, filter_for_package, filter_global
from rangekit.release import Release, ReleaseChainBuilder
from rangekit.resolver import RangeResolver, RevisionResolver
from rangekit.revspec import RangePattern, parse_range
from rangekit.tags import LatestTagLocator, Tag
from rangekit.versions import Increment, SemanticVersion, max_increment, parse_version
from rangekit.walker import CommitRangeWalker

__version__ = '0.1.0'

__all__ = [
    'BackendFailureError',
    'Commit',
    'CommitRange',
    'CommitRangeWalker',
    'EmptyHistoryError',
    'EndpointKind',
    'Increment',
    'InvalidRangeSyntaxError',
    'LatestTagLocator',
    'MonoRepoPackage',
    'NoTagFoundError',
    'PackageNotFoundError',
    'RangeKit',
    'RangeKitError',
    'RangePattern',
    'RangeResolver',
    'Release',
    'ReleaseChainBuilder',
    'ResolvedEndpoint',
    'RevisionNotFoundError',
    'RevisionResolver',
    'SemanticVersion',
    'Tag',
    'filter_for_package',
    'filter_global',
    'max_increment',
    'parse_range',
    'parse_version',
]
