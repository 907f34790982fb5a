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

"""Protocol-based backend shim layer for rangekit.

All version-control queries go through the injectable :class:`VCS`
protocol, so the resolver can run against a real repository or against
an in-memory graph in tests.

Protocols (defined in subpackage ``__init__.py`` files):

- :class:`VCS`: rev-parse, walk, tags, tree diff (default: :class:`GitCLIBackend`)
"""

from rangekit.backends._run import CommandResult, run_command
from rangekit.backends.vcs import VCS, GitCLIBackend, TagRef

__all__ = [
    'CommandResult',
    'GitCLIBackend',
    'TagRef',
    'VCS',
    'run_command',
]
