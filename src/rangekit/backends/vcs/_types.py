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

"""Value types shared by VCS backends."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TagRef:
    """A tag ref as stored by the backend.

    Attributes:
        name: Tag name without the ``refs/tags/`` prefix.
        object_sha: Object the ref points at (the tag object for
            annotated tags, the commit for lightweight ones).
        target: The commit the tag resolves to after peeling.
        annotated: Whether the ref points at a tag object.
    """

    name: str
    object_sha: str
    target: str
    annotated: bool = False


__all__ = ['TagRef']
