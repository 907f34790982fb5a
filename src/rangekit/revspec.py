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

"""Two-dot range patterns.

``FROM..TO`` with either side optional::

    "1.0.0..2.0.0"  → from='1.0.0', to='2.0.0'
    "1.0.0.."       → from='1.0.0', to=None   (up to the branch head)
    "..2.0.0"       → from=None,    to='2.0.0' (from the previous tag)
    ".."            → from=None,    to=None

The sides are kept verbatim; interpreting them is the resolver's job.
"""

from __future__ import annotations

from dataclasses import dataclass

from rangekit.errors import InvalidRangeSyntaxError

RANGE_SEPARATOR = '..'


@dataclass(frozen=True)
class RangePattern:
    """A parsed ``from..to`` pattern.

    Attributes:
        from_: Lower bound revision text, or ``None`` for "previous tag,
            else first commit".
        to: Upper bound revision text, or ``None`` for the branch head.
    """

    from_: str | None = None
    to: str | None = None

    @classmethod
    def between(cls, from_: str, to: str) -> RangePattern:
        """Build a pattern from two known revisions, without parsing."""
        return cls(from_=from_, to=to)

    @classmethod
    def upper_bound(cls, to: str | None) -> RangePattern:
        """Build ``..to``."""
        return cls(from_=None, to=to)

    def __str__(self) -> str:
        return f'{self.from_ or ""}{RANGE_SEPARATOR}{self.to or ""}'


def parse_range(text: str) -> RangePattern:
    """Parse ``text`` into a :class:`RangePattern`.

    The text is split once, at the first ``..``.

    Args:
        text: Range text such as ``"1.0.0..HEAD"``.

    Returns:
        The parsed pattern.

    Raises:
        InvalidRangeSyntaxError: If ``text`` has no ``..`` separator.

    Examples::

        >>> parse_range('1.0.0..')
        RangePattern(from_='1.0.0', to=None)
    """
    if RANGE_SEPARATOR not in text:
        raise InvalidRangeSyntaxError(
            f"Invalid commit range pattern: '{text}'",
            hint="Use 'FROM..TO'; either side may be empty.",
        )
    from_, to = text.split(RANGE_SEPARATOR, 1)
    return RangePattern(from_=from_ or None, to=to or None)


__all__ = [
    'RANGE_SEPARATOR',
    'RangePattern',
    'parse_range',
]
