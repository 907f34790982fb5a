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

"""Tests for rangekit.logging module."""

from __future__ import annotations

import io
import json
import logging

from rangekit.logging import LOGGER_NAME, configure_logging, get_logger


def _library_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_default_level_is_info(self) -> None:
        """Default level is INFO."""
        configure_logging()
        assert _library_logger().level == logging.INFO

    def test_verbose_sets_debug(self) -> None:
        """Verbose enables DEBUG."""
        configure_logging(verbose=True)
        assert _library_logger().level == logging.DEBUG

    def test_quiet_wins_over_verbose(self) -> None:
        """Quiet takes precedence when both are set."""
        configure_logging(verbose=True, quiet=True)
        assert _library_logger().level == logging.WARNING

    def test_root_logger_untouched(self) -> None:
        """The host's root logger keeps its level and handlers."""
        root = logging.getLogger()
        level, handlers = root.level, list(root.handlers)
        configure_logging(verbose=True)
        assert root.level == level
        assert root.handlers == handlers
        assert _library_logger().propagate is False

    def test_reconfigure_replaces_handler(self) -> None:
        """Only the latest handler stays installed."""
        first = configure_logging()
        second = configure_logging(json_log=True)
        handlers = _library_logger().handlers
        assert second in handlers
        assert first not in handlers

    def test_null_handler_kept(self) -> None:
        """The library's NullHandler survives reconfiguration."""
        configure_logging()
        assert any(isinstance(h, logging.NullHandler) for h in _library_logger().handlers)


class TestOutput:
    """Tests for what configured loggers write."""

    def test_json_lines(self) -> None:
        """JSON mode writes one object per event with its context."""
        out = io.StringIO()
        configure_logging(json_log=True, stream=out)
        get_logger('rangekit.resolver').info('range_resolved', pattern='1.0.0..', commits=3)
        record = json.loads(out.getvalue().splitlines()[-1])
        assert record['event'] == 'range_resolved'
        assert record['commits'] == 3
        assert record['logger'] == 'rangekit.resolver'
        assert record['level'] == 'info'

    def test_quiet_drops_debug(self) -> None:
        """Quiet mode keeps warnings and drops debug events."""
        out = io.StringIO()
        configure_logging(quiet=True, stream=out)
        log = get_logger('rangekit.release')
        log.debug('release_chain_link', title='1.0.0')
        log.warning('release_target_unreachable', target='abc1234')
        text = out.getvalue()
        assert 'release_target_unreachable' in text
        assert 'release_chain_link' not in text

    def test_console_has_no_color_off_tty(self) -> None:
        """Console output to a non-TTY stream is plain text."""
        out = io.StringIO()
        configure_logging(stream=out)
        get_logger('rangekit.walker').warning('commit_walk_truncated', limit=2)
        assert 'commit_walk_truncated' in out.getvalue()
        assert '\x1b[' not in out.getvalue()

    def test_other_loggers_unaffected(self) -> None:
        """Loggers outside the rangekit tree do not reach its handler."""
        out = io.StringIO()
        configure_logging(verbose=True, stream=out)
        logging.getLogger('host.app').warning('host message')
        assert 'host message' not in out.getvalue()
