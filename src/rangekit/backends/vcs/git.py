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

"""Git VCS backend for rangekit.

The :class:`GitCLIBackend` implements the :class:`VCS` protocol by
delegating to ``git`` plumbing via :func:`run_command`.

Commit metadata is read with a single ``git log -z`` per walk. Records
end in NUL, which git refuses in commit messages, and fields
are split on the unit separator with the message last, so separators in
message bodies survive the round trip::

    sha \\x1f parents \\x1f tree \\x1f author ... \\x1f message \\0
    sha \\x1f ...
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from rangekit.backends._run import DEFAULT_TIMEOUT_SECONDS, CommandResult, TimeoutExpired, run_command
from rangekit.backends.vcs._types import TagRef
from rangekit.errors import BackendFailureError, RevisionNotFoundError
from rangekit.logging import get_logger
from rangekit.models import Commit

log = get_logger('rangekit.backends.git')

_RECORD_SEP = '\0'
_FIELD_SEP = '\x1f'

# sha, parents, tree, author name/email, committer name/email, committer date, raw body.
_LOG_FORMAT = '%x1f'.join(['%H', '%P', '%T', '%an', '%ae', '%cn', '%ce', '%cI', '%B'])
_LOG_FIELDS = 9

# Untranslated stderr.
_GIT_ENV = {'LC_ALL': 'C'}

_TAG_FORMAT = '%1f'.join([
    '%(refname:strip=2)',
    '%(objectname)',
    '%(objecttype)',
    '%(*objectname)',
    '%(*objecttype)',
])


class GitCLIBackend:
    """Default :class:`~rangekit.backends.vcs.VCS` implementation using ``git``.

    Args:
        repo_root: Path to the git repository (any directory inside the
            work tree works).
        timeout: Per-command timeout in seconds.
    """

    def __init__(self, repo_root: Path, *, timeout: int = DEFAULT_TIMEOUT_SECONDS) -> None:
        """Initialize with the git repository root path."""
        self._root = repo_root
        self._timeout = timeout

    @property
    def root(self) -> Path:
        """The repository path this backend runs in."""
        return self._root

    def _git(self, *args: str) -> CommandResult:
        """Run a git command, translating timeouts into backend failures."""
        try:
            return run_command(['git', *args], cwd=self._root, env=_GIT_ENV, timeout=self._timeout)
        except TimeoutExpired as exc:
            raise BackendFailureError(
                f"'git {' '.join(args)}' timed out after {self._timeout}s",
                hint='Raise git_timeout in rangekit.toml for very large histories.',
            ) from exc

    def _git_checked(self, *args: str) -> CommandResult:
        """Run a git command that is expected to succeed."""
        result = self._git(*args)
        if not result.ok:
            raise BackendFailureError(f"'{result.command_str}' failed: {result.stderr.strip()}")
        return result

    def _ensure_repository(self) -> None:
        """Raise if the root is not inside a git repository."""
        result = self._git('rev-parse', '--git-dir')
        if not result.ok:
            raise BackendFailureError(
                f'{self._root} is not a git repository: {result.stderr.strip()}',
                hint="Run rangekit from inside a git work tree or pass its path explicitly.",
            )

    def head_sha(self) -> str | None:
        """Return the commit sha of ``HEAD``, or ``None`` on an unborn branch."""
        result = self._git('rev-parse', '--verify', '--quiet', 'HEAD^{commit}')
        if result.ok:
            return result.stdout.strip()
        self._ensure_repository()
        return None

    def resolve_commit(self, rev: str) -> str | None:
        """Resolve a revision expression to a commit sha (peeling tags)."""
        if not rev or rev.startswith('-'):
            return None
        result = self._git('rev-parse', '--verify', '--quiet', f'{rev}^{{commit}}')
        if not result.ok:
            return None
        return result.stdout.strip() or None

    def first_commit(self) -> str | None:
        """Return the root commit of ``HEAD``'s history."""
        if self.head_sha() is None:
            return None
        result = self._git_checked('rev-list', '--max-parents=0', 'HEAD', '--')
        roots = result.stdout.split()
        return roots[-1] if roots else None

    def log(
        self,
        *,
        include: str,
        exclude: str | None = None,
        max_count: int = 0,
    ) -> list[Commit]:
        """Return commits of ``exclude..include`` in topological order."""
        cmd_parts = ['log', '--no-color', '--topo-order', '-z', f'--format={_LOG_FORMAT}']
        if max_count > 0:
            cmd_parts.append(f'-n{max_count}')
        cmd_parts.append(include)
        if exclude:
            cmd_parts.append(f'^{exclude}')
        cmd_parts.append('--')
        result = self._git_checked(*cmd_parts)
        return _parse_log(result.stdout)

    def ancestry(self, sha: str) -> set[str]:
        """Return ``sha`` and all of its ancestors."""
        result = self._git_checked('rev-list', sha, '--')
        return set(result.stdout.split())

    def commit(self, sha: str) -> Commit:
        """Look up a single commit by sha."""
        resolved = self.resolve_commit(sha)
        if resolved is None:
            raise RevisionNotFoundError(f"Commit '{sha}' not found")
        commits = self.log(include=resolved, max_count=1)
        if not commits:
            raise RevisionNotFoundError(f"Commit '{sha}' not found")
        return commits[0]

    def list_tag_refs(self) -> list[TagRef]:
        """Return every tag that peels to a commit."""
        result = self._git_checked('for-each-ref', f'--format={_TAG_FORMAT}', 'refs/tags')
        refs: list[TagRef] = []
        for line in result.stdout.splitlines():
            if not line.strip():
                continue
            name, object_sha, object_type, peeled_sha, peeled_type = line.split(_FIELD_SEP)
            if object_type == 'commit':
                refs.append(TagRef(name=name, object_sha=object_sha, target=object_sha))
            elif object_type == 'tag':
                target = peeled_sha if peeled_type == 'commit' else self.resolve_commit(f'refs/tags/{name}')
                if target is None:
                    log.debug('tag_skip_not_commit', tag=name, peeled_type=peeled_type)
                    continue
                refs.append(TagRef(name=name, object_sha=object_sha, target=target, annotated=True))
            else:
                log.debug('tag_skip_not_commit', tag=name, object_type=object_type)
        return refs

    def changed_paths(self, commit: Commit) -> list[str]:
        """Return paths touched by ``commit`` against its first parent."""
        cmd_parts = ['diff-tree', '-r', '-z', '--no-commit-id', '--name-only', '--no-renames']
        if commit.first_parent is None:
            cmd_parts.extend(['--root', commit.sha])
        else:
            cmd_parts.extend([commit.first_parent, commit.sha])
        result = self._git_checked(*cmd_parts)
        return [path for path in result.stdout.split('\0') if path]


def _parse_log(stdout: str) -> list[Commit]:
    """Parse ``git log`` output produced with ``_LOG_FORMAT``."""
    commits: list[Commit] = []
    for record in stdout.split(_RECORD_SEP):
        if not record.strip():
            continue
        fields = record.split(_FIELD_SEP, _LOG_FIELDS - 1)
        if len(fields) != _LOG_FIELDS:
            raise BackendFailureError(f'Unexpected git log record: {record[:80]!r}')
        sha, parents, tree, author_name, author_email, committer_name, committer_email, date, message = fields
        commits.append(
            Commit(
                sha=sha.strip(),
                parents=tuple(parents.split()),
                tree=tree,
                message=message.rstrip('\n'),
                author_name=author_name,
                author_email=author_email,
                committer_name=committer_name,
                committer_email=committer_email,
                timestamp=datetime.fromisoformat(date) if date else None,
            )
        )
    return commits


__all__ = [
    'GitCLIBackend',
]
