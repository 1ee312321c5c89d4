#!/usr/bin/env python3
# file: .github/workflows/scripts/git_ops.py
# version: 1.0.0
# guid: 0a7c3e58-d2b4-4916-8f5e-c1a9b3d6e207

"""Git subprocess helpers for staging files and establishing branches.

Every helper raises :class:`commit_errors.GitError` when git exits with a
non-zero status.
"""

from __future__ import annotations

from collections.abc import Iterable
import subprocess

from commit_errors import GitError
from commit_models import FileAddition, FileChanges, FileDeletion
import workflow_common


def _run_git(*args: str) -> str:
    command = ["git", *args]
    workflow_common.debug(f"running: {' '.join(command)}")
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as error:
        raise GitError(command, error.returncode, error.stderr or "") from error
    return result.stdout


def switch_branch(branch_name: str) -> None:
    """Create (or reset) and check out ``branch_name`` at the current HEAD."""
    _run_git("checkout", "-B", branch_name)
    print(f"🔀 Switched to branch {branch_name}")


def add_file_changes(paths: Iterable[str]) -> None:
    """Stage additions, modifications and deletions for ``paths``."""
    _run_git("add", "--", *paths)


def get_file_changes() -> FileChanges:
    """Return the changes staged in the index relative to HEAD."""
    output = _run_git("diff", "--cached", "--name-status", "--no-renames", "-z")
    fields = [entry for entry in output.split("\0") if entry]

    changes = FileChanges()
    for status, path in zip(fields[0::2], fields[1::2]):
        if status.startswith("D"):
            changes.deletions.append(FileDeletion(path=path))
        else:
            changes.additions.append(FileAddition(path=path))
    return changes


def push_current_branch(branch_name: str) -> None:
    """Publish HEAD to ``origin`` as ``branch_name``.

    The refspec names the branch explicitly, so a detached checkout pushes too.
    """
    _run_git("push", "origin", f"HEAD:refs/heads/{branch_name}")
    print(f"⬆️  Pushed HEAD to origin/{branch_name}")


def get_head_sha() -> str:
    return _run_git("rev-parse", "HEAD").strip()
