#!/usr/bin/env python3
# file: tests/integration/test_git_ops_integration.py
# version: 1.0.0
# guid: 8d2a6f14-c3e9-4b71-a5d0-1f7b9e4c2a86

"""Integration tests for staging and pushing with a real git binary."""

from __future__ import annotations

import base64
import subprocess
import sys
from pathlib import Path

import pytest

sys.path.insert(
    0,
    str(Path(__file__).resolve().parent.parent.parent / ".github/workflows/scripts"),
)

import file_blob  # pylint: disable=wrong-import-position
import git_ops  # pylint: disable=wrong-import-position
import github_graphql  # pylint: disable=wrong-import-position
import verified_commit  # pylint: disable=wrong-import-position
from commit_errors import GitError  # pylint: disable=wrong-import-position
from commit_models import (  # pylint: disable=wrong-import-position
    BranchRef,
    CommitResult,
    FileAddition,
    FileDeletion,
    RemoteCommit,
    RepositorySnapshot,
)
from github_context import GitHubContext  # pylint: disable=wrong-import-position


def _git(*args: str) -> str:
    result = subprocess.run(["git", *args], check=True, capture_output=True, text=True)
    return result.stdout.strip()


@pytest.fixture
def repo_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A repository with one commit and a bare `origin` remote."""
    remote = tmp_path / "origin.git"
    subprocess.run(["git", "init", "--bare", str(remote)], check=True, capture_output=True)

    repo = tmp_path / "work"
    repo.mkdir()
    monkeypatch.chdir(repo)
    _git("init")
    _git("config", "user.email", "test@example.com")
    _git("config", "user.name", "Test User")
    _git("checkout", "-b", "main")
    (repo / "README.md").write_text("# Test\n", encoding="utf-8")
    (repo / "obsolete.txt").write_text("remove me\n", encoding="utf-8")
    _git("add", ".")
    _git("commit", "-m", "Initial commit")
    _git("remote", "add", "origin", str(remote))
    return repo


@pytest.mark.integration
def test_stage_and_read_file_changes(repo_dir: Path) -> None:
    """
    Validate the staging flow against a working tree.

    Ensures:
        1. New and modified files are reported as additions
        2. Removed tracked files are reported as deletions
        3. Additions load as base64 blobs from the working tree
    """
    (repo_dir / "README.md").write_text("# Updated\n", encoding="utf-8")
    (repo_dir / "docs").mkdir()
    (repo_dir / "docs" / "new file.md").write_text("hello\n", encoding="utf-8")
    (repo_dir / "obsolete.txt").unlink()

    git_ops.add_file_changes(["README.md", "docs/new file.md", "obsolete.txt"])
    changes = git_ops.get_file_changes()

    assert sorted(item.path for item in changes.additions) == [
        "README.md",
        "docs/new file.md",
    ]
    assert changes.deletions == [FileDeletion(path="obsolete.txt")]

    blob = file_blob.get_blob("docs/new file.md").load()
    assert blob == FileAddition(
        path="docs/new file.md",
        contents=base64.b64encode(b"hello\n").decode("ascii"),
    )


@pytest.mark.integration
def test_unchanged_files_produce_no_changes(repo_dir: Path) -> None:
    git_ops.add_file_changes(["README.md"])

    assert git_ops.get_file_changes().count == 0


@pytest.mark.integration
def test_switch_branch_and_push(repo_dir: Path) -> None:
    """A new branch keeps HEAD and is published to origin."""
    head = git_ops.get_head_sha()

    git_ops.switch_branch("bot/update")
    git_ops.push_current_branch("bot/update")

    assert _git("rev-parse", "--abbrev-ref", "HEAD") == "bot/update"
    remote_head = _git("ls-remote", "origin", "refs/heads/bot/update").split()[0]
    assert remote_head == head


@pytest.mark.integration
def test_push_from_detached_head(repo_dir: Path) -> None:
    """A detached checkout is published under the requested branch name."""
    head = git_ops.get_head_sha()
    _git("checkout", "--detach")

    git_ops.push_current_branch("fork-branch")

    remote_head = _git("ls-remote", "origin", "refs/heads/fork-branch").split()[0]
    assert remote_head == head


@pytest.mark.integration
def test_pull_request_commit_uses_checked_out_head(
    repo_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """The parent commit is the local HEAD even when the event sha is a merge sha."""
    _git("checkout", "-b", "feature")
    head = git_ops.get_head_sha()
    (repo_dir / "README.md").write_text("# Changed\n", encoding="utf-8")
    seen: dict = {}

    monkeypatch.setattr(
        github_graphql,
        "get_repository",
        lambda owner, repo, branch=None: RepositorySnapshot(
            id="repo-id",
            name_with_owner=f"{owner}/{repo}",
            ref=BranchRef(name=branch, latest_commit=RemoteCommit(oid=head)),
        ),
    )

    def fake_create(branch, parent_commit, file_changes, message=None):
        seen["branch"] = branch.branch_name
        seen["parent"] = parent_commit.oid
        return CommitResult(oid="new-oid")

    monkeypatch.setattr(github_graphql, "create_commit_on_branch", fake_create)
    context = GitHubContext(
        owner="owner",
        repo="repo",
        sha="f" * 40,
        ref="refs/pull/3/merge",
        event_name="pull_request",
        payload={"pull_request": {"head": {"ref": "feature"}}},
    )

    result = verified_commit.commit_files(context, ["README.md"])

    assert result.oid == "new-oid"
    assert seen == {"branch": "feature", "parent": head}


@pytest.mark.integration
def test_add_unknown_path_raises_git_error(repo_dir: Path) -> None:
    with pytest.raises(GitError) as exc_info:
        git_ops.add_file_changes(["does-not-exist.txt"])

    assert "does-not-exist.txt" in str(exc_info.value)
