#!/usr/bin/env python3
# file: .github/workflows/scripts/commit_models.py
# version: 1.0.0
# guid: e4a96c27-1b5d-4f08-a3c2-7d9b0e6f5a41

"""Data shapes exchanged with git and the GitHub GraphQL API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FileAddition:
    """A file to add or update; ``contents`` is base64 once loaded."""

    path: str
    contents: str | None = None

    def to_input(self) -> dict[str, Any]:
        return {"path": self.path, "contents": self.contents}


@dataclass(frozen=True)
class FileDeletion:
    """A file to delete."""

    path: str

    def to_input(self) -> dict[str, Any]:
        return {"path": self.path}


@dataclass
class FileChanges:
    """Staged additions and deletions.

    Attributes:
        additions: Files added or modified relative to HEAD
        deletions: Files removed relative to HEAD
    """

    additions: list[FileAddition] = field(default_factory=list)
    deletions: list[FileDeletion] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.additions) + len(self.deletions)

    def to_input(self) -> dict[str, Any]:
        """Render as a GraphQL ``FileChanges`` input object."""
        payload: dict[str, Any] = {}
        if self.additions:
            payload["additions"] = [item.to_input() for item in self.additions]
        if self.deletions:
            payload["deletions"] = [item.to_input() for item in self.deletions]
        return payload


@dataclass(frozen=True)
class CommittableBranch:
    """Branch targeted by ``createCommitOnBranch``."""

    repository_name_with_owner: str
    branch_name: str

    def to_input(self) -> dict[str, Any]:
        return {
            "repositoryNameWithOwner": self.repository_name_with_owner,
            "branchName": self.branch_name,
        }


@dataclass(frozen=True)
class ParentCommit:
    """Commit expected to be the current tip of the target branch."""

    oid: str


@dataclass(frozen=True)
class RemoteCommit:
    oid: str
    message: str = ""
    committed_date: str = ""


@dataclass(frozen=True)
class BranchRef:
    """A remote branch and its most recent commit, if it has one."""

    name: str
    latest_commit: RemoteCommit | None = None


@dataclass(frozen=True)
class RepositorySnapshot:
    """Remote repository state; ``ref`` is None when the branch does not exist."""

    id: str
    name_with_owner: str
    default_branch_ref: BranchRef | None = None
    ref: BranchRef | None = None


@dataclass(frozen=True)
class CommitResult:
    oid: str
    url: str = ""
