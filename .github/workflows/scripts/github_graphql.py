#!/usr/bin/env python3
# file: .github/workflows/scripts/github_graphql.py
# version: 1.0.0
# guid: c8f1a5d3-4b9e-4e07-a6c8-1d2f9b3e7c50

"""Repository queries and commit creation through the GitHub GraphQL API."""

from __future__ import annotations

from typing import Any

from commit_errors import GraphQLError
from commit_models import (
    BranchRef,
    CommitResult,
    CommittableBranch,
    FileChanges,
    ParentCommit,
    RemoteCommit,
    RepositorySnapshot,
)
import file_blob
from graphql_client import graphql_client
import workflow_common

DEFAULT_COMMIT_MESSAGE = "Update files"

_REF_FIELDS = """
      name
      target {
        ... on Commit {
          history(first: 1) {
            nodes {
              oid
              message
              committedDate
            }
          }
        }
      }
"""

REPOSITORY_QUERY = (
    """
query GetRepository($owner: String!, $repo: String!) {
  repository(owner: $owner, name: $repo) {
    id
    nameWithOwner
    defaultBranchRef {"""
    + _REF_FIELDS
    + """    }
  }
}
"""
)

REPOSITORY_BRANCH_QUERY = (
    """
query GetRepositoryBranch($owner: String!, $repo: String!, $ref: String!) {
  repository(owner: $owner, name: $repo) {
    id
    nameWithOwner
    defaultBranchRef {"""
    + _REF_FIELDS
    + """    }
    ref(qualifiedName: $ref) {"""
    + _REF_FIELDS
    + """    }
  }
}
"""
)

CREATE_COMMIT_MUTATION = """
mutation CreateCommitOnBranch($input: CreateCommitOnBranchInput!) {
  createCommitOnBranch(input: $input) {
    commit {
      oid
      url
    }
  }
}
"""


def _parse_ref(node: dict[str, Any] | None) -> BranchRef | None:
    if not node:
        return None
    target = node.get("target") or {}
    history = target.get("history") or {}
    nodes = history.get("nodes") or []
    latest = None
    if nodes and nodes[0] and nodes[0].get("oid"):
        latest = RemoteCommit(
            oid=nodes[0]["oid"],
            message=nodes[0].get("message", ""),
            committed_date=nodes[0].get("committedDate", ""),
        )
    return BranchRef(name=node.get("name", ""), latest_commit=latest)


def get_repository(owner: str, repo: str, branch: str | None = None) -> RepositorySnapshot:
    """Fetch the repository, its default branch and optionally ``branch``.

    ``ref`` on the result is None when ``branch`` does not exist remotely.
    """
    variables: dict[str, Any] = {"owner": owner, "repo": repo}
    query = REPOSITORY_QUERY
    if branch:
        query = REPOSITORY_BRANCH_QUERY
        variables["ref"] = f"refs/heads/{branch}"

    data = graphql_client().execute(query, variables)
    repository = data.get("repository") or {}
    return RepositorySnapshot(
        id=repository.get("id", ""),
        name_with_owner=repository.get("nameWithOwner", f"{owner}/{repo}"),
        default_branch_ref=_parse_ref(repository.get("defaultBranchRef")),
        ref=_parse_ref(repository.get("ref")),
    )


def get_commit_message(override: str | None = None) -> dict[str, str]:
    """Return the commit message as a GraphQL ``CommitMessage``.

    Lookup order: ``override``, the `commit-message` input,
    ``verified_commit.commit_message`` in the repository config, then the
    default message.
    """
    message = (
        override
        or workflow_common.get_input("commit-message")
        or workflow_common.config_path(
            DEFAULT_COMMIT_MESSAGE, "verified_commit", "commit_message"
        )
    )
    headline, _, body = str(message).strip().partition("\n")
    commit_message = {"headline": headline.strip()}
    if body.strip():
        commit_message["body"] = body.strip()
    return commit_message


def _with_contents(file_changes: FileChanges) -> FileChanges:
    additions = [
        addition if addition.contents is not None else file_blob.get_blob(addition.path).load()
        for addition in file_changes.additions
    ]
    return FileChanges(additions=additions, deletions=list(file_changes.deletions))


def create_commit_on_branch(
    branch: CommittableBranch,
    parent_commit: ParentCommit,
    file_changes: FileChanges,
    message: str | None = None,
) -> CommitResult:
    """Create one commit on ``branch`` on top of ``parent_commit``.

    GitHub rejects the whole mutation when ``parent_commit`` is no longer the
    tip of the branch, so no partial commit can be produced.
    """
    changes = _with_contents(file_changes)
    variables = {
        "input": {
            "branch": branch.to_input(),
            "expectedHeadOid": parent_commit.oid,
            "message": get_commit_message(message),
            "fileChanges": changes.to_input(),
        }
    }

    data = graphql_client().execute(CREATE_COMMIT_MUTATION, variables)
    payload = data.get("createCommitOnBranch") or {}
    commit = payload.get("commit") or {}
    if not commit.get("oid"):
        raise GraphQLError("createCommitOnBranch returned no commit oid")
    return CommitResult(oid=commit["oid"], url=commit.get("url", ""))
