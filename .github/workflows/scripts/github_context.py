#!/usr/bin/env python3
# file: .github/workflows/scripts/github_context.py
# version: 1.0.0
# guid: 9f4b2a61-3c7e-4d85-b0a2-5e8d1c7f6a39

"""Read the triggering workflow run's context from the environment."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
import os
from pathlib import Path
from typing import Any

import workflow_common

PULL_REQUEST_EVENTS = {"pull_request", "pull_request_target"}


@dataclass
class GitHubContext:
    """Subset of the Actions run context used to place a commit.

    Attributes:
        owner: Repository owner
        repo: Repository name
        sha: Commit checked out for the run
        ref: Fully qualified ref that triggered the run
        event_name: Name of the triggering event
        head_ref: Pull request head branch (``GITHUB_HEAD_REF``)
        payload: Parsed webhook event payload
    """

    owner: str
    repo: str
    sha: str = ""
    ref: str = ""
    event_name: str = ""
    head_ref: str = ""
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> GitHubContext:
        repository = os.environ.get("GITHUB_REPOSITORY", "")
        owner, _, repo = repository.partition("/")
        if not owner or not repo:
            raise workflow_common.WorkflowError(
                f"GITHUB_REPOSITORY must be <owner>/<repo>, got '{repository}'",
                hint="This helper must run inside a GitHub Actions workflow",
            )

        return cls(
            owner=owner,
            repo=repo,
            sha=os.environ.get("GITHUB_SHA", ""),
            ref=os.environ.get("GITHUB_REF", ""),
            event_name=os.environ.get("GITHUB_EVENT_NAME", ""),
            head_ref=os.environ.get("GITHUB_HEAD_REF", ""),
            payload=_load_event_payload(os.environ.get("GITHUB_EVENT_PATH", "")),
        )

    @property
    def is_pull_request(self) -> bool:
        return self.event_name in PULL_REQUEST_EVENTS

    @property
    def pull_request_head_ref(self) -> str:
        """Head branch of the triggering pull request, or an empty string."""
        pull_request = self.payload.get("pull_request") or {}
        head = pull_request.get("head") or {}
        return head.get("ref") or self.head_ref


def _load_event_payload(event_path: str) -> dict[str, Any]:
    if not event_path:
        return {}
    path = Path(event_path)
    if not path.is_file():
        return {}
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as error:
        raise workflow_common.WorkflowError(
            f"Invalid JSON in event payload {path}: {error}",
        ) from error
    return payload if isinstance(payload, dict) else {}
