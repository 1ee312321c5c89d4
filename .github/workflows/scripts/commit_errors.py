#!/usr/bin/env python3
# file: .github/workflows/scripts/commit_errors.py
# version: 1.0.0
# guid: 8b2e4d10-7a3c-4f61-b5d9-2c6e0a9f4d17

"""Errors raised while committing files through the GraphQL API."""

from __future__ import annotations

from typing import Any

from workflow_common import WorkflowError


class InputFilesRequiredError(WorkflowError):
    """The `files` input was empty."""

    def __init__(self) -> None:
        super().__init__(
            "Input <files> is required",
            hint="List one path per line in the `files` input",
        )


class UnsupportedEventError(WorkflowError):
    """The triggering event does not identify a branch."""

    def __init__(self, event_name: str, ref: str) -> None:
        super().__init__(
            f"Unsupported event: {event_name}, ref: {ref}",
            hint="Run on a branch push or pull_request event, or set `branch-name`",
        )
        self.event_name = event_name
        self.ref = ref


class NoFileChangesError(WorkflowError):
    """Staging the configured files produced no changes."""

    def __init__(self) -> None:
        super().__init__("No changes found")


class ParentMismatchError(WorkflowError):
    """The local checkout is not at the remote branch tip."""

    def __init__(self, sha: str, remote_sha: str) -> None:
        super().__init__(
            f"Parent Commit mismatched, sha:{sha}, remote-sha:{remote_sha}",
            hint="Check out the latest commit of the target branch and retry",
        )
        self.sha = sha
        self.remote_sha = remote_sha


class GitError(WorkflowError):
    """A git subprocess exited with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, stderr: str = "") -> None:
        message = f"`{' '.join(command)}` failed with exit code {returncode}"
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class GraphQLError(WorkflowError):
    """The GraphQL endpoint rejected a request.

    ``message`` is the first reported error; ``errors`` keeps every entry of
    the response's ``errors`` array.
    """

    def __init__(
        self,
        message: str,
        errors: list[dict[str, Any]] | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.errors = errors or []
        self.status_code = status_code
