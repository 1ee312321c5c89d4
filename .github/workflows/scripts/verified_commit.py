#!/usr/bin/env python3
# file: .github/workflows/scripts/verified_commit.py
# version: 1.0.0
# guid: 2e5b7d90-f1c3-4a68-8d4e-a9c0b6f13d72

"""Commit changed files to a branch as a verified commit.

The commit is created server-side with the ``createCommitOnBranch`` GraphQL
mutation, so GitHub signs it. The local checkout must sit at the remote
branch tip; the mutation's ``expectedHeadOid`` rejects concurrent pushes.
"""

from __future__ import annotations

import argparse

from commit_errors import (
    InputFilesRequiredError,
    NoFileChangesError,
    ParentMismatchError,
    UnsupportedEventError,
)
from commit_models import CommittableBranch, CommitResult, ParentCommit, RepositorySnapshot
import git_ops
from github_context import GitHubContext
import github_graphql
import workflow_common


def resolve_current_branch(context: GitHubContext) -> str:
    """Return the branch the run was triggered for."""
    if context.ref.startswith("refs/heads/"):
        return context.ref[len("refs/heads/"):]
    if context.is_pull_request and context.pull_request_head_ref:
        return context.pull_request_head_ref
    raise UnsupportedEventError(context.event_name, context.ref)


def resolve_target_branch(current_branch: str, requested_branch: str = "") -> str:
    if requested_branch and requested_branch != current_branch:
        return requested_branch
    return current_branch


def check_parent_commit(repository: RepositorySnapshot, sha: str) -> None:
    """Ensure ``sha`` is the latest commit of the remote branch.

    Only the most recent remote commit is compared.
    """
    if repository.ref is None or repository.ref.latest_commit is None:
        return
    remote_sha = repository.ref.latest_commit.oid
    if remote_sha != sha:
        raise ParentMismatchError(sha, remote_sha)


def commit_files(
    context: GitHubContext,
    file_paths: list[str],
    branch_name: str = "",
    commit_message: str | None = None,
) -> CommitResult:
    """Stage ``file_paths`` and commit them to the target branch.

    Raises:
        InputFilesRequiredError: If no file paths were given
        UnsupportedEventError: If no branch can be resolved
        NoFileChangesError: If staging produced no changes
        ParentMismatchError: If the remote branch moved past the local sha
    """
    if not file_paths:
        raise InputFilesRequiredError()

    current_branch = resolve_current_branch(context)
    target_branch = resolve_target_branch(current_branch, branch_name)
    if target_branch != current_branch:
        git_ops.switch_branch(target_branch)

    git_ops.add_file_changes(file_paths)
    file_changes = git_ops.get_file_changes()
    if file_changes.count <= 0:
        raise NoFileChangesError()
    print(
        f"📋 {len(file_changes.additions)} addition(s), "
        f"{len(file_changes.deletions)} deletion(s) staged"
    )

    # GITHUB_SHA is the merge commit on pull_request runs, not the checkout.
    sha = git_ops.get_head_sha()

    with workflow_common.timed_operation(
        f"fetching repository info for owner: {context.owner}, "
        f"repo: {context.repo}, branch: {target_branch}"
    ):
        repository = github_graphql.get_repository(
            context.owner, context.repo, target_branch
        )

    if repository.ref is not None:
        check_parent_commit(repository, sha)
    else:
        print(f"🌱 Branch {target_branch} does not exist remotely, pushing it first")
        git_ops.push_current_branch(target_branch)

    with workflow_common.timed_operation("committing files"):
        return github_graphql.create_commit_on_branch(
            CommittableBranch(
                repository_name_with_owner=repository.name_with_owner,
                branch_name=target_branch,
            ),
            ParentCommit(oid=sha),
            file_changes,
            message=commit_message,
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Commit files to a branch through the GitHub GraphQL API",
    )
    parser.add_argument("--branch-name", help="Target branch override")
    parser.add_argument(
        "--files",
        action="append",
        help="File path to commit (repeatable); defaults to the `files` input",
    )
    parser.add_argument("--commit-message", help="Commit message override")
    return parser


def run(args: argparse.Namespace) -> None:
    """Run the commit step and report its outcome to the workflow."""
    try:
        file_paths = args.files or workflow_common.get_multiline_input("files")
        branch_name = args.branch_name or workflow_common.get_input("branch-name")
        context = GitHubContext.from_env()

        result = commit_files(
            context,
            file_paths,
            branch_name,
            commit_message=args.commit_message,
        )

        print(f"✅ Created commit {result.oid}")
        workflow_common.write_output("commit-sha", result.oid)
        try:
            workflow_common.append_summary(
                f"## Verified Commit\n\n- **Commit:** `{result.oid}`\n"
            )
        except workflow_common.WorkflowError as error:
            print(workflow_common.sanitize_log(str(error)))

    except NoFileChangesError:
        workflow_common.notice("No changes found")
    except Exception as error:  # pylint: disable=broad-except
        workflow_common.handle_error(error, "Verified commit")


def main() -> None:
    """Entry point for CLI usage."""
    run(build_parser().parse_args())


if __name__ == "__main__":
    main()
