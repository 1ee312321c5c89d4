#!/usr/bin/env python3
# file: .github/workflows/scripts/graphql_client.py
# version: 1.0.0
# guid: 6d3e8b14-a0f9-4c72-9e1d-b4a5c2f70e86

"""Authenticated client for the GitHub GraphQL endpoint."""

from __future__ import annotations

import json
import os
from typing import Any

import requests

from commit_errors import GraphQLError
import workflow_common

DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"
REQUEST_TIMEOUT = 30


class GraphQLClient:
    """Send GraphQL documents to GitHub with bearer token authentication."""

    def __init__(
        self,
        token: str,
        url: str = DEFAULT_GRAPHQL_URL,
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"bearer {token}",
                "Accept": "application/vnd.github+json",
                "User-Agent": "verified-commit-action",
            }
        )

    def execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a query or mutation and return its ``data`` object.

        The request is sent once. Error responses are logged and raised as
        :class:`GraphQLError`.
        """
        variables = variables or {}
        try:
            response = self.session.post(
                self.url,
                json={"query": query, "variables": variables},
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as error:
            raise GraphQLError(f"GraphQL request failed: {error}") from error

        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {}

        errors = body.get("errors") or []
        if errors:
            _log_failure(query, variables, errors)
            first = errors[0].get("message", "Unknown GraphQL error")
            raise GraphQLError(first, errors=errors, status_code=response.status_code)

        if response.status_code >= 400:
            message = body.get("message") or response.reason or "request failed"
            raise GraphQLError(
                f"GraphQL request failed with HTTP {response.status_code}: {message}",
                status_code=response.status_code,
            )

        return body.get("data") or {}


def _log_failure(query: str, variables: dict[str, Any], errors: list[dict[str, Any]]) -> None:
    lines = "\n".join(f" - {item.get('message', '')}" for item in errors)
    workflow_common.error(f"Request failed due to following response errors:\n{lines}")
    workflow_common.debug(
        f"Request failed, query: {query}, variables: {json.dumps(variables)}"
    )


def graphql_client() -> GraphQLClient:
    """Build a client from the Actions environment."""
    token = os.environ.get("GH_TOKEN") or os.environ.get("GITHUB_TOKEN")
    if not token:
        raise workflow_common.WorkflowError(
            "GH_TOKEN is not set",
            hint="Pass `github-token` to the action or export GH_TOKEN",
        )
    url = os.environ.get("GITHUB_GRAPHQL_URL") or DEFAULT_GRAPHQL_URL
    return GraphQLClient(token, url=url)
