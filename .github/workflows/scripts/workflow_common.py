#!/usr/bin/env python3
# file: .github/workflows/scripts/workflow_common.py
# version: 2.0.0
# guid: 3c1f9a72-5e04-4b8d-9a6e-0f2d7c4b1e53

"""Shared GitHub Actions runtime helpers for the verified commit scripts."""

from __future__ import annotations

from contextlib import contextmanager
import os
from pathlib import Path
import re
import sys
import time
from typing import Any, Iterator

import yaml

_CONFIG_CACHE: dict[str, Any] | None = None

CONFIG_FILE = Path(".github/repository-config.yml")


class WorkflowError(Exception):
    """Workflow execution error with optional hints and documentation links."""

    def __init__(
        self,
        message: str,
        hint: str = "",
        docs_url: str = "",
    ) -> None:
        """Initialize workflow error."""
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.docs_url = docs_url

    def __str__(self) -> str:
        """Format error with hints and documentation links."""
        parts = [self.message]
        if self.hint:
            parts.append(f"💡 Hint: {self.hint}")
        if self.docs_url:
            parts.append(f"📚 Docs: {self.docs_url}")
        return "\n".join(parts)


def append_to_file(path_env: str, content: str) -> None:
    """Append content to a GitHub Actions environment file."""
    file_path_str = os.environ.get(path_env)
    if not file_path_str:
        raise WorkflowError(
            f"Environment variable {path_env} not set",
            hint="This helper must run inside a GitHub Actions workflow",
            docs_url=(
                "https://docs.github.com/en/actions/using-workflows/"
                "workflow-commands-for-github-actions"
            ),
        )

    file_path = Path(file_path_str)
    if not file_path.exists():
        raise WorkflowError(
            f"File {file_path} does not exist",
            hint=f"Ensure GitHub Actions created the {path_env} file",
        )

    with file_path.open("a", encoding="utf-8") as handle:
        handle.write(content)


def write_output(name: str, value: str) -> None:
    """Write an output variable for downstream workflow steps."""
    append_to_file("GITHUB_OUTPUT", f"{name}={value}\n")


def append_summary(text: str) -> None:
    """Append markdown content to the GitHub Actions step summary."""
    append_to_file("GITHUB_STEP_SUMMARY", text)


def _input_env_names(name: str) -> list[str]:
    key = name.replace(" ", "_").upper()
    return [f"INPUT_{key}", f"INPUT_{key.replace('-', '_')}"]


def get_input(name: str, required: bool = False) -> str:
    """Return an action input from its ``INPUT_<NAME>`` environment variable."""
    value = ""
    for env_name in _input_env_names(name):
        value = os.environ.get(env_name, "").strip()
        if value:
            break

    if required and not value:
        raise WorkflowError(
            f"Input required and not supplied: {name}",
            hint=f"Set `{name}` in the step's `with:` block",
        )
    return value


def get_multiline_input(name: str, required: bool = False) -> list[str]:
    """Return a newline-delimited action input as a list of non-blank lines."""
    raw = get_input(name, required=required)
    return [line.strip() for line in raw.splitlines() if line.strip()]


def escape_data(value: str) -> str:
    """Escape a workflow command payload."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _issue_command(command: str, message: str) -> None:
    print(f"::{command}::{escape_data(sanitize_log(message))}")


def debug(message: str) -> None:
    """Emit a debug message, visible when step debug logging is enabled."""
    _issue_command("debug", message)


def notice(message: str) -> None:
    """Emit a notice annotation."""
    _issue_command("notice", message)


def error(message: str) -> None:
    """Emit an error annotation."""
    _issue_command("error", message)


@contextmanager
def timed_operation(operation_name: str) -> Iterator[None]:
    """Wrap an operation in a collapsible log group and record its duration."""
    print(f"::group::{escape_data(operation_name)}")
    start_time = time.time()
    try:
        yield
    finally:
        duration = time.time() - start_time
        debug(f"time taken: {int(duration * 1000)} ms")
        print("::endgroup::")
        print(f"⏱️  {operation_name} took {duration:.2f}s")


def handle_error(error_: Exception, context: str) -> None:
    """Report a fatal error as an annotation and exit with a failure status."""
    if isinstance(error_, WorkflowError):
        message = str(error_)
    else:
        message = f"Unexpected error in {context}: {error_}"
    error(message)
    print(sanitize_log(f"❌ {message}"), file=sys.stderr)
    sys.exit(1)


def sanitize_log(message: str) -> str:
    """Mask sensitive tokens from log messages."""
    sanitized = re.sub(r"ghp_[a-zA-Z0-9]{36}", "***GITHUB_TOKEN***", message)
    sanitized = re.sub(r"ghs_[a-zA-Z0-9]{36}", "***GITHUB_SECRET***", sanitized)
    sanitized = re.sub(
        r"Bearer\s+[a-zA-Z0-9\-._~+/]+=*",
        "Bearer ***TOKEN***",
        sanitized,
        flags=re.IGNORECASE,
    )
    return sanitized


def get_repository_config() -> dict[str, Any]:
    """Load and cache `.github/repository-config.yml`.

    The file is optional; when it is missing an empty mapping is returned.
    """
    global _CONFIG_CACHE

    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    if not CONFIG_FILE.exists():
        return {}

    try:
        with CONFIG_FILE.open(encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
    except yaml.YAMLError as yaml_error:
        raise WorkflowError(
            f"Invalid YAML in repository-config.yml: {yaml_error}",
            hint="Validate with: yamllint .github/repository-config.yml",
        ) from yaml_error

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise WorkflowError(
            "repository-config.yml must contain a YAML dictionary",
            hint="Ensure the file starts with top-level keys",
        )

    _CONFIG_CACHE = loaded
    return _CONFIG_CACHE


def config_path(default: Any, *path: str) -> Any:
    """Navigate the optional configuration and return value or default."""
    current: Any = get_repository_config()
    for key in path:
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]
    return current
