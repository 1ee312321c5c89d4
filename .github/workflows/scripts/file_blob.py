#!/usr/bin/env python3
# file: .github/workflows/scripts/file_blob.py
# version: 1.0.0
# guid: 51d7a0c3-9e8f-4a26-8c1b-6f3e2d5a7b09

"""Load working tree files as base64 file additions."""

from __future__ import annotations

import base64
from pathlib import Path

from commit_models import FileAddition


class Blob:
    """A file in the working tree, addressed by its repository path."""

    def __init__(self, path: str) -> None:
        self.path = path

    def load(self) -> FileAddition:
        """Read the file and return it as a file addition.

        Raises:
            OSError: If the file cannot be read
        """
        data = Path(self.path).read_bytes()
        return FileAddition(
            path=self.path,
            contents=base64.b64encode(data).decode("ascii"),
        )


def get_blob(path: str) -> Blob:
    """Return the blob for a repository path."""
    return Blob(path)
