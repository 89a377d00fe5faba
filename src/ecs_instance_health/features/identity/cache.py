"""Single-entry file cache for the container instance id."""

from __future__ import annotations

import os
from pathlib import Path

from ...core.errors import CacheWriteError

CACHE_FILE_MODE = 0o600


class IdentityCache:
    """File holding exactly one container instance id, nothing else.

    The file carries no cluster or instance tag, so the path itself must be
    specific to one (cluster, EC2 instance) pair.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def read(self) -> str | None:
        """Return the cached id, or None when the file is missing or unreadable."""
        try:
            return self.path.read_text()
        except (OSError, UnicodeDecodeError):
            return None

    def write(self, container_instance_id: str) -> None:
        try:
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CACHE_FILE_MODE)
            with os.fdopen(fd, "w") as f:
                f.write(container_instance_id)
        except OSError as e:
            raise CacheWriteError(str(self.path), e.strerror or str(e)) from e
