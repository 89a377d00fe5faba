"""Error kinds raised by ecs-instance-health."""

from __future__ import annotations


class InstanceHealthError(Exception):
    """Base class for every error this tool reports."""


class TransportError(InstanceHealthError):
    """An AWS API call failed."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.message = message


class NotFoundError(InstanceHealthError):
    """No container instance matched the lookup."""

    def __init__(self, cluster: str, instance: str) -> None:
        super().__init__(f"No container instances found for {instance} in cluster {cluster}")
        self.cluster = cluster
        self.instance = instance


class CacheWriteError(InstanceHealthError):
    """The identity was resolved but could not be written to the cache file.

    Never raised past the resolver: it travels alongside the resolved identity
    so callers can report it as a warning.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not write cache file {path}: {reason}")
        self.path = path
        self.reason = reason


class DrainTimeoutError(InstanceHealthError):
    """Tasks were still running when the wait timeout elapsed.

    Callers may treat this as a soft failure.
    """

    def __init__(self, instance_id: str, timeout: float, running_tasks: int | None = None) -> None:
        super().__init__("Timeout reached waiting for tasks to drain")
        self.instance_id = instance_id
        self.timeout = timeout
        self.running_tasks = running_tasks


class MetadataError(InstanceHealthError):
    """The EC2 instance metadata service could not answer."""


class ConfigurationError(InstanceHealthError):
    """Settings are missing or inconsistent."""
