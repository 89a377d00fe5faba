"""Type definitions for ecs-instance-health."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .errors import CacheWriteError

ACTIVE = "ACTIVE"
DRAINING = "DRAINING"

DEFAULT_WAIT_TIMEOUT = 600
DEFAULT_CHECK_INTERVAL = 10


@dataclass(frozen=True)
class ResolvedIdentity:
    """Container instance id plus the cache write failure, if any."""

    container_instance_id: str
    cache_error: CacheWriteError | None = None


@dataclass(frozen=True)
class InstanceStatus:
    status: str
    running_tasks_count: int


@dataclass(frozen=True)
class DrainRequest:
    """Parameters of a single drain run. A timeout of 0 waits forever."""

    cluster: str
    ec2_instance_id: str
    wait: bool = False
    poll_interval: float = DEFAULT_CHECK_INTERVAL
    timeout: float = DEFAULT_WAIT_TIMEOUT


class WaitState(Enum):
    """States of the drain wait loop."""

    CHECKING = "checking"
    WAITING = "waiting"
    DONE = "done"
    TIMED_OUT = "timed_out"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (WaitState.DONE, WaitState.TIMED_OUT, WaitState.FAILED)
