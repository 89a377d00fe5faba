"""Drain a container instance and wait for its tasks to leave."""

from __future__ import annotations

import queue

from ...core.base import ProgressCallback
from ...core.errors import DrainTimeoutError, InstanceHealthError
from ...core.types import ACTIVE, DEFAULT_CHECK_INTERVAL, DEFAULT_WAIT_TIMEOUT, DRAINING, DrainRequest, WaitState
from ...core.utils import print_info, print_warning
from ..identity.identity import IdentityResolver
from ..instance.state import InstanceStateService
from .timers import DisabledTimer, Ticker, TimerEvent, timeout_timer


class DrainWaiter:
    """Blocks until a draining instance runs zero tasks or the timeout fires.

    The first check runs before any timer exists. After that a poll ticker and
    a one-shot timeout timer feed a single queue, and every check runs on the
    calling thread, so task counts are never queried concurrently.
    """

    def __init__(
        self,
        state_service: InstanceStateService,
        cluster: str,
        ec2_instance_id: str,
        container_instance_id: str,
        progress: ProgressCallback = print_info,
    ) -> None:
        self.state_service = state_service
        self.cluster = cluster
        self.ec2_instance_id = ec2_instance_id
        self.container_instance_id = container_instance_id
        self.progress = progress
        self.state = WaitState.CHECKING
        self.ticks = 0
        self.running_tasks: int | None = None
        self.poll_timer: Ticker | None = None
        self.timeout_timer: Ticker | DisabledTimer | None = None

    def _check(self) -> WaitState:
        try:
            count = self.state_service.running_tasks(self.cluster, self.container_instance_id)
        except InstanceHealthError:
            self.state = WaitState.FAILED
            raise

        self.running_tasks = count
        if count == 0:
            self.progress(f"Instance {self.ec2_instance_id} has 0 tasks running")
            return WaitState.DONE
        self.progress(f"Instance {self.ec2_instance_id} still has {count} tasks running")
        return WaitState.WAITING

    def wait(self, poll_interval: float, timeout: float) -> None:
        self.state = self._check()
        if self.state is WaitState.DONE:
            return

        events: queue.Queue[TimerEvent] = queue.Queue()
        self.poll_timer = Ticker(poll_interval, events, TimerEvent.POLL)
        self.timeout_timer = timeout_timer(timeout, events)
        try:
            self.poll_timer.start()
            self.timeout_timer.start()
            while not self.state.is_terminal:
                event = events.get()
                # A fired timeout wins over any poll queued ahead of it.
                if event is TimerEvent.TIMEOUT or self.timeout_timer.triggered:
                    self.state = WaitState.TIMED_OUT
                    raise DrainTimeoutError(self.ec2_instance_id, timeout, self.running_tasks)
                self.poll_timer.acknowledge()
                self.ticks += 1
                self.state = self._check()
        finally:
            self.poll_timer.stop()
            self.timeout_timer.stop()


class DrainController:
    """Checks and drains ECS container instances identified by EC2 instance id."""

    def __init__(
        self,
        resolver: IdentityResolver,
        state_service: InstanceStateService,
        progress: ProgressCallback = print_info,
    ) -> None:
        self.resolver = resolver
        self.state_service = state_service
        self.progress = progress

    def container_instance_id(self, cluster: str, ec2_instance_id: str) -> str:
        resolved = self.resolver.resolve(cluster, ec2_instance_id)
        if resolved.cache_error:
            print_warning(str(resolved.cache_error))
        return resolved.container_instance_id

    def is_active(self, cluster: str, ec2_instance_id: str) -> tuple[bool, str]:
        """Return whether the instance is ACTIVE, and its raw status."""
        container_instance_id = self.container_instance_id(cluster, ec2_instance_id)
        state = self.state_service.current_state(cluster, container_instance_id)
        return state == ACTIVE, state

    def drain(
        self,
        cluster: str,
        ec2_instance_id: str,
        wait: bool = False,
        poll_interval: float = DEFAULT_CHECK_INTERVAL,
        timeout: float = DEFAULT_WAIT_TIMEOUT,
    ) -> None:
        """Set the instance to DRAINING, optionally waiting for its tasks to stop.

        Raises DrainTimeoutError when ``timeout`` seconds pass with tasks still
        running. A timeout of 0 waits forever.
        """
        container_instance_id = self.container_instance_id(cluster, ec2_instance_id)

        # Already draining instances are left alone.
        if self.state_service.current_state(cluster, container_instance_id) != DRAINING:
            self.state_service.set_draining(cluster, container_instance_id)
        self.progress(f"Instance {ec2_instance_id} has been set to DRAINING")

        if not wait:
            return

        waiter = DrainWaiter(self.state_service, cluster, ec2_instance_id, container_instance_id, self.progress)
        waiter.wait(poll_interval, timeout)

    def run(self, request: DrainRequest) -> None:
        self.drain(request.cluster, request.ec2_instance_id, request.wait, request.poll_interval, request.timeout)
