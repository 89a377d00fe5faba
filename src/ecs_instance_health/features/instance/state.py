"""Container instance state queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...core.base import BaseAWSService
from ...core.errors import NotFoundError, TransportError
from ...core.types import DRAINING, InstanceStatus

if TYPE_CHECKING:
    from mypy_boto3_ecs.client import ECSClient


class InstanceStateService(BaseAWSService):
    """Reads and changes the lifecycle state of one container instance."""

    def __init__(self, ecs_client: ECSClient) -> None:
        super().__init__(ecs_client)

    def describe(self, cluster: str, container_instance_id: str) -> InstanceStatus:
        with self._transport("DescribeContainerInstances"):
            response = self.ecs_client.describe_container_instances(
                cluster=cluster, containerInstances=[container_instance_id]
            )

        instances = response.get("containerInstances", [])
        if not instances:
            raise NotFoundError(cluster, container_instance_id)

        instance = instances[0]
        return InstanceStatus(
            status=instance.get("status", ""),
            running_tasks_count=instance.get("runningTasksCount", 0),
        )

    def current_state(self, cluster: str, container_instance_id: str) -> str:
        return self.describe(cluster, container_instance_id).status

    def running_tasks(self, cluster: str, container_instance_id: str) -> int:
        return self.describe(cluster, container_instance_id).running_tasks_count

    def set_draining(self, cluster: str, container_instance_id: str) -> None:
        with self._transport("UpdateContainerInstancesState"):
            response = self.ecs_client.update_container_instances_state(
                cluster=cluster, containerInstances=[container_instance_id], status=DRAINING
            )

        failures = response.get("failures", [])
        if failures:
            failure = failures[0]
            if failure.get("reason") == "MISSING":
                raise NotFoundError(cluster, container_instance_id)
            detail = failure.get("detail")
            reason = failure.get("reason", "Unknown")
            raise TransportError("UpdateContainerInstancesState", f"{reason}: {detail}" if detail else reason)
