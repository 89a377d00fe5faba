"""AWS ECS service layer - handles all AWS API interactions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .core.base import ProgressCallback
from .core.types import DrainRequest
from .core.utils import print_info
from .features.drain.drain import DrainController
from .features.identity.identity import CachePathFactory, IdentityResolver
from .features.instance.state import InstanceStateService

if TYPE_CHECKING:
    from mypy_boto3_ecs.client import ECSClient


class ECSInstanceService:
    """Service for checking and draining ECS container instances."""

    def __init__(
        self,
        ecs_client: ECSClient,
        cache_path: str | CachePathFactory,
        progress: ProgressCallback = print_info,
    ) -> None:
        self.ecs_client = ecs_client
        # Initialize feature services
        self._resolver = IdentityResolver(ecs_client, cache_path)
        self._state = InstanceStateService(ecs_client)
        self._drain = DrainController(self._resolver, self._state, progress)

    def is_active(self, cluster: str, ec2_instance_id: str) -> tuple[bool, str]:
        """Check whether an EC2 instance is ACTIVE in the cluster."""
        return self._drain.is_active(cluster, ec2_instance_id)

    def drain(self, request: DrainRequest) -> None:
        """Set an EC2 instance to DRAINING, waiting for its tasks if requested."""
        self._drain.run(request)
