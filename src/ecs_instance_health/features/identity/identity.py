"""Resolve an EC2 instance id to its ECS container instance id."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from ...core.base import BaseAWSService
from ...core.errors import CacheWriteError, NotFoundError
from ...core.types import ResolvedIdentity
from ...core.utils import extract_name_from_arn
from .cache import IdentityCache

if TYPE_CHECKING:
    from mypy_boto3_ecs.client import ECSClient

CachePathFactory = Callable[[str, str], str]


def ec2_instance_filter(ec2_instance_id: str) -> str:
    """Cluster query language expression matching one EC2 instance."""
    return f"attribute:EC2_INSTANCE_ID=={ec2_instance_id}"


class IdentityResolver(BaseAWSService):
    """Looks up container instance ids, consulting a file cache first."""

    def __init__(self, ecs_client: ECSClient, cache_path: str | CachePathFactory) -> None:
        super().__init__(ecs_client)
        self._cache_path = cache_path

    def cache_for(self, cluster: str, ec2_instance_id: str) -> IdentityCache:
        if callable(self._cache_path):
            return IdentityCache(self._cache_path(cluster, ec2_instance_id))
        return IdentityCache(self._cache_path)

    def resolve(self, cluster: str, ec2_instance_id: str) -> ResolvedIdentity:
        """Return the container instance id for ``ec2_instance_id`` in ``cluster``.

        A readable cache file short-circuits the API call. Its contents are
        trusted as-is. On a miss the id is looked up and written back. A failed
        write is returned in ``cache_error`` rather than raised.
        """
        cache = self.cache_for(cluster, ec2_instance_id)
        cached = cache.read()
        if cached is not None:
            return ResolvedIdentity(cached)

        container_instance_id = self.lookup(cluster, ec2_instance_id)
        try:
            cache.write(container_instance_id)
        except CacheWriteError as e:
            return ResolvedIdentity(container_instance_id, cache_error=e)
        return ResolvedIdentity(container_instance_id)

    def lookup(self, cluster: str, ec2_instance_id: str) -> str:
        with self._transport("ListContainerInstances"):
            response = self.ecs_client.list_container_instances(
                cluster=cluster, filter=ec2_instance_filter(ec2_instance_id)
            )

        arns = response.get("containerInstanceArns", [])
        if not arns:
            raise NotFoundError(cluster, ec2_instance_id)
        return extract_name_from_arn(arns[0])
