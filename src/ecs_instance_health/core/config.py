"""Runtime settings built from command line arguments and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from . import metadata
from .errors import ConfigurationError, MetadataError
from .types import DEFAULT_CHECK_INTERVAL, DEFAULT_WAIT_TIMEOUT

if TYPE_CHECKING:
    import argparse

DEFAULT_CACHE_PATH = "ecs-instance-health-{cluster}-{instance_id}.cache"
METADATA_INSTANCE_ID = "-"


@dataclass
class Settings:
    cluster: str = ""
    instance_id: str = ""
    drain: bool = False
    is_active: bool = False
    wait: bool = False
    wait_timeout: float = DEFAULT_WAIT_TIMEOUT
    check_interval: float = DEFAULT_CHECK_INTERVAL
    cache_path: str = DEFAULT_CACHE_PATH
    profile: str | None = None
    region: str | None = None
    verbose: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> Settings:
        return cls(
            cluster=args.cluster or "",
            instance_id=args.instance_id or "",
            drain=args.drain,
            is_active=args.is_active,
            wait=args.wait,
            wait_timeout=args.wait_timeout,
            check_interval=args.check_interval,
            cache_path=args.cache_path,
            profile=args.profile,
            region=args.region,
            verbose=args.verbose,
        )

    def validate(self) -> list[str]:
        """Return every problem with the requested action, empty when runnable."""
        errors = []
        if self.drain or self.is_active:
            if not self.instance_id:
                errors.append("-i instance_id must be specified")
            if not self.cluster:
                errors.append("-c cluster must be supplied")
        if self.drain and self.is_active:
            errors.append("--drain and --is-active can not be used together")
        if self.wait_timeout < 0:
            errors.append("--wait-timeout can not be negative")
        if self.check_interval < 0:
            errors.append("--check-interval can not be negative")
        elif self.wait and self.check_interval == 0:
            errors.append("--check-interval must be greater than 0")
        return errors

    def cache_path_for(self, cluster: str, instance_id: str) -> str:
        """Render the cache path template for one (cluster, instance) pair."""
        try:
            return self.cache_path.format(cluster=cluster, instance_id=instance_id)
        except (KeyError, IndexError, ValueError) as e:
            raise ConfigurationError(f"Invalid cache path template {self.cache_path!r}: {e}") from e

    def resolve_instance_id(self) -> str:
        if self.instance_id == METADATA_INSTANCE_ID:
            try:
                return metadata.instance_id()
            except MetadataError as e:
                raise ConfigurationError(f"Could not determine instance id. Error: {e}") from e
        return self.instance_id

    def resolve_region(self) -> str:
        """Region from the flag, then the environment, then the metadata service."""
        region = self.region or os.environ.get("AWS_REGION") or os.environ.get("AWS_DEFAULT_REGION")
        if region:
            return region
        try:
            return metadata.region()
        except MetadataError as e:
            raise ConfigurationError(f"AWS_REGION is not set. Attempted guess failed. Error: {e}") from e
