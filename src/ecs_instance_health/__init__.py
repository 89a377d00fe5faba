import argparse
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING

import boto3
from botocore.config import Config

if TYPE_CHECKING:
    from mypy_boto3_ecs import ECSClient

from .aws_service import ECSInstanceService
from .core.config import DEFAULT_CACHE_PATH, Settings
from .core.errors import DrainTimeoutError, InstanceHealthError
from .core.types import DEFAULT_CHECK_INTERVAL, DEFAULT_WAIT_TIMEOUT, DrainRequest
from .core.utils import console, print_error, print_success, print_warning, set_verbose, show_spinner

try:
    __version__ = version("ecs-instance-health")
except PackageNotFoundError:
    __version__ = "dev"

HELP_BLURB = """\
Determine if an EC2 instance is 'Active' in an ECS cluster, or set it to
DRAINING and optionally wait until all of its tasks have been removed.

Only a single action can be invoked in a single run. Credentials are taken
from the instance profile, environment variables or --profile.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ecs-instance-health",
        description=HELP_BLURB,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"ecs-instance-health {__version__}")
    parser.add_argument(
        "-i",
        "--instance-id",
        help="EC2 instance id. Pass - to read it from the instance metadata service",
        type=str,
        default="",
    )
    parser.add_argument("-c", "--cluster", help="Name of the ECS cluster", type=str, default="")
    parser.add_argument("--drain", help="Set the instance to DRAINING in its ECS cluster", action="store_true")
    parser.add_argument(
        "--is-active", help="Check whether the instance is ACTIVE in its ECS cluster", action="store_true"
    )
    parser.add_argument("--wait", help="With --drain, wait until there are 0 tasks running", action="store_true")
    parser.add_argument(
        "--wait-timeout",
        help="Maximum wait time in seconds for draining to complete, 0 waits forever",
        type=float,
        default=DEFAULT_WAIT_TIMEOUT,
    )
    parser.add_argument(
        "--check-interval",
        help="Wait time in seconds between checks for running tasks",
        type=float,
        default=DEFAULT_CHECK_INTERVAL,
    )
    parser.add_argument(
        "--cache-path",
        help="Path of the file caching the container instance id. {cluster} and {instance_id} are substituted",
        type=str,
        default=DEFAULT_CACHE_PATH,
    )
    parser.add_argument("--profile", help="AWS profile to use for authentication", type=str, default=None)
    parser.add_argument("--region", help="AWS region, guessed from the environment or metadata if unset", default=None)
    parser.add_argument("--verbose", help="Report successes as well as errors", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Check or drain an EC2 instance in an ECS cluster. Returns the exit code."""
    args = build_parser().parse_args(argv)
    settings = Settings.from_args(args)
    set_verbose(settings.verbose)

    if not (settings.drain or settings.is_active):
        console.print("No action specified.")
        return 1

    problems = settings.validate()
    if problems:
        for problem in problems:
            print_error(problem)
        return 1

    try:
        instance_id = settings.resolve_instance_id()
        ecs_client = _create_aws_client(settings.profile, settings.resolve_region())
        ecs_service = ECSInstanceService(ecs_client, settings.cache_path_for)

        if settings.is_active:
            return _is_active(ecs_service, settings.cluster, instance_id)

        request = DrainRequest(
            cluster=settings.cluster,
            ec2_instance_id=instance_id,
            wait=settings.wait,
            poll_interval=settings.check_interval,
            timeout=settings.wait_timeout,
        )
        ecs_service.drain(request)
    except DrainTimeoutError as e:
        print_warning(str(e))
        return 0
    except InstanceHealthError as e:
        print_error(str(e))
        return 1

    return 0


def _is_active(ecs_service: ECSInstanceService, cluster: str, instance_id: str) -> int:
    with show_spinner(f"Checking {instance_id} in {cluster}"):
        active, state = ecs_service.is_active(cluster, instance_id)
    message = f"instance {instance_id} is in state '{state}'"
    if not active:
        print_error(message)
        return 1
    print_success(message)
    return 0


def _create_aws_client(profile_name: str | None, region_name: str) -> "ECSClient":
    """Create an ECS client that surfaces failures instead of retrying them."""
    config = Config(
        max_pool_connections=5,
        retries={"total_max_attempts": 1, "mode": "standard"},
    )

    session = boto3.Session(profile_name=profile_name) if profile_name else boto3
    return session.client("ecs", region_name=region_name, config=config)


if __name__ == "__main__":
    sys.exit(main())
