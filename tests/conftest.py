"""Shared pytest fixtures for tests."""

from unittest.mock import Mock

import pytest

CONTAINER_INSTANCE_ARN = (
    "arn:aws:ecs:us-east-1:123456789012:container-instance/production/5e3b1f0c2a8d4e6f9b7c1d2e3f4a5b6c"
)


@pytest.fixture
def describe_response():
    def _response(status: str = "ACTIVE", running_tasks: int = 0) -> dict:
        return {
            "containerInstances": [
                {
                    "containerInstanceArn": CONTAINER_INSTANCE_ARN,
                    "ec2InstanceId": "i-0abc123def456",
                    "status": status,
                    "runningTasksCount": running_tasks,
                }
            ],
            "failures": [],
        }

    return _response


@pytest.fixture
def mock_ecs_client(describe_response):
    client = Mock()
    client.list_container_instances.return_value = {"containerInstanceArns": [CONTAINER_INSTANCE_ARN]}
    client.describe_container_instances.return_value = describe_response()
    client.update_container_instances_state.return_value = {"containerInstances": [], "failures": []}
    return client


@pytest.fixture
def cache_path(tmp_path):
    return tmp_path / "ecs-instance-health.cache"
