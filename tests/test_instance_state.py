"""Tests for container instance state queries."""

from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from ecs_instance_health.core.errors import NotFoundError, TransportError
from ecs_instance_health.features.instance.state import InstanceStateService

CLUSTER = "production"
CONTAINER_INSTANCE_ID = "5e3b1f0c2a8d4e6f9b7c1d2e3f4a5b6c"


def test_current_state_returns_status_verbatim(describe_response):
    mock_ecs_client = Mock()
    mock_ecs_client.describe_container_instances.return_value = describe_response(status="REGISTERING")
    service = InstanceStateService(mock_ecs_client)

    assert service.current_state(CLUSTER, CONTAINER_INSTANCE_ID) == "REGISTERING"
    mock_ecs_client.describe_container_instances.assert_called_once_with(
        cluster=CLUSTER, containerInstances=[CONTAINER_INSTANCE_ID]
    )


def test_running_tasks_returns_count(describe_response):
    mock_ecs_client = Mock()
    mock_ecs_client.describe_container_instances.return_value = describe_response(running_tasks=4)

    assert InstanceStateService(mock_ecs_client).running_tasks(CLUSTER, CONTAINER_INSTANCE_ID) == 4


def test_describe_with_no_instances_raises_not_found():
    mock_ecs_client = Mock()
    mock_ecs_client.describe_container_instances.return_value = {
        "containerInstances": [],
        "failures": [{"arn": CONTAINER_INSTANCE_ID, "reason": "MISSING"}],
    }
    service = InstanceStateService(mock_ecs_client)

    with pytest.raises(NotFoundError):
        service.current_state(CLUSTER, CONTAINER_INSTANCE_ID)
    with pytest.raises(NotFoundError):
        service.running_tasks(CLUSTER, CONTAINER_INSTANCE_ID)


def test_describe_client_error_raises_transport_error_once():
    mock_ecs_client = Mock()
    mock_ecs_client.describe_container_instances.side_effect = ClientError(
        {"Error": {"Code": "AccessDeniedException", "Message": "User is not authorized"}},
        "DescribeContainerInstances",
    )
    service = InstanceStateService(mock_ecs_client)

    with pytest.raises(TransportError) as excinfo:
        service.running_tasks(CLUSTER, CONTAINER_INSTANCE_ID)

    assert str(excinfo.value) == "DescribeContainerInstances failed: AccessDeniedException: User is not authorized"
    assert isinstance(excinfo.value.__cause__, ClientError)
    assert mock_ecs_client.describe_container_instances.call_count == 1


def test_describe_connection_error_raises_transport_error():
    mock_ecs_client = Mock()
    mock_ecs_client.describe_container_instances.side_effect = EndpointConnectionError(
        endpoint_url="https://ecs.us-east-1.amazonaws.com"
    )

    with pytest.raises(TransportError) as excinfo:
        InstanceStateService(mock_ecs_client).current_state(CLUSTER, CONTAINER_INSTANCE_ID)

    assert "Could not connect" in str(excinfo.value)


def test_set_draining_updates_state():
    mock_ecs_client = Mock()
    mock_ecs_client.update_container_instances_state.return_value = {"containerInstances": [], "failures": []}

    InstanceStateService(mock_ecs_client).set_draining(CLUSTER, CONTAINER_INSTANCE_ID)

    mock_ecs_client.update_container_instances_state.assert_called_once_with(
        cluster=CLUSTER, containerInstances=[CONTAINER_INSTANCE_ID], status="DRAINING"
    )


def test_set_draining_missing_instance_raises_not_found():
    mock_ecs_client = Mock()
    mock_ecs_client.update_container_instances_state.return_value = {
        "containerInstances": [],
        "failures": [{"arn": CONTAINER_INSTANCE_ID, "reason": "MISSING"}],
    }

    with pytest.raises(NotFoundError):
        InstanceStateService(mock_ecs_client).set_draining(CLUSTER, CONTAINER_INSTANCE_ID)


def test_set_draining_rejected_transition_raises_transport_error():
    mock_ecs_client = Mock()
    mock_ecs_client.update_container_instances_state.return_value = {
        "containerInstances": [],
        "failures": [{"arn": CONTAINER_INSTANCE_ID, "reason": "INVALID_STATE", "detail": "Instance is deregistering"}],
    }

    with pytest.raises(TransportError) as excinfo:
        InstanceStateService(mock_ecs_client).set_draining(CLUSTER, CONTAINER_INSTANCE_ID)

    assert excinfo.value.message == "INVALID_STATE: Instance is deregistering"
