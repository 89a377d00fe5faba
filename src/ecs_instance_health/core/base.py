"""Base classes for AWS services."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from botocore.exceptions import BotoCoreError, ClientError

from .errors import TransportError

if TYPE_CHECKING:
    from mypy_boto3_ecs.client import ECSClient


class BaseAWSService:
    """Base class for AWS service interactions with common patterns."""

    def __init__(self, ecs_client: ECSClient) -> None:
        self.ecs_client = ecs_client

    @contextmanager
    def _transport(self, operation: str) -> Iterator[None]:
        """Turn botocore failures raised inside the block into TransportError."""
        try:
            yield
        except ClientError as e:
            raise TransportError(operation, format_client_error(e)) from e
        except BotoCoreError as e:
            raise TransportError(operation, str(e)) from e


def format_client_error(error: ClientError) -> str:
    """Render a ClientError as 'Code: Message'."""
    details = error.response.get("Error", {})
    code = details.get("Code", "Unknown")
    message = details.get("Message", str(error))
    return f"{code}: {message}"


ProgressCallback = Callable[[str], None]
