"""EC2 instance metadata lookups."""

from __future__ import annotations

import requests

from .errors import MetadataError

METADATA_PREFIX = "http://169.254.169.254/latest/meta-data"
REQUEST_TIMEOUT = 2  # seconds


def _get(path: str, what: str) -> str:
    try:
        response = requests.get(f"{METADATA_PREFIX}/{path}", timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        raise MetadataError(f"Could not reach the metadata service while getting the {what}. Error: {e}") from e

    if response.status_code != 200:
        raise MetadataError(
            f"Could not get the {what} from the meta-data service. "
            f"Status code of the response: {response.status_code}"
        )
    return response.text


def instance_id() -> str:
    """Return the id of the EC2 instance this process runs on."""
    return _get("instance-id", "instance id")


def region() -> str:
    """Guess the region by dropping the zone letter from the availability zone."""
    availability_zone = _get("placement/availability-zone", "instance region")
    if not availability_zone:
        raise MetadataError("The meta-data service returned an empty availability zone")
    return availability_zone[:-1]
