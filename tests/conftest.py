"""Shared fixtures for PteroStatus tests."""

import copy
import json
from typing import Any, Dict

import pytest

from pterostatus.config import ConfigurationSet

SERVER_PAYLOAD: Dict[str, Any] = {
    "object": "server",
    "attributes": {
        "uuid": "d3aac109-e5a0-4331-b03e-3454f7e136dc",
        "identifier": "d3aac109",
        "name": "Vanilla",
        "node": "node-01",
        "description": "Survival world",
        "limits": {"memory": 4096, "swap": 0, "disk": 20480, "io": 500, "cpu": 200},
        "feature_limits": {"databases": 1, "allocations": 2, "backups": 3},
        "relationships": {
            "allocations": {
                "object": "list",
                "data": [
                    {
                        "object": "allocation",
                        "attributes": {
                            "id": 1,
                            "ip": "10.0.0.5",
                            "ip_alias": "play.darkwindcraft.com",
                            "port": 25565,
                            "is_default": True,
                        },
                    }
                ],
            }
        },
    },
}

RESOURCES_PAYLOAD: Dict[str, Any] = {
    "object": "stats",
    "attributes": {
        "current_state": "running",
        "is_suspended": False,
        "resources": {
            "memory_bytes": 1048576 * 1536,
            "cpu_absolute": 12.5,
            "disk_bytes": 1048576 * 3000 + 12345,
            "network_rx_bytes": 2048,
            "network_tx_bytes": 4096,
            "uptime": 3600000,
        },
    },
}


@pytest.fixture
def server_payload() -> Dict[str, Any]:
    """A fresh copy of a panel server document."""
    return copy.deepcopy(SERVER_PAYLOAD)


@pytest.fixture
def resources_payload() -> Dict[str, Any]:
    """A fresh copy of a panel resources document."""
    return copy.deepcopy(RESOURCES_PAYLOAD)


@pytest.fixture
def server_body(server_payload) -> bytes:
    return json.dumps(server_payload).encode()


@pytest.fixture
def resources_body(resources_payload) -> bytes:
    return json.dumps(resources_payload).encode()


@pytest.fixture
def config() -> ConfigurationSet:
    """Configuration with two servers."""
    return ConfigurationSet(
        api_url="https://panel.example.com",
        api_key="test-api-key",
        server_uuids=("A", "B"),
        bot_token="test-bot-token",
    )
