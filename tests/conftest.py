import os
import tempfile
from pathlib import Path

import pytest

# Point config loading at an empty directory BEFORE any imports from apnframe
_tmp_dir = tempfile.TemporaryDirectory(prefix="pytest_config_")
os.environ["CONFIG_PATH"] = str(Path(_tmp_dir.name) / "config.yaml")


@pytest.fixture(autouse=True)
def reset_cached_settings():
    """Reset cached settings after each test to prevent state leakage."""
    yield
    from apnframe.config import reset_settings

    reset_settings()


@pytest.fixture
def device_token() -> str:
    """A valid 64 hex character device token."""
    return "a1b2c3d4" * 8


@pytest.fixture
def token_bytes(device_token: str) -> bytes:
    """Raw bytes of the device_token fixture."""
    return bytes.fromhex(device_token)


@pytest.fixture
def auth_headers():
    """Valid authorization headers."""
    return {"Authorization": "Bearer test-token-123"}
