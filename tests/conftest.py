"""Root pytest configuration for container-registry-client tests."""
import pytest

from container_registry import ContainerRegistryV1
from container_registry.settings import Settings

from .fakes.fake_transport import FakeTransport

ACCOUNT = "testString"
SERVICE_URL = "https://us.icr.io"


# Keep the developer's environment out of settings-driven tests
@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Automatically set up test environment variables."""
    for name in (
        "CONTAINER_REGISTRY_URL",
        "CONTAINER_REGISTRY_REGION",
        "CONTAINER_REGISTRY_TIMEOUT",
        "CONTAINER_REGISTRY_MAX_RETRIES",
        "CONTAINER_REGISTRY_RETRY_INTERVAL",
        "CONTAINER_REGISTRY_DISABLE_SSL",
        "CONTAINER_REGISTRY_BEARER_TOKEN",
        "CONTAINER_REGISTRY_USERNAME",
        "CONTAINER_REGISTRY_PASSWORD",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CONTAINER_REGISTRY_ACCOUNT", ACCOUNT)
    monkeypatch.setenv("CONTAINER_REGISTRY_AUTH_TYPE", "noauth")


@pytest.fixture
def settings():
    """Standard test settings."""
    return Settings(account=ACCOUNT, service_url=SERVICE_URL)


@pytest.fixture
def transport():
    """Recording fake transport."""
    return FakeTransport()


@pytest.fixture
def service(transport):
    """Client wired to the fake transport."""
    return ContainerRegistryV1(ACCOUNT, service_url=SERVICE_URL, transport=transport)
