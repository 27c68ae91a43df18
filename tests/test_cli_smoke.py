"""
CLI smoke tests with a fake transport.

Tests basic CLI functionality and command wiring without a real registry.
CLIContext.from_env is patched to hand commands a client backed by
FakeTransport, so each test can check both the request that was sent and
the text the command printed.
"""
from __future__ import annotations

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from container_registry import ContainerRegistryV1
from container_registry.cli import app
from container_registry.cli_context import CLIContext
from container_registry.errors import ApiException
from container_registry.settings import Settings
from tests.conftest import ACCOUNT, SERVICE_URL
from tests.fakes.fake_transport import FakeTransport


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fake():
    return FakeTransport()


@pytest.fixture
def invoke(runner, fake):
    """Invoke the CLI with a context whose client talks to the fake transport."""
    def _invoke(*args):
        context = CLIContext(
            settings=Settings(account=ACCOUNT, service_url=SERVICE_URL),
            _service=ContainerRegistryV1(ACCOUNT, service_url=SERVICE_URL, transport=fake),
        )
        with patch("container_registry.cli.CLIContext.from_env", return_value=context):
            return runner.invoke(app, list(args))
    return _invoke


class TestOfflineCommands:
    def test_regions(self, runner):
        result = runner.invoke(app, ["regions"])

        assert result.exit_code == 0
        assert "us-south" in result.stdout
        assert "https://jp2.icr.io" in result.stdout

    def test_region_url(self, runner):
        result = runner.invoke(app, ["region-url", "eu-de"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "https://de.icr.io"

    def test_unknown_region(self, runner):
        result = runner.invoke(app, ["region-url", "mars-1"])

        assert result.exit_code == 1
        assert "Unknown region: mars-1" in result.output


class TestNamespaceCommands:
    def test_list(self, invoke, fake):
        fake.respond("GET", "/api/v1/namespaces", ["alpha", "beta"])

        result = invoke("namespaces")

        assert result.exit_code == 0
        assert result.stdout.splitlines() == ["alpha", "beta"]
        assert fake.closed

    def test_list_empty(self, invoke, fake):
        fake.respond("GET", "/api/v1/namespaces", [])

        result = invoke("namespaces")

        assert "No namespaces found" in result.stdout

    def test_details(self, invoke, fake):
        fake.respond("GET", "/api/v1/namespaces/details", [
            {"name": "alpha", "resource_group": "rg1", "created_date": "2020-01-01"},
        ])

        result = invoke("namespaces", "--details")

        assert result.exit_code == 0
        assert "alpha  resource_group=rg1  created=2020-01-01" in result.stdout

    def test_create_with_resource_group(self, invoke, fake):
        result = invoke("namespace-create", "alpha", "--resource-group", "rg1")

        assert result.exit_code == 0
        assert "Created namespace alpha" in result.stdout
        sent = fake.last_request
        assert (sent.method, sent.url, sent.path_params) == ("PUT", "/api/v1/namespaces/{name}", {"name": "alpha"})
        assert sent.headers["X-Auth-Resource-Group"] == "rg1"

    def test_delete(self, invoke, fake):
        result = invoke("namespace-delete", "alpha")

        assert result.exit_code == 0
        assert "Deleted namespace alpha" in result.stdout
        assert fake.last_request.method == "DELETE"


class TestImageCommands:
    def test_images(self, invoke, fake):
        fake.respond("GET", "/api/v1/images", [
            {"RepoTags": ["us.icr.io/ns/app:1.0", "us.icr.io/ns/app:latest"], "Size": 2048, "Created": 0},
        ])

        result = invoke("images", "--namespace", "ns", "--include-ibm")

        assert result.exit_code == 0
        assert "us.icr.io/ns/app:1.0" in result.stdout
        assert "us.icr.io/ns/app:latest" in result.stdout
        assert "2.0 KB" in result.stdout
        assert fake.last_request.query == {"namespace": "ns", "includeIBM": True}

    def test_image_inspect(self, invoke, fake):
        fake.respond("GET", "/api/v1/images/{image}/json", {
            "Id": "sha256:abc", "Os": "linux", "Architecture": "amd64", "Size": 10,
        })

        result = invoke("image-inspect", "us.icr.io/ns/app:1.0")

        assert result.exit_code == 0
        assert "Id: sha256:abc" in result.stdout
        assert "Platform: linux/amd64" in result.stdout

    def test_tag(self, invoke, fake):
        result = invoke("tag", "us.icr.io/ns/app:1.0", "us.icr.io/ns/app:stable")

        assert result.exit_code == 0
        assert "Tagged us.icr.io/ns/app:1.0 as us.icr.io/ns/app:stable" in result.stdout
        assert fake.last_request.query == {
            "fromimage": "us.icr.io/ns/app:1.0",
            "toimage": "us.icr.io/ns/app:stable",
        }

    def test_image_delete_not_found(self, invoke, fake):
        fake.fail_with(ApiException(404, "The image does not exist."))

        result = invoke("image-delete", "us.icr.io/ns/app:gone")

        assert result.exit_code == 1
        assert "The image does not exist." in result.output


class TestAccountCommands:
    def test_quota(self, invoke, fake):
        fake.respond("GET", "/api/v1/quotas", {
            "usage": {"storage_bytes": 1024, "traffic_bytes": 0},
            "limit": {"storage_bytes": -1, "traffic_bytes": -1},
        })

        result = invoke("quota")

        assert result.exit_code == 0
        assert "Usage: storage 1.0 KB, traffic 0 B" in result.stdout
        assert "Limit: storage unlimited, traffic unlimited" in result.stdout

    def test_plans(self, invoke, fake):
        fake.respond("GET", "/api/v1/plans", {"plan": "Standard"})

        result = invoke("plans")

        assert result.stdout.strip() == "Plan: Standard"

    def test_settings(self, invoke, fake):
        fake.respond("GET", "/api/v1/settings", {"platform_metrics": True})

        result = invoke("settings")

        assert result.stdout.strip() == "Platform metrics: on"

    def test_messages_empty(self, invoke, fake):
        result = invoke("messages")

        assert result.exit_code == 0
        assert "No service messages" in result.stdout
        assert "Account" not in fake.last_request.headers

    def test_unauthorized_maps_to_exit_3(self, invoke, fake):
        fake.fail_with(ApiException(401, "Unauthorized"))

        result = invoke("quota")

        assert result.exit_code == 3


class TestRetentionCommands:
    def test_get(self, invoke, fake):
        fake.respond("GET", "/api/v1/retentions/{namespace}", {
            "namespace": "alpha", "images_per_repo": -1, "retain_untagged": False,
        })

        result = invoke("retention-get", "alpha")

        assert result.exit_code == 0
        assert "Images per repository: unlimited" in result.stdout
        assert "Retain untagged: off" in result.stdout

    def test_set(self, invoke, fake):
        result = invoke("retention-set", "alpha", "--images-per-repo", "5", "--no-retain-untagged")

        assert result.exit_code == 0
        assert "Retention policy set for alpha" in result.stdout
        assert fake.last_request.body == {"namespace": "alpha", "images_per_repo": 5, "retain_untagged": False}

    def test_analyze(self, invoke, fake):
        fake.respond("POST", "/api/v1/retentions/analyze", {"us.icr.io/alpha/app": ["us.icr.io/alpha/app:old"]})

        result = invoke("retention-set", "alpha", "--images-per-repo", "1", "--analyze")

        assert result.exit_code == 0
        assert "Would delete: us.icr.io/alpha/app:old" in result.stdout
        assert fake.last_request.url == "/api/v1/retentions/analyze"


class TestTrashCommands:
    def test_trash(self, invoke, fake):
        fake.respond("GET", "/api/v1/trash", {
            "us.icr.io/ns/app@sha256:1": {"daysUntilExpiry": 20, "tags": ["1.0"]},
        })

        result = invoke("trash", "--namespace", "ns")

        assert result.exit_code == 0
        assert "us.icr.io/ns/app@sha256:1  expires in 20 days  tags: 1.0" in result.stdout
        assert fake.last_request.query == {"namespace": "ns"}

    def test_trash_empty(self, invoke, fake):
        result = invoke("trash")

        assert "Trash is empty" in result.stdout

    def test_restore_tags(self, invoke, fake):
        fake.respond("POST", "/api/v1/trash/{digest}/restoretags", {
            "successful": ["us.icr.io/ns/app:1.0"], "unsuccessful": ["us.icr.io/ns/app:2.0"],
        })

        result = invoke("restore", "us.icr.io/ns/app@sha256:1", "--tags")

        assert result.exit_code == 0
        assert "Restored: us.icr.io/ns/app:1.0" in result.stdout
        assert "Not restored: us.icr.io/ns/app:2.0" in result.stdout

    def test_restore_image(self, invoke, fake):
        result = invoke("restore", "us.icr.io/ns/app:1.0")

        assert result.exit_code == 0
        assert "Restored us.icr.io/ns/app:1.0" in result.stdout
        assert fake.last_request.path_params == {"image": "us.icr.io/ns/app:1.0"}


class TestConfigurationErrors:
    def test_missing_account(self, runner, monkeypatch):
        monkeypatch.delenv("CONTAINER_REGISTRY_ACCOUNT")

        result = runner.invoke(app, ["quota"])

        assert result.exit_code == 2
        assert "CONTAINER_REGISTRY_ACCOUNT environment variable is required" in result.output
