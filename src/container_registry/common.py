"""SDK identity headers attached to every request."""
from __future__ import annotations

import platform
from typing import Dict

from .version import __version__

__all__ = ["SDK_NAME", "get_sdk_headers", "get_user_agent"]

SDK_NAME = "container-registry-python-sdk"


def get_user_agent() -> str:
    return (
        f"{SDK_NAME}/{__version__} "
        f"(lang=python; os.name={platform.system()}; python.version={platform.python_version()})"
    )


def get_sdk_headers(service_name: str, service_version: str, operation_id: str) -> Dict[str, str]:
    """
    Build the correlation headers identifying this SDK and the operation.

    Args:
        service_name: Service identifier (e.g. "container_registry")
        service_version: API version (e.g. "v1")
        operation_id: Operation name (e.g. "list_images")
    """
    return {
        "User-Agent": get_user_agent(),
        "X-IBMCloud-SDK-Analytics": (
            f"service_name={service_name};service_version={service_version};"
            f"operation_id={operation_id}"
        ),
    }
