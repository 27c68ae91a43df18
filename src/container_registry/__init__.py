"""
Async client for the IBM Cloud Container Registry management API.
"""
from .container_registry_v1 import ContainerRegistryV1
from .errors import ApiException, ContainerRegistryError, ValidationError
from .regions import REGIONAL_ENDPOINTS, get_service_url_for_region
from .settings import Settings, create_settings_from_env
from .transport import (
    BasicAuthenticator,
    BearerTokenAuthenticator,
    DetailedResponse,
    HttpxTransport,
    NoAuthAuthenticator,
    RequestDescriptor,
    Transport,
)
from .version import __version__

__all__ = [
    "ContainerRegistryV1",
    "ApiException",
    "ContainerRegistryError",
    "ValidationError",
    "REGIONAL_ENDPOINTS",
    "get_service_url_for_region",
    "Settings",
    "create_settings_from_env",
    "BasicAuthenticator",
    "BearerTokenAuthenticator",
    "DetailedResponse",
    "HttpxTransport",
    "NoAuthAuthenticator",
    "RequestDescriptor",
    "Transport",
    "__version__",
]
