"""
Transport package - HTTP boundary of the Container Registry client.

The service builds RequestDescriptors; a Transport sends them and returns
DetailedResponses.
"""
from .authenticators import Authenticator, BasicAuthenticator, BearerTokenAuthenticator, NoAuthAuthenticator
from .base import DetailedResponse, RequestDescriptor, Transport
from .http import HttpxTransport

__all__ = [
    "Authenticator",
    "BasicAuthenticator",
    "BearerTokenAuthenticator",
    "NoAuthAuthenticator",
    "DetailedResponse",
    "RequestDescriptor",
    "Transport",
    "HttpxTransport",
]
