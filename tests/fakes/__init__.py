# Fake implementations for testing

from .fake_transport import FakeTransport

__all__ = ["FakeTransport"]
