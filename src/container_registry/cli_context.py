"""
CLI Context for managing application dependencies.

Provides a clean way to manage CLI-level dependencies like settings and the
registry client, avoiding global state and enabling dependency injection
in tests.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from .container_registry_v1 import ContainerRegistryV1
from .settings import Settings, create_settings_from_env

T = TypeVar("T")


@dataclass
class CLIContext:
    """
    Shared context for CLI commands.

    Holds the settings and the registry client for one CLI command
    execution.
    """
    settings: Settings
    _service: Optional[ContainerRegistryV1] = None

    @classmethod
    def from_env(cls) -> CLIContext:
        """
        Create CLI context from environment variables.

        Returns:
            CLIContext with settings loaded from environment
        """
        return cls(settings=create_settings_from_env())

    @property
    def service(self) -> ContainerRegistryV1:
        """Get or create the registry client (lazy initialization)."""
        if self._service is None:
            self._service = ContainerRegistryV1.new_instance(self.settings)
        return self._service

    def run(self, call: Callable[[ContainerRegistryV1], Awaitable[T]]) -> T:
        """
        Run one client call to completion on a fresh event loop.

        The client is closed afterwards; a context serves a single command.
        """
        service = self.service

        async def _run() -> T:
            try:
                return await call(service)
            finally:
                await service.aclose()

        return asyncio.run(_run())
