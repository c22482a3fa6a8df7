from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import cast

import httpx

from stampverify.config import Config
from stampverify.core.clock import Clock, MonotonicClock


class Service:
    """Base class for services with access to config and shared HTTP clients."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    from stampverify.core.modules.idena.service import IdenaService  # noqa: PLC0415
    from stampverify.core.modules.lens.service import LensService  # noqa: PLC0415
    from stampverify.core.modules.provider.service import ProviderService  # noqa: PLC0415
    from stampverify.core.modules.session.service import SessionService  # noqa: PLC0415

    session: SessionService
    idena: IdenaService
    lens: LensService
    provider: ProviderService

    def __init__(self, config: Config) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []

        # Service configuration: (attribute_name, module_path, class_name)
        # Order matters - provider registers the services before it
        service_configs = [
            ("session", "stampverify.core.modules.session.service", "SessionService"),
            ("idena", "stampverify.core.modules.idena.service", "IdenaService"),
            ("lens", "stampverify.core.modules.lens.service", "LensService"),
            ("provider", "stampverify.core.modules.provider.service", "ProviderService"),
        ]

        # Dynamically import and instantiate services
        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(config)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        """Start all services that have startup logic."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services in reverse order."""
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, clock, HTTP clients, and all service instances."""

    config: Config
    clock: Clock
    http_client: httpx.AsyncClient
    idena_client: httpx.AsyncClient
    services: Services

    def __init__(self, config: Config, clock: Clock | None = None, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialize core with config, HTTP clients, and auto-register services.

        Args:
            config: Application configuration
            clock: Time source for session expiry (monotonic by default)
            transport: Optional httpx transport shared by both clients (tests pass a MockTransport)
        """
        self.config = config
        self.clock = clock or MonotonicClock()
        self.http_client = httpx.AsyncClient(timeout=config.http_timeout, transport=transport)
        self.idena_client = httpx.AsyncClient(base_url=config.idena_api_url, timeout=config.http_timeout, transport=transport)
        self.services = Services(config)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Start all services on application startup."""
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close HTTP clients on shutdown."""
        await self.services.stop_all()
        await self.http_client.aclose()
        await self.idena_client.aclose()
