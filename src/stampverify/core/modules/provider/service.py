from typing import TYPE_CHECKING

from stampverify.config import Config
from stampverify.core.core import Service
from stampverify.core.modules.provider.models import Provider, VerifiedPayload
from stampverify.errors import ValidationError

if TYPE_CHECKING:
    from stampverify.core.core import Core


class ProviderService(Service):
    """Registry of stamp providers, keyed by provider type."""

    def __init__(self, config: Config) -> None:
        super().__init__(config)
        self._providers: dict[str, Provider] = {}

    def set_core(self, core: "Core") -> None:
        super().set_core(core)
        self.register(core.services.lens)

    def register(self, provider: Provider) -> None:
        self._providers[provider.type] = provider

    def get_provider(self, provider_type: str) -> Provider:
        if provider_type not in self._providers:
            raise ValidationError(f"Unknown provider type: {provider_type}")
        return self._providers[provider_type]

    @property
    def provider_types(self) -> list[str]:
        return sorted(self._providers)

    async def verify(self, provider_type: str, address: str) -> VerifiedPayload:
        return await self.get_provider(provider_type).verify(address)
