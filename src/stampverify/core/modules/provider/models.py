from typing import Protocol

from pydantic import BaseModel, Field


class VerifiedPayload(BaseModel):
    """Outcome of a provider check, handed to credential issuance."""

    valid: bool = Field(..., description="Whether the address satisfies the provider condition")
    record: dict[str, str] = Field(default_factory=dict, description="Provider-specific evidence, e.g. token ids")


class VerifyRequest(BaseModel):
    """Request to verify an address against one provider."""

    type: str = Field(..., min_length=1, description="Provider type, e.g. Lens")
    address: str = Field(..., min_length=1, description="Wallet address to verify")


class Provider(Protocol):
    """A check that turns an address into a VerifiedPayload."""

    type: str

    async def verify(self, address: str) -> VerifiedPayload: ...
