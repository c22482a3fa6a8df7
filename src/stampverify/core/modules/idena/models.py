"""Identity payloads returned by authenticated Idena queries."""

from pydantic import BaseModel, ConfigDict, Field


class IdentityPayload(BaseModel):
    """Fields shared by every authenticated identity query."""

    address: str = Field(..., description="Address bound to the session")
    expiration_date: str = Field(
        ..., alias="expirationDate", description="Validation time of the last epoch, when the stamp expires"
    )

    model_config = ConfigDict(populate_by_name=True)


class IdentityState(IdentityPayload):
    state: str = Field(..., description="Identity state, e.g. Human, Verified, Newbie")


class IdentityAge(IdentityPayload):
    age: int = Field(..., description="Identity age in epochs")


class IdentityStake(IdentityPayload):
    stake: float = Field(..., description="Stake held by the identity")
