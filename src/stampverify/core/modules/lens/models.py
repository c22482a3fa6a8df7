"""Lens subgraph response shapes."""

from typing import Any

from pydantic import BaseModel, field_validator


class LensToken(BaseModel):
    id: str
    created: int  # Seconds since the epoch; subgraphs serialize BigInt as a string


class LensAccount(BaseModel):
    tokens: list[LensToken] = []

    @field_validator("tokens", mode="before")
    @classmethod
    def null_tokens_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class LensCheckResult(BaseModel):
    has_tokens: bool = False
    token_list: list[str] | None = None
