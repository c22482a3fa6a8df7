from typing import Literal

from pydantic_settings import BaseSettings

LENS_SUBGRAPHS = [
    "https://api.thegraph.com/subgraphs/name/lens-xyz/lens",
    "https://api.thegraph.com/subgraphs/name/lens-xyz/lens-xdai",
]


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    host: str = "127.0.0.1"
    port: int = 3100
    debug: bool = False
    cors_origins: list[str] = []
    idena_api_url: str = "https://api.idena.io"  # Base URL of the Idena indexer REST API
    http_timeout: float = 10.0  # Seconds, applied to every outbound request
    session_ttl: float = 300.0  # Seconds a sign-in session lives, regardless of progress
    session_expiry_mode: Literal["timer", "sweep"] = "timer"
    session_sweep_interval: float = 30.0  # Seconds between sweeps when session_expiry_mode="sweep"
    lens_subgraphs: list[str] = LENS_SUBGRAPHS  # Checked in order, first match wins
    lens_min_token_age_days: int = 15

    model_config = {
        "env_file": [".env"],
        "env_prefix": "STAMPVERIFY_",
        "extra": "ignore",
    }
