# erc7730_kg/core/config.py
"""
Central configuration for the ERC-7730 knowledge-graph tooling.

Environment variables (and an optional ``.env``) override defaults.
Per-network endpoints live in YAML (see ``core/networks.py``) so they can
be pointed at private deployments without code changes.
"""
from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven settings with sensible defaults."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="KG_", extra="ignore"
    )

    log_level: str = "INFO"
    log_json: bool = Field(default=True, description="Emit JSON log lines")

    # Hardhat / Ignition project layout, relative to the working directory
    deployments_dir: str = "ignition/deployments"
    artifacts_dir: str = "artifacts"
    default_chain_id: str = Field(
        default="31337", description="Chain id used when nothing else resolves"
    )

    networks_config_paths: list[str] = Field(
        default_factory=lambda: ["config/networks.yaml"]
    )

    # Descriptor generator
    generator_adapter: str = Field(
        default="erc7730_kg.core.generator.process:SubprocessGenerator",
        description="Import path of the GeneratorAdapter implementation",
    )
    generator_command: list[str] = Field(
        default_factory=lambda: ["erc7730-generate"],
        description="Command line of the external generator; the output path is appended",
    )

    # None disables timeouts on outgoing HTTP requests
    http_timeout: Optional[float] = None

    private_key: str = Field(
        default="",
        validation_alias=AliasChoices("PRIVATE_KEY", "KG_PRIVATE_KEY"),
        description="Signing key for publish transactions",
    )


settings = Settings()
