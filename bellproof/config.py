"""
Configuration management for bellproof.

This module provides centralized configuration for:
- Prover selection and table size bounds
- Default canonicalization policy
- Logging settings
"""

import os
from typing import Literal, cast

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables from .env file
load_dotenv()

ProverName = Literal["auto", "naive", "hash", "compact"]
CanonName = Literal["copy", "full-cyclic", "fixed-treble-cyclic", "full-dihedral"]
LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ProvingConfig(BaseModel):
    """Configuration for truth provers."""

    compact_hash_max_stage: int = Field(
        default=10,
        ge=1,
        le=12,
        description="Largest stage for which CompactHashProver allocates its stage! table",
    )
    hash_max_stage: int = Field(
        default=8,
        ge=1,
        le=8,
        description="Largest stage for which HashProver allocates its stage**stage bitmap",
    )
    preferred_prover: ProverName = Field(
        default="auto",
        description="Prover used by prover_for_stage ('auto' picks by stage)",
    )
    default_canon: CanonName = Field(
        default="copy", description="Canonicalization policy used when none is given"
    )


class LogConfig(BaseModel):
    """Configuration for logging system."""

    level: LogLevel = Field(default="INFO", description="Logging level")
    format: str = Field(
        default="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[component]}</cyan> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
        "<level>{message}</level>",
        description="Log message format",
    )
    enable_console_logging: bool = Field(
        default=True, description="Whether to enable console logging"
    )


class Config(BaseModel):
    """Main configuration object for bellproof."""

    proving: ProvingConfig = Field(default_factory=ProvingConfig)
    logging: LogConfig = Field(default_factory=LogConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        return cls(
            proving=ProvingConfig(
                compact_hash_max_stage=int(
                    os.getenv("BELLPROOF_COMPACT_MAX_STAGE", "10")
                ),
                preferred_prover=cast(
                    ProverName, os.getenv("BELLPROOF_PREFERRED_PROVER", "auto")
                ),
                default_canon=cast(
                    CanonName, os.getenv("BELLPROOF_DEFAULT_CANON", "copy")
                ),
            ),
            logging=LogConfig(level=cast(LogLevel, os.getenv("LOG_LEVEL", "INFO"))),
        )


# Global configuration instance
config = Config.from_env()
