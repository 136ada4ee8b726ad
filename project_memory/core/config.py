# Copyright (c) 2026 Project Memory Contributors. All Rights Reserved.

"""
Server Configuration — Environment-driven settings.

All configuration is loaded from PROJECT_MEMORY_* environment variables
(or a .env file). Prompt resolution itself reads no settings: the project
root is always the process working directory.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class PromptServerSettings(BaseSettings):
    """Process-wide configuration loaded from environment."""

    # --- Identity ---
    SERVER_NAME: str = Field(
        default="project-memory-mcp",
        description="Name reported to MCP clients during initialization",
    )
    SERVER_VERSION: str = Field(default="0.1.0")

    # --- Logging ---
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(
        default="json",
        description="Log line format: json | plain",
    )

    # --- HTTP transport ---
    HTTP_HOST: str = Field(
        default="127.0.0.1",
        description="Bind host when serving the HTTP API",
    )
    HTTP_PORT: int = Field(
        default=8765,
        description="Bind port when serving the HTTP API",
    )

    model_config = {
        "env_prefix": "PROJECT_MEMORY_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }


# Global singleton
settings = PromptServerSettings()
