"""quicky-setup configuration.

Centralised, typed configuration for the scaffolder. All settings use
Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class Config(BaseModel):
    """Global quicky-setup configuration.

    Holds the pinned generator versions, the commands used to reach the
    JavaScript toolchain and the defaults baked into generated env files.
    Instances are typically created once by the CLI entry point and then
    passed to ``ScaffoldPipeline`` / ``FeatureAdder``.
    """

    # Pinned upstream generators
    next_version: str = Field(default="14.2.3")
    vite_version: str = Field(default="5.2.0")

    # Toolchain commands
    package_manager: str = Field(default="npm")
    npx: str = Field(default="npx")
    git: str = Field(default="git")
    init_git: bool = Field(default=True)
    command_timeout: int | None = Field(
        default=None, ge=1, description="Per-command timeout in seconds (None waits forever)"
    )

    # Generated .env defaults
    api_url: str = Field(default="http://localhost:3000/api")
    socket_url: str = Field(default="http://localhost:3000")
    secret_length: int = Field(default=32, ge=16)

    # Project snapshot written by ``init`` and read back by ``add``
    snapshot_name: str = Field(default=".quicky.json")

    # Self-update check
    package_name: str = Field(default="quicky-setup")
    index_url: str = Field(default="https://pypi.org/pypi")
    index_timeout: float = Field(default=10.0, gt=0)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            QUICKY_NEXT_VERSION, QUICKY_VITE_VERSION, QUICKY_PACKAGE_MANAGER,
            QUICKY_NPX, QUICKY_GIT, QUICKY_INIT_GIT, QUICKY_COMMAND_TIMEOUT,
            QUICKY_API_URL, QUICKY_SOCKET_URL, QUICKY_INDEX_URL.
        """
        kwargs: dict[str, Any] = {}
        string_vars = {
            "QUICKY_NEXT_VERSION": "next_version",
            "QUICKY_VITE_VERSION": "vite_version",
            "QUICKY_PACKAGE_MANAGER": "package_manager",
            "QUICKY_NPX": "npx",
            "QUICKY_GIT": "git",
            "QUICKY_API_URL": "api_url",
            "QUICKY_SOCKET_URL": "socket_url",
            "QUICKY_INDEX_URL": "index_url",
        }
        for env_name, field_name in string_vars.items():
            if os.environ.get(env_name):
                kwargs[field_name] = os.environ[env_name]

        if os.environ.get("QUICKY_INIT_GIT"):
            kwargs["init_git"] = os.environ["QUICKY_INIT_GIT"].strip().lower() not in (
                "0",
                "false",
                "no",
                "off",
            )
        if os.environ.get("QUICKY_COMMAND_TIMEOUT"):
            kwargs["command_timeout"] = int(os.environ["QUICKY_COMMAND_TIMEOUT"])

        return cls(**kwargs)
