"""Self-update check against the package index."""

from __future__ import annotations

from importlib import metadata

import httpx
from pydantic import BaseModel, Field

from .config import Config
from .utils import print_success, print_warning


class UpdateStatus(BaseModel):
    """Result of comparing the installed release with the index."""

    installed: str | None = Field(default=None, description="Installed version, if any")
    latest: str | None = Field(default=None, description="Latest version on the index")
    error: str | None = Field(default=None, description="Why the check could not complete")

    @property
    def update_available(self) -> bool:
        if not self.installed or not self.latest:
            return False
        return _version_key(self.latest) > _version_key(self.installed)


def _version_key(version: str) -> tuple[int, ...]:
    parts: list[int] = []
    for piece in version.split("."):
        digits = "".join(ch for ch in piece if ch.isdigit())
        if not digits:
            break
        parts.append(int(digits))
    return tuple(parts)


def installed_version(package_name: str) -> str | None:
    try:
        return metadata.version(package_name)
    except metadata.PackageNotFoundError:
        return None


async def fetch_latest_version(
    config: Config, transport: httpx.AsyncBaseTransport | None = None
) -> str:
    """Return the newest version published under ``config.package_name``.

    Raises:
        httpx.HTTPError: On network failure or a non-2xx response.
    """
    async with httpx.AsyncClient(
        base_url=config.index_url.rstrip("/"),
        timeout=httpx.Timeout(config.index_timeout, connect=5.0),
        transport=transport,
    ) as client:
        response = await client.get(f"/{config.package_name}/json")
        response.raise_for_status()
        return response.json()["info"]["version"]


async def check_for_update(
    config: Config, transport: httpx.AsyncBaseTransport | None = None
) -> UpdateStatus:
    """Compare the installed release with the index and report the outcome."""
    status = UpdateStatus(installed=installed_version(config.package_name))
    try:
        status.latest = await fetch_latest_version(config, transport)
    except (httpx.HTTPError, KeyError, ValueError) as exc:
        status.error = str(exc) or exc.__class__.__name__
        print_warning(f"Could not check for updates: {status.error}")
        return status

    if status.update_available:
        print_warning(f"A new version is available: {status.installed} -> {status.latest}")
        print_warning(f"Run: pip install -U {config.package_name}")
    elif status.installed is None:
        print_warning(
            f"{config.package_name} {status.latest} is available; "
            f"install it with: pip install {config.package_name}"
        )
    else:
        print_success(f"{config.package_name} {status.installed} is up to date.")
    return status
