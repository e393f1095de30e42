"""Environment file setup for generated projects.

Writes ``.env`` and ``.env.example`` with the framework's variable names and
makes sure ``.gitignore`` excludes them.  Neither env file is ever
overwritten: a second run keeps whatever the user already has.
"""

from __future__ import annotations

from pathlib import Path

from ..answers import Answers
from ..config import Config
from ..utils import console, generate_secret, write_file_if_absent
from .resolver import TemplateKind, TemplateResolver

GITIGNORE_BLOCK = "\n# Environment variables\n.env\n.env.local\n.env.*.local\n"


def setup_env_files(
    project_root: Path,
    answers: Answers,
    config: Config,
    resolver: TemplateResolver | None = None,
) -> list[Path]:
    """Create the env files and update ``.gitignore``.

    Returns:
        The files that were created or modified by this call.
    """
    resolver = resolver or TemplateResolver()
    root = Path(project_root)
    extra = {
        "api_url": config.api_url,
        "socket_url": config.socket_url,
        "secret": generate_secret(config.secret_length),
    }

    touched: list[Path] = []
    for kind in (TemplateKind.ENV, TemplateKind.ENV_EXAMPLE):
        content = resolver.resolve(kind, answers, extra)
        target = root / resolver.output_path(kind, answers)
        if content is not None and write_file_if_absent(target, content):
            console.print(f"  [green]+[/green] Created {target.name}")
            touched.append(target)

    if update_gitignore(root):
        console.print("  [green]+[/green] Updated .gitignore to exclude .env files")
        touched.append(root / ".gitignore")

    return touched


def update_gitignore(project_root: Path) -> bool:
    """Append the env exclusions to ``.gitignore`` unless ``.env`` is already listed.

    Returns:
        ``True`` if the file was changed.
    """
    gitignore = Path(project_root) / ".gitignore"
    current = gitignore.read_text(encoding="utf-8") if gitignore.exists() else ""
    if ".env" in current:
        return False
    with gitignore.open("a", encoding="utf-8") as fh:
        fh.write(GITIGNORE_BLOCK)
    return True
