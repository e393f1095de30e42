"""External process invoker.

Thin async wrapper around the upstream generators (``create-next-app``,
``create-vite``), the package manager and git.  The scaffolder only cares
about exit codes: any non-zero status raises ``CommandError``.
"""

from __future__ import annotations

from pathlib import Path

from ..answers import Answers, Framework, Routing
from ..config import Config
from ..errors import CommandError
from ..utils import run_command

NEXT_ENV: dict[str, str] = {
    "NEXT_TELEMETRY_DISABLED": "1",
    "NEXT_DISABLE_CREATE_NEXT_APP_UPDATE_NOTIFICATION": "1",
}


def base_project_command(answers: Answers, config: Config) -> list[str]:
    """Return the generator invocation for the chosen framework/language/routing."""
    if answers.framework is Framework.NEXT:
        cmd = [
            config.npx,
            "--yes",
            f"create-next-app@{config.next_version}",
            ".",
            "--use-npm",
            "--import-alias",
            "@/*",
            "--eslint",
            "--tailwind",
            "--no-src-dir",
            "--no-https",
            "--turbo",
            "--typescript" if answers.is_typescript else "--js",
        ]
        cmd.append("--app" if answers.routing is Routing.APP else "--no-app")
        return cmd

    return [
        config.npx,
        "--yes",
        f"create-vite@{config.vite_version}",
        ".",
        "--template",
        "react-ts" if answers.is_typescript else "react",
    ]


class ProcessRunner:
    """Runs toolchain commands inside a project directory.

    Installer output is streamed straight to the terminal; git runs quietly.
    """

    def __init__(self, config: Config) -> None:
        self.config = config

    async def run(
        self,
        cmd: list[str],
        cwd: Path,
        *,
        capture: bool = False,
        env: dict[str, str] | None = None,
    ) -> str:
        """Run *cmd* in *cwd*.

        Returns:
            Captured stdout (empty when *capture* is ``False``).

        Raises:
            CommandError: If the command exits with a non-zero status.
        """
        returncode, stdout, stderr = await run_command(
            cmd,
            cwd=cwd,
            timeout=self.config.command_timeout,
            capture=capture,
            env=env,
        )
        if returncode != 0:
            raise CommandError(cmd, returncode, stderr)
        return stdout

    async def create_base_project(self, answers: Answers, cwd: Path) -> None:
        """Generate the framework skeleton in *cwd*."""
        env = NEXT_ENV if answers.framework is Framework.NEXT else None
        await self.run(base_project_command(answers, self.config), cwd, env=env)

    async def install(self, packages: list[str] | tuple[str, ...], cwd: Path, *, dev: bool = False) -> None:
        """Install *packages* with the configured package manager."""
        if not packages:
            return
        cmd = [self.config.package_manager, "install"]
        if dev:
            cmd.append("-D")
        cmd.extend(packages)
        await self.run(cmd, cwd)

    async def init_repository(self, cwd: Path, message: str) -> None:
        """Initialise git, stage everything and create the first commit."""
        git = self.config.git
        await self.run([git, "init"], cwd, capture=True)
        await self.run([git, "add", "."], cwd, capture=True)
        await self.run([git, "commit", "-m", message], cwd, capture=True)
