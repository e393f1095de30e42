"""quicky-setup orchestrator.

Runs a scaffolding job as an ordered list of steps, each tagged fatal or
recoverable:

 1. create-root     -- create the project directory
 2. base-project    -- run create-next-app / create-vite
 3. post-process    -- pin Next.js deps, or wire Tailwind + router into Vite
 4. folders         -- create the fixed directory layout
 5. env-files       -- .env, .env.example, .gitignore   (recoverable)
 6. module-config   -- rewrite jsconfig.json if present
 7. auth            -- Axios client, routes and endpoints
 8. redux           -- Redux Toolkit store
 9. ui-library      -- shadcn / antd dependencies
10. folders-again   -- idempotent re-run of step 4
11. readme-and-git  -- README, snapshot, initial commit

A fatal step's failure aborts the run with ``ScaffoldError``; nothing that was
already written is rolled back.  ``FeatureAdder`` applies a single feature
bundle to an existing project.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable

from .answers import (
    Answers,
    AuthStorage,
    Framework,
    UiLibrary,
    build_answers,
    detect_answers,
    load_snapshot,
    save_snapshot,
)
from .config import Config
from .errors import ConfigurationError, ScaffoldError
from .scaffolder.env_setup import setup_env_files
from .scaffolder.installer import ProcessRunner
from .scaffolder.manifest import merge_next_manifest, rewrite_module_config
from .scaffolder.planner import create_folders
from .scaffolder.resolver import (
    UI_FOLLOW_UP,
    Feature,
    TemplateKind,
    TemplateResolver,
    dependencies_for,
)
from .utils import (
    console,
    print_step_header,
    print_success,
    print_summary_table,
    print_warning,
    write_file,
)

COMMIT_MESSAGE = "Initial commit (via quicky-setup)"


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Step:
    """One unit of the scaffolding run."""

    name: str
    title: str
    action: Callable[[], Awaitable[None]]
    fatal: bool = True


def write_bundle(project_root: Path, files: list[tuple[str, str]]) -> list[Path]:
    """Write resolved ``(relative_path, content)`` pairs under *project_root*."""
    written: list[Path] = []
    for rel_path, content in files:
        written.append(write_file(Path(project_root) / rel_path, content))
        console.print(f"  [green]+[/green] {rel_path}")
    return written


# ---------------------------------------------------------------------------
# Scaffolding orchestrator
# ---------------------------------------------------------------------------


class ScaffoldPipeline:
    """Creates a new project from a set of ``Answers``.

    Attributes:
        answers: The user's choices.
        config: Toolchain and template configuration.
        project_root: Directory the project is generated into.
        state: Names of completed / failed steps and collected warnings.
    """

    def __init__(
        self,
        answers: Answers,
        config: Config,
        runner: ProcessRunner | None = None,
        resolver: TemplateResolver | None = None,
        parent_dir: Path | None = None,
    ) -> None:
        self.answers = answers
        self.config = config
        self.runner = runner or ProcessRunner(config)
        self.resolver = resolver or TemplateResolver()
        self.project_root = Path(parent_dir or Path.cwd()) / answers.project_name
        self.state: dict[str, Any] = {
            "steps_completed": [],
            "steps_failed": [],
            "warnings": [],
            "success": False,
        }

    # ------------------------------------------------------------------
    # Step table
    # ------------------------------------------------------------------

    def steps(self) -> list[Step]:
        """Return the steps that apply to these answers, in execution order."""
        answers = self.answers
        steps = [
            Step("create-root", "Create project directory", self._create_root),
            Step("base-project", "Create base project", self._create_base_project),
            Step("post-process", "Configure framework", self._post_process),
            Step("folders", "Set up project structure", self._create_folders),
            Step("env-files", "Set up environment files", self._setup_env_files, fatal=False),
            Step("module-config", "Configure module resolution", self._rewrite_module_config),
        ]
        if answers.auth:
            steps.append(Step("auth", "Set up Auth + Axios", self._setup_auth))
        if answers.redux:
            steps.append(Step("redux", "Set up Redux Toolkit", self._setup_redux))
        if answers.ui_library is not UiLibrary.NONE:
            steps.append(Step("ui-library", "Install UI library", self._install_ui_library))
        steps.extend(
            [
                Step("folders-again", "Verify project structure", self._create_folders),
                Step("readme-and-git", "Write README and commit", self._finalize),
            ]
        )
        return steps

    async def run(self) -> dict[str, Any]:
        """Execute every applicable step in order.

        Returns:
            The final state dictionary with a top-level ``success`` flag.

        Raises:
            ScaffoldError: When a fatal step fails.
        """
        steps = self.steps()
        for index, step in enumerate(steps, start=1):
            print_step_header(index, len(steps), step.title)
            try:
                await step.action()
            except Exception as exc:
                self.state["steps_failed"].append(step.name)
                if step.fatal:
                    raise ScaffoldError(step.name, str(exc)) from exc
                message = f"Could not {step.title.lower()}: {exc}"
                self.state["warnings"].append(message)
                print_warning(f"  {message}")
                continue
            self.state["steps_completed"].append(step.name)

        self.state["success"] = True
        self._print_next_steps()
        return self.state

    # ------------------------------------------------------------------
    # Step implementations
    # ------------------------------------------------------------------

    async def _create_root(self) -> None:
        root = self.project_root
        if root.exists() and any(root.iterdir()):
            raise FileExistsError(f"Directory already exists and is not empty: {root}")
        root.mkdir(parents=True, exist_ok=True)
        console.print(f"  [green]+[/green] {root}")

    async def _create_base_project(self) -> None:
        await self.runner.create_base_project(self.answers, self.project_root)

    async def _post_process(self) -> None:
        root = self.project_root
        if self.answers.framework is Framework.NEXT:
            if merge_next_manifest(root, self.config.next_version):
                console.print("  [green]+[/green] Pinned Next.js dependencies and scripts in package.json")
            else:
                print_warning("  package.json not found -- skipped dependency pinning")
            return

        await self.runner.install(["react-router-dom"], root)
        await self.runner.install(
            ["tailwindcss@latest", "postcss@latest", "autoprefixer@latest"], root, dev=True
        )
        self._write_template(TemplateKind.TAILWIND_CONFIG)
        self._write_template(TemplateKind.INDEX_CSS)
        await self.runner.install(["@tailwindcss/vite"], root, dev=True)
        vite_config = root / self.resolver.output_path(TemplateKind.VITE_CONFIG, self.answers)
        if vite_config.exists():
            self._write_template(TemplateKind.VITE_CONFIG)

    async def _create_folders(self) -> None:
        created = create_folders(self.project_root, self.answers.framework)
        console.print(f"  [green]+[/green] {len(created)} folders ready")

    async def _setup_env_files(self) -> None:
        setup_env_files(self.project_root, self.answers, self.config, self.resolver)

    async def _rewrite_module_config(self) -> None:
        if rewrite_module_config(self.project_root, self.answers, self.resolver):
            console.print("  [green]+[/green] Updated jsconfig.json with the @/* alias")

    async def _setup_auth(self) -> None:
        await self.runner.install(dependencies_for(Feature.AUTH), self.project_root)
        write_bundle(self.project_root, self.resolver.plan_files(Feature.AUTH, self.answers))

    async def _setup_redux(self) -> None:
        await self.runner.install(dependencies_for(Feature.REDUX), self.project_root)
        write_bundle(self.project_root, self.resolver.plan_files(Feature.REDUX, self.answers))

    async def _install_ui_library(self) -> None:
        library = self.answers.ui_library
        await self.runner.install(dependencies_for(library), self.project_root)
        follow_up = UI_FOLLOW_UP.get(library)
        if follow_up:
            console.print(f"  For {library.value}, run: [bold]{follow_up}[/bold]")

    async def _finalize(self) -> None:
        root = self.project_root
        self._write_template(TemplateKind.README)
        save_snapshot(self.answers, root, self.config.snapshot_name)
        if self.config.init_git:
            await self.runner.init_repository(root, COMMIT_MESSAGE)
            console.print("  [green]+[/green] Initialised git repository")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _write_template(self, kind: TemplateKind) -> Path | None:
        content = self.resolver.resolve(kind, self.answers)
        if content is None:
            return None
        rel_path = self.resolver.output_path(kind, self.answers)
        console.print(f"  [green]+[/green] {rel_path}")
        return write_file(self.project_root / rel_path, content)

    def _print_next_steps(self) -> None:
        answers = self.answers
        print_summary_table(
            {
                "Project": answers.project_name,
                "Framework": answers.framework.value,
                "Language": answers.language.value,
                "Auth": answers.auth_storage.value if answers.auth_storage else "no",
                "Redux": "yes" if answers.redux else "no",
                "UI library": answers.ui_library.value,
            },
            title="Project setup complete",
        )
        if self.state["warnings"]:
            print_warning(f"Finished with {len(self.state['warnings'])} warning(s).")
        console.print("[bold]Next steps:[/bold]")
        console.print(f"   cd {answers.project_name}")
        if answers.framework is Framework.NEXT:
            console.print("   npm run dev        # Start development server")
            console.print("   npm run dev:turbo  # Start with Turbopack")
        else:
            console.print("   npm run dev")
        follow_up = UI_FOLLOW_UP.get(answers.ui_library)
        if follow_up:
            console.print(f"   {follow_up}")
        print_success("\nHappy hacking!")


# ---------------------------------------------------------------------------
# Feature adder
# ---------------------------------------------------------------------------


class FeatureAdder:
    """Adds one feature bundle (redux | api | auth) to an existing project."""

    def __init__(
        self,
        project_root: Path,
        config: Config,
        runner: ProcessRunner | None = None,
        resolver: TemplateResolver | None = None,
    ) -> None:
        self.project_root = Path(project_root)
        self.config = config
        self.runner = runner or ProcessRunner(config)
        self.resolver = resolver or TemplateResolver()

    def current_answers(self) -> Answers:
        """Answers from the project snapshot, or inferred from its files."""
        snapshot = load_snapshot(self.project_root, self.config.snapshot_name)
        if snapshot is not None:
            return snapshot
        return detect_answers(self.project_root)

    def answers_for(self, feature: Feature, storage: AuthStorage | None = None) -> Answers:
        """Return the current answers updated with *feature* switched on.

        Raises:
            ConfigurationError: If ``auth`` is requested and no storage mode
                is known from *storage* or the snapshot.
        """
        current = self.current_answers()
        values = current.model_dump()
        if feature is Feature.REDUX:
            values["redux"] = True
        elif storage is not None or feature is Feature.AUTH:
            chosen = storage or current.auth_storage
            if chosen is None:
                raise ConfigurationError(
                    "Adding auth needs a storage mode: pass --storage cookie|localStorage"
                )
            values["auth"] = True
            values["auth_storage"] = chosen
        return build_answers(**values)

    async def add(self, feature: Feature, storage: AuthStorage | None = None) -> list[Path]:
        """Install the feature's dependencies and write its files.

        Returns:
            Paths of the files written.
        """
        answers = self.answers_for(feature, storage)
        files = self.resolver.plan_files(feature, answers)
        await self.runner.install(dependencies_for(feature), self.project_root)
        written = write_bundle(self.project_root, files)
        save_snapshot(answers, self.project_root, self.config.snapshot_name)
        print_success(f"Added {feature.value} ({len(written)} file(s))")
        return written
