"""Command-line entry point: ``quicky-setup init | add | update | help``."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path

from rich.panel import Panel

from . import __version__
from .answers import TEMPLATE_SHORTHANDS, AuthStorage, parse_template
from .config import Config
from .errors import QuickyError
from .pipeline import FeatureAdder, ScaffoldPipeline
from .prompts import PromptAborted, ask_auth_storage, ask_questions
from .scaffolder.resolver import Feature
from .updater import check_for_update
from .utils import console, print_error, print_warning


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quicky-setup",
        description="Scaffold React (Vite) and Next.js projects with auth, Redux and Tailwind wired in.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  quicky-setup init\n"
            "  quicky-setup init my-app --template next-ts\n"
            "  quicky-setup add redux\n"
            "  quicky-setup add auth --storage cookie\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    init = subparsers.add_parser("init", help="Create a new project")
    init.add_argument("project_name", nargs="?", default=None, help="Directory name of the new project")
    init.add_argument(
        "--template",
        "-t",
        choices=list(TEMPLATE_SHORTHANDS),
        default=None,
        help="Framework and language shorthand",
    )
    init.add_argument(
        "--yes", "-y", action="store_true", help="Accept defaults for every unanswered question"
    )
    init.add_argument("--no-git", action="store_true", help="Skip the initial git commit")

    add = subparsers.add_parser("add", help="Add a feature to an existing project")
    add.add_argument("feature", choices=[feature.value for feature in Feature])
    add.add_argument("--path", default=".", help="Project directory (default: current directory)")
    add.add_argument(
        "--storage",
        choices=[storage.value for storage in AuthStorage],
        default=None,
        help="Token storage mode for the API client",
    )

    subparsers.add_parser("update", help="Check for a newer quicky-setup release")
    subparsers.add_parser("help", help="Show this help message")
    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_init(args: argparse.Namespace, config: Config) -> int:
    console.print(Panel.fit(f"[bold cyan]quicky-setup[/bold cyan] v{__version__}", border_style="cyan"))
    framework = language = None
    if args.template:
        framework, language = parse_template(args.template)
    if args.no_git:
        config = config.model_copy(update={"init_git": False})

    answers = ask_questions(
        project_name=args.project_name,
        framework=framework,
        language=language,
        assume_defaults=args.yes,
    )
    pipeline = ScaffoldPipeline(answers, config, parent_dir=Path.cwd())
    state = asyncio.run(pipeline.run())
    return 0 if state.get("success") else 1


def cmd_add(args: argparse.Namespace, config: Config) -> int:
    feature = Feature(args.feature)
    storage = AuthStorage(args.storage) if args.storage else None
    adder = FeatureAdder(Path(args.path), config)

    if feature is Feature.AUTH and storage is None and adder.current_answers().auth_storage is None:
        storage = ask_auth_storage()

    asyncio.run(adder.add(feature, storage))
    return 0


def cmd_update(args: argparse.Namespace, config: Config) -> int:
    asyncio.run(check_for_update(config))
    return 0


COMMANDS = {
    "init": cmd_init,
    "add": cmd_add,
    "update": cmd_update,
}


def main(argv: list[str] | None = None) -> int:
    """Parse *argv*, run the command and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args, Config.from_env())
    except PromptAborted as exc:
        print_warning(str(exc))
        return 0
    except QuickyError as exc:
        print_error(f"Error: {exc}")
        return 1
    except ValueError as exc:
        print_error(f"Invalid configuration: {exc}")
        return 1
