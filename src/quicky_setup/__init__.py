"""quicky-setup -- scaffold React (Vite) and Next.js projects.

Collects a handful of answers (framework, language, routing, auth storage,
Redux, UI library), runs the upstream generator and then writes an Axios auth
client, a Redux store, env files and a fixed folder layout on top.

Quick usage::

    from quicky_setup import Config, ScaffoldPipeline, build_answers

    answers = build_answers(
        project_name="my-app",
        framework="next",
        language="ts",
        auth_storage="cookie",
    )
    state = await ScaffoldPipeline(answers, Config()).run()
"""

__version__ = "1.2.0"

from quicky_setup.answers import Answers, build_answers
from quicky_setup.config import Config
from quicky_setup.errors import CommandError, ConfigurationError, QuickyError, ScaffoldError
from quicky_setup.pipeline import FeatureAdder, ScaffoldPipeline
from quicky_setup.session import ApiError, SessionClient, SessionExpiredError

__all__ = [
    "Answers",
    "ApiError",
    "CommandError",
    "Config",
    "ConfigurationError",
    "FeatureAdder",
    "QuickyError",
    "ScaffoldError",
    "ScaffoldPipeline",
    "SessionClient",
    "SessionExpiredError",
    "build_answers",
]
