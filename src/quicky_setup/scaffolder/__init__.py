"""Building blocks of a scaffolding run.

``planner`` decides the folder layout, ``resolver`` maps answers to template
variants and output paths, ``templates`` renders them with Jinja2,
``env_setup`` and ``manifest`` edit project files, and ``installer`` runs the
JavaScript toolchain.
"""

from quicky_setup.scaffolder.installer import ProcessRunner
from quicky_setup.scaffolder.planner import create_folders, plan_folders
from quicky_setup.scaffolder.resolver import Feature, TemplateKind, TemplateResolver
from quicky_setup.scaffolder.templates import TemplateRenderer

__all__ = [
    "Feature",
    "ProcessRunner",
    "TemplateKind",
    "TemplateRenderer",
    "TemplateResolver",
    "create_folders",
    "plan_folders",
]
