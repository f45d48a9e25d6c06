"""
Provisioning domain module
"""
from .models import (
    AssertNonEmpty,
    Echo,
    ProbeService,
    Run,
    ScriptPlan,
    Section,
    Step,
    WhenCommand,
)
from .recipes import jenkins_plan, requirements_plan
from .render import render_script
from .executor import LocalStepExecutor
from .service import ProvisionService, build_command, remote_path_arg

__all__ = [
    "AssertNonEmpty",
    "Echo",
    "ProbeService",
    "Run",
    "ScriptPlan",
    "Section",
    "Step",
    "WhenCommand",
    "jenkins_plan",
    "requirements_plan",
    "render_script",
    "LocalStepExecutor",
    "ProvisionService",
    "build_command",
    "remote_path_arg",
]
