"""
Render a ScriptPlan into a standalone bash script
"""
import shlex
from typing import List

from ...core.constants import SUDO_PASS_ENV
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

RULE = "#" * 79


def _echo(message: str) -> str:
    return f"echo {shlex.quote(message)}"


def _command(step: Run) -> str:
    cmd = shlex.join(step.argv)
    if step.sudo:
        cmd = f"sudo_s {cmd}"
    if step.best_effort:
        warning = f"WARNING: '{shlex.join(step.argv)}' failed, continuing."
        cmd = f"{cmd} || echo {shlex.quote(warning)}"
    return cmd


def _render_step(step: Step, indent: str = "") -> List[str]:
    if isinstance(step, Section):
        return ["", indent + _echo(f"=== {step.title} ===")]
    if isinstance(step, Echo):
        return [indent + _echo(step.message)]
    if isinstance(step, Run):
        return [indent + _command(step)]
    if isinstance(step, AssertNonEmpty):
        return [
            f"{indent}if ! sudo_s test -s {shlex.quote(step.path)}; then",
            f"{indent}  echo {shlex.quote('ERROR: ' + step.message)}",
            f"{indent}  exit 1",
            f"{indent}fi",
        ]
    if isinstance(step, WhenCommand):
        lines = [f"{indent}if command -v {shlex.quote(step.command)} &>/dev/null; then"]
        for inner in step.then:
            lines.extend(_render_step(inner, indent + "  "))
        if step.otherwise:
            lines.append(f"{indent}else")
            lines.append(f"{indent}  " + _echo(step.otherwise))
        lines.append(f"{indent}fi")
        return lines
    if isinstance(step, ProbeService):
        return ["", f"{indent}systemctl is-active {shlex.quote(step.service)} || true"]
    raise TypeError(f"Unknown step type: {type(step).__name__}")


def render_script(plan: ScriptPlan) -> str:
    """Bash source for `plan`, expecting SUDO_PASS in the environment"""
    lines = [
        "#!/usr/bin/env bash",
        "set -euo pipefail",
        "",
        RULE,
        f"# {plan.name}",
        "#",
        "# Purpose:",
    ]
    lines.extend(f"#   - {line}" for line in plan.purpose)
    lines.append(f"#   - Expects {SUDO_PASS_ENV} in the environment for non-interactive sudo.")
    lines.append(RULE)
    lines.append("")

    if plan.marker:
        lines.extend([
            f'if [[ "${{1:-}}" != {shlex.quote(plan.marker)} ]]; then',
            f"  echo {shlex.quote(f'ERROR: run this script with {plan.marker}.')}",
            "  exit 1",
            "fi",
            "",
        ])

    lines.extend([
        f'if [[ -z "${{{SUDO_PASS_ENV}:-}}" ]]; then',
        f'  echo "ERROR: {SUDO_PASS_ENV} not set. Cannot run sudo -S commands."',
        "  exit 1",
        "fi",
        "",
        "sudo_s() {",
        f"  printf '%s\\n' \"${SUDO_PASS_ENV}\" | sudo -S -p '' \"$@\"",
        "}",
    ])

    for step in plan.steps:
        lines.extend(_render_step(step))

    lines.append("")
    return "\n".join(lines)
