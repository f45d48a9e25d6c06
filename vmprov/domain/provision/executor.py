"""
Run a ScriptPlan on the current machine (server-side mode)
"""
import shlex
from typing import Callable, Optional

from ...core.credentials import Credential
from ...core.exceptions import RemoteExecutionError
from ...core.interfaces import CommandRunner
from ...core.logging import get_logger
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

logger = get_logger(__name__)


class LocalStepExecutor:
    """
    Executes plan steps with subprocess, mirroring the rendered bash script.

    The sudo passphrase is fed on stdin to `sudo -S`; it never appears in
    an argv.
    """

    def __init__(
        self,
        runner: CommandRunner,
        sudo_password: Credential,
        echo: Callable[[str], None] = print,
    ):
        self.runner = runner
        self.sudo_password = sudo_password
        self.echo = echo

    def _run(self, argv, sudo: bool, capture: bool = False):
        if sudo:
            return self.runner.run(
                ["sudo", "-S", "-p", "", *argv],
                input_data=self.sudo_password.reveal() + "\n",
                capture=capture,
            )
        return self.runner.run(argv, capture=capture)

    def execute_step(self, step: Step) -> Optional[str]:
        if isinstance(step, Section):
            self.echo(f"=== {step.title} ===")
        elif isinstance(step, Echo):
            self.echo(step.message)
        elif isinstance(step, Run):
            logger.debug(f"[step] {shlex.join(step.argv)}")
            result = self._run(step.argv, step.sudo)
            if not result.ok:
                if step.best_effort:
                    self.echo(f"WARNING: '{shlex.join(step.argv)}' failed, continuing.")
                else:
                    raise RemoteExecutionError(
                        f"'{shlex.join(step.argv)}' failed with exit code {result.returncode}",
                        exit_code=result.returncode,
                    )
        elif isinstance(step, AssertNonEmpty):
            if not self._run(["test", "-s", step.path], sudo=True).ok:
                raise RemoteExecutionError(f"ERROR: {step.message}")
        elif isinstance(step, WhenCommand):
            if self.runner.which(step.command):
                for inner in step.then:
                    self.execute_step(inner)
            elif step.otherwise:
                self.echo(step.otherwise)
        elif isinstance(step, ProbeService):
            result = self.runner.run(["systemctl", "is-active", step.service])
            state = result.stdout.strip()
            self.echo(state)
            return state
        else:
            raise TypeError(f"Unknown step type: {type(step).__name__}")
        return None

    def execute(self, plan: ScriptPlan) -> str:
        """Run every step; returns the last probe output ("" when none)"""
        probe = ""
        for step in plan.steps:
            out = self.execute_step(step)
            if out is not None:
                probe = out
        return probe
