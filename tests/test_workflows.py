"""End-to-end tests of the init and Jenkins workflows against fakes."""

import stat
from pathlib import Path

import pytest

from vmprov.core.exceptions import ConfigError, PreflightError, RemoteExecutionError
from vmprov.core.results import CommandResult, RemoteResult
from vmprov.core.settings import Settings
from vmprov.domain.preflight import PreflightService
from vmprov.domain.targets import KNOWN_PROFILES, ServiceStatus, get_profile
from vmprov.domain.workflows import InitVmWorkflow, JenkinsWorkflow
from tests.fakes import FakePrompts, FakeRunner, FakeTransport, FakeTransportFactory, git_handler

OPENEMR = KNOWN_PROFILES["openemr"]


def _write_config(folder: Path, prefix: str, host: str = "10.0.0.7") -> None:
    folder.mkdir(parents=True, exist_ok=True)
    name = prefix.lower() + "_config"
    (folder / name).write_text(
        f"{prefix}_HOST='{host}'\n{prefix}_USER='ops'\n{prefix}_PASS='pw'\n"
    )


def _init(mirror, prompts, runner, transport, root=False) -> InitVmWorkflow:
    return InitVmWorkflow(
        Settings(mirror_dir=str(mirror)),
        runner,
        prompts,
        FakeTransportFactory(transport),
        preflight=PreflightService(runner, prompts, superuser_check=lambda: root),
    )


def _jenkins(mirror, prompts, runner, transport, root=False) -> JenkinsWorkflow:
    return JenkinsWorkflow(
        Settings(mirror_dir=str(mirror)),
        runner,
        prompts,
        FakeTransportFactory(transport),
        preflight=PreflightService(runner, prompts, superuser_check=lambda: root),
    )


# ============================================================
# init
# ============================================================

def test_init_creates_folder_config_script_and_publishes(mirror: Path) -> None:
    prompts = FakePrompts(answers=["10.0.0.7", "ops", "pw"], confirms=[True, True])
    runner = FakeRunner(handler=git_handler())
    transport = FakeTransport()

    result = _init(mirror, prompts, runner, transport).run(OPENEMR)

    folder = mirror / "openemr-vm"
    assert (folder / ".gitignore").read_text() == "openemr_config\n"
    assert stat.S_IMODE((folder / "openemr_config").stat().st_mode) == 0o600
    assert stat.S_IMODE((folder / "openemr_requirements.sh").stat().st_mode) == 0o755

    assert transport.commands[0] == ("mkdir -p ~/scripts", None)
    assert transport.uploads[0][1] == "~/scripts/openemr_requirements.sh"
    command, stdin_data = transport.commands[1]
    assert command.endswith("bash ~/scripts/openemr_requirements.sh")
    assert stdin_data == "pw\n"
    assert transport.connected and transport.closed

    assert result.provisioned
    assert result.publish.pushed_branch == "main"
    assert [
        "git", "commit", "-m",
        "Update openemr-vm folder with config & sudo -S fix (config ignored)",
    ] in runner.git_calls()


def test_init_reuses_existing_config_without_prompts(mirror: Path) -> None:
    _write_config(mirror / "openemr-vm", "OPENEMR")
    prompts = FakePrompts(confirms=[False])
    runner = FakeRunner(handler=git_handler(status_output=""))
    transport = FakeTransport()

    result = _init(mirror, prompts, runner, transport).run(OPENEMR)

    assert prompts.asked == []
    assert not result.provisioned
    assert transport.commands == []
    # nothing new, earlier local commits still pushed
    assert result.publish.pushed_branch == "main"
    assert ["git", "push", "origin", "main"] in runner.git_calls()


def test_init_asks_before_overwriting_script(mirror: Path) -> None:
    folder = mirror / "openemr-vm"
    _write_config(folder, "OPENEMR")
    (folder / "openemr_requirements.sh").write_text("custom\n")
    prompts = FakePrompts(confirms=[False, False])

    _init(mirror, prompts, FakeRunner(handler=git_handler()), FakeTransport()).run(OPENEMR)

    assert (folder / "openemr_requirements.sh").read_text() == "custom\n"
    assert prompts.confirmed[0] == "Do you want to overwrite 'openemr_requirements.sh'?"


def test_init_fails_on_remote_error_before_publish(mirror: Path) -> None:
    _write_config(mirror / "openemr-vm", "OPENEMR")
    prompts = FakePrompts(confirms=[True, True])
    runner = FakeRunner(handler=git_handler())
    transport = FakeTransport({"bash": RemoteResult(stdout="", stderr="", exit_code=100)})

    with pytest.raises(RemoteExecutionError):
        _init(mirror, prompts, runner, transport).run(OPENEMR)

    assert runner.git_calls() == []
    assert transport.closed


def test_init_incomplete_config_fails_before_remote_work(mirror: Path) -> None:
    folder = mirror / "openemr-vm"
    folder.mkdir()
    (folder / "openemr_config").write_text("OPENEMR_HOST='10.0.0.7'\n")
    transport = FakeTransport()

    with pytest.raises(ConfigError, match="user, password"):
        _init(mirror, FakePrompts(confirms=[True]), FakeRunner(), transport).run(OPENEMR)

    assert transport.commands == []


def test_init_as_root_has_no_side_effects(mirror: Path) -> None:
    runner = FakeRunner()

    with pytest.raises(PreflightError):
        _init(mirror, FakePrompts(), runner, FakeTransport(), root=True).run(OPENEMR)

    assert not (mirror / "openemr-vm").exists()
    assert runner.calls == []


def test_init_without_mirror_creates_no_config(tmp_path: Path) -> None:
    mirror = tmp_path / "janus-local"

    with pytest.raises(PreflightError):
        _init(mirror, FakePrompts(), FakeRunner(), FakeTransport()).run(OPENEMR)

    assert not mirror.exists()


@pytest.mark.parametrize("name", [*KNOWN_PROFILES, "grafana"])
def test_every_target_folder_ignores_its_config(mirror: Path, name: str) -> None:
    profile = get_profile(name)
    prompts = FakePrompts(answers=["10.0.0.7", "ops", "pw"], confirms=[False])
    runner = FakeRunner(handler=git_handler())

    _init(mirror, prompts, runner, FakeTransport()).run(profile)

    folder = mirror / f"{name}-vm"
    assert f"{name}_config" in (folder / ".gitignore").read_text().splitlines()
    assert (folder / f"{name}_config").exists()
    assert runner.git_calls()[0] == ["git", "add", f"{name}-vm"]


# ============================================================
# jenkins
# ============================================================

def _probe(state: str) -> FakeTransport:
    return FakeTransport({
        "systemctl is-active": RemoteResult(stdout=state, stderr="", exit_code=0),
    })


def test_jenkins_active_publishes(mirror: Path) -> None:
    _write_config(mirror / "jenkins-vm", "JENKINS", host="10.0.0.9")
    prompts = FakePrompts(confirms=[True])
    runner = FakeRunner(handler=git_handler())
    transport = _probe("active\n")

    result = _jenkins(mirror, prompts, runner, transport).run_local()

    assert result.status is ServiceStatus.ACTIVE
    assert transport.uploads[0][1] == "~/jenkins_install_remote.sh"
    assert "systemctl is-active jenkins || true" in transport.uploads[0][2]
    command, stdin_data = transport.commands[0]
    assert command.endswith("bash ~/jenkins_install_remote.sh --remote")
    assert stdin_data == "pw\n"
    assert [
        "git", "commit", "-m",
        "Jenkins installed successfully on 10.0.0.9 (port 8080 allowed via ufw if available)",
    ] in runner.git_calls()
    assert ("info", "Access Jenkins at: http://10.0.0.9:8080") in prompts.messages


@pytest.mark.parametrize("state", ["inactive\n", "failed\n", "", "activating\n"])
def test_jenkins_not_active_skips_git(mirror: Path, state: str) -> None:
    _write_config(mirror / "jenkins-vm", "JENKINS")
    prompts = FakePrompts(confirms=[True])
    runner = FakeRunner(handler=git_handler())

    result = _jenkins(mirror, prompts, runner, _probe(state)).run_local()

    assert not result.status.is_active
    assert result.publish is None
    assert runner.git_calls() == []
    assert any("won't push" in w for w in prompts.warnings())


def test_jenkins_decline_is_a_clean_cancel(mirror: Path) -> None:
    _write_config(mirror / "jenkins-vm", "JENKINS")
    transport = FakeTransport()

    result = _jenkins(mirror, FakePrompts(confirms=[False]), FakeRunner(), transport).run_local()

    assert result.cancelled
    assert transport.uploads == []
    assert not (mirror / "jenkins-vm" / "jenkins_install.sh").exists()


def test_jenkins_remote_failure_skips_probe_and_git(mirror: Path) -> None:
    _write_config(mirror / "jenkins-vm", "JENKINS")
    runner = FakeRunner(handler=git_handler())
    transport = FakeTransport({"--remote": RemoteResult(stdout="", stderr="", exit_code=1)})

    with pytest.raises(RemoteExecutionError):
        _jenkins(mirror, FakePrompts(confirms=[True]), runner, transport).run_local()

    assert len(transport.commands) == 1
    assert runner.git_calls() == []


def test_jenkins_custom_folder(mirror: Path, tmp_path: Path) -> None:
    folder = tmp_path / "ci"
    _write_config(folder, "JENKINS")

    _jenkins(mirror, FakePrompts(confirms=[True]), FakeRunner(), _probe("inactive")).run_local(folder)

    assert (folder / ".gitignore").read_text() == "jenkins_config\n"
    assert (folder / "jenkins_install.sh").exists()


def test_jenkins_remote_mode_requires_sudo_pass(mirror: Path) -> None:
    runner = FakeRunner()
    workflow = _jenkins(mirror, FakePrompts(), runner, FakeTransport())

    with pytest.raises(PreflightError, match="SUDO_PASS"):
        workflow.run_remote({})

    assert runner.calls == []


def test_jenkins_remote_mode_reports_status(mirror: Path) -> None:
    def handler(argv):
        if argv[:2] == ["systemctl", "is-active"]:
            return CommandResult(returncode=0, stdout="active\n")
        return None

    runner = FakeRunner(available=(), handler=handler)
    out = []
    workflow = _jenkins(mirror, FakePrompts(), runner, FakeTransport())

    assert workflow.run_remote({"SUDO_PASS": "pw"}, echo=out.append) is ServiceStatus.ACTIVE
    assert out[-1] == "active"
    assert all(c["input"] in (None, "pw\n") for c in runner.calls)
