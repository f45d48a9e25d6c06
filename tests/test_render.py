"""Tests for rendering step plans to bash."""

from vmprov.domain.provision import jenkins_plan, render_script, requirements_plan
from vmprov.domain.provision.models import Run, ScriptPlan
from vmprov.domain.targets import KNOWN_PROFILES


def test_requirements_script_shape() -> None:
    script = render_script(requirements_plan(KNOWN_PROFILES["openemr"]))
    lines = script.splitlines()

    assert lines[0] == "#!/usr/bin/env bash"
    assert lines[1] == "set -euo pipefail"
    assert "# openemr_requirements.sh" in lines
    assert 'if [[ -z "${SUDO_PASS:-}" ]]; then' in lines
    assert "sudo_s apt-get update -y" in lines
    assert "sudo_s apt-get upgrade -y" in lines
    assert "sudo_s apt-get install -y curl wget git" in lines
    assert lines[-1] == "echo 'VM is now prepared for OpenEMR usage (but OpenEMR not installed).'"


def test_requirements_script_uses_product_name() -> None:
    script = render_script(requirements_plan(KNOWN_PROFILES["apisix"]))

    assert "prepared for Apache APISIX usage (but APISIX not installed)." in script


def test_sudo_helper_reads_passphrase_from_environment() -> None:
    script = render_script(requirements_plan(KNOWN_PROFILES["frontend"]))

    assert "printf '%s\\n' \"$SUDO_PASS\" | sudo -S -p '' \"$@\"" in script


def test_jenkins_script_requires_marker_and_ends_with_probe() -> None:
    script = render_script(jenkins_plan())
    lines = script.splitlines()

    assert "if [[ \"${1:-}\" != --remote ]]; then" in lines
    assert lines[-1] == "systemctl is-active jenkins || true"


def test_jenkins_script_installs_in_order() -> None:
    script = render_script(jenkins_plan())

    positions = [
        script.index("sudo_s add-apt-repository -y ppa:openjdk-r/ppa"),
        script.index("sudo_s apt-get install -y openjdk-21-jdk"),
        script.index("https://pkg.jenkins.io/debian-stable/jenkins.io-2023.key"),
        script.index("if ! sudo_s test -s /usr/share/keyrings/jenkins-keyring.asc; then"),
        script.index("sudo_s apt-get install -y jenkins"),
        script.index("sudo_s systemctl start jenkins"),
        script.index("if command -v ufw &>/dev/null; then"),
    ]
    assert positions == sorted(positions)


def test_jenkins_script_firewall_step_is_best_effort() -> None:
    script = render_script(jenkins_plan())

    assert "sudo_s ufw allow 8080/tcp || echo" in script
    assert "WARNING: ufw not installed" in script


def test_arguments_are_shell_quoted() -> None:
    plan = ScriptPlan(name="x.sh", purpose=[], steps=[Run(["echo", "a b", "$HOME"])])

    assert "echo 'a b' '$HOME'" in render_script(plan).splitlines()
