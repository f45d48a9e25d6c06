"""
Built-in remote recipes
"""
from ...core.constants import (
    JENKINS_APT_SOURCE,
    JENKINS_KEY_URL,
    JENKINS_KEYRING,
    JENKINS_PORT,
    JENKINS_REMOTE_FLAG,
    JENKINS_REPO_URL,
    JENKINS_SERVICE,
)
from ..targets.models import ServiceProfile
from .models import (
    AssertNonEmpty,
    Echo,
    ProbeService,
    Run,
    ScriptPlan,
    Section,
    WhenCommand,
)

BASE_PACKAGES = ["curl", "wget", "git"]

JENKINS_PREREQUISITES = [
    "gnupg2",
    "wget",
    "curl",
    "unzip",
    "fontconfig",
    "git",
    "ca-certificates",
    "ca-certificates-java",
    "apt-transport-https",
    "software-properties-common",
    "lsb-release",
]

OPENJDK_PPA = "ppa:openjdk-r/ppa"
OPENJDK_PACKAGE = "openjdk-21-jdk"
JENKINS_DIRS = ["/var/lib/jenkins", "/var/log/jenkins"]


def apt(*args: str) -> Run:
    return Run(["apt-get", *args], sudo=True)


def requirements_plan(profile: ServiceProfile) -> ScriptPlan:
    """Minimal update & readiness for an Ubuntu VM; installs nothing service-specific"""
    display = profile.display_name
    return ScriptPlan(
        name=profile.requirements_name,
        purpose=[
            f"Minimal system update & readiness for an Ubuntu VM (for {display} usage).",
            f"DOES NOT install {profile.product_name}. Just ensures a standard environment.",
        ],
        steps=[
            Echo("Running system update & upgrade..."),
            apt("update", "-y"),
            apt("upgrade", "-y"),
            Echo("Installing basic packages (curl, wget, git, etc.)..."),
            apt("install", "-y", *BASE_PACKAGES),
            Echo(f"VM is now prepared for {display} usage (but {profile.product_name} not installed)."),
        ],
    )


def jenkins_plan() -> ScriptPlan:
    """
    Full Jenkins LTS install on Ubuntu/Debian.

    Ends by printing `systemctl is-active jenkins` so the caller can read
    the service state from the last output line.
    """
    sources_line = f"deb [signed-by={JENKINS_KEYRING}] {JENKINS_REPO_URL} binary/"
    ownership = []
    for path in JENKINS_DIRS:
        ownership.extend([
            Run(["mkdir", "-p", path], sudo=True),
            Run(["chown", "-R", "jenkins:jenkins", path], sudo=True),
            Run(["chmod", "755", path], sudo=True),
        ])

    return ScriptPlan(
        name="jenkins_install_remote.sh",
        purpose=[
            "Install Jenkins (LTS) with OpenJDK 21 on an Ubuntu/Debian VM.",
            "Adds the Jenkins apt repository with a signed-by keyring.",
            f"Opens {JENKINS_PORT}/tcp when ufw is present.",
            "Prints the Jenkins service state as its last line.",
        ],
        marker=JENKINS_REMOTE_FLAG,
        steps=[
            Section("(REMOTE) 0) Updating & Upgrading the System"),
            apt("update", "-y"),
            apt("upgrade", "-y"),
            Section("(REMOTE) 1) Installing Pre-Requisite Packages"),
            apt("install", "-y", *JENKINS_PREREQUISITES),
            Section("(REMOTE) 1A) Adding PPA for OpenJDK 21"),
            Run(["add-apt-repository", "-y", OPENJDK_PPA], sudo=True),
            apt("update", "-y"),
            Section("(REMOTE) 2) Installing OpenJDK 21"),
            apt("install", "-y", OPENJDK_PACKAGE),
            Section("(REMOTE) 3) Adding Jenkins apt repo & GPG key"),
            Run(["mkdir", "-p", "/usr/share/keyrings"], sudo=True),
            Run(["wget", "-O", JENKINS_KEYRING, JENKINS_KEY_URL], sudo=True),
            AssertNonEmpty(
                JENKINS_KEYRING,
                "Jenkins 2023 GPG key is empty! Check network/firewall or key URL.",
            ),
            Run(["chmod", "a+r", JENKINS_KEYRING], sudo=True),
            Run(["sh", "-c", f'echo "{sources_line}" > {JENKINS_APT_SOURCE}'], sudo=True),
            Section("(REMOTE) 4) Installing Jenkins (LTS release)"),
            apt("update", "-y"),
            apt("install", "-y", "jenkins"),
            *ownership,
            Section("(REMOTE) 5) Enabling & starting Jenkins service"),
            Run(["systemctl", "daemon-reload"], sudo=True),
            Run(["systemctl", "enable", JENKINS_SERVICE], sudo=True),
            Run(["systemctl", "start", JENKINS_SERVICE], sudo=True),
            Section(f"(REMOTE) 6) Checking if ufw is installed to open {JENKINS_PORT}"),
            WhenCommand(
                "ufw",
                then=[
                    Echo(f"Allowing {JENKINS_PORT}/tcp via ufw..."),
                    Run(["ufw", "allow", f"{JENKINS_PORT}/tcp"], sudo=True, best_effort=True),
                ],
                otherwise=(
                    f"WARNING: ufw not installed. If a firewall is active, "
                    f"port {JENKINS_PORT} might be blocked externally."
                ),
            ),
            ProbeService(JENKINS_SERVICE),
        ],
    )
