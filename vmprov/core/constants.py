"""
Project constants definitions
"""

# ============================================================
# Mirror Repository
# ============================================================

DEFAULT_MIRROR_DIR = "~/janus-local"
DEFAULT_GIT_REMOTE = "origin"
DEFAULT_BRANCH = "main"
DEFAULT_FALLBACK_BRANCH = "master"
DEFAULT_GITHUB_REPO = "janus-local"

# ============================================================
# Remote Defaults
# ============================================================

DEFAULT_SSH_PORT = 22
DEFAULT_REMOTE_SCRIPT_DIR = "~/scripts"
DEFAULT_TRANSPORT = "paramiko"
TRANSPORTS = ("paramiko", "sshpass")
DEFAULT_INTERPRETER = "bash"

SUDO_PASS_ENV = "SUDO_PASS"
SSHPASS_ENV = "SSHPASS"

# ============================================================
# Managed Folder Layout
# ============================================================

FOLDER_SUFFIX = "-vm"
CONFIG_SUFFIX = "_config"
REQUIREMENTS_SUFFIX = "_requirements.sh"
GITIGNORE_NAME = ".gitignore"
CONFIG_FILE_MODE = 0o600
SCRIPT_FILE_MODE = 0o755

# ============================================================
# Jenkins
# ============================================================

JENKINS_SERVICE = "jenkins"
JENKINS_PORT = 8080
JENKINS_REMOTE_SCRIPT = "~/jenkins_install_remote.sh"
JENKINS_REMOTE_FLAG = "--remote"
JENKINS_KEY_URL = "https://pkg.jenkins.io/debian-stable/jenkins.io-2023.key"
JENKINS_KEYRING = "/usr/share/keyrings/jenkins-keyring.asc"
JENKINS_APT_SOURCE = "/etc/apt/sources.list.d/jenkins.list"
JENKINS_REPO_URL = "https://pkg.jenkins.io/debian-stable"
JENKINS_ADMIN_PASSWORD_PATH = "/var/lib/jenkins/secrets/initialAdminPassword"

# ============================================================
# Settings Storage
# ============================================================

DEFAULT_SETTINGS_PATH = "~/.config/vmprov/config.toml"
ENV_PREFIX = "VMPROV_"

# ============================================================
# Workstation
# ============================================================

SSH_DIR = "~/.ssh"
SSH_KEY_NAME = "id_ed25519"
DEFAULT_KEY_COMMENT = "default_comment"
GITHUB_HOSTNAME = "github.com"
