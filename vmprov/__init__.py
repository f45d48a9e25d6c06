"""
vmprov - VM provisioning over password-based SSH

Provides CLI workflows for lab VMs, supporting:
- Per-service folders with a git-ignored credential file and a requirements script
- Remote script execution with non-interactive sudo
- All-in-one Jenkins installation with a server-side mode
- Publishing the folders to a local Git mirror repository
- Workstation bootstrap (git identity, SSH key, GitHub repository)
"""

__version__ = "0.1.0"

from .core import (
    Credential,
    Settings,
    LocalCommandRunner,
)

from .domain.targets import (
    ServiceProfile,
    ServiceStatus,
    TargetConfig,
    get_profile,
)

from .domain.provision import (
    ProvisionService,
    jenkins_plan,
    render_script,
    requirements_plan,
)

from .domain.publish import GitPublisher, PublishResult

from .domain.workflows import InitVmWorkflow, JenkinsWorkflow

__all__ = [
    "__version__",
    "Credential",
    "Settings",
    "LocalCommandRunner",
    "ServiceProfile",
    "ServiceStatus",
    "TargetConfig",
    "get_profile",
    "ProvisionService",
    "jenkins_plan",
    "render_script",
    "requirements_plan",
    "GitPublisher",
    "PublishResult",
    "InitVmWorkflow",
    "JenkinsWorkflow",
]
