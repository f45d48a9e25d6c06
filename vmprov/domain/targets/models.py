"""
Target domain models
"""
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from ...core.constants import CONFIG_SUFFIX, FOLDER_SUFFIX, REQUIREMENTS_SUFFIX
from ...core.credentials import Credential
from ...core.exceptions import ConfigError


@dataclass(frozen=True)
class ServiceProfile:
    """
    One managed remote role.

    Derives every per-target file name from `name`:
    folder `<name>-vm`, config `<name>_config`, script `<name>_requirements.sh`,
    config keys `<NAME>_HOST` / `<NAME>_USER` / `<NAME>_PASS`.
    """
    name: str
    display_name: str
    product: str = ""

    @property
    def folder_name(self) -> str:
        return f"{self.name}{FOLDER_SUFFIX}"

    @property
    def config_name(self) -> str:
        return f"{self.name}{CONFIG_SUFFIX}"

    @property
    def requirements_name(self) -> str:
        return f"{self.name}{REQUIREMENTS_SUFFIX}"

    @property
    def key_prefix(self) -> str:
        return self.name.upper().replace("-", "_")

    @property
    def product_name(self) -> str:
        return self.product or self.display_name


@dataclass
class TargetConfig:
    """Credential record for one remote host"""
    host: str
    user: str
    password: Credential = field(repr=False)

    def missing_fields(self) -> List[str]:
        missing = []
        if not self.host:
            missing.append("host")
        if not self.user:
            missing.append("user")
        if not self.password:
            missing.append("password")
        return missing

    def validate(self) -> None:
        """Non-emptiness is the only check"""
        missing = self.missing_fields()
        if missing:
            raise ConfigError(f"Target config incomplete, missing: {', '.join(missing)}")


class ServiceStatus(Enum):
    """systemd unit state as reported by `systemctl is-active`"""
    ACTIVE = "active"
    INACTIVE = "inactive"
    FAILED = "failed"
    ACTIVATING = "activating"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, output: str) -> "ServiceStatus":
        """
        Map probe output to a status.

        Only the last non-empty line counts, so remote install logs printed
        before the probe do not matter. Anything unrecognised is UNKNOWN.
        """
        lines = [line.strip() for line in (output or "").splitlines() if line.strip()]
        if not lines:
            return cls.UNKNOWN
        last = lines[-1]
        for status in cls:
            if status is not cls.UNKNOWN and last == status.value:
                return status
        return cls.UNKNOWN

    @property
    def is_active(self) -> bool:
        return self is ServiceStatus.ACTIVE


# ============================================================
# Known profiles
# ============================================================

_NAME_RE = re.compile(r"^[a-z0-9][a-z0-9_-]*$")

KNOWN_PROFILES: Dict[str, ServiceProfile] = {
    "apisix": ServiceProfile("apisix", "Apache APISIX", product="APISIX"),
    "frontend": ServiceProfile("frontend", "front-end", product="front-end tools"),
    "jenkins": ServiceProfile("jenkins", "Jenkins"),
    "openemr": ServiceProfile("openemr", "OpenEMR"),
}


def get_profile(name: str) -> ServiceProfile:
    """Known profile by name, or a generic one derived from the name"""
    key = name.strip().lower()
    if not key:
        raise ConfigError("Service name must not be empty")
    if key.endswith(FOLDER_SUFFIX):
        key = key[: -len(FOLDER_SUFFIX)]
    if key in KNOWN_PROFILES:
        return KNOWN_PROFILES[key]
    if not _NAME_RE.match(key):
        raise ConfigError(f"Invalid service name: {name!r}")
    return ServiceProfile(key, key)
