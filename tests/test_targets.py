"""Tests for service profiles, target configs and service status."""

import pytest

from vmprov.core.credentials import Credential
from vmprov.core.exceptions import ConfigError
from vmprov.domain.targets import KNOWN_PROFILES, ServiceStatus, TargetConfig, get_profile


def test_profile_derives_file_names() -> None:
    profile = KNOWN_PROFILES["openemr"]

    assert profile.folder_name == "openemr-vm"
    assert profile.config_name == "openemr_config"
    assert profile.requirements_name == "openemr_requirements.sh"
    assert profile.key_prefix == "OPENEMR"


def test_get_profile_accepts_folder_name_and_case() -> None:
    assert get_profile("APISIX") is KNOWN_PROFILES["apisix"]
    assert get_profile("jenkins-vm") is KNOWN_PROFILES["jenkins"]


def test_get_profile_builds_generic_profile() -> None:
    profile = get_profile("grafana")

    assert profile.display_name == "grafana"
    assert profile.config_name == "grafana_config"


@pytest.mark.parametrize("name", ["", "   ", "../etc", "a/b"])
def test_get_profile_rejects_bad_names(name: str) -> None:
    with pytest.raises(ConfigError):
        get_profile(name)


def test_target_config_validate_lists_missing_fields() -> None:
    config = TargetConfig(host="10.0.0.5", user="", password=Credential(""))

    with pytest.raises(ConfigError, match="user, password"):
        config.validate()


def test_target_config_repr_hides_password() -> None:
    config = TargetConfig(host="10.0.0.5", user="ops", password=Credential("hunter2"))

    assert "hunter2" not in repr(config)
    assert "hunter2" not in repr(config.password)
    assert config.password.reveal() == "hunter2"


def test_credential_wiped_after_context() -> None:
    with Credential("s3cret") as cred:
        assert cred
    assert not cred
    assert cred.reveal() == ""


@pytest.mark.parametrize(
    "output,expected",
    [
        ("active\n", ServiceStatus.ACTIVE),
        ("inactive", ServiceStatus.INACTIVE),
        ("failed\n", ServiceStatus.FAILED),
        ("activating", ServiceStatus.ACTIVATING),
        ("", ServiceStatus.UNKNOWN),
        ("Active", ServiceStatus.UNKNOWN),
        ("not-found", ServiceStatus.UNKNOWN),
        ("=== installing ===\nsome log\nactive\n", ServiceStatus.ACTIVE),
    ],
)
def test_service_status_parse(output: str, expected: ServiceStatus) -> None:
    assert ServiceStatus.parse(output) is expected


def test_only_active_is_active() -> None:
    assert ServiceStatus.ACTIVE.is_active
    assert not any(s.is_active for s in ServiceStatus if s is not ServiceStatus.ACTIVE)
