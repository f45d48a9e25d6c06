"""
Target domain module
"""
from .models import ServiceProfile, TargetConfig, ServiceStatus, KNOWN_PROFILES, get_profile
from .service import TargetConfigService

__all__ = [
    "ServiceProfile",
    "TargetConfig",
    "ServiceStatus",
    "KNOWN_PROFILES",
    "get_profile",
    "TargetConfigService",
]
