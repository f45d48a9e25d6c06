"""
Unified exception definitions
"""


class VmprovError(Exception):
    """Base exception class"""
    pass


class PreflightError(VmprovError):
    """Local precondition failed (privilege level, mirror repository, dependency)"""
    pass


class ConfigError(VmprovError):
    """Configuration error"""
    pass


class ConnectionError(VmprovError):
    """Connection error"""
    pass


class RemoteExecutionError(VmprovError):
    """Remote command or script failed"""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class PublishError(VmprovError):
    """Commit or push to the mirror repository failed"""
    pass


class WorkstationError(VmprovError):
    """Local workstation setup error"""
    pass
