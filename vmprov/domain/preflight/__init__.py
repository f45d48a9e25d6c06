"""
Preflight domain module
"""
from .service import PreflightService

__all__ = ["PreflightService"]
