"""
Workstation domain module
"""
from .service import WorkstationService

__all__ = ["WorkstationService"]
