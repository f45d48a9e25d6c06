"""
Publish domain module
"""
from .service import GitPublisher, PublishResult

__all__ = ["GitPublisher", "PublishResult"]
