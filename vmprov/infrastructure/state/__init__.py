"""
Local state storage
"""
from .config_file import FileTargetConfigStore, parse_assignments, quote_value
from .gitignore import ensure_ignored, is_ignored

__all__ = [
    "FileTargetConfigStore",
    "parse_assignments",
    "quote_value",
    "ensure_ignored",
    "is_ignored",
]
