"""
Shell-sourceable key-value storage for target configs
"""
import os
import shlex
from pathlib import Path
from typing import Dict, Optional

from ...core.constants import CONFIG_FILE_MODE
from ...core.exceptions import ConfigError

FIELDS = ("host", "user", "password")
_SUFFIXES = {"host": "HOST", "user": "USER", "password": "PASS"}


def quote_value(value: str) -> str:
    """Single-quote a value so `source` (and shlex) yield it back verbatim"""
    return "'" + value.replace("'", "'\"'\"'") + "'"


def parse_assignments(text: str) -> Dict[str, str]:
    """
    Parse KEY='value' lines.

    Comments and blank lines are skipped, an optional `export ` prefix is
    accepted. Quoting follows POSIX shell rules via shlex.
    """
    values: Dict[str, str] = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, rest = line.partition("=")
        if not sep or not key.isidentifier():
            raise ConfigError(f"Line {lineno}: expected KEY=value")
        try:
            tokens = shlex.split(rest, comments=True)
        except ValueError as e:
            raise ConfigError(f"Line {lineno}: {e}") from e
        values[key] = " ".join(tokens)
    return values


class FileTargetConfigStore:
    """
    Target config persisted as a file that bash can `source`.

    Layout:
        # <title>
        <PREFIX>_HOST='...'
        <PREFIX>_USER='...'
        <PREFIX>_PASS='...'

    Records are plain dicts with the keys host, user, password.
    """

    def __init__(self, path: Path, key_prefix: str, title: str = ""):
        self.path = Path(path)
        self.key_prefix = key_prefix
        self.title = title

    def _key(self, field: str) -> str:
        return f"{self.key_prefix}_{_SUFFIXES[field]}"

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> Optional[Dict[str, str]]:
        """Stored record, or None when the file is absent. No validation."""
        if not self.exists():
            return None
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read {self.path}: {e}") from e
        values = parse_assignments(text)
        return {field: values.get(self._key(field), "") for field in FIELDS}

    def save(self, record: Dict[str, str]) -> Path:
        lines = []
        if self.title:
            lines.append(f"# {self.title}")
        for field in FIELDS:
            lines.append(f"{self._key(field)}={quote_value(record.get(field, ''))}")
        lines.append("")

        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Created 0600 from the start so the secret is never world-readable
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CONFIG_FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write("\n".join(lines))
        os.chmod(self.path, CONFIG_FILE_MODE)
        return self.path
