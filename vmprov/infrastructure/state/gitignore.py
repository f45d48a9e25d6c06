"""
Per-folder ignore list maintenance
"""
from pathlib import Path

from ...core.constants import GITIGNORE_NAME


def is_ignored(folder: Path, entry: str) -> bool:
    """True when `entry` is a whole line of `<folder>/.gitignore`"""
    path = Path(folder) / GITIGNORE_NAME
    if not path.exists():
        return False
    return entry in (line.strip() for line in path.read_text(encoding="utf-8").splitlines())


def ensure_ignored(folder: Path, entry: str) -> bool:
    """
    Make sure `entry` is a line of `<folder>/.gitignore`.

    Returns True when the file was created or changed.
    """
    path = Path(folder) / GITIGNORE_NAME
    if is_ignored(folder, entry):
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    text = path.read_text(encoding="utf-8") if path.exists() else ""
    if text and not text.endswith("\n"):
        text += "\n"
    path.write_text(f"{text}{entry}\n", encoding="utf-8")
    return True
