"""
Core utility functions
"""
import os
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey


# ============================================================
# SSH Key Management
# ============================================================

def public_key_path(key_path: Path) -> Path:
    return Path(str(key_path) + ".pub")


def generate_ssh_key_pair(key_path: Path, comment: str) -> Tuple[str, str]:
    """
    Generate an Ed25519 SSH key pair without passphrase, in OpenSSH format.
    
    Args:
        key_path: Path to private key file (public key will be key_path + '.pub')
        comment: Comment written after the public key
    
    Returns:
        (private_key_path, public_key_path) as strings
    """
    key_path = Path(key_path).expanduser()
    key_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
    
    key = Ed25519PrivateKey.generate()
    private_bytes = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.OpenSSH,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_bytes = key.public_key().public_bytes(
        encoding=serialization.Encoding.OpenSSH,
        format=serialization.PublicFormat.OpenSSH,
    )
    
    fd = os.open(key_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "wb") as f:
        f.write(private_bytes)
    key_path.chmod(0o600)
    
    pub_key_path = public_key_path(key_path)
    pub_key_path.write_text(f"{public_bytes.decode()} {comment}\n")
    pub_key_path.chmod(0o644)
    
    return str(key_path), str(pub_key_path)


def backup_key_pair(key_path: Path, now: Optional[datetime] = None) -> Tuple[Path, Path]:
    """
    Move an existing key pair aside with a `.bak_<YYYYmmdd_HHMMSS>` suffix.
    
    Returns:
        (private_backup, public_backup)
    """
    suffix = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    key_path = Path(key_path).expanduser()
    pub = public_key_path(key_path)
    private_backup = Path(f"{key_path}.bak_{suffix}")
    public_backup = Path(f"{pub}.bak_{suffix}")
    key_path.rename(private_backup)
    pub.rename(public_backup)
    return private_backup, public_backup
