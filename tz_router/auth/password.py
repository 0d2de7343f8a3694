"""Password and token encoding helpers replicating the admin panel's JavaScript."""

import base64
import hashlib


def b64encode_text(text: str) -> str:
    """Standard RFC 4648 Base64 over the UTF-8 bytes of *text*."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def sha256_hex(text: str) -> str:
    """Lower-case hex SHA-256 of the UTF-8 bytes of *text*."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def encode_login_password(salt: str, password: str) -> str:
    """
    Replicate the login page's password transform:

      1. SHA256(salt + password)  -> hex string
      2. Base64(hex string)
    """
    return b64encode_text(sha256_hex(salt + password))
