"""Reversible passphrase obfuscation for export files.

This is NOT encryption. It only keeps an export file from being readable
at a glance; anyone with the file and a little time can reverse it
without the passphrase. Do not rely on it to protect sensitive data.

Scheme: key = sum of the passphrase's code points (1 if that is 0).
Byte i of the UTF-8 text is XORed with (key + i mod 251) mod 256, and
the result is base64 encoded. An empty passphrase leaves the text as is.
"""

import base64
import binascii

CYCLE = 251


def _key(passphrase: str) -> int:
    return sum(ord(ch) for ch in passphrase) or 1


def _xor(data: bytes, key: int) -> bytes:
    return bytes(b ^ ((key + (i % CYCLE)) & 0xFF) for i, b in enumerate(data))


def obfuscate(text: str, passphrase: str = "") -> str:
    """Obfuscate ``text`` with ``passphrase``; identity when it is empty."""
    if not passphrase:
        return text
    return base64.b64encode(_xor(text.encode("utf-8"), _key(passphrase))).decode("ascii")


def deobfuscate(payload: str, passphrase: str = "") -> str:
    """Reverse ``obfuscate``.

    Raises:
        ValueError: If the payload is not valid base64, or the passphrase
            does not yield UTF-8 text.
    """
    if not passphrase:
        return payload
    try:
        raw = base64.b64decode(payload.strip(), validate=True)
    except binascii.Error as e:
        raise ValueError(f"Payload is not base64: {e}") from e
    return _xor(raw, _key(passphrase)).decode("utf-8")


__all__ = ["obfuscate", "deobfuscate"]
