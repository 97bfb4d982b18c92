# Copyright (c) 2026 Signer — MIT License

"""PBKDF2-HMAC-SHA256 (RFC 8018 §5.2) over a caller-supplied HMAC instance.

scrypt calls this twice with a single iteration: once to stretch the salt
into the 128*r*p byte working buffer, once to compress that buffer into the
derived key. The HMAC itself comes from the standard library.
"""

import hashlib
import hmac
import struct

from .errors import PrimitiveUnavailableError

HASH_LEN = 32                      # SHA-256 output size
MAX_OUT_LEN = ((1 << 32) - 1) * HASH_LEN   # 32-bit block counter

_be32 = struct.Struct(">I").pack


def hmac_sha256(key):
    """Return an HMAC-SHA256 instance keyed with ``key``."""
    try:
        return hmac.new(bytes(key), digestmod=hashlib.sha256)
    except (ValueError, TypeError) as exc:
        raise PrimitiveUnavailableError(
            f"HMAC-SHA256 is not available: {exc}") from exc


def pbkdf2(mac, salt, iterations, out_len):
    """Expand ``salt`` into ``out_len`` pseudorandom bytes.

    Args:
        mac: Keyed HMAC instance (the password is the key). Never mutated;
            each block works on a copy.
        salt: Bytes-like salt.
        iterations: PBKDF2 iteration count (>= 1).
        out_len: Number of output bytes (>= 0).

    Returns:
        ``out_len`` bytes.
    """
    if iterations < 1:
        raise ValueError("iterations must be >= 1")
    if out_len < 0:
        raise ValueError("out_len must be >= 0")
    if out_len > MAX_OUT_LEN:
        raise ValueError("out_len too large for PBKDF2-HMAC-SHA256")

    salt = bytes(salt)
    out = bytearray()
    index = 1
    while len(out) < out_len:
        prf = mac.copy()
        prf.update(salt + _be32(index))
        u = prf.digest()
        t = int.from_bytes(u, "big")
        for _ in range(iterations - 1):
            prf = mac.copy()
            prf.update(u)
            u = prf.digest()
            t ^= int.from_bytes(u, "big")
        out += t.to_bytes(len(u), "big")
        index += 1
    return bytes(out[:out_len])
