# Copyright (c) 2026 Signer — MIT License

"""scrypt key derivation (RFC 7914).

    B  = PBKDF2-HMAC-SHA256(P, S, 1, 128 * r * p)
    B[i] = ROMix(B[i], N)            for each of the p lanes
    DK = PBKDF2-HMAC-SHA256(P, B, 1, dkLen)

``scrypt()`` validates the parameters, then dispatches to libsodium or to
the pure Python engine according to the native toggle (see ``native``).
``scrypt_pure()`` always runs the pure Python engine, which is the
reference the native backend is tested against.

Performance note: pure Python manages roughly N=1024, r=8, p=16 in tens of
seconds. Lanes are independent, so ``workers`` > 1 spreads them over a
process pool.
"""

import logging
import sys
from concurrent.futures import ProcessPoolExecutor

from .errors import ScryptParameterError
from .native import NativeMode, use_native, scrypt_native
from .pbkdf2 import hmac_sha256, pbkdf2, MAX_OUT_LEN
from .romix import romix, smix

logger = logging.getLogger(__name__)

SIZE_MAX = sys.maxsize
MAX_DK_LEN = MAX_OUT_LEN

# ── Secure memory utilities (libsodium-backed) ────────────────
_HAS_SODIUM = False
try:
    from nacl._sodium import ffi as _ffi, lib as _lib
    _HAS_SODIUM = True
except ImportError:
    pass


def _secure_zero(buf):
    """Securely wipe a mutable buffer (bytearray / memoryview)."""
    if not isinstance(buf, (bytearray, memoryview)):
        return
    n = len(buf)
    if n == 0:
        return
    if _HAS_SODIUM:
        _lib.sodium_memzero(_ffi.from_buffer(buf), n)
    else:
        for i in range(n):
            buf[i] = 0


# ── Parameter validation ─────────────────────────────────────────

def _is_int(v):
    return isinstance(v, int) and not isinstance(v, bool)


def validate_params(n, r, p, dk_len):
    """Reject invalid cost parameters before anything is allocated.

    Raises:
        ScryptParameterError: N is not a power of 2 greater than 1, r or p
            is < 1, dk_len is out of range, or 128*r*N / 128*r*p would not
            fit in the platform size type.
    """
    for name, value in (("N", n), ("r", r), ("p", p), ("dk_len", dk_len)):
        if not _is_int(value):
            raise TypeError(f"{name} must be an int, not {type(value).__name__}")
    if n < 2 or n & (n - 1):
        raise ScryptParameterError("N must be a power of 2 greater than 1")
    if r < 1:
        raise ScryptParameterError("r must be >= 1")
    if p < 1:
        raise ScryptParameterError("p must be >= 1")
    if dk_len < 0:
        raise ScryptParameterError("dk_len must be >= 0")
    if dk_len > MAX_DK_LEN:
        raise ScryptParameterError("dk_len too large")
    if n > SIZE_MAX // 128 // r:
        raise ScryptParameterError("Parameter N is too large")
    if r > SIZE_MAX // 128 // p:
        raise ScryptParameterError("Parameter r is too large")


def _check_workers(workers):
    if not _is_int(workers) or workers < 1:
        raise ScryptParameterError("workers must be >= 1")


def _check_bytes(password, salt):
    if not isinstance(password, (bytes, bytearray, memoryview)):
        raise TypeError("password must be bytes")
    if not isinstance(salt, (bytes, bytearray, memoryview)):
        raise TypeError("salt must be bytes")


# ── Lane mixing ──────────────────────────────────────────────────

def _mix_lanes(b, n, r, p, workers):
    size = 128 * r
    if workers <= 1 or p == 1:
        for i in range(p):
            smix(b, i * size, r, n)
        return

    # Each worker gets a copy of its own lane; results land in lane order.
    lanes = [bytes(b[i * size:(i + 1) * size]) for i in range(p)]
    with ProcessPoolExecutor(max_workers=min(workers, p)) as pool:
        for i, mixed in enumerate(pool.map(romix, lanes, [n] * p)):
            b[i * size:(i + 1) * size] = mixed


# ── Public API ───────────────────────────────────────────────────

def scrypt_pure(password, salt, n, r, p, dk_len, workers=1):
    """Pure Python scrypt.

    Args:
        password: Secret bytes.
        salt: Salt bytes.
        n: CPU/memory cost, a power of 2 greater than 1.
        r: Block size factor (>= 1).
        p: Parallelisation factor (>= 1).
        dk_len: Length of the derived key in bytes (>= 0).
        workers: Processes used for the p lanes; 1 computes them in order.

    Returns:
        Derived key as bytes.
    """
    _check_bytes(password, salt)
    validate_params(n, r, p, dk_len)
    _check_workers(workers)

    mac = hmac_sha256(password)
    b = bytearray(pbkdf2(mac, salt, 1, 128 * r * p))
    try:
        _mix_lanes(b, n, r, p, workers)
        return pbkdf2(mac, b, 1, dk_len)
    finally:
        _secure_zero(b)


def scrypt(password, salt, n, r, p, dk_len, native=None, workers=1):
    """scrypt KDF with backend selection.

    Args:
        password: Secret bytes.
        salt: Salt bytes.
        n: CPU/memory cost, a power of 2 greater than 1.
        r: Block size factor (>= 1).
        p: Parallelisation factor (>= 1).
        dk_len: Length of the derived key in bytes (>= 0).
        native: "default", "false" or "require" (see ``NativeMode``).
            None reads the SCRYPT_NATIVE environment variable.
        workers: Processes for the pure Python lanes.

    Returns:
        Derived key as bytes.

    Raises:
        ScryptParameterError: Invalid cost parameters.
        PrimitiveUnavailableError: HMAC-SHA256 cannot be constructed.
        NativeUnavailableError: native="require" and libsodium is unusable.
    """
    _check_bytes(password, salt)
    validate_params(n, r, p, dk_len)
    _check_workers(workers)
    mode = NativeMode.from_env() if native is None else NativeMode.parse(native)

    if use_native(mode, n, r, p):
        logger.debug("scrypt N=%d r=%d p=%d dk_len=%d via libsodium",
                     n, r, p, dk_len)
        return scrypt_native(password, salt, n, r, p, dk_len)

    logger.debug("scrypt N=%d r=%d p=%d dk_len=%d via pure Python",
                 n, r, p, dk_len)
    return scrypt_pure(password, salt, n, r, p, dk_len, workers=workers)
