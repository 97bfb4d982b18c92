# Copyright (c) 2026 Signer — MIT License

"""libsodium scrypt backend (via PyNaCl) and the native toggle.

libsodium's ``crypto_pwhash_scryptsalsa208sha256_ll`` is the low-level
scrypt with raw N, r, p — the same function as the pure-Python core, only
~100x faster. It is a drop-in substitute: the pure core stays the reference
and the test suite checks the two agree byte for byte.

Toggle values (``NativeMode.parse`` / ``SCRYPT_NATIVE`` env var):
    "default"  — use libsodium when available, silently fall back otherwise.
    "false"    — never use libsodium.
    "require"  — use libsodium or raise NativeUnavailableError.
"""

import logging
import os
import sys

from .errors import NativeUnavailableError

logger = logging.getLogger(__name__)

ENV_VAR = "SCRYPT_NATIVE"

# ── Backend probe ────────────────────────────────────────────────
# A missing pynacl or a minimal libsodium build both mean "unavailable".
_HAS_NACL = False
try:
    import nacl.hashlib
    _HAS_NACL = bool(nacl.hashlib.SCRYPT_AVAILABLE)
except ImportError:
    pass

HAS_NATIVE = _HAS_NACL

# libsodium parameter limits beyond the ones the core enforces
_PR_MAX = (1 << 30) - 1
_MAXMEM_SLACK = 1 << 16


class NativeMode:
    """Three-state switch for the libsodium backend."""
    DEFAULT = "default"
    NEVER = "false"
    REQUIRE = "require"

    _ALL = (DEFAULT, NEVER, REQUIRE)

    @classmethod
    def parse(cls, value):
        """Normalise a toggle string, raising ValueError if unrecognised."""
        if value is None:
            return cls.DEFAULT
        mode = str(value).strip().lower()
        if mode not in cls._ALL:
            raise ValueError(
                f"Unrecognised {ENV_VAR}, expecting false, require or "
                f"default; not {value!r}")
        return mode

    @classmethod
    def from_env(cls, environ=None):
        """Read the toggle from ``SCRYPT_NATIVE`` (absent means default)."""
        env = os.environ if environ is None else environ
        return cls.parse(env.get(ENV_VAR))


def _maxmem(n, r, p):
    return 128 * r * (n + p + 2) + _MAXMEM_SLACK


def native_supports(n, r, p):
    """True when libsodium accepts these (already validated) parameters."""
    if r * p > _PR_MAX:
        return False
    if n >= 1 << (16 * r):
        return False
    return _maxmem(n, r, p) <= sys.maxsize


def use_native(mode, n, r, p):
    """Decide whether this call goes to libsodium.

    Args:
        mode: A NativeMode value.
        n, r, p: Validated scrypt cost parameters.

    Returns:
        True for the native backend, False for pure Python.

    Raises:
        NativeUnavailableError: mode is REQUIRE and libsodium cannot run
            this call.
    """
    if mode == NativeMode.NEVER:
        return False
    if not HAS_NATIVE:
        if mode == NativeMode.REQUIRE:
            raise NativeUnavailableError("native scrypt library failed to load")
        logger.info("libsodium scrypt unavailable, using pure Python")
        return False
    if not native_supports(n, r, p):
        if mode == NativeMode.REQUIRE:
            raise NativeUnavailableError(
                f"native scrypt cannot handle N={n}, r={r}, p={p}")
        logger.info("libsodium scrypt rejects N=%d r=%d p=%d, using pure Python",
                    n, r, p)
        return False
    return True


def scrypt_native(password, salt, n, r, p, dk_len):
    """scrypt via libsodium. Parameters must already be validated."""
    if not HAS_NATIVE:
        raise NativeUnavailableError("native scrypt library failed to load")
    return nacl.hashlib.scrypt(bytes(password), salt=bytes(salt), n=n, r=r,
                               p=p, maxmem=_maxmem(n, r, p), dklen=dk_len)
