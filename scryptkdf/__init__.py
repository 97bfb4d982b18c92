# Copyright (c) 2026 Signer — MIT License

"""scrypt key derivation function (RFC 7914).

Engine (pure Python, the reference):
    PBKDF2-HMAC-SHA256  — block expander, HMAC from the standard library.
    Salsa20/8           — 64-byte core permutation.
    BlockMix / ROMix    — sequential memory-hard mixing, 128*r*N bytes.

Backends:
    scrypt() uses libsodium (PyNaCl) when available and falls back to the
    pure Python engine. The choice is controlled per call by ``native=``
    ("default", "false", "require") or the SCRYPT_NATIVE environment
    variable.
"""

from .errors import (
    ScryptError, ScryptParameterError,
    PrimitiveUnavailableError, NativeUnavailableError,
)
from .pbkdf2 import hmac_sha256, pbkdf2, HASH_LEN
from .salsa import salsa20_8
from .romix import blockmix, romix, smix
from .native import NativeMode, HAS_NATIVE, scrypt_native
from .kdf import scrypt, scrypt_pure, validate_params, SIZE_MAX, MAX_DK_LEN

__all__ = [
    # KDF
    "scrypt", "scrypt_pure", "scrypt_native", "validate_params",
    "NativeMode", "HAS_NATIVE", "SIZE_MAX", "MAX_DK_LEN",
    # Building blocks
    "hmac_sha256", "pbkdf2", "HASH_LEN",
    "salsa20_8", "blockmix", "romix", "smix",
    # Errors
    "ScryptError", "ScryptParameterError",
    "PrimitiveUnavailableError", "NativeUnavailableError",
]
