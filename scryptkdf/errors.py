# Copyright (c) 2026 Signer — MIT License

"""Exceptions raised by the scrypt KDF."""


class ScryptError(Exception):
    """Base class for every error raised by this package."""


class ScryptParameterError(ScryptError, ValueError):
    """N, r, p, dk_len or workers rejected before any buffer is allocated."""


class PrimitiveUnavailableError(ScryptError, RuntimeError):
    """HMAC-SHA256 could not be constructed in this runtime."""


class NativeUnavailableError(PrimitiveUnavailableError):
    """The libsodium backend was required but cannot be used."""
