# Copyright (c) 2026 Signer — MIT License

"""BlockMix and ROMix (RFC 7914 §4 and §5) — pure Python.

A ROMix lane is 128*r bytes, held internally as 32*r little-endian uint32
words. The scratch table V is one flat word list of N slots, allocated per
call and dropped when the call returns.
"""

import struct

from .salsa import _salsa20_8_words, BLOCK_BYTES, BLOCK_WORDS

# ── Little-endian helpers ────────────────────────────────────────

def _lane_struct(r):
    return struct.Struct("<%dI" % (32 * r))


def _block_r(block):
    """Infer r from a 128*r byte block."""
    n = len(block)
    if n == 0 or n % (2 * BLOCK_BYTES):
        raise ValueError(f"block length must be a positive multiple of "
                         f"{2 * BLOCK_BYTES}, got {n}")
    return n // (2 * BLOCK_BYTES)


def _check_n(n):
    if n < 2 or n & (n - 1):
        raise ValueError("N must be a power of 2 greater than 1")


# ── BlockMix ─────────────────────────────────────────────────────

def _blockmix_words(b, r):
    """BlockMix over 32*r words; returns a new list in interleaved order.

    Y[i] = Salsa20/8(Y[i-1] xor B[i]) with Y[-1] = B[2r-1]; the output is
    Y[0], Y[2], ..., Y[2r-2], Y[1], Y[3], ..., Y[2r-1].
    """
    x = b[-BLOCK_WORDS:]
    out = [0] * (32 * r)
    for i in range(2 * r):
        src = i * BLOCK_WORDS
        x = _salsa20_8_words([a ^ c for a, c in zip(x, b[src:src + BLOCK_WORDS])])
        dst = ((i >> 1) + (i & 1) * r) * BLOCK_WORDS
        out[dst:dst + BLOCK_WORDS] = x
    return out


def blockmix(block):
    """BlockMix a 128*r byte block, returns 128*r bytes."""
    r = _block_r(block)
    lane = _lane_struct(r)
    return lane.pack(*_blockmix_words(list(lane.unpack(bytes(block))), r))


# ── ROMix ────────────────────────────────────────────────────────

def _integerify(x):
    # First word of the last 64-byte sub-block; only the low 32 bits are used.
    return x[-BLOCK_WORDS]


def _romix_words(x, n, r):
    size = 32 * r
    v = [0] * (size * n)

    for i in range(n):
        off = i * size
        v[off:off + size] = x
        x = _blockmix_words(x, r)

    mask = n - 1
    for _ in range(n):
        off = (_integerify(x) & mask) * size
        x = _blockmix_words([a ^ c for a, c in zip(x, v[off:off + size])], r)

    return x


def romix(block, n):
    """ROMix a 128*r byte block with cost parameter ``n``.

    Args:
        block: 128*r bytes; r is inferred from the length.
        n: CPU/memory cost, a power of 2 greater than 1.

    Returns:
        The mixed 128*r byte block.
    """
    _check_n(n)
    r = _block_r(block)
    lane = _lane_struct(r)
    return lane.pack(*_romix_words(list(lane.unpack(bytes(block))), n, r))


def smix(b, offset, r, n):
    """ROMix the lane ``b[offset:offset + 128*r]`` of a bytearray in place."""
    _check_n(n)
    size = 128 * r
    if offset < 0 or offset + size > len(b):
        raise ValueError("lane lies outside the buffer")
    lane = _lane_struct(r)
    x = list(lane.unpack_from(b, offset))
    lane.pack_into(b, offset, *_romix_words(x, n, r))
