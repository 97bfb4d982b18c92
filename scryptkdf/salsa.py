# Copyright (c) 2026 Signer — MIT License

"""Salsa20/8 core (RFC 7914 §3) — pure Python.

The core is a 64-byte permutation: 16 little-endian uint32 words, four
double rounds of add-rotate-xor, then the input words are added back in.
BlockMix calls the word-level function directly so blocks only cross the
bytes <-> words boundary once per ROMix lane.
"""

import struct

MASK32 = 0xFFFFFFFF
BLOCK_BYTES = 64
BLOCK_WORDS = 16

_block = struct.Struct("<16I")


# ── Word-level core ──────────────────────────────────────────────

def _salsa20_8_words(b):
    """Salsa20/8 over a sequence of 16 uint32 words, returns a new list."""
    (x00, x01, x02, x03, x04, x05, x06, x07,
     x08, x09, x10, x11, x12, x13, x14, x15) = b
    M = MASK32

    for _ in range(4):
        # Columns
        t = (x00 + x12) & M; x04 ^= ((t << 7) & M) | (t >> 25)
        t = (x04 + x00) & M; x08 ^= ((t << 9) & M) | (t >> 23)
        t = (x08 + x04) & M; x12 ^= ((t << 13) & M) | (t >> 19)
        t = (x12 + x08) & M; x00 ^= ((t << 18) & M) | (t >> 14)
        t = (x05 + x01) & M; x09 ^= ((t << 7) & M) | (t >> 25)
        t = (x09 + x05) & M; x13 ^= ((t << 9) & M) | (t >> 23)
        t = (x13 + x09) & M; x01 ^= ((t << 13) & M) | (t >> 19)
        t = (x01 + x13) & M; x05 ^= ((t << 18) & M) | (t >> 14)
        t = (x10 + x06) & M; x14 ^= ((t << 7) & M) | (t >> 25)
        t = (x14 + x10) & M; x02 ^= ((t << 9) & M) | (t >> 23)
        t = (x02 + x14) & M; x06 ^= ((t << 13) & M) | (t >> 19)
        t = (x06 + x02) & M; x10 ^= ((t << 18) & M) | (t >> 14)
        t = (x15 + x11) & M; x03 ^= ((t << 7) & M) | (t >> 25)
        t = (x03 + x15) & M; x07 ^= ((t << 9) & M) | (t >> 23)
        t = (x07 + x03) & M; x11 ^= ((t << 13) & M) | (t >> 19)
        t = (x11 + x07) & M; x15 ^= ((t << 18) & M) | (t >> 14)
        # Rows
        t = (x00 + x03) & M; x01 ^= ((t << 7) & M) | (t >> 25)
        t = (x01 + x00) & M; x02 ^= ((t << 9) & M) | (t >> 23)
        t = (x02 + x01) & M; x03 ^= ((t << 13) & M) | (t >> 19)
        t = (x03 + x02) & M; x00 ^= ((t << 18) & M) | (t >> 14)
        t = (x05 + x04) & M; x06 ^= ((t << 7) & M) | (t >> 25)
        t = (x06 + x05) & M; x07 ^= ((t << 9) & M) | (t >> 23)
        t = (x07 + x06) & M; x04 ^= ((t << 13) & M) | (t >> 19)
        t = (x04 + x07) & M; x05 ^= ((t << 18) & M) | (t >> 14)
        t = (x10 + x09) & M; x11 ^= ((t << 7) & M) | (t >> 25)
        t = (x11 + x10) & M; x08 ^= ((t << 9) & M) | (t >> 23)
        t = (x08 + x11) & M; x09 ^= ((t << 13) & M) | (t >> 19)
        t = (x09 + x08) & M; x10 ^= ((t << 18) & M) | (t >> 14)
        t = (x15 + x14) & M; x12 ^= ((t << 7) & M) | (t >> 25)
        t = (x12 + x15) & M; x13 ^= ((t << 9) & M) | (t >> 23)
        t = (x13 + x12) & M; x14 ^= ((t << 13) & M) | (t >> 19)
        t = (x14 + x13) & M; x15 ^= ((t << 18) & M) | (t >> 14)

    return [
        (x00 + b[0]) & M, (x01 + b[1]) & M, (x02 + b[2]) & M, (x03 + b[3]) & M,
        (x04 + b[4]) & M, (x05 + b[5]) & M, (x06 + b[6]) & M, (x07 + b[7]) & M,
        (x08 + b[8]) & M, (x09 + b[9]) & M, (x10 + b[10]) & M, (x11 + b[11]) & M,
        (x12 + b[12]) & M, (x13 + b[13]) & M, (x14 + b[14]) & M, (x15 + b[15]) & M,
    ]


# ── Byte-level API ───────────────────────────────────────────────

def salsa20_8(block):
    """Apply the Salsa20/8 core to a 64-byte block.

    Args:
        block: 64 bytes, read as 16 little-endian uint32 words.

    Returns:
        The permuted 64-byte block.
    """
    if len(block) != BLOCK_BYTES:
        raise ValueError(f"Salsa20/8 block must be {BLOCK_BYTES} bytes, "
                         f"got {len(block)}")
    return _block.pack(*_salsa20_8_words(_block.unpack(bytes(block))))
