from dataclasses import dataclass
from functools import cache
from typing import Iterator, Tuple

MASK_SIZE = 0x1000
MASK_SEED_XOR = 0xF7654321
U32 = 0xFFFFFFFF


@dataclass(frozen=True)
class EncryptionKey:
    seed0: int = 0
    seed1: int = 0


def rol32(value: int, shift: int) -> int:
    value &= U32
    return ((value << shift) | (value >> (32 - shift))) & U32


@cache
def _get_encryption_key(name: bytes) -> EncryptionKey:
    s0 = 0
    for ch in reversed(name):
        s0 = ((s0 + (s0 << 5)) ^ ch) & U32
    s1 = 0
    for ch in name:
        s1 = ((s1 + (s1 << 5)) ^ ch) & U32
    return EncryptionKey(s0, s1)


def get_encryption_key(name: str | bytes) -> EncryptionKey:
    """Derives the per-file key from a file's *base* name.

    The name is hashed twice, once backwards into seed0 and once forwards into seed1.
    Bytes are taken as unsigned 8-bit values; ``str`` names are hashed over their UTF-8 encoding.

    Args:
        name (str | bytes): Base name of the file, extension included. Case sensitive.

    Returns:
        EncryptionKey: The derived key
    """
    if isinstance(name, str):
        name = name.encode("utf-8", "surrogateescape")
    return _get_encryption_key(bytes(name))


def create_mask(key: EncryptionKey, size: int = MASK_SIZE) -> bytes:
    """Expands a key into the cipher's mask table.

    Each generator round emits up to 4 bytes. A short final round (fewer than 4 bytes left)
    emits only what is left yet still advances the generator by a full round.

    Args:
        key (EncryptionKey): Key to expand
        size (int, optional): Mask length. Defaults to MASK_SIZE, which is what the cipher uses.

    Returns:
        bytes: Mask of exactly ``size`` bytes
    """
    mask = bytearray(size)
    seed0, seed1 = key.seed0 & U32, key.seed1 & U32
    pos, remaining = 0, size
    while remaining > 0:
        s0 = seed0
        s1 = seed1 ^ MASK_SEED_XOR
        seed0 = (rol32(s1, 25) + s0) & U32
        seed1 = rol32(s0, 29)
        mask[pos] = (s0 >> 3) & 0xFF
        if remaining >= 2:
            mask[pos + 1] = (s0 >> 11) & 0xFF
        if remaining >= 3:
            mask[pos + 2] = (s0 >> 19) & 0xFF
        if remaining >= 4:
            mask[pos + 3] = (seed1 >> 24) & 0xFF
        emitted = min(remaining, 4)
        pos += emitted
        remaining -= emitted
    return bytes(mask)


def iter_mask_indices(count: int) -> Iterator[Tuple[int, int, int]]:
    """Yields the (a, b, c) mask indices used for each of the first ``count`` bytes.

    The sequence only depends on the position, never on the data. It repeats every MASK_SIZE bytes.
    """
    b = c = 0
    for _ in range(count):
        a = b % MASK_SIZE
        c = c % MASK_SIZE
        b = (a + 1) % MASK_SIZE
        yield a, b, c
        c += 3
        b = a + 7


def decrypt_inplace(data: bytearray, mask: bytes) -> bytearray:
    """Decrypts ``data`` in place, one byte at a time.

    Args:
        data (bytearray): Ciphertext, without the checksum trailer
        mask (bytes): Mask from ``create_mask``

    Returns:
        bytearray: ``data``, now holding the plaintext
    """
    assert len(mask) == MASK_SIZE, "mask must be %d bytes" % MASK_SIZE
    for i, (a, b, c) in enumerate(iter_mask_indices(len(data))):
        data[i] = (((data[i] - mask[b]) ^ mask[c]) + mask[a]) & 0xFF
    return data


def decrypt_inplace_precomputed(data: bytearray, mask: bytes) -> bytearray:
    """Same as ``decrypt_inplace``, with one period of mask lookups resolved up front."""
    assert len(mask) == MASK_SIZE, "mask must be %d bytes" % MASK_SIZE
    period = [
        (mask[b], mask[c], mask[a])
        for a, b, c in iter_mask_indices(min(len(data), MASK_SIZE))
    ]
    for i in range(len(data)):
        sub, xor, add = period[i & (MASK_SIZE - 1)]
        data[i] = (((data[i] - sub) ^ xor) + add) & 0xFF
    return data


def decrypt(data: bytes, key: EncryptionKey) -> bytearray:
    return decrypt_inplace_precomputed(bytearray(data), create_mask(key))
