from . import *
import random

import pytest


def test_mask_indices():
    from rctsea.crypto.SEA import iter_mask_indices, MASK_SIZE

    assert list(iter_mask_indices(0)) == []
    assert list(iter_mask_indices(3)) == [(0, 1, 0), (7, 8, 3), (14, 15, 6)]
    for i, (a, b, c) in enumerate(iter_mask_indices(3 * MASK_SIZE)):
        assert a == (7 * i) % MASK_SIZE
        assert b == (a + 1) % MASK_SIZE
        assert c == (3 * i) % MASK_SIZE


def test_mask_indices_period():
    from rctsea.crypto.SEA import iter_mask_indices, MASK_SIZE

    indices = list(iter_mask_indices(2 * MASK_SIZE))
    assert indices[MASK_SIZE:] == indices[:MASK_SIZE]


@pytest.mark.parametrize("size", [0, 1, 2, 4095, 4096, 4097, 10000])
def test_precomputed_matches_sequential(size):
    from rctsea.crypto.SEA import (
        create_mask,
        get_encryption_key,
        decrypt_inplace,
        decrypt_inplace_precomputed,
    )

    mask = create_mask(get_encryption_key("park%d.sea" % size))
    rng = random.Random(size)
    data = bytes(rng.randrange(256) for _ in range(size))
    assert decrypt_inplace(bytearray(data), mask) == decrypt_inplace_precomputed(
        bytearray(data), mask
    )


def test_decrypt_inplace_mutates():
    from rctsea.crypto.SEA import create_mask, get_encryption_key, decrypt_inplace

    data = bytearray.fromhex("4c0c21a973082b2858f261aef5d6617afa462ba2a979da5416a463fa48")
    result = decrypt_inplace(data, create_mask(get_encryption_key("x")))
    assert result is data
    assert data == b"R2 scenario: Forest Frontiers"


def test_decrypt_vectors():
    from rctsea.crypto.SEA import decrypt, get_encryption_key

    ciphertext = bytes.fromhex(
        "307f5712fc64f9005eca6e6c9c3a5cdb42d52698cc04946b00f55b67f1"
    )
    plain = decrypt(ciphertext, get_encryption_key(GOLDEN_SEA_NAME))
    assert plain == b"R2 scenario: Forest Frontiers"
    # Same bytes, wrong name
    assert decrypt(ciphertext, get_encryption_key("x")) != plain


def test_bad_mask():
    from rctsea.crypto.SEA import decrypt_inplace

    with pytest.raises(AssertionError):
        decrypt_inplace(bytearray(4), bytes(16))


if __name__ == "__main__":
    test_mask_indices()
    test_decrypt_vectors()
