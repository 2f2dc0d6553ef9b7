import pytest

from sha2stream.compress import block_words, ch, compress, maj, message_schedule, state_bytes
from sha2stream.constants import ROUND_CONSTANTS, SHA224_IV, SHA256_IV

ABC_BLOCK = b"abc" + b"\x80" + b"\x00" * 52 + (24).to_bytes(8, "big")


def test_tables():
    assert len(ROUND_CONSTANTS) == 64
    assert ROUND_CONSTANTS[0] == 0x428A2F98
    assert ROUND_CONSTANTS[-1] == 0xC67178F2
    assert len(SHA256_IV) == len(SHA224_IV) == 8
    assert SHA256_IV != SHA224_IV


def test_single_block_abc():
    out = compress(SHA256_IV, ABC_BLOCK)
    assert state_bytes(out).hex() == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


def test_compress_is_pure():
    state = list(SHA256_IV)
    block = bytearray(ABC_BLOCK)
    compress(state, block)
    assert state == list(SHA256_IV)
    assert bytes(block) == ABC_BLOCK


def test_compress_accepts_memoryview_slice():
    data = b"\x00" * 10 + ABC_BLOCK + b"\xff" * 10
    assert compress(SHA256_IV, memoryview(data)[10:74]) == compress(SHA256_IV, ABC_BLOCK)


@pytest.mark.parametrize("size", [0, 63, 65, 128])
def test_rejects_partial_block(size):
    with pytest.raises(ValueError):
        compress(SHA256_IV, b"\x00" * size)


def test_block_words_big_endian():
    block = bytes(range(64))
    words = block_words(block)
    assert len(words) == 16
    assert words[0] == 0x00010203
    assert words[15] == 0x3C3D3E3F


def test_message_schedule():
    words = block_words(ABC_BLOCK)
    w = message_schedule(words)
    assert len(w) == 64
    assert w[:16] == words
    # FIPS 180-4 example: W[16] for "abc"
    assert w[16] == 0x61626380
    assert all(0 <= x <= 0xFFFFFFFF for x in w)


def test_ch_maj():
    x, y, z = 0xFFFF0000, 0x12345678, 0x9ABCDEF0
    assert ch(x, y, z) == 0x1234DEF0
    assert maj(0xFFFFFFFF, 0, 0x0F0F0F0F) == 0x0F0F0F0F
    assert maj(0, 0, 0xFFFFFFFF) == 0
