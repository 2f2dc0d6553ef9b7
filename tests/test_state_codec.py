import hashlib
import struct

import pytest

from sha2stream import STATE_SIZE, ContextSnapshot, Sha2Context, StateDecodeError, decode_state, encode_state
from sha2stream.state import MAGIC_STATE


def test_state_size():
    assert STATE_SIZE == 64 + 8 + 8 * 4 + 4


def test_resume_from_saved_state():
    data = bytes(range(256)) * 3
    ctx = Sha2Context(224)
    ctx.update(data[:300])
    blob = ctx.save_state()

    resumed = Sha2Context.load_state(blob, require_crc32=True)
    assert resumed.variant == 224
    assert resumed.total_length == 300
    assert resumed.pending == data[256:300]
    resumed.update(data[300:])
    assert resumed.finalize() == hashlib.sha224(data).digest()

    # original keeps going on its own
    ctx.update(data[300:])
    assert ctx.finalize() == hashlib.sha224(data).digest()


def test_snapshot_fields():
    ctx = Sha2Context()
    ctx.update(b"x" * 70)
    snap = ctx.snapshot()
    assert snap.total_length == 70
    assert snap.pending == 6
    assert snap.buffer[:6] == b"x" * 6
    assert snap.digest_length == 32
    assert snap.state == ctx.state


def test_decode_without_crc():
    blob = Sha2Context().save_state(include_crc32=False)
    snap = decode_state(blob)
    assert snap.total_length == 0
    with pytest.raises(StateDecodeError):
        decode_state(blob, require_crc32=True)


def test_crc_mismatch():
    blob = bytearray(Sha2Context().save_state())
    blob[10] ^= 0x01
    with pytest.raises(StateDecodeError, match="CRC32"):
        decode_state(bytes(blob))


def test_bad_magic_and_version():
    body = Sha2Context().save_state(include_crc32=False)[6:]
    with pytest.raises(StateDecodeError, match="magic"):
        decode_state(struct.pack(">IH", 0xDEADBEEF, 1) + body)
    with pytest.raises(StateDecodeError, match="version"):
        decode_state(struct.pack(">IH", MAGIC_STATE, 2) + body)


@pytest.mark.parametrize("cut", [0, 1, 50, 113, 115])
def test_bad_length(cut):
    blob = Sha2Context().save_state()
    with pytest.raises(StateDecodeError):
        decode_state(blob[:cut])


def test_bad_digest_length():
    snap = ContextSnapshot(buffer=bytes(64), total_length=0, state=(0,) * 8, digest_length=20)
    with pytest.raises(StateDecodeError, match="digest length"):
        decode_state(encode_state(snap))


def test_encode_rejects_malformed_snapshot():
    with pytest.raises(ValueError):
        encode_state(ContextSnapshot(buffer=b"short", total_length=0, state=(0,) * 8, digest_length=32))
    with pytest.raises(ValueError):
        encode_state(ContextSnapshot(buffer=bytes(64), total_length=0, state=(0,) * 7, digest_length=32))


@pytest.mark.parametrize(
    "snap",
    [
        ContextSnapshot(buffer=b"abc", total_length=3, state=(0,) * 8, digest_length=32),
        ContextSnapshot(buffer=bytes(64), total_length=3, state=(0,) * 7, digest_length=32),
        ContextSnapshot(buffer=bytes(64), total_length=3, state=(0,) * 7 + (1 << 32,), digest_length=32),
        ContextSnapshot(buffer=bytes(64), total_length=-1, state=(0,) * 8, digest_length=32),
        ContextSnapshot(buffer=bytes(64), total_length=3, state=(0,) * 8, digest_length=20),
    ],
)
def test_from_snapshot_rejects_malformed(snap):
    with pytest.raises(StateDecodeError):
        Sha2Context.from_snapshot(snap)


def test_from_snapshot_roundtrip_dataclass():
    ctx = Sha2Context(224)
    ctx.update(b"a" * 100)
    resumed = Sha2Context.from_snapshot(ctx.snapshot())
    resumed.update(b"b")
    assert resumed.finalize() == hashlib.sha224(b"a" * 100 + b"b").digest()
