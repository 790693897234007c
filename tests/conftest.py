import pytest

from chip8 import Machine, load


def words_to_bytes(words):
    data = bytearray()
    for w in words:
        data += bytes([(w >> 8) & 0xFF, w & 0xFF])
    return bytes(data)


@pytest.fixture
def boot():
    """Build a Machine with the given 16-bit words loaded at 0x200."""
    def _boot(*words, **kwargs):
        kwargs.setdefault("seed", 0)
        m = Machine(**kwargs)
        load(m, words_to_bytes(words))
        return m
    return _boot
