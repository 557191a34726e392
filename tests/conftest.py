import struct

import pytest


FMT_PCM = struct.pack('<HHIIHH', 1, 2, 44100, 176400, 4, 16)


def u32(value, big=False):
    return struct.pack('>I' if big else '<I', value)


@pytest.fixture
def make_chunk():
    '''Build a chunk, by default the size is the one of the payload and the
    pad byte is added for odd sizes.'''
    def _make_chunk(tag, payload=b'', big=False, size=None, pad=True):
        size = len(payload) if size is None else size
        data = tag + u32(size, big) + payload
        if pad and len(payload) % 2:
            data += b'\x00'
        return data

    return _make_chunk


@pytest.fixture
def make_riff(make_chunk):
    def _make_riff(children=b'', form=b'WAVE', big=False, size=None):
        return make_chunk(b'RIFX' if big else b'RIFF', form + children, big=big, size=size, pad=False)

    return _make_riff


@pytest.fixture
def make_label(make_chunk):
    def _make_label(text, cue_id=1, big=False):
        return make_chunk(b'labl', u32(cue_id, big) + text, big=big)

    return _make_label


@pytest.fixture
def wave(make_chunk):
    '''The smallest WAVE file: a PCM format chunk and an empty data chunk'''
    return b'RIFF' + u32(36) + b'WAVE' + make_chunk(b'fmt ', FMT_PCM) + make_chunk(b'data')


@pytest.fixture
def labelled_wave(make_chunk, make_riff, make_label):
    adtl = make_chunk(b'LIST', b'adtl' + make_label(b'Footstep\x00'))
    return make_riff(make_chunk(b'fmt ', FMT_PCM) + make_chunk(b'data', b'\x01\x02\x03\x04') + adtl)
