from conftest import u32

from riffx.enum import Endianess
from riffx.label import extract_label, sanitize
from riffx.locator import locate


def _only_segment(data):
    segment, = locate(data)
    return segment


def test_extract_label(labelled_wave):
    assert extract_label(labelled_wave, _only_segment(labelled_wave)) == 'Footstep'
    assert extract_label(labelled_wave) == 'Footstep'


def test_label_is_sanitized(make_chunk, make_riff, make_label):
    data = make_riff(make_chunk(b'LIST', b'adtl' + make_label(b'a/b\\c d\x01\x00')))

    label = extract_label(data, _only_segment(data))

    assert label == 'a_b_c_d_'


def test_label_never_contains_separators(make_chunk, make_riff, make_label):
    for text in (b'../../etc/passwd\x00', b'C:\\Windows\\x\x00', b'with spaces in\x00', b'.. /\x00'):
        data = make_riff(make_label(text))
        label = extract_label(data, _only_segment(data))

        assert label is not None
        assert '/' not in label and '\\' not in label and ' ' not in label


def test_last_label_wins(make_riff, make_label):
    data = make_riff(make_label(b'First\x00') + make_label(b'Second\x00', cue_id=2))

    assert extract_label(data, _only_segment(data)) == 'Second'


def test_label_too_short(make_riff):
    '''A declared length of 5 is below the minimum'''
    data = make_riff(b'labl' + u32(5) + u32(1) + b'A\x00\x00\x00')

    assert extract_label(data, _only_segment(data)) is None


def test_label_too_long(make_riff):
    data = make_riff(b'labl' + u32(201) + u32(1) + b'Big\x00' + b'\x00' * 200)
    segment = _only_segment(data)

    assert extract_label(data, segment) is None
    assert extract_label(data, segment, max_length=300) == 'Big'


def test_label_bounds_are_configurable(make_riff, make_label):
    data = make_riff(make_label(b'abc\x00'))  # declared length 8
    segment = _only_segment(data)

    assert extract_label(data, segment) == 'abc'
    assert extract_label(data, segment, min_length=9) is None


def test_label_not_terminated(make_riff):
    data = make_riff(b'labl' + u32(8) + u32(1) + b'abcd')

    assert extract_label(data, _only_segment(data)) is None


def test_label_not_printable(make_riff, make_label):
    data = make_riff(make_label(b'\x01abc\x00'))

    assert extract_label(data, _only_segment(data)) is None


def test_label_tag_at_the_end(make_riff):
    data = make_riff(b'data' + u32(0) + b'labl')

    assert extract_label(data, _only_segment(data)) is None


def test_label_outside_segment(make_riff, make_label):
    data = make_riff(b'data' + u32(0)) + make_label(b'Outside\x00')
    segment = _only_segment(data)

    assert segment.end < len(data)
    assert extract_label(data, segment) is None


def test_label_big_endian(make_riff, make_label):
    data = make_riff(make_label(b'Big endian\x00', big=True), big=True)
    segment = _only_segment(data)

    assert segment.endianess == Endianess.BIG_ENDIAN
    assert extract_label(data, segment) == 'Big_endian'


def test_sanitize():
    assert sanitize('Footstep_01-a.b') == 'Footstep_01-a.b'
    assert sanitize('a b/c\\d') == 'a_b_c_d'
    assert sanitize('caf\xe9\x7f') == 'caf__'
    assert sanitize('a b', placeholder='-') == 'a-b'
