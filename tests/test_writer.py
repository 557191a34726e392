import os

import pytest

from riffx.enum import Endianess, Options
from riffx.exceptions import OutputWriteException
from riffx.locator import Segment
from riffx.writer import ensure_directory, extract, extract_file, output_name, output_prefix


@pytest.fixture
def archive(make_chunk, make_riff, make_label):
    '''Two streams hidden between junk, only the first one labelled'''
    first = make_riff(make_chunk(b'LIST', b'adtl' + make_label(b'Foot step\x00')))
    second = make_riff(make_chunk(b'data', b'\x01\x02'))

    return b'\xff' * 7 + first + b'junk' * 3 + second + b'\x00' * 5, [first, second]


def test_output_name():
    riff = Segment(0, 12, Endianess.LITTLE_ENDIAN, b'RIFF')
    rifx = Segment(0, 12, Endianess.BIG_ENDIAN, b'RIFX')

    assert output_name('out/', riff, 42) == 'out/000042.riff'
    assert output_name('out/', rifx, 1) == 'out/000001.rifx'
    assert output_name('out/001_foo_', riff, 3, label='Footstep') == 'out/001_foo_Footstep_000003.riff'


def test_output_prefix_flat(tmp_path):
    outdir = str(tmp_path / 'output')

    assert output_prefix(outdir, 'a/b/foo.pck', index=1, options=Options.FLAT) == os.path.join(outdir, '001_foo_')
    assert output_prefix(outdir, 'foo', index=12, options=Options.FLAT) == os.path.join(outdir, '012_foo_')
    # only the output directory is created for the flat layout
    assert os.path.isdir(outdir)
    assert os.listdir(outdir) == []


def test_output_prefix_tree(tmp_path):
    outdir = str(tmp_path)

    prefix = output_prefix(outdir, 'a/b/foo.pck')

    assert prefix == os.path.join(outdir, 'a', 'b', 'foo') + os.sep
    assert os.path.isdir(prefix)


def test_output_prefix_stays_inside(tmp_path):
    outdir = str(tmp_path / 'output')

    assert output_prefix(outdir, '/tmp/x/foo.pck') == os.path.join(outdir, 'tmp', 'x', 'foo') + os.sep
    assert output_prefix(outdir, '../../foo.pck') == os.path.join(outdir, 'foo') + os.sep


def test_ensure_directory(tmp_path):
    path = tmp_path / 'a' / 'b'
    ensure_directory(str(path))
    ensure_directory(str(path))

    assert path.is_dir()

    blocker = tmp_path / 'file'
    blocker.write_bytes(b'')
    with pytest.raises(OutputWriteException):
        ensure_directory(str(blocker))


def test_extract(tmp_path, archive):
    data, streams = archive
    prefix = str(tmp_path) + os.sep

    result = extract(data, prefix)

    assert result.written == [prefix + '000000.riff', prefix + '000001.riff']
    assert not result.failures
    assert [open(_, 'rb').read() for _ in result.written] == streams


def test_extract_labels(tmp_path, archive):
    data, streams = archive
    prefix = str(tmp_path) + os.sep

    result = extract(data, prefix, options=Options.LABEL)

    # the second stream has no label and it falls back to the index only
    assert result.written == [prefix + 'Foot_step_000000.riff', prefix + '000001.riff']


def test_extract_short_label(tmp_path, make_chunk, make_riff, make_label):
    data = make_riff(make_chunk(b'LIST', b'adtl' + make_label(b'A')))
    prefix = str(tmp_path) + os.sep

    result = extract(data, prefix, options=Options.LABEL)

    assert result.written == [prefix + '000000.riff']


def test_extract_guess_length(tmp_path, make_chunk, make_riff):
    corrupted = b'RIFF' + b'\xff' * 4 + b'WAVE'
    good = make_riff(make_chunk(b'data', b'\x01\x02'))
    prefix = str(tmp_path) + os.sep

    result = extract(corrupted + good, prefix, options=Options.GUESS_LENGTH)

    assert [open(_, 'rb').read() for _ in result.written] == [corrupted, good]


def test_extract_failure_isolation(tmp_path, archive):
    data, streams = archive
    prefix = str(tmp_path) + os.sep
    # a directory in place of the first output file
    os.mkdir(prefix + '000000.riff')

    result = extract(data, prefix)

    assert len(result) == 2
    assert len(result.failures) == 1
    assert result.written == [prefix + '000001.riff']
    assert open(result.written[0], 'rb').read() == streams[1]


def test_extract_nothing(tmp_path):
    result = extract(b'no streams in here', str(tmp_path) + os.sep)

    assert len(result) == 0
    assert os.listdir(str(tmp_path)) == []


def test_extract_file(tmp_path, archive):
    data, streams = archive
    source = tmp_path / 'game.pck'
    source.write_bytes(data)
    outdir = tmp_path / 'output'

    result = extract_file(str(source), str(outdir), options=Options.FLAT)

    assert result.path == str(source)
    assert [os.path.basename(_) for _ in result.written] == ['001_game_000000.riff', '001_game_000001.riff']
    assert [open(_, 'rb').read() for _ in result.written] == streams


def test_extract_file_missing(tmp_path):
    outdir = tmp_path / 'output'

    with pytest.raises(OSError):
        extract_file(str(tmp_path / 'missing.pck'), str(outdir))

    assert not outdir.exists()
