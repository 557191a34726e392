from riffx import report
from riffx.report import LineKind, ReportLine, hex_row, hexdump, render_fourcc


def test_render_fourcc():
    assert render_fourcc(b'fmt ') == 'fmt '
    assert render_fourcc(b'\x00ab\xff') == '?ab?'


def test_hex_row():
    hexa, ascii = hex_row(bytes(range(0x41, 0x51)))

    assert hexa == '41 42 43 44 45 46 47 48  49 4a 4b 4c 4d 4e 4f 50'
    assert ascii == 'ABCDEFGHIJKLMNOP'

    hexa, ascii = hex_row(b' a\x00')
    assert hexa == '20 61 00'
    assert ascii == '.a.'


def test_hexdump_offsets():
    lines = list(hexdump(b'\x00' * 33, offset=100))

    assert [_.offset for _ in lines] == [100, 116, 132]
    assert lines[2].value == ('00', '.')
    assert list(hexdump(b'')) == []


def test_line_rendering():
    assert str(report.section()) == ''
    assert str(report.info('File size', 44)) == 'File size: 44'
    assert str(report.field(0, 'Chunk ID', 'RIFF', 4)) == '         0  [4]       Chunk ID: RIFF'
    assert str(report.field(1234, 'Label Text', 'Footstep', 's')) == '      1234  [s]     Label Text: Footstep'
    assert str(report.end(b'fmt ')) == '                ==============: [fmt  end]'
    assert str(report.warning(8, 'oops')) == '         8  !!! oops'


def test_dump_line_rendering():
    line, = hexdump(b'RIFF\x00', offset=16)

    assert str(line) == '        16  ' + '52 49 46 46 00'.ljust(49) + ' RIFF.'


def test_line_equality():
    assert report.field(0, 'Size', 36, 4) == ReportLine(LineKind.FIELD, 0, 'Size', 36, 4)
    assert report.field(0, 'Size', 36, 4) != report.field(4, 'Size', 36, 4)
