"""
Lines composing the introspection report.

Each line carries the absolute offset of what it describes so that
the report can be cross-checked with an hex editor.
"""
from enum import Enum, auto
from typing import Iterator


DUMP_ROW = 16
DUMP_GROUP = 8
END_RULE = '=' * 14


class LineKind(Enum):
    SECTION = auto()
    INFO    = auto()
    FIELD   = auto()
    DUMP    = auto()
    END     = auto()
    WARNING = auto()


class ReportLine(object):

    def __init__(self, kind: LineKind, offset: int = None, name: str = None, value=None, width=None):
        self.kind = kind
        self.offset = offset
        self.name = name
        self.value = value
        self.width = width

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.kind.name}, {self.offset}, {self.name!r}, {self.value!r})>'

    def __eq__(self, other):
        if not isinstance(other, ReportLine):
            return NotImplemented

        return (self.kind, self.offset, self.name, self.value, self.width) == \
            (other.kind, other.offset, other.name, other.value, other.width)

    def __str__(self):
        if self.kind == LineKind.SECTION:
            return ''
        if self.kind == LineKind.INFO:
            return f'{self.name}: {self.value}'
        if self.kind == LineKind.FIELD:
            return f'{self.offset:10d}  [{self.width}] {self.name:>14}: {self.value}'
        if self.kind == LineKind.DUMP:
            hexa, ascii = self.value
            return f'{self.offset:10d}  {hexa:<49} {ascii}'
        if self.kind == LineKind.END:
            return f'{"":10}      {END_RULE:>14}: [{self.value} end]'

        return f'{self.offset:10d}  !!! {self.value}'


def render_fourcc(raw: bytes) -> str:
    '''FourCC are not required to be printable'''
    return ''.join(chr(_) if 0x20 <= _ <= 0x7e else '?' for _ in raw)


def hex_row(raw: bytes):
    groups = [raw[_:_ + DUMP_GROUP] for _ in range(0, len(raw), DUMP_GROUP)]
    hexa = '  '.join(' '.join('%02x' % c for c in group) for group in groups)
    ascii = ''.join(chr(c) if 0x21 <= c <= 0x7e else '.' for c in raw)

    return hexa, ascii


def hexdump(raw: bytes, offset: int = 0) -> Iterator[ReportLine]:
    '''One line for each 16 bytes, offset is the position of raw in the original buffer.'''
    for idx in range(0, len(raw), DUMP_ROW):
        yield ReportLine(LineKind.DUMP, offset=offset + idx, value=hex_row(raw[idx:idx + DUMP_ROW]))


def section() -> ReportLine:
    return ReportLine(LineKind.SECTION)


def info(name: str, value) -> ReportLine:
    return ReportLine(LineKind.INFO, name=name, value=value)


def field(offset: int, name: str, value, width) -> ReportLine:
    return ReportLine(LineKind.FIELD, offset=offset, name=name, value=value, width=width)


def end(tag: bytes) -> ReportLine:
    return ReportLine(LineKind.END, value=render_fourcc(tag))


def warning(offset: int, message: str) -> ReportLine:
    return ReportLine(LineKind.WARNING, offset=offset, value=message)
