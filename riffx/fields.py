"""
A Field is "fundamental" datatype from the format point of view, something
directly unpackable from a stream and renderable as report lines.
"""
import logging
import struct
from typing import Iterator

from . import report
from .meta import FieldBase
from .properties import Dependency
from .exceptions import UnpackException


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, label=None, name=None, father=None, default=None, offset=None, optional=False):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.label = label
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.optional = optional
        self.present = False

        self.init()

    def init(self):
        self.value = self.default

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    @property
    def title(self):
        return self.label or self.name

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _is_missing(self, stream) -> bool:
        '''An optional field is simply absent when the stream ends before it.'''
        if self.optional and stream.remaining() < self.size:
            self.logger.debug('optional field \'%s\' not present at offset %#x' % (self.name, stream.tell()))
            return True

        return False

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')

    def lines(self) -> Iterator[report.ReportLine]:
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Unsigned integer whose width is given by a format character of the struct
    module; the byte order is the one of the stream.

    The "enum" argument allows to indicate some subclass of enum.Enum so to have
    directly a representation of the integer value of the field itself.
    """

    def __init__(self, format, enum=None, **kw):
        self.format = format
        self.enum = enum
        super().__init__(**kw)

    def _get_size(self):
        return struct.calcsize('<%s' % self.format)

    def __int__(self):
        return self.value

    def unpack(self, stream):
        if self._is_missing(stream):
            return

        self.offset = stream.tell()
        try:
            self.value = stream.read_uint(self.size)
        except UnpackException as e:
            e.chain.append(self.name)
            raise

        self.present = True

    def render(self) -> str:
        if not self.enum:
            return str(self.value)

        try:
            return f'{self.value} ({self.enum(self.value).name})'
        except ValueError:
            self.logger.debug(f'enum {self.enum!r} doesn\'t have element with value {self.value:#x} in it')
            return str(self.value)

    def lines(self):
        if self.present:
            yield report.field(self.offset, self.title, self.render(), self.size)


class FourCCField(Field):
    """Four characters code, not necessarily printable."""

    def _get_size(self):
        return 4

    def unpack(self, stream):
        if self._is_missing(stream):
            return

        self.offset = stream.tell()
        self.value = stream.read(self.size)
        if len(self.value) != self.size:
            raise UnpackException(chain=[self.name], msg=f'FourCC truncated at offset {self.offset:#x}')

        self.present = True

    def lines(self):
        if self.present:
            yield report.field(self.offset, self.title, report.render_fourcc(self.value), self.size)


class CStringField(Field):
    """Null terminated string that can't go past the end of the stream."""

    def init(self):
        self.value = self.default or ''
        self.raw = b''

    def _get_size(self):
        return len(self.raw)

    def unpack(self, stream):
        self.offset = stream.tell()
        stream.save()
        data = stream.read_all()
        stream.restore()

        terminator = data.find(b'\x00')
        if terminator < 0:
            self.logger.warning('string at offset %#x is not null terminated' % self.offset)
            self.raw = data
        else:
            self.raw = data[:terminator + 1]

        stream.read(len(self.raw))
        self.value = self.raw.rstrip(b'\x00').decode('latin1')
        self.present = True

    def lines(self):
        if self.present:
            yield report.field(self.offset, self.title, self.value, 's')


class ArrayField(Field):
    '''Unpack an array of Chunks.

    You can indicate an explicit number of elements via the parameter named "n",
    that can be a Dependency. If the stream ends before all the elements are
    unpacked the array is cut to the elements that fit.
    '''

    def __init__(self, field_cls, n=0, **kw):
        if not isinstance(n, (int, Dependency)):
            raise ValueError('n is \'%s\' must be of the right type' % n.__class__.__name__)

        self.field_cls = field_cls
        self._n = n
        self.truncated = False
        super().__init__(**kw)

    def init(self):
        self.value = []

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    @property
    def n(self):
        return self._n.resolve(self) if isinstance(self._n, Dependency) else self._n

    def _get_size(self):
        return sum(_.size for _ in self.value)

    def instance_element(self):
        return self.field_cls(father=self)  # pass the father so that we don't lose the hierarchy

    def unpack(self, stream):
        self.offset = stream.tell()
        self.value = []

        n = self.n
        for idx in range(n):
            element = self.instance_element()
            if stream.remaining() < element.size:
                self.logger.warning('%s: only %d elements out of %d fit into the stream' % (self.name, idx, n))
                self.truncated = True
                break

            element.unpack(stream)
            self.value.append(element)

        self.present = True

    def lines(self):
        for element in self.value:
            yield from element.lines()


class PaddingField(Field):
    '''Takes as much stream as possible, it's rendered as an hexdump'''

    def init(self):
        self.value = b''

    def _get_size(self):
        return len(self.value)

    def unpack(self, stream):
        self.offset = stream.tell()
        self.value = stream.read_all()
        self.present = True

    def lines(self):
        if self.present:
            yield from report.hexdump(self.value, offset=self.offset)
