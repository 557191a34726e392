import logging

from bitstring import Bits

from .enum import Endianess
from .exceptions import NotRiffContainerException, UnpackException


logger = logging.getLogger(__name__)


MARKERS = {
    b'RIFF': Endianess.LITTLE_ENDIAN,
    b'RIFX': Endianess.BIG_ENDIAN,
}


def decode_uint(raw: bytes, endianess: Endianess) -> int:
    '''Build an unsigned integer from raw bytes following the byte order
    of the file, the host byte order never enters the picture.'''
    bits = Bits(raw)

    return bits.uintle if endianess == Endianess.LITTLE_ENDIAN else bits.uintbe


def _get_uint(data, offset: int, size: int, endianess: Endianess) -> int:
    raw = bytes(data[offset:offset + size])
    if offset < 0 or len(raw) != size:
        raise UnpackException(chain=[offset], msg=f'{size} bytes not available at offset {offset}')

    return decode_uint(raw, endianess)


def get_ui16(data, offset=0, endianess=Endianess.LITTLE_ENDIAN) -> int:
    return _get_uint(data, offset, 2, endianess)


def get_ui32(data, offset=0, endianess=Endianess.LITTLE_ENDIAN) -> int:
    return _get_uint(data, offset, 4, endianess)


def detect_endianess(data) -> Endianess:
    '''The byte order is decided once per file looking at the leading marker.'''
    marker = bytes(data[:4])
    try:
        return MARKERS[marker]
    except KeyError:
        raise NotRiffContainerException(chain=[marker], msg=f'{marker!r} is not a RIFF/RIFX marker') from None


class Stream(object):
    '''This is a simple cursor over a buffer: it keeps the position and the
    window [start, end) of the data it is allowed to access.

    Sub-windows share the same underlying buffer so that the offsets are
    always absolute with respect to the original data, and they are clamped
    to the window of the parent so that nothing outside of it is ever read.'''

    def __init__(self, obj, endianess=Endianess.LITTLE_ENDIAN, start=0, end=None):
        '''Here we normalize the object in order to be accessed as a read-only buffer'''
        self.obj = obj
        self.endianess = endianess
        self.history = []

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)
        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to use as stream' % obj.__class__.__name__)

        init_method()

        length = len(self.data)
        self.end = length if end is None else max(0, min(end, length))
        self.start = max(0, min(start, self.end))
        self._position = self.start

    def __repr__(self):
        return f'<{self.__class__.__name__}([{self.start:#x}, {self.end:#x}) @ {self._position:#x})>'

    def __len__(self):
        return self.end - self.start

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        with open(self.obj, 'rb') as f:
            self.data = memoryview(f.read())

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.data = memoryview(self.obj)

    init_bytearray = init_bytes

    def init_memoryview(self):
        self.data = self.obj

    def window(self, offset, length):
        '''Returns a new stream limited to length bytes starting at offset.

        If the requested region overruns this stream it's clamped to its end.'''
        end = offset + length
        if end > self.end:
            logger.debug('clamping window [%#x, %#x) to %#x' % (offset, end, self.end))
            end = self.end

        return Stream(self.data, endianess=self.endianess, start=max(offset, self.start), end=end)

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        if not self.start <= offset <= self.end:
            raise ValueError(f'offset {offset:#x} outside of {self!r}')

        self._position = offset

        return self

    def tell(self):
        return self._position

    def remaining(self):
        return self.end - self._position

    def read(self, size):
        '''Read at most size bytes, less if the window ends before.'''
        end = min(self._position + size, self.end)
        value = bytes(self.data[self._position:end])
        self._position = end

        return value

    def read_all(self):
        return self.read(self.remaining())

    def read_uint(self, size):
        offset = self._position
        raw = self.read(size)
        if len(raw) != size:
            self._position = offset
            raise UnpackException(chain=[offset], msg=f'{size} bytes not available at offset {offset:#x}')

        return decode_uint(raw, self.endianess)

    def save(self):
        self.history.append(self._position)

    def restore(self):
        self._position = self.history.pop()
