"""
Locate the RIFF/RIFX streams embedded into an arbitrary buffer.

The length of a stream can be established in two ways:

 1. from the size declared in its header (plus the 8 bytes of the header
    itself), clamped to the end of the buffer; it's precise but a corrupted
    header can swallow the streams that follow.

 2. guessing it as the distance from the next marker (or the end of the
    buffer for the last one); it survives corrupted headers but splits a
    stream having the marker bytes inside its payload.
"""
import logging
from typing import Iterator, Optional

from .enum import Endianess, Options
from .search import find, NOT_FOUND
from .streams import MARKERS, get_ui32


logger = logging.getLogger(__name__)

HEADER_SIZE = 8
MARKER_SIZE = 4


class Segment(object):
    '''Region of the buffer belonging to a single stream.'''

    def __init__(self, offset: int, length: int, endianess: Endianess, marker: bytes):
        self.offset = offset
        self.length = length
        self.endianess = endianess
        self.marker = marker

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.marker.decode()} @ {self.offset:#x}, {self.length} bytes)>'

    def __eq__(self, other):
        if not isinstance(other, Segment):
            return NotImplemented

        return (self.offset, self.length, self.marker) == (other.offset, other.length, other.marker)

    @property
    def end(self):
        return self.offset + self.length

    @property
    def extension(self):
        return self.marker.decode('ascii').lower()

    def data(self, buffer):
        return buffer[self.offset:self.end]


def first_marker(data, start: int = 0) -> Optional[bytes]:
    '''Search for both the markers and return the one found first.'''
    found = []
    for marker in MARKERS:
        offset = find(data, marker, start)
        if offset != NOT_FOUND:
            found.append((offset, marker))

    return min(found)[1] if found else None


def declared_length(data, offset: int, endianess: Endianess) -> int:
    remaining = len(data) - offset
    if remaining < HEADER_SIZE:
        logger.warning('stream at %#x has no room for its size field' % offset)
        return remaining

    length = get_ui32(data, offset + MARKER_SIZE, endianess) + HEADER_SIZE
    if length > remaining:
        logger.warning('stream at %#x declares %d bytes but only %d are available' % (offset, length, remaining))
        return remaining

    return length


def locate(data, options: Options = Options.NONE) -> Iterator[Segment]:
    '''Yield a Segment for each stream found inside data.

    The marker found first fixes the byte order for the rest of the scan.'''
    marker = first_marker(data)
    if marker is None:
        logger.debug('no RIFF/RIFX marker found')
        return

    endianess = MARKERS[marker]
    guess = bool(options & Options.GUESS_LENGTH)

    logger.debug('using marker %r (%s), %s length' % (marker, endianess.name, 'guessed' if guess else 'declared'))

    offset = find(data, marker)
    while offset != NOT_FOUND:
        if guess:
            following = find(data, marker, offset + MARKER_SIZE)
            length = (following if following != NOT_FOUND else len(data)) - offset
        else:
            length = declared_length(data, offset, endianess)
            following = find(data, marker, offset + length)

        yield Segment(offset, length, endianess, marker)

        offset = following
