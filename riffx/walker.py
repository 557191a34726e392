"""
Walk the chunk tree of a RIFF/RIFX container producing the report lines.

The traversal is depth-first and offset-ascending; the nesting is kept in an
explicit stack of frames, one for each container being visited, so that the
depth of the tree is bounded only by the size of the buffer.

The declared sizes are never trusted: a chunk claiming more bytes than its
container has left is rendered up to the end of the container, the walker
flags the truncation and goes on with the siblings of the container.
"""
import logging
from typing import Iterator, List

from . import report
from .audio.wave import RENDERERS
from .exceptions import ChunkUnpackException, TruncatedChunkException
from .streams import Stream, detect_endianess


logger = logging.getLogger(__name__)

HEADER_SIZE = 8
FOURCC_SIZE = 4

RIFF_TAGS = (b'RIFF', b'RIFX')
LIST_TAG = b'LIST'


class Frame(object):
    '''A container being visited: the region [offset, end) still to walk and
    what to emit once it's exhausted.'''

    def __init__(self, offset: int, end: int, tag: bytes = None, trailing: tuple = None):
        self.offset = offset
        self.end = end
        self.tag = tag
        self.trailing = trailing
        self.done = False

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.tag!r} [{self.offset:#x}, {self.end:#x}))>'

    @property
    def remaining(self):
        return self.end - self.offset


class Walker(object):
    """Chunk tree walker for a buffer starting with a RIFF/RIFX marker.

    The byte order is established once by the marker and used for all the
    reads; the report is produced lazily by walk(), after it's exhausted the
    attribute "truncated" tells if some chunk declared more data than available.
    """

    def __init__(self, data, renderers=None):
        self.logger = logging.getLogger(__name__)
        self.stream = Stream(data)
        self.endianess = detect_endianess(self.stream.data)
        self.stream.endianess = self.endianess
        self.renderers = RENDERERS if renderers is None else renderers
        self.truncated = False

    def __len__(self):
        return len(self.stream)

    def walk(self) -> Iterator[report.ReportLine]:
        self.truncated = False
        yield report.info('File size', len(self.stream))

        stack: List[Frame] = [Frame(0, len(self.stream))]
        while stack:
            frame = stack[-1]

            if frame.done or frame.remaining < HEADER_SIZE:
                stack.pop()
                yield from self._close(frame)
                continue

            child = yield from self._step(frame)
            if child is not None:
                stack.append(child)

    def check(self) -> List[report.ReportLine]:
        '''Walk eagerly and raise TruncatedChunkException if it was the case'''
        lines = list(self.walk())
        if self.truncated:
            raise TruncatedChunkException(chain=[], msg='truncated chunk encountered')

        return lines

    def _close(self, frame: Frame):
        if frame.tag is not None:
            yield report.end(frame.tag)

        if frame.trailing:
            yield from self._trailing(*frame.trailing)

    def _trailing(self, offset, end):
        yield report.field(offset, 'Trailing bytes', end - offset, '*')
        yield from self._dump(offset, end - offset)

    def _dump(self, offset, length):
        return report.hexdump(bytes(self.stream.data[offset:offset + length]), offset=offset)

    def _step(self, frame: Frame):
        '''Render the chunk at the start of the frame and move the frame to its
        next sibling; it returns the frame for the children, if any.'''
        offset = frame.offset
        header = self.stream.window(offset, HEADER_SIZE)
        tag = header.read(FOURCC_SIZE)
        size = header.read_uint(4)

        if tag == b'\x00' * FOURCC_SIZE and size == 0:
            self.logger.debug('padding at %#x, end of siblings' % offset)
            frame.done = True
            return None

        yield report.section()
        yield report.field(offset, 'Chunk ID', report.render_fourcc(tag), FOURCC_SIZE)
        yield report.field(offset + FOURCC_SIZE, 'Size', size, 4)

        payload_offset = offset + HEADER_SIZE
        available = frame.end - payload_offset
        length = size
        if size > available:
            self.logger.warning('chunk %r at %#x declares %d bytes but only %d are available' % (
                tag, offset, size, available))
            yield report.warning(offset, f'declared size {size} exceeds the {available} bytes available')
            self.truncated = True
            length = available
            frame.done = True

        # odd sized chunks are followed by a pad byte
        frame.offset = payload_offset + size + (size & 1)

        # nothing follows the outermost RIFF container, when nested
        # it's a container like any other
        if tag in RIFF_TAGS and frame.tag is None:
            frame.done = True

        if tag in RIFF_TAGS or tag == LIST_TAG:
            return (yield from self._container(frame, tag, payload_offset, length))

        yield from self._leaf(tag, payload_offset, length)

        if not frame.done:
            yield report.end(tag)

        return None

    def _container(self, frame: Frame, tag: bytes, offset: int, length: int):
        trailing = None
        if tag in RIFF_TAGS and frame.tag is None and frame.offset < frame.end:
            trailing = (frame.offset, frame.end)

        if length < FOURCC_SIZE:
            self.logger.warning('container %r at %#x too short for its form type' % (tag, offset))
            yield from self._dump(offset, length)
            yield report.end(tag)
            if trailing:
                yield from self._trailing(*trailing)
            return None

        form = bytes(self.stream.data[offset:offset + FOURCC_SIZE])
        name = 'RIFF Type' if tag in RIFF_TAGS else 'Form Type'
        yield report.field(offset, name, report.render_fourcc(form), FOURCC_SIZE)

        self.logger.debug('descending into %r at %#x' % (tag, offset))

        return Frame(offset + FOURCC_SIZE, offset + length, tag=tag, trailing=trailing)

    def _leaf(self, tag: bytes, offset: int, length: int):
        cls = self.renderers.get(tag)
        if cls is None:
            yield from self._dump(offset, length)
            return

        try:
            chunk = cls(self.stream.window(offset, length))
        except ChunkUnpackException as e:
            self.logger.warning('failed to decode %r at %#x (%s), dumping it raw' % (tag, offset, e))
            yield report.warning(offset, f'unable to decode {report.render_fourcc(tag)}: {e}')
            yield from self._dump(offset, length)
            return

        yield from chunk.lines()

        if chunk.truncated:
            yield report.warning(offset, f'{report.render_fourcc(tag)} declares more entries than it contains')


def dump(data) -> Walker:
    '''Entry point for the introspection: it raises NotRiffContainerException if
    data doesn't start with a RIFF/RIFX marker.'''
    return Walker(data)
