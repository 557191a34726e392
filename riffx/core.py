"""
Core module for the abstraction of a chunk payload

"""
from typing import Tuple, List

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import (
    ChunkUnpackException,
    UnpackException,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a payload layout: the
    fields are declared as class attributes and are unpacked in order of
    declaration, each one starting where the previous one ended.

        class LabelChunk(Chunk):
            cue_id = fields.StructField('I', label='Label ID')
            text   = fields.CStringField(label='Label Text')

    A Chunk can contain sub-chunks, see fields.ArrayField.
    """

    def __init__(self, stream: Stream = None, **kwargs):
        super().__init__(**kwargs)

        if stream is not None:
            self.logger.debug('unpacking \'%s\' from %r' % (self.__class__.__name__, stream))
            self.unpack(stream)

    def init(self):
        self.value = None

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def _get_size(self):
        return sum(field.size for _, field in self.get_fields())

    @property
    def truncated(self) -> bool:
        '''True if some field declared more elements than the payload contains'''
        return any(getattr(field, 'truncated', False) for _, field in self.get_fields())

    def unpack(self, stream: Stream):
        '''Take the binary data from the current position of the stream and
        fill the fields in order.

        The stream is a window over the payload: a field that would need more
        than what is left raises ChunkUnpackException carrying the chain of
        field names down to the one that failed.'''
        self.offset = stream.tell()
        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s at %#x' % (self.__class__.__name__, field_name, stream.tell()))

            try:
                field.unpack(stream)
            except (UnpackException, ChunkUnpackException) as e:
                chain = e.chain if isinstance(e, ChunkUnpackException) else []
                chain.append(field_name)
                raise ChunkUnpackException(chain=chain) from e

        self.present = True

    def lines(self):
        for _, field in self.get_fields():
            yield from field.lines()
