class RiffxException(Exception):
    '''Base class to extend in order to throw exception in riffx.

    It takes a single argument that represents the chain of the layer that
    caused the exception.
    '''

    def __init__(self, chain, msg=None):
        self.chain = chain
        super().__init__(msg or ' <- '.join(str(_) for _ in chain))


class NotRiffContainerException(RiffxException):
    '''The buffer doesn't start with a RIFF or RIFX marker.'''
    pass


class UnpackException(RiffxException):
    pass


class ChunkUnpackException(RiffxException):
    pass


class TruncatedChunkException(RiffxException):
    '''A chunk declares more data than the buffer contains.'''
    pass


class OutputWriteException(RiffxException):
    '''It wasn't possible to persist a stream, the chain contains the path.'''
    pass
