"""
Persist the located streams, one file for each of them.

Two layouts are possible for the output directory:

    tree: a/b/foo.pck -> output/a/b/foo/000042.riff
    flat: a/b/foo.pck -> output/001_foo_000042.riff

when the label is requested and found it's inserted before the index,
i.e. output/a/b/foo/Footstep_01_000042.riff
"""
import logging
import os
from pathlib import PurePath
from typing import List

from .enum import Options
from .exceptions import OutputWriteException
from .label import extract_label
from .locator import locate, Segment
from .streams import Stream


logger = logging.getLogger(__name__)

INDEX_WIDTH = 6


class ExtractionResult(object):
    '''What happened to the streams of a single input'''

    def __init__(self, path: str = None):
        self.path = path
        self.written: List[str] = []
        self.failures: List[OutputWriteException] = []

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.path!r}, written={len(self.written)}, failures={len(self.failures)})>'

    def __len__(self):
        return len(self.written) + len(self.failures)


def ensure_directory(path: str) -> None:
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise OutputWriteException(chain=[path], msg=f'failed to create {path}: {e.strerror}') from e

    if not os.path.isdir(path):
        raise OutputWriteException(chain=[path], msg=f'{path} is not a valid output directory')


def _relative_stem(path: str) -> PurePath:
    '''The input path without extension, made relative and without
    parent references so that it can't escape the output directory.'''
    stem = PurePath(os.path.splitext(path)[0])
    parts = [_ for _ in stem.parts if _ not in (stem.anchor, '..', '.')]

    return PurePath(*parts) if parts else PurePath('stream')


def output_prefix(outdir: str, path: str, index: int = 1, options: Options = Options.NONE) -> str:
    '''Everything of the output filename but the stream index, the
    directories it needs are created on the way.'''
    stem = _relative_stem(path)

    if options & Options.FLAT:
        ensure_directory(outdir)
        return os.path.join(outdir, f'{index:03d}_{stem.name}_')

    directory = os.path.join(outdir, str(stem))
    ensure_directory(directory)

    return directory + os.sep


def output_name(prefix: str, segment: Segment, index: int, label: str = None) -> str:
    if label:
        return f'{prefix}{label}_{index:0{INDEX_WIDTH}d}.{segment.extension}'

    return f'{prefix}{index:0{INDEX_WIDTH}d}.{segment.extension}'


def write_segment(filename: str, data, segment: Segment) -> None:
    '''The file is byte-identical to the region of the segment.'''
    try:
        with open(filename, 'wb') as f:
            f.write(segment.data(data))
    except OSError as e:
        raise OutputWriteException(chain=[filename], msg=f'failed to create {filename}: {e.strerror}') from e


def extract(data, prefix: str, options: Options = Options.NONE) -> ExtractionResult:
    '''Write all the streams found into data; a failure on a single stream
    is recorded and the extraction goes on with the following one.'''
    result = ExtractionResult()

    for index, segment in enumerate(locate(data, options)):
        logger.debug('Entry %d: %r' % (index, segment))

        label = extract_label(data, segment) if options & Options.LABEL else None
        filename = output_name(prefix, segment, index, label=label)

        try:
            write_segment(filename, data, segment)
        except OutputWriteException as e:
            logger.error(str(e))
            result.failures.append(e)
            continue

        result.written.append(filename)

    return result


def extract_file(path: str, outdir: str, index: int = 1, options: Options = Options.NONE) -> ExtractionResult:
    '''Extraction pipeline for a single input file.

    OSError is raised if the input can't be read, OutputWriteException if
    its output directory can't be created.'''
    stream = Stream(path)
    prefix = output_prefix(outdir, path, index=index, options=options)

    result = extract(stream.data, prefix, options=options)
    result.path = path

    return result
