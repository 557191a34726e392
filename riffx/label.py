"""
Extract a name for a stream from its embedded "labl" chunk.

    .----------------------------------------------.
    | "labl" | size | cue point id | text ... \\0 |
    '----------------------------------------------'

the size covers the cue point id and the null terminated text. The bounds
on the size are heuristics to skip the occurrences of the FourCC that are
just accidental, they are not part of the format.
"""
import logging
from typing import Optional

from .enum import Endianess
from .search import find, NOT_FOUND
from .streams import get_ui32


logger = logging.getLogger(__name__)

LABEL_TAG = b'labl'
LABEL_MIN_LENGTH = 6
LABEL_MAX_LENGTH = 200
PLACEHOLDER = '_'

_CUE_ID_SIZE = 4
_TEXT_OFFSET = 12  # tag + size + cue point id
_UNSAFE = '/\\ '


def is_printable(c: int) -> bool:
    return 0x20 <= c <= 0x7e


def sanitize(label: str, placeholder: str = PLACEHOLDER) -> str:
    '''Make the label usable as (part of) a filename.'''
    return ''.join(
        placeholder if (not is_printable(ord(c)) or c in _UNSAFE) else c
        for c in label
    )


def _label_at(data, offset: int, end: int, endianess: Endianess, min_length: int, max_length: int) -> Optional[str]:
    if offset + _TEXT_OFFSET >= end:
        return None

    declared = get_ui32(data, offset + 4, endianess)
    if not min_length <= declared <= max_length:
        logger.debug('label at %#x rejected: declared length %d out of [%d, %d]' % (
            offset, declared, min_length, max_length))
        return None

    start = offset + _TEXT_OFFSET
    text = bytes(data[start:min(start + declared - _CUE_ID_SIZE, end)])

    terminator = text.find(b'\x00')
    if terminator < 0:
        logger.debug('label at %#x rejected: not null terminated' % offset)
        return None

    text = text[:terminator]
    if not text or not is_printable(text[0]):
        logger.debug('label at %#x rejected: starts with a non printable character' % offset)
        return None

    return text.decode('latin1')


def extract_label(data, segment=None, min_length: int = LABEL_MIN_LENGTH, max_length: int = LABEL_MAX_LENGTH,
                  endianess: Endianess = None) -> Optional[str]:
    '''Return the sanitized text of the last valid label inside the segment (or
    the whole data) or None if nothing plausible is found.'''
    start, end = (segment.offset, segment.end) if segment else (0, len(data))
    if endianess is None:
        endianess = segment.endianess if segment else Endianess.LITTLE_ENDIAN

    label = None

    offset = find(data, LABEL_TAG, start, end)
    while offset != NOT_FOUND:
        candidate = _label_at(data, offset, end, endianess, min_length, max_length)
        if candidate is not None:
            label = candidate
        offset = find(data, LABEL_TAG, offset + len(LABEL_TAG), end)

    if label is None:
        return None

    safe = sanitize(label)
    if safe != label:
        logger.debug('label %r sanitized as %r' % (label, safe))

    return safe
