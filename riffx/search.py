"""
Byte pattern search.

It's the Boyer-Moore-Horspool algorithm: the needle is compared starting
from its last byte and, on mismatch, the window is shifted by an amount
looked up in a table indexed by the haystack byte aligned with the end of
the needle. All the shifts are at least one so the scan always progresses.

See <http://www-igm.univ-mlv.fr/~lecroq/string/node18.html>.
"""
from functools import lru_cache
from typing import Tuple


NOT_FOUND = -1


@lru_cache(maxsize=16)
def skip_table(needle: bytes) -> Tuple[int, ...]:
    nlen = len(needle)
    table = [nlen] * 256
    for k in range(nlen - 1):
        table[needle[k]] = nlen - k - 1

    return tuple(table)


def find(haystack, needle: bytes, start: int = 0, end: int = None) -> int:
    '''Return the offset of the first occurrence of needle inside haystack[start:end]
    or NOT_FOUND. The offset is absolute with respect to haystack.'''
    hlen = len(haystack) if end is None else min(end, len(haystack))
    nlen = len(needle)
    start = max(start, 0)

    if nlen == 0:
        return start if start <= hlen else NOT_FOUND

    skip = skip_table(bytes(needle))
    last = nlen - 1

    k = start + last
    while k < hlen:
        i, j = k, last
        while j >= 0 and haystack[i] == needle[j]:
            i -= 1
            j -= 1
        if j < 0:
            return i + 1
        k += skip[haystack[k]]

    return NOT_FOUND

