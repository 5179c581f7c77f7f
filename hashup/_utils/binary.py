from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from collections.abc import Iterator

BCRYPT_CHARS = "./ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"


def _encode_bytes_big(
    next_value: Callable[[], int], chunks: int, tail: int
) -> Iterator[int]:
    """helper used by encode_bytes() to handle big-endian encoding"""
    #
    # output bit layout:
    #
    # first byte:   v1 765432
    #
    # second byte:  v1 10....
    #              +v2 ..7654
    #
    # third byte:   v2 3210..
    #              +v3 ....76
    #
    # fourth byte:  v3 543210
    #
    idx = 0
    while idx < chunks:
        v1 = next_value()
        v2 = next_value()
        v3 = next_value()
        yield v1 >> 2
        yield ((v1 & 0x03) << 4) | (v2 >> 4)
        yield ((v2 & 0x0F) << 2) | (v3 >> 6)
        yield v3 & 0x3F
        idx += 1
    if tail:
        v1 = next_value()
        if tail == 1:
            # note: 4 lsb of last byte are padding
            yield v1 >> 2
            yield (v1 & 0x03) << 4
        else:
            assert tail == 2
            # note: 2 lsb of last byte are padding
            v2 = next_value()
            yield v1 >> 2
            yield ((v1 & 0x03) << 4) | (v2 >> 4)
            yield ((v2 & 0x0F) << 2)


def _decode_bytes_big(
    next_value: Callable[[], int], chunks: int, tail: int
) -> Iterator[int]:
    """helper used by decode_bytes() to handle big-endian encoding"""
    #
    # input bit layout:
    #
    # first byte:   v1 543210..
    #              +v2 ......54
    #
    # second byte:  v2 3210....
    #              +v3 ....5432
    #
    # third byte:   v3 10......
    #              +v4 ..543210
    #
    idx = 0
    while idx < chunks:
        v1 = next_value()
        v2 = next_value()
        v3 = next_value()
        v4 = next_value()
        yield (v1 << 2) | (v2 >> 4)
        yield ((v2 & 0xF) << 4) | (v3 >> 2)
        yield ((v3 & 0x3) << 6) | v4
        idx += 1
    if tail:
        # tail is 2 or 3
        v1 = next_value()
        v2 = next_value()
        yield (v1 << 2) | (v2 >> 4)
        # NOTE: if tail == 2, 4 lsb of v2 are ignored (should be 0)
        if tail == 3:
            # NOTE: 2 lsb of v3 are ignored (should be 0)
            v3 = next_value()
            yield ((v2 & 0xF) << 4) | (v3 >> 2)


class Base64Engine:
    """big-endian radix-64 codec over a custom alphabet, as used by bcrypt"""

    def __init__(self, charmap: str) -> None:
        if len(charmap) != 64 or len(set(charmap)) != 64:
            raise ValueError("charmap must be 64 unique characters")

        self._charmap = charmap.encode("latin-1")
        self._lookup = {value: idx for idx, value in enumerate(self._charmap)}

    def encode_bytes(self, source: bytes) -> bytes:
        """encode bytes to base64 string.

        :arg source: byte string to encode.
        :returns: byte string containing encoded data.
        """
        chunks, tail = divmod(len(source), 3)
        next_value = iter(source).__next__
        gen = _encode_bytes_big(next_value, chunks, tail)
        return bytes(map(self._charmap.__getitem__, gen))

    def decode_bytes(self, source: bytes) -> bytes:
        """decode bytes from base64 string.

        :arg source: byte string to decode.
        :returns: byte string containing decoded data.
        :raises ValueError: on characters outside the alphabet or an impossible length.
        """
        chunks, tail = divmod(len(source), 4)
        if tail == 1:
            # only 6 bits left, can't encode a whole byte!
            raise ValueError("input string length cannot be == 1 mod 4")
        next_value = map(self._lookup.__getitem__, source).__next__
        try:
            return bytes(_decode_bytes_big(next_value, chunks, tail))
        except KeyError as err:
            raise ValueError(f"invalid character: {chr(err.args[0])!r}") from None


bcrypt64 = Base64Engine(BCRYPT_CHARS)
