import numpy as np
from numba import jit, types, int64


def encode(number: int) -> bytes:
    """Pack a non-negative `number` into unsigned LEB128 varint bytes"""
    if number < 0:
        raise ValueError(f"Cannot varint-encode negative number {number}")

    buf = bytearray()
    while True:
        towrite = number & 0x7F
        number >>= 7
        if number:
            buf.append(towrite | 0x80)
        else:
            buf.append(towrite)
            break
    return bytes(buf)


@jit(
    types.UniTuple(int64, 2)(types.Array(types.uint8, 1, "A", readonly=True), int64),
    nopython=True,
)
def decode_bytes_jit(data: np.ndarray, offset: int):
    """Read a varint from `data` starting at `offset`, returns (value, next_offset)"""
    shift = 0
    result = 0
    current_offset = offset

    while True:
        byte = int64(data[current_offset])
        result |= (byte & 0x7F) << shift
        current_offset += 1
        shift += 7
        if not (byte & 0x80):
            break

    return result, current_offset
