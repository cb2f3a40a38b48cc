FNV32_OFFSET_BASIS = 0x811C9DC5
FNV32_PRIME = 0x01000193


def fnv1a_32(data: bytes) -> int:
    """
    32-bit FNV-1a over `data`.

    Unlike the builtin `hash`, the value does not depend on PYTHONHASHSEED,
    so it is identical across processes and machines.
    """
    h = FNV32_OFFSET_BASIS
    for byte in data:
        h ^= byte
        h = (h * FNV32_PRIME) & 0xFFFFFFFF
    return h
