"""
Binary Encoding Utilities

Primitives shared by every packet the builder emits:
- VarInt: unsigned 32-bit integer, 7 payload bits per byte, low group first,
  high bit set while more bytes follow
- String: VarInt byte length followed by the UTF-8 bytes (no terminator)

Readers mirror the parsers' convention of returning (value, new_offset).
"""

import io
from typing import BinaryIO, Tuple, Union

VARINT_MAX = 0xFFFFFFFF
VARINT_MAX_BYTES = 5

SEGMENT_BITS = 0x7F
CONTINUE_BIT = 0x80


def encode_varint(value: int) -> bytes:
    """
    Encode a non-negative integer as a VarInt.

    Args:
        value: Integer in [0, 2^32 - 1]

    Returns:
        Encoded bytes (1 to 5 bytes)

    Raises:
        ValueError: If value is negative or does not fit in 32 bits
    """
    if value < 0 or value > VARINT_MAX:
        raise ValueError(f"VarInt value out of range: {value}")

    out = bytearray()
    while True:
        byte = value & SEGMENT_BITS
        value >>= 7
        if value:
            out.append(byte | CONTINUE_BIT)
        else:
            out.append(byte)
            return bytes(out)


def varint_size(value: int) -> int:
    """Number of bytes encode_varint(value) produces."""
    if value < 0 or value > VARINT_MAX:
        raise ValueError(f"VarInt value out of range: {value}")
    return max(1, (value.bit_length() + 6) // 7)


def encode_string(text: str) -> bytes:
    """Encode a string as VarInt length + UTF-8 bytes."""
    data = text.encode('utf-8')
    return encode_varint(len(data)) + data


def write_varint(buffer: Union[BinaryIO, io.BytesIO], value: int):
    """Write a VarInt to a buffer."""
    buffer.write(encode_varint(value))


def write_string(buffer: Union[BinaryIO, io.BytesIO], text: str):
    """Write a length-prefixed UTF-8 string to a buffer."""
    buffer.write(encode_string(text))


def read_varint(data: bytes, offset: int) -> Tuple[int, int]:
    """
    Read a VarInt from binary data.

    Args:
        data: Binary data to read from
        offset: Starting offset in the data

    Returns:
        Tuple of (value, new_offset after the last VarInt byte)

    Raises:
        ValueError: If the data ends mid-VarInt or the VarInt exceeds 5 bytes
    """
    value = 0
    shift = 0
    position = offset

    for _ in range(VARINT_MAX_BYTES):
        if position >= len(data):
            raise ValueError(f"Truncated VarInt at offset {offset}")

        byte = data[position]
        position += 1
        value |= (byte & SEGMENT_BITS) << shift

        if not byte & CONTINUE_BIT:
            if value > VARINT_MAX:
                raise ValueError(f"VarInt at offset {offset} exceeds 32 bits")
            return value, position

        shift += 7

    raise ValueError(f"VarInt at offset {offset} is longer than {VARINT_MAX_BYTES} bytes")


def read_string(data: bytes, offset: int) -> Tuple[str, int]:
    """
    Read a length-prefixed UTF-8 string from binary data.

    Args:
        data: Binary data to read from
        offset: Offset of the length prefix

    Returns:
        Tuple of (string, new_offset after the string bytes)

    Raises:
        ValueError: If the data is truncated or not valid UTF-8
    """
    length, start = read_varint(data, offset)
    end = start + length

    if end > len(data):
        raise ValueError(f"String at offset {offset} needs {length} bytes, only {len(data) - start} left")

    try:
        return data[start:end].decode('utf-8'), end
    except UnicodeDecodeError as e:
        raise ValueError(f"String at offset {offset} is not valid UTF-8") from e
