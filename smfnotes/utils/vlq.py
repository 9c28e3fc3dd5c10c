"""
MIDI variable-length quantity (VLQ) encoding/decoding.

SMF stores delta-times and meta/sysex lengths as VLQs: 7 data bits per
byte, most significant group first, with bit 7 set on every byte except
the last.

Example:
    0x00000000 -> 00
    0x00000040 -> 40
    0x0000007F -> 7F
    0x00000080 -> 81 00
    0x00002000 -> C0 00
    0x0FFFFFFF -> FF FF FF 7F
"""

from smfnotes.utils.stream import ByteStream

# Largest value the SMF standard allows in four encoded bytes
MAX_VLQ = 0x0FFFFFFF


def decode_vlq(stream: ByteStream) -> int:
    """
    Read one variable-length quantity from the stream.

    There is no limit on the number of bytes. A quantity that never clears
    its continuation bit runs into the end of the data and raises
    TruncatedStreamError from the stream.

    Args:
        stream: Stream positioned at the first byte of the quantity

    Returns:
        Decoded non-negative integer
    """
    result = 0
    while True:
        byte = stream.read_u8()
        result = (result << 7) | (byte & 0x7F)
        if byte & 0x80 == 0:
            return result


def encode_vlq(value: int) -> bytes:
    """
    Encode a non-negative integer as a variable-length quantity.

    Args:
        value: Integer to encode

    Returns:
        Encoded bytes, most significant group first

    Raises:
        ValueError: If value is negative
    """
    if value < 0:
        raise ValueError(f"VLQ value must be non-negative, got {value}")

    groups = [value & 0x7F]
    value >>= 7
    while value:
        groups.append((value & 0x7F) | 0x80)
        value >>= 7

    return bytes(reversed(groups))
