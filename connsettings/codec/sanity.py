"""
Sanity checks shared by the decoder and the encoder.

A declared string length larger than SANITY_MAX_STRING_LEN is treated as a
corruption signal rather than a genuinely large value. The encoder applies
the same bound so that everything it writes can be read back.
"""
from connsettings.exceptions import (
    ImplausibleLengthError,
    LengthOverflowError,
    ValueTooLargeError,
)

SANITY_MAX_STRING_LEN = 1000


def check_declared_length(length: int, data_offset: int, buffer_length: int) -> None:
    """
    Validate a declared string length before its bytes are read.

    Args:
        length: Declared byte length of the string run (terminator included)
        data_offset: Offset where the string bytes start
        buffer_length: Total size of the buffer being decoded

    Raises:
        LengthOverflowError: If the run extends past the end of the buffer
        ImplausibleLengthError: If the run exceeds the sanity threshold
    """
    if data_offset + length > buffer_length:
        raise LengthOverflowError(
            f"Declared length {length} at offset {data_offset} exceeds "
            f"remaining {max(buffer_length - data_offset, 0)} bytes",
            offset=data_offset,
            details={"declared_length": length},
        )
    if length > SANITY_MAX_STRING_LEN:
        raise ImplausibleLengthError(
            f"Declared length {length} at offset {data_offset} exceeds "
            f"sanity limit of {SANITY_MAX_STRING_LEN}",
            offset=data_offset,
            details={"declared_length": length},
        )


def check_encodable(field: str, encoded_length: int) -> None:
    """Raise ValueTooLargeError if an encoded string run would be rejected on decode."""
    if encoded_length > SANITY_MAX_STRING_LEN:
        raise ValueTooLargeError(field, encoded_length, SANITY_MAX_STRING_LEN)
