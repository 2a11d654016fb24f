from typing import BinaryIO


def read_byte(reader: BinaryIO) -> int:
    """Block until one byte is available from `reader` and return it.

    End of stream is an error: there is no implicit zero byte.
    """
    data = reader.read(1)
    if not data:
        raise EOFError('unexpected end of input')
    return data[0]


def write_byte(writer: BinaryIO, value: int) -> None:
    """Write exactly one byte to `writer` and flush it."""
    written = writer.write(bytes((value,)))
    if written is not None and written != 1:
        raise OSError(f'short write: {written} of 1 byte')
    writer.flush()
