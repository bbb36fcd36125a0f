# filename: huffman_chunk.py

import logging
import struct
from collections import namedtuple

from huffman_core import MAX_BLOCK
from huffman_errors import CorruptData, TruncatedHeader
from huffman_header import MAX_HEADER_SIZE, deserialize_tree, serialize_tree

logger = logging.getLogger(__name__)

BLOCK_SIZE = MAX_BLOCK
SIZE_FIELD = struct.Struct(">H")

ChunkHeader = namedtuple("ChunkHeader", ["tree", "header_size", "data_size"])


def read_exact(reader, size):
    """Read up to ``size`` bytes, retrying short reads until EOF."""
    parts = []
    remaining = size
    while remaining > 0:
        part = reader.read(remaining)
        if not part:
            break
        parts.append(part)
        remaining -= len(part)
    return b"".join(parts)


def write_chunk_header(writer, tree, data_size):
    if not 0 <= data_size <= BLOCK_SIZE:
        raise ValueError(f"data size {data_size} does not fit a chunk")
    header = serialize_tree(tree)
    writer.write(SIZE_FIELD.pack(len(header)))
    writer.write(header)
    writer.write(SIZE_FIELD.pack(data_size))
    logger.debug("wrote chunk header: %d header bytes, %d data bytes", len(header), data_size)
    return SIZE_FIELD.size * 2 + len(header)


def read_chunk_header(reader):
    """Read the framing in front of one chunk's payload.

    Returns None at a clean end of stream, i.e. when fewer than two bytes
    remain for the header size field.
    """
    raw = read_exact(reader, SIZE_FIELD.size)
    if len(raw) < SIZE_FIELD.size:
        return None
    (header_size,) = SIZE_FIELD.unpack(raw)
    if header_size > MAX_HEADER_SIZE:
        raise CorruptData(f"header size {header_size} exceeds {MAX_HEADER_SIZE}")

    header = read_exact(reader, header_size)
    if len(header) < header_size:
        raise TruncatedHeader(f"expected {header_size} header bytes, got {len(header)}")
    tree = deserialize_tree(header)

    raw = read_exact(reader, SIZE_FIELD.size)
    if len(raw) < SIZE_FIELD.size:
        raise TruncatedHeader("stream ended inside the data size field")
    (data_size,) = SIZE_FIELD.unpack(raw)

    if tree is None and data_size:
        raise CorruptData(f"empty header for a chunk of {data_size} bytes")
    logger.debug("read chunk header: %d header bytes, %d data bytes", header_size, data_size)
    return ChunkHeader(tree, header_size, data_size)
