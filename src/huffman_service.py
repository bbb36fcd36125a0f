# filename: huffman_service.py

import io
import logging

from huffman_bits import BitPacker, BitUnpacker
from huffman_chunk import BLOCK_SIZE, read_chunk_header, read_exact, write_chunk_header
from huffman_core import HuffmanLogic

logger = logging.getLogger(__name__)


class HuffmanService:
    def __init__(self):
        self.logic = HuffmanLogic()

    def encode_chunk(self, block, writer):
        freqs = self.logic.count_frequencies(block)
        tree = self.logic.build_tree(freqs)
        codes = self.logic.generate_codes(tree)

        write_chunk_header(writer, tree, len(block))
        packer = BitPacker(writer, codes)
        packer.encode(block)
        payload_size = packer.flush()
        logger.debug("encoded %d bytes, %d symbols -> %d payload bytes",
                     len(block), len(freqs), payload_size)
        return payload_size

    def decode_chunk(self, header, reader):
        unpacker = BitUnpacker(reader, header.tree)
        data = unpacker.decode(header.data_size)
        logger.debug("decoded %d payload bytes -> %d bytes", unpacker.bytes_read, len(data))
        return data

    def encode(self, reader, writer, on_chunk=None):
        """Compress ``reader`` into ``writer`` one block at a time; return the chunk count."""
        chunks = 0
        while True:
            block = read_exact(reader, BLOCK_SIZE)
            if not block:
                break
            self.encode_chunk(block, writer)
            chunks += 1
            if on_chunk is not None:
                on_chunk(chunks)
            if len(block) < BLOCK_SIZE:
                break
        return chunks

    def decode(self, reader, writer, on_chunk=None):
        """Decompress chunks from ``reader`` into ``writer`` until the stream ends cleanly."""
        chunks = 0
        while True:
            header = read_chunk_header(reader)
            if header is None:
                break
            writer.write(self.decode_chunk(header, reader))
            chunks += 1
            if on_chunk is not None:
                on_chunk(chunks)
        return chunks

    def compress(self, data):
        if not data:
            return b""
        out = io.BytesIO()
        self.encode(io.BytesIO(data), out)
        return out.getvalue()

    def decompress(self, blob):
        out = io.BytesIO()
        self.decode(io.BytesIO(blob), out)
        return out.getvalue()


def encode(reader, writer, on_chunk=None):
    return HuffmanService().encode(reader, writer, on_chunk)


def decode(reader, writer, on_chunk=None):
    return HuffmanService().decode(reader, writer, on_chunk)
