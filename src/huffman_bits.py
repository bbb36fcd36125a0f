# filename: huffman_bits.py

import logging

from bitarray import bitarray

from huffman_errors import CorruptData, CorruptTree

logger = logging.getLogger(__name__)


class BitPacker:
    """Accumulates code bits and writes every complete byte, MSB first."""

    def __init__(self, writer, codes):
        self.writer = writer
        self.codes = codes
        self.buffer = bitarray(endian="big")
        self.bytes_written = 0

    def encode(self, block):
        self.buffer.encode(self.codes, block)
        self._emit_full_bytes()

    def flush(self):
        # Padding is zero bits; the decoder stops on the output byte count.
        if self.buffer:
            pad = self.buffer.fill()
            self._emit_full_bytes()
            logger.debug("padded final payload byte with %d zero bits", pad)
        return self.bytes_written

    def _emit_full_bytes(self):
        whole = len(self.buffer) - len(self.buffer) % 8
        if not whole:
            return
        self.writer.write(self.buffer[:whole].tobytes())
        del self.buffer[:whole]
        self.bytes_written += whole // 8


class BitUnpacker:
    """Walks a Huffman tree over payload bytes pulled one at a time from a reader."""

    def __init__(self, reader, tree):
        self.reader = reader
        self.tree = tree
        self.bytes_read = 0

    def _bits(self):
        while True:
            byte = self.reader.read(1)
            if not byte:
                return
            self.bytes_read += 1
            bits = bitarray(endian="big")
            bits.frombytes(byte)
            yield from bits

    def decode(self, data_size):
        """Return exactly ``data_size`` decoded bytes.

        Unread bits left in the last payload byte are dropped.
        """
        out = bytearray()
        if data_size == 0:
            return bytes(out)
        if self.tree is None:
            raise CorruptData(f"chunk declares {data_size} bytes but has no tree")

        bits = self._bits()
        if self.tree.is_leaf:
            for bit in bits:
                if bit:
                    raise CorruptData("single-symbol chunk contains a 1 bit")
                out.append(self.tree.symbol)
                if len(out) == data_size:
                    return bytes(out)
        else:
            node = self.tree
            for bit in bits:
                node = node.right if bit else node.left
                if node is None:
                    raise CorruptTree("bit walk reached a missing child")
                if node.is_leaf:
                    out.append(node.symbol)
                    if len(out) == data_size:
                        return bytes(out)
                    node = self.tree
        raise CorruptData(f"payload ended after {len(out)} of {data_size} bytes")
