# filename: huffman_core.py

import heapq
import itertools
import logging
from collections import Counter

from bitarray import bitarray

logger = logging.getLogger(__name__)

MAX_BLOCK = 65535


class HuffmanNode:
    """A node in a per-chunk Huffman tree.

    Leaves carry a byte value in ``symbol``; branches have ``symbol`` set to
    None and exactly two children. ``freq`` only matters while the tree is
    being built.
    """

    __slots__ = ("symbol", "freq", "left", "right")

    def __init__(self, symbol=None, freq=0, left=None, right=None):
        self.symbol = symbol
        self.freq = freq
        self.left = left
        self.right = right

    @property
    def is_leaf(self):
        return self.left is None and self.right is None

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode(symbol={self.symbol}, freq={self.freq})"
        return f"HuffmanNode(freq={self.freq}, left={self.left!r}, right={self.right!r})"


class HuffmanLogic:
    def count_frequencies(self, block):
        if len(block) > MAX_BLOCK:
            raise ValueError(f"block of {len(block)} bytes exceeds {MAX_BLOCK}")
        return dict(Counter(block))

    def build_tree(self, freqs):
        if not freqs:
            raise ValueError("cannot build a tree from an empty frequency table")

        # Equal weights pop in sequence order: leaves by ascending byte value,
        # then branches in the order they were merged.
        sequence = itertools.count()
        priority_queue = [
            (freqs[symbol], next(sequence), HuffmanNode(symbol, freqs[symbol]))
            for symbol in sorted(freqs)
        ]
        heapq.heapify(priority_queue)

        while len(priority_queue) > 1:
            left_freq, _, left = heapq.heappop(priority_queue)
            right_freq, _, right = heapq.heappop(priority_queue)
            merged = HuffmanNode(None, left_freq + right_freq, left, right)
            heapq.heappush(priority_queue, (merged.freq, next(sequence), merged))

        root = priority_queue[0][2]
        logger.debug("built tree over %d symbols, weight %d", len(freqs), root.freq)
        return root

    def generate_codes(self, node):
        """Map every leaf symbol to its code, ``0`` for left and ``1`` for right.

        A tree made of a single leaf gets the one-bit code ``0``.
        """
        codes = {}
        if node is None:
            return codes
        if node.is_leaf:
            codes[node.symbol] = bitarray("0")
            return codes

        def walk(current, prefix):
            if current.is_leaf:
                codes[current.symbol] = bitarray(prefix)
                return
            walk(current.left, prefix + "0")
            walk(current.right, prefix + "1")

        walk(node, "")
        return codes
