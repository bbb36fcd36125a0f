# filename: huffman_header.py

import logging

from huffman_core import HuffmanNode
from huffman_errors import CorruptData, InvalidNodeType, TruncatedHeader

logger = logging.getLogger(__name__)

BRANCH = 0
LEAF = 1

# A tree over 256 byte values has at most 256 leaves, 255 branches and a
# depth of 255, so no valid header is longer than MAX_HEADER_SIZE.
MAX_LEAVES = 256
MAX_DEPTH = MAX_LEAVES - 1
MAX_HEADER_SIZE = MAX_LEAVES * 2 + (MAX_LEAVES - 1)


def serialize_tree(tree):
    """Pre-order tag stream: 0x00 for a branch, 0x01 followed by the value for a leaf."""
    header = bytearray()
    if tree is None:
        return bytes(header)

    def emit(node):
        if node.is_leaf:
            header.append(LEAF)
            header.append(node.symbol)
        else:
            header.append(BRANCH)
            emit(node.left)
            emit(node.right)

    emit(tree)
    return bytes(header)


def deserialize_tree(data):
    if not data:
        return None
    if len(data) > MAX_HEADER_SIZE:
        raise CorruptData(f"header of {len(data)} bytes exceeds {MAX_HEADER_SIZE}")
    pos = 0

    def take():
        nonlocal pos
        if pos >= len(data):
            raise TruncatedHeader(f"header ended after {len(data)} bytes with the tree incomplete")
        value = data[pos]
        pos += 1
        return value

    def parse(depth):
        if depth > MAX_DEPTH:
            raise CorruptData(f"header tree deeper than {MAX_DEPTH} levels")
        tag = take()
        if tag == BRANCH:
            left = parse(depth + 1)
            right = parse(depth + 1)
            return HuffmanNode(left=left, right=right)
        if tag == LEAF:
            return HuffmanNode(symbol=take())
        raise InvalidNodeType(tag)

    tree = parse(0)
    if pos != len(data):
        raise CorruptData(f"{len(data) - pos} unused bytes after the header tree")
    logger.debug("parsed %d header bytes", len(data))
    return tree
