# filename: huffman_errors.py


class HuffmanError(Exception):
    """Base class for every failure raised while encoding or decoding a stream."""


class InvalidNodeType(HuffmanError):
    def __init__(self, tag):
        super().__init__(f"Invalid node type: {tag}")
        self.tag = tag


class TruncatedHeader(HuffmanError):
    pass


class CorruptData(HuffmanError):
    pass


class CorruptTree(CorruptData):
    pass
