import io
import os
import sys

import pytest
from bitarray import bitarray

SRC = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if SRC not in sys.path:
	sys.path.insert(0, SRC)

from huffman_bits import BitPacker, BitUnpacker
from huffman_core import HuffmanNode
from huffman_errors import CorruptData, CorruptTree

A, B = ord('a'), ord('b')


def two_leaf_tree():
	# b -> 0, a -> 1
	return HuffmanNode(left=HuffmanNode(symbol=B), right=HuffmanNode(symbol=A))


def test_packer_pads_final_byte_with_zeros():
	out = io.BytesIO()
	packer = BitPacker(out, {A: bitarray('1'), B: bitarray('0')})
	packer.encode(b"aab")
	assert out.getvalue() == b""
	assert packer.flush() == 1
	assert out.getvalue() == b"\xc0"


def test_packer_emits_full_bytes_immediately():
	out = io.BytesIO()
	packer = BitPacker(out, {1: bitarray('10101'), 2: bitarray('010'), 3: bitarray('11')})
	packer.encode(bytes([1, 2, 3]))
	assert out.getvalue() == b"\xaa"
	assert packer.flush() == 2
	assert out.getvalue() == b"\xaa\xc0"


def test_packer_flush_without_leftover_adds_nothing():
	out = io.BytesIO()
	packer = BitPacker(out, {A: bitarray('0'), B: bitarray('1')})
	packer.encode(b"abababab")
	assert packer.flush() == 1
	assert out.getvalue() == b"\x55"


def test_unpacker_stops_mid_byte():
	reader = io.BytesIO(b"\xc0\xff")
	unpacker = BitUnpacker(reader, two_leaf_tree())
	assert unpacker.decode(3) == b"aab"
	assert reader.tell() == 1
	assert unpacker.bytes_read == 1


def test_unpacker_reuses_bits_across_bytes():
	tree = HuffmanNode(
		left=HuffmanNode(symbol=1),
		right=HuffmanNode(left=HuffmanNode(symbol=2), right=HuffmanNode(symbol=3)))
	# 0 10 11 0 10 | 11 11 0 -> 01011010 11110000
	reader = io.BytesIO(b"\x5a\xf0")
	assert BitUnpacker(reader, tree).decode(8) == bytes([1, 2, 3, 1, 2, 3, 3, 1])


def test_unpacker_zero_size_reads_nothing():
	reader = io.BytesIO(b"\xff")
	assert BitUnpacker(reader, None).decode(0) == b""
	assert reader.tell() == 0


def test_unpacker_single_leaf_tree():
	reader = io.BytesIO(b"\x00\x00")
	assert BitUnpacker(reader, HuffmanNode(symbol=7)).decode(10) == b"\x07" * 10
	assert reader.tell() == 2


def test_unpacker_single_leaf_rejects_one_bit():
	with pytest.raises(CorruptData):
		BitUnpacker(io.BytesIO(b"\x80"), HuffmanNode(symbol=7)).decode(1)


def test_unpacker_missing_child():
	tree = HuffmanNode(left=HuffmanNode(symbol=1), right=None)
	with pytest.raises(CorruptTree):
		BitUnpacker(io.BytesIO(b"\x80"), tree).decode(1)


def test_unpacker_payload_too_short():
	with pytest.raises(CorruptData):
		BitUnpacker(io.BytesIO(b"\xc0"), two_leaf_tree()).decode(9)


def test_unpacker_without_tree():
	with pytest.raises(CorruptData):
		BitUnpacker(io.BytesIO(b"\x00"), None).decode(1)
