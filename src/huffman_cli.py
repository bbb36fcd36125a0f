#!/usr/bin/env python3
"""
huffman_cli.py : command line front end for the streaming Huffman codec

Usage:
    huffstream notes.txt                  # writes notes.txt.huf
    huffstream -d notes.txt.huf           # writes notes.txt
    huffstream -i in.bin -o out.huf       # explicit names
"""

import argparse
import logging
import os
import sys

from huffman_errors import HuffmanError
from huffman_service import HuffmanService

HUF_EXT = ".huf"


def default_output(infile, decode):
    if not decode:
        return infile + HUF_EXT
    base, ext = os.path.splitext(infile)
    if ext.lower() == HUF_EXT:
        return base
    return infile + ".out"


def unused_name(outfile):
    """Append .0, .1, ... to ``outfile`` until the name is free."""
    directory = os.path.dirname(outfile)
    base = os.path.basename(outfile)
    candidate = outfile
    i = 0
    while os.path.exists(candidate):
        print(f"File exists: {candidate}")
        candidate = os.path.join(directory, f"{base}.{i}")
        i += 1
    return candidate


def _progress(_chunks):
    print("#", end="", flush=True)


def encode_file(infile, outfile, service=None):
    service = service or HuffmanService()
    print(f"Encoding: {infile} -> {outfile}")
    with open(infile, "rb") as src, open(outfile, "wb") as dst:
        service.encode(src, dst, on_chunk=_progress)
    print()
    in_size = os.path.getsize(infile)
    out_size = os.path.getsize(outfile)
    if in_size:
        print(f"Compression Ratio: {out_size / in_size * 100.0:2.2f}%")


def decode_file(infile, outfile, service=None):
    service = service or HuffmanService()
    print(f"Decoding: {infile} -> {outfile}")
    with open(infile, "rb") as src, open(outfile, "wb") as dst:
        service.decode(src, dst, on_chunk=_progress)
    print()


def build_parser():
    parser = argparse.ArgumentParser(description="Huffman encoder/decoder.")
    parser.add_argument("-i", dest="infile", help="Input file name")
    parser.add_argument("-o", dest="outfile", help="Output file name")
    parser.add_argument("-d", dest="decode", action="store_true",
                        help="Decode rather than encode")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log per-chunk details to stderr")
    parser.add_argument("paths", nargs="*", metavar="FILE",
                        help="input file, optionally followed by the output file")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format="%(asctime)s %(name)s %(levelname)s %(message)s")

    paths = list(args.paths)
    infile = args.infile or (paths.pop(0) if paths else None)
    if not infile:
        parser.print_help(sys.stderr)
        return 2
    outfile = args.outfile or (paths.pop(0) if paths else None)
    outfile = unused_name(outfile or default_output(infile, args.decode))

    try:
        if args.decode:
            decode_file(infile, outfile)
        else:
            encode_file(infile, outfile)
    except (HuffmanError, OSError) as e:
        print()
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
