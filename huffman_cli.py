#!/usr/bin/env python3
"""
Command line front end for the tree-header Huffman compressor.

Run with:
    huff compress notes.txt            # writes notes.txt.hf
    huff decompress notes.txt.hf       # writes notes.txt
"""
import argparse
import logging
import sys

from huffman_core import HuffException
from huffman_service import HuffmanService

HUFF_SUFFIX = ".hf"
UNHUFF_SUFFIX = ".unhf"


def default_output(src, command):
    if command == "compress":
        return src + HUFF_SUFFIX
    if src.endswith(HUFF_SUFFIX):
        return src[:-len(HUFF_SUFFIX)]
    return src + UNHUFF_SUFFIX


def build_parser():
    parser = argparse.ArgumentParser(prog="huff", description="Huffman compress or decompress a file")
    parser.add_argument("command", choices=["compress", "decompress"])
    parser.add_argument("src", help="Input file")
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output file (default: SRC.hf, or SRC without .hf when decompressing)"
    )
    parser.add_argument(
        "-d", "--debug",
        type=int,
        default=0,
        help="Processor debug level: 1 logs bit counts, 4 also logs every code"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug log records")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    dst = args.output or default_output(args.src, args.command)
    service = HuffmanService(debug=args.debug)
    try:
        if args.command == "compress":
            stats = service.compress_file(args.src, dst)
        else:
            stats = service.decompress_file(args.src, dst)
    except (HuffException, OSError) as e:
        print(f"huff: {args.command} failed: {e}", file=sys.stderr)
        return 1

    print(f"{args.src} -> {dst}: read {stats.bits_read // 8} bytes, wrote {(stats.bits_written + 7) // 8} bytes")
    return 0


if __name__ == "__main__":
    sys.exit(main())
