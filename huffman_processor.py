# filename: huffman_processor.py

import logging
from collections import namedtuple

from huffman_core import (
    BITS_PER_INT,
    BITS_PER_WORD,
    DEBUG_LOW,
    HUFF_TREE,
    PSEUDO_EOF,
    SINGLE_BIT,
    HuffmanLogic,
    MalformedHeaderError,
    MalformedTreeError,
    TruncatedStreamError,
)

logger = logging.getLogger(__name__)

# leaves counts tree leaves, so the empty-input tree reports its filler leaf too
HuffStats = namedtuple("HuffStats", ["bits_read", "bits_written", "leaves"])


class HuffProcessor:
    """Compresses and decompresses a single byte stream with a tree header.

    Both directions work on bit ports: an input with ``read_bits`` and
    ``reset`` and an output with ``write_bits`` and ``close``. The output is
    closed on every exit path.
    """

    def __init__(self, debug=0):
        self.debug = debug
        self.logic = HuffmanLogic(debug)

    def compress(self, bit_in, bit_out):
        try:
            counts = self.logic.count_frequencies(bit_in)
            root = self.logic.build_tree(counts)
            codes = self.logic.generate_codes(root)

            bit_out.write_bits(BITS_PER_INT, HUFF_TREE)
            self.logic.write_tree(root, bit_out)

            bit_in.reset()
            self._write_codes(codes, bit_in, bit_out)
        finally:
            bit_out.close()

        stats = HuffStats(bit_in.bits_read, bit_out.bits_written, len(root.leaves()))
        if self.debug >= DEBUG_LOW:
            logger.debug(
                "compressed: %d bits read, %d bits written, %d leaves",
                stats.bits_read, stats.bits_written, stats.leaves,
            )
        return stats

    def _write_codes(self, codes, bit_in, bit_out):
        while True:
            bits = bit_in.read_bits(BITS_PER_WORD)
            if bits == -1:
                break
            self._write_code(codes[bits], bit_out)
        self._write_code(codes[PSEUDO_EOF], bit_out)

    @staticmethod
    def _write_code(code, bit_out):
        length, bits = code
        # deep trees can yield codes wider than one port write
        while length > BITS_PER_INT:
            length -= BITS_PER_INT
            bit_out.write_bits(BITS_PER_INT, bits >> length)
        bit_out.write_bits(length, bits)

    @staticmethod
    def check_header(bit_in):
        bits = bit_in.read_bits(BITS_PER_INT)
        if bits != HUFF_TREE:
            raise MalformedHeaderError("illegal header starts with %d" % bits)

    def decompress(self, bit_in, bit_out):
        try:
            self.check_header(bit_in)
            root = self.logic.read_tree(bit_in)
            if root.is_leaf():
                raise MalformedTreeError("huff tree has no internal nodes")
            self._write_output(root, bit_in, bit_out)
        finally:
            bit_out.close()

        stats = HuffStats(bit_in.bits_read, bit_out.bits_written, len(root.leaves()))
        if self.debug >= DEBUG_LOW:
            logger.debug(
                "decompressed: %d bits read, %d bits written, %d leaves",
                stats.bits_read, stats.bits_written, stats.leaves,
            )
        return stats

    def _write_output(self, root, bit_in, bit_out):
        current = root
        while True:
            bits = bit_in.read_bits(SINGLE_BIT)
            if bits == -1:
                raise TruncatedStreamError("bad input, no PSEUDO_EOF")
            current = current.left if bits == 0 else current.right

            if current.is_leaf():
                if current.value == PSEUDO_EOF:
                    return
                bit_out.write_bits(BITS_PER_WORD, current.value)
                current = root
