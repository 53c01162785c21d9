# filename: huffman_core.py

import heapq
import logging
from collections import namedtuple

logger = logging.getLogger(__name__)

SINGLE_BIT = 1
BITS_PER_WORD = 8
BITS_PER_INT = 32
ALPH_SIZE = 1 << BITS_PER_WORD
PSEUDO_EOF = ALPH_SIZE
HUFF_NUMBER = 0xFACE8200
HUFF_TREE = HUFF_NUMBER | 1

DEBUG_LOW = 1
DEBUG_HIGH = 4


class HuffException(Exception):
    """Base class for errors raised while decoding a compressed artifact."""


class MalformedHeaderError(HuffException):
    pass


class MalformedTreeError(HuffException):
    pass


class TruncatedStreamError(HuffException):
    pass


class Code(namedtuple("Code", ["length", "bits"])):
    """A root-to-leaf path: `length` bits of `bits`, most significant first."""

    __slots__ = ()

    def __str__(self):
        return format(self.bits, "0{}b".format(self.length)) if self.length else ""

    def is_prefix_of(self, other):
        if self.length > other.length:
            return False
        return other.bits >> (other.length - self.length) == self.bits


class HuffmanNode:
    def __init__(self, value, weight, left=None, right=None, order=0):
        self.value = value
        self.weight = weight
        self.left = left
        self.right = right
        # secondary heap key so equal weights pop in a fixed order
        self.order = order

    def __lt__(self, other):
        return (self.weight, self.order) < (other.weight, other.order)

    def is_leaf(self):
        return self.left is None and self.right is None

    def leaves(self):
        if self.is_leaf():
            return [self]
        return self.left.leaves() + self.right.leaves()


class HuffmanLogic:
    def __init__(self, debug=0):
        self.debug = debug

    def count_frequencies(self, bit_in):
        """Count every 8-bit chunk until the source is exhausted.

        The returned list has one slot per symbol, ``PSEUDO_EOF`` included,
        and that slot is always 1. The caller must ``reset()`` the source
        before reading it again.
        """
        counts = [0] * (ALPH_SIZE + 1)
        while True:
            bits = bit_in.read_bits(BITS_PER_WORD)
            if bits == -1:
                break
            counts[bits] += 1
        counts[PSEUDO_EOF] = 1
        return counts

    def build_tree(self, counts):
        # Leaves take their symbol as order, merged nodes count up from there
        priority_queue = [
            HuffmanNode(symbol, weight, order=symbol)
            for symbol, weight in enumerate(counts)
            if weight > 0
        ]
        heapq.heapify(priority_queue)
        next_order = ALPH_SIZE + 1

        while len(priority_queue) > 1:
            left = heapq.heappop(priority_queue)
            right = heapq.heappop(priority_queue)
            merged = HuffmanNode(0, left.weight + right.weight, left, right, order=next_order)
            next_order += 1
            heapq.heappush(priority_queue, merged)

        root = priority_queue[0]
        if root.is_leaf():
            # Only PSEUDO_EOF was counted (empty input); give it a one-bit code.
            root = HuffmanNode(0, root.weight, root, HuffmanNode(0, 0), order=next_order)
        return root

    def generate_codes(self, node, current_code=Code(0, 0), codes=None):
        if codes is None:
            codes = [None] * (ALPH_SIZE + 1)
        if node.is_leaf():
            codes[node.value] = current_code
            if self.debug >= DEBUG_HIGH:
                logger.debug("encoding for %d is %s", node.value, current_code)
            return codes
        length, bits = current_code
        self.generate_codes(node.left, Code(length + 1, bits << 1), codes)
        self.generate_codes(node.right, Code(length + 1, (bits << 1) | 1), codes)
        return codes

    def write_tree(self, node, bit_out):
        if node.is_leaf():
            bit_out.write_bits(SINGLE_BIT, 1)
            bit_out.write_bits(BITS_PER_WORD + 1, node.value)
            return
        bit_out.write_bits(SINGLE_BIT, 0)
        self.write_tree(node.left, bit_out)
        self.write_tree(node.right, bit_out)

    def read_tree(self, bit_in, depth=0):
        # 257 leaves can sit at most ALPH_SIZE levels below the root
        if depth > ALPH_SIZE:
            raise MalformedTreeError("error decoding huff tree: deeper than %d levels" % ALPH_SIZE)
        bit = bit_in.read_bits(SINGLE_BIT)
        if bit == -1:
            raise MalformedTreeError("error decoding huff tree: stream ended before a node flag")
        if bit == 0:
            left = self.read_tree(bit_in, depth + 1)
            right = self.read_tree(bit_in, depth + 1)
            return HuffmanNode(0, 0, left, right)

        value = bit_in.read_bits(BITS_PER_WORD + 1)
        if value == -1:
            raise MalformedTreeError("error decoding huff tree: stream ended inside a leaf value")
        if value > PSEUDO_EOF:
            raise MalformedTreeError("error decoding huff tree: leaf value %d is not a symbol" % value)
        if self.debug >= DEBUG_HIGH:
            logger.debug("read leaf %d", value)
        return HuffmanNode(value, 0)
