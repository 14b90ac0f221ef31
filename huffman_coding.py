"""
Huffman coding algorithm -
tree over the full byte alphabet and per-symbol codes
"""

import heapq

from bitarray import bitarray

from frequency_table import N_SYMBOLS, FrequencyTable

# 256 leaves + 255 internal nodes
TREE_SIZE = 2 * N_SYMBOLS - 1
ROOT = TREE_SIZE - 1


class Node:
    """
    Class object for Node in Huffman's Tree
    """

    __slots__ = ("value", "weight", "left", "right", "parent")

    def __init__(self, value: int, weight: int = 0):
        """
        Function initializes the structure of a node.

        :param value: int, byte value for leaves, own index for internal nodes
        :param weight: int, the frequency in our data for this node
        """
        self.value = value
        self.weight = weight
        self.left = 0
        self.right = 0
        self.parent = 0

    def is_leaf(self):
        return self.value < N_SYMBOLS

    def __repr__(self):
        return (
            f"Node(value={self.value}, weight={self.weight}, "
            f"left={self.left}, right={self.right}, parent={self.parent})"
        )


class HuffmanTree:
    """
    Class object for Huffman Tree - arena of 511 nodes addressed by index.
    Leaves 0..255 are the byte values, internal nodes 256..510
    are created in merge order, 510 is the root.
    """

    def __init__(self):
        """
        Function initializes an unlinked tree with zero weights.
        """
        self.nodes = [Node(i) for i in range(TREE_SIZE)]
        self.nodes[ROOT].parent = ROOT
        self.codes = []

    @classmethod
    def build_from_freq(cls, freq) -> "HuffmanTree":
        """
        Builds Huffman tree from symbol frequencies and generates codes.

        :param freq: list of 256 counts, FrequencyTable or dict {symbol: count}
        :return: HuffmanTree with filled codes
        """
        if isinstance(freq, dict):
            counts = [0] * N_SYMBOLS
            for symbol, count in freq.items():
                counts[symbol] = count
        else:
            counts = list(freq)
        if len(counts) != N_SYMBOLS:
            raise ValueError(f"Expected {N_SYMBOLS} counts, got {len(counts)}")
        if any(count < 0 for count in counts):
            raise ValueError("Counts can not be negative")

        tree = cls()
        for symbol, count in enumerate(counts):
            tree.nodes[symbol].weight = count

        # ordering key is copied into the heap entry: (weight, index)
        heap = [(count, symbol) for symbol, count in enumerate(counts)]
        heapq.heapify(heap)

        for i in range(N_SYMBOLS, TREE_SIZE):
            l_weight, l = heapq.heappop(heap)
            r_weight, r = heapq.heappop(heap)

            node = tree.nodes[i]
            node.left, node.right = l, r
            node.weight = l_weight + r_weight
            tree.nodes[l].parent = tree.nodes[r].parent = i

            heapq.heappush(heap, (node.weight, i))

        tree.nodes[ROOT].parent = ROOT
        tree.codes_generation()
        return tree

    @classmethod
    def from_table(cls, pairs) -> "HuffmanTree":
        """
        Rebuilds the tree topology from (left, right) pairs
        of internal nodes 256..510. Weights are unknown and stay zero.

        :param pairs: sequence of 255 (left, right) tuples
        :return: HuffmanTree with filled codes
        """
        pairs = list(pairs)
        if len(pairs) != TREE_SIZE - N_SYMBOLS:
            raise ValueError(
                f"Expected {TREE_SIZE - N_SYMBOLS} internal nodes, got {len(pairs)}"
            )
        tree = cls()
        seen = set()
        for i, (l, r) in enumerate(pairs, start=N_SYMBOLS):
            # every node except the root is a child exactly once
            if not (0 <= l < i and 0 <= r < i) or l == r or l in seen or r in seen:
                raise ValueError(f"Invalid children ({l}, {r}) for node {i}")
            seen.update((l, r))
            node = tree.nodes[i]
            node.left, node.right = l, r
            tree.nodes[l].parent = tree.nodes[r].parent = i
        tree.nodes[ROOT].parent = ROOT
        tree.codes_generation()
        return tree

    def to_table(self):
        """
        Returns (left, right) pairs of internal nodes in index order.
        """
        return [(node.left, node.right) for node in self.nodes[N_SYMBOLS:]]

    def codes_generation(self):
        """
        Generates code for each symbol by walking from the leaf
        up to the root: 0 for a left child, 1 for a right child.
        Bits are collected leaf-first and stored root-first.
        """
        self.codes = []
        for symbol in range(N_SYMBOLS):
            code = bitarray()
            v = symbol
            while v != ROOT:
                p = self.nodes[v].parent
                code.append(0 if self.nodes[p].left == v else 1)
                v = p
            code.reverse()
            self.codes.append(code)

    def depth(self, index: int) -> int:
        """
        Number of edges between node index and the root.
        """
        d = 0
        while index != ROOT:
            index = self.nodes[index].parent
            d += 1
        return d

    def code_lengths(self):
        return [len(code) for code in self.codes]

    def decode_step(self, v: int, bit: int) -> int:
        """
        Moves from node v to its left child on bit 0, right child on bit 1.
        """
        node = self.nodes[v]
        return node.right if bit else node.left

    @property
    def root(self) -> Node:
        return self.nodes[ROOT]

    @staticmethod
    def char_frequency(data) -> FrequencyTable:
        """
        Function builds frequency table of each byte for given data.

        :param data: bytes to count symbol frequency for
        :return: FrequencyTable
        """
        return FrequencyTable.from_bytes(data)
