import heapq
from collections import Counter
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple, Union

from errors import CorruptData, InvalidInput


class Leaf(NamedTuple):
    """Leaf of a Huffman tree.

    :ivar symbol: Character this leaf encodes; ``None`` only for the
        zero-weight sibling added to a single-symbol alphabet.
    :type symbol: str | None
    :ivar weight: Occurrence count of ``symbol`` in the input.
    :type weight: int
    """

    symbol: Optional[str]
    weight: int


class Internal(NamedTuple):
    """Internal node of a Huffman tree.

    :ivar weight: Sum of the weights of ``left`` and ``right``.
    :type weight: int
    :ivar left: Subtree reached with a ``0`` digit.
    :ivar right: Subtree reached with a ``1`` digit.
    """

    weight: int
    left: "Node"
    right: "Node"


Node = Union[Leaf, Internal]


def count_frequencies(text: Iterable[str]) -> Dict[str, int]:
    """Count how often each symbol occurs in ``text``.

    :param text: Sequence of symbols (usually a ``str``).
    :type text: Iterable[str]
    :returns: Mapping from symbol to occurrence count.
    :rtype: Dict[str, int]
    """
    return dict(Counter(text))


def build_tree(frequencies: Dict[str, int]) -> Node:
    """Build a Huffman tree by repeatedly merging the two lightest nodes.

    Leaves enter the priority queue in ascending symbol order and every
    queue entry carries an insertion sequence number, so nodes of equal
    weight are merged first-in first-out. The node popped first becomes the
    left child. The resulting tree is identical on every run.

    A single-symbol alphabet gets a synthetic ``Leaf(None, 0)`` as the right
    sibling of the real leaf, so the only real code is ``"0"``.

    :param frequencies: Mapping from symbol to observed frequency.
    :type frequencies: Dict[str, int]
    :returns: Root node of the tree.
    :rtype: Leaf | Internal
    :raises InvalidInput: If ``frequencies`` is empty or holds a
        non-positive count.
    """
    if not frequencies:
        raise InvalidInput("Cannot build a Huffman tree without symbols")
    for symbol, weight in frequencies.items():
        if weight <= 0:
            raise InvalidInput(f"Frequency of {symbol!r} must be positive, got {weight}")

    if len(frequencies) == 1:
        symbol, weight = next(iter(frequencies.items()))
        return Internal(weight, Leaf(symbol, weight), Leaf(None, 0))

    heap: List[Tuple[int, int, Node]] = []
    for seq, symbol in enumerate(sorted(frequencies)):
        weight = frequencies[symbol]
        heap.append((weight, seq, Leaf(symbol, weight)))
    heapq.heapify(heap)

    seq = len(heap)
    while len(heap) > 1:
        _, _, left = heapq.heappop(heap)
        _, _, right = heapq.heappop(heap)
        merged = Internal(left.weight + right.weight, left, right)
        heapq.heappush(heap, (merged.weight, seq, merged))
        seq += 1

    return heap[0][2]


def generate_codes(root: Node) -> Dict[str, str]:
    """Assign a digit-string code to every real symbol of the tree.

    :param root: Tree returned by :func:`build_tree`.
    :type root: Leaf | Internal
    :returns: Mapping from symbol to code (``"0"`` for left, ``"1"`` for right).
    :rtype: Dict[str, str]
    """
    codes: Dict[str, str] = {}
    _collect_codes(root, "", codes)
    return codes


def _collect_codes(node: Node, prefix: str, codes: Dict[str, str]):
    """Populate ``codes`` by traversing the subtree rooted at ``node``.

    :param node: Current node in the Huffman tree.
    :type node: Leaf | Internal
    :param prefix: Digits leading from the root to ``node``.
    :type prefix: str
    :param codes: Mapping filled in place with ``symbol -> code``.
    :type codes: Dict[str, str]
    :returns: None
    :rtype: None
    """
    if isinstance(node, Leaf):
        if node.symbol is not None:
            codes[node.symbol] = prefix or "0"
        return
    _collect_codes(node.left, prefix + "0", codes)
    _collect_codes(node.right, prefix + "1", codes)


class _TrieNode:
    """Node of a :class:`DecodeTrie`.

    :ivar symbol: Symbol whose code ends here; ``None`` for inner nodes.
    :type symbol: str | None
    :ivar children: Child reached with ``0`` and child reached with ``1``.
    :type children: List[_TrieNode | None]
    """

    __slots__ = ("symbol", "children")

    def __init__(self):
        """Create a node with no symbol and no children.

        :returns: None
        :rtype: None
        """
        self.symbol: Optional[str] = None
        self.children: List[Optional["_TrieNode"]] = [None, None]


class DecodeTrie:
    """Binary trie rebuilt from a code table, walked bit by bit to decode.

    :ivar root: Root of the trie; never carries a symbol itself.
    """

    def __init__(self, codes: Dict[str, str]):
        """Insert every ``symbol -> code`` path of ``codes`` into the trie.

        :param codes: Code table as produced by :func:`generate_codes`.
        :type codes: Dict[str, str]
        :returns: None
        :rtype: None
        :raises InvalidInput: If a code is empty, contains digits other than
            ``0``/``1``, or the table is not prefix-free.
        """
        self.root = _TrieNode()
        for symbol, code in codes.items():
            self._insert(symbol, code)

    def _insert(self, symbol: str, code: str):
        """Add the path of ``code`` to the trie and mark its end with ``symbol``.

        :param symbol: Symbol encoded by ``code``.
        :type symbol: str
        :param code: Digit string leading to ``symbol``.
        :type code: str
        :returns: None
        :rtype: None
        :raises InvalidInput: If ``code`` is empty, malformed or collides
            with a code already inserted.
        """
        if not isinstance(code, str) or not code:
            raise InvalidInput(f"Code for {symbol!r} must be a non-empty string")
        node = self.root
        for digit in code:
            if digit == "0":
                branch = 0
            elif digit == "1":
                branch = 1
            else:
                raise InvalidInput(
                    f"Codes must consist of '0' and '1' only: {symbol!r} -> {code!r}"
                )
            if node.symbol is not None:
                raise InvalidInput(f"Code {code!r} extends the code of {node.symbol!r}")
            child = node.children[branch]
            if child is None:
                child = node.children[branch] = _TrieNode()
            node = child
        if node.symbol is not None or node.children != [None, None]:
            raise InvalidInput(f"Code {code!r} of {symbol!r} collides with another code")
        node.symbol = symbol

    def walk(self, bits: Iterable[int]) -> str:
        """Decode a stream of bits back into text.

        :param bits: Iterable of ``0``/``1`` integers, padding excluded.
        :type bits: Iterable[int]
        :returns: Decoded text.
        :rtype: str
        :raises CorruptData: If the bits leave the trie or stop in the
            middle of a code.
        """
        out = []
        node = self.root
        for bit in bits:
            node = node.children[bit]
            if node is None:
                raise CorruptData(
                    "Encountered a bit sequence that does not map to any symbol"
                )
            if node.symbol is not None:
                out.append(node.symbol)
                node = self.root
        if node is not self.root:
            raise CorruptData("Bit stream ends in the middle of a code")
        return "".join(out)
