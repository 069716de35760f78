"""
Constituency parse trees in Penn Treebank bracketed form
"""

import re
from typing import Iterable, List, Optional

_TOKEN_RE = re.compile(r"\(|\)|[^\s()]+")


class ParseTree:
    """A node in a constituency tree.

    Leaves carry the index of the sentence word they stand for.
    """

    def __init__(self, label: str, children: Optional[List["ParseTree"]] = None,
                 word_index: Optional[int] = None):
        self.label = label
        self.children: List[ParseTree] = children or []
        self.parent: Optional[ParseTree] = None
        self.word_index = word_index
        for child in self.children:
            child.parent = self

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def leaves(self) -> List["ParseTree"]:
        if self.is_leaf:
            return [self]
        out: List[ParseTree] = []
        for child in self.children:
            out.extend(child.leaves())
        return out

    def leaf_indices(self) -> frozenset:
        return frozenset(leaf.word_index for leaf in self.leaves())

    def root(self) -> "ParseTree":
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def ancestors(self) -> List["ParseTree"]:
        """Path from this node up to the root, both included."""
        path = [self]
        node = self
        while node.parent is not None:
            node = node.parent
            path.append(node)
        return path

    def depth_nodes(self) -> int:
        """Number of nodes on the path from the root to this node."""
        return len(self.ancestors())

    def covering_node(self, word_indices: Iterable[int]) -> Optional["ParseTree"]:
        """
        Find the subtree corresponding to a set of words.

        This is the smallest non-leaf node covering all the words, widened to
        the highest ancestor that still yields exactly the same words (so a
        one-word noun phrase maps to its NP rather than the POS node).
        """
        wanted = frozenset(word_indices)
        if not wanted:
            return None
        best = None
        for node in self._preorder():
            if node.is_leaf:
                continue
            if wanted <= node.leaf_indices():
                best = node
        if best is None:
            return None
        yield_set = best.leaf_indices()
        while best.parent is not None and best.parent.leaf_indices() == yield_set:
            best = best.parent
        return best

    def _preorder(self):
        yield self
        for child in self.children:
            yield from child._preorder()

    @staticmethod
    def path_nodes(first: "ParseTree", second: "ParseTree") -> List["ParseTree"]:
        """Nodes on the path between two nodes of the same tree, both ends included."""
        up = first.ancestors()
        down = second.ancestors()
        down_ids = {id(n): i for i, n in enumerate(down)}
        for i, node in enumerate(up):
            if id(node) in down_ids:
                j = down_ids[id(node)]
                return up[: i + 1] + list(reversed(down[:j]))
        raise ValueError("Nodes do not belong to the same tree")

    def __repr__(self) -> str:
        if self.is_leaf:
            return self.label
        return f"({self.label} {' '.join(repr(c) for c in self.children)})"


def parse_bracketed(text: str) -> ParseTree:
    """
    Parse a bracketed tree such as ``(ROOT (S (NP (PRP It)) (VP (VBZ binds))))``.

    Leaves are numbered left to right, so they line up with sentence word indices.

    Raises:
        ValueError: If the brackets are unbalanced or the tree is empty
    """
    tokens = _TOKEN_RE.findall(text)
    if not tokens:
        raise ValueError("Empty parse tree")
    position = 0
    leaf_counter = [0]

    def parse_node() -> ParseTree:
        nonlocal position
        if tokens[position] != "(":
            raise ValueError(f"Expected '(' at token {position}: {tokens[position]!r}")
        position += 1
        label = ""
        if tokens[position] not in ("(", ")"):
            label = tokens[position]
            position += 1
        children: List[ParseTree] = []
        while position < len(tokens) and tokens[position] != ")":
            if tokens[position] == "(":
                children.append(parse_node())
            else:
                children.append(ParseTree(tokens[position], word_index=leaf_counter[0]))
                leaf_counter[0] += 1
                position += 1
        if position >= len(tokens):
            raise ValueError("Unbalanced parentheses in parse tree")
        position += 1
        return ParseTree(label or "ROOT", children)

    tree = parse_node()
    if position != len(tokens):
        raise ValueError("Trailing tokens after parse tree")
    return tree
