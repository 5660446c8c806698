"""Decision-tree encoding for small constant integer tables.

Some execution targets cannot own an addressable array inside a shared code
unit. A table over ``[low, high]`` is then written as a balanced tree of
``i <= pivot`` comparisons whose leaves return the precomputed values. The
tree needs no storage and no loop, and a 256-entry table costs eight
comparisons per lookup.

The helpers below build that tree from a materialized value array, walk it,
and render it back out as nested conditionals.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple, Union

# Ranges holding fewer indices than this become a single equality leaf.
LEAF_WIDTH = 3

ValueAt = Callable[[Sequence[int], int], int]


# //1.- Leaf comparing the lowest index of a tiny range for equality.
@dataclass(frozen=True)
class Leaf:
    index: int
    hit: int
    miss: int


# //2.- Interior node splitting its range at ``pivot`` (inclusive on the left).
@dataclass(frozen=True)
class Branch:
    pivot: int
    below: "Node"
    above: "Node"


Node = Union[Leaf, Branch]


def _direct(values: Sequence[int], index: int) -> int:
    return values[index]


# //3.- Recursively split the domain until only leaf-sized ranges remain.
def build_decision_tree(
    values: Sequence[int],
    low: int = 0,
    high: Optional[int] = None,
    *,
    value_at: Optional[ValueAt] = None,
) -> Node:
    """Encode ``values[low..high]`` as a balanced comparison tree.

    ``value_at`` lets a table derive each entry from the raw samples, which
    is how the fade table packs two neighbouring samples into one leaf value.
    """

    if high is None:
        high = len(values) - 1
    if high < low:
        raise ValueError(f"Empty table domain [{low}, {high}]")
    if low < 0:
        raise ValueError("Table domain must start at a non-negative index")
    resolve = value_at or _direct
    if value_at is None and high >= len(values):
        raise ValueError(f"Table has {len(values)} values but domain ends at {high}")
    return _build(values, low, high, resolve)


def _build(values: Sequence[int], low: int, high: int, resolve: ValueAt) -> Node:
    if high - low + 1 < LEAF_WIDTH:
        return Leaf(index=low, hit=int(resolve(values, low)), miss=int(resolve(values, high)))
    middle = (low + high) // 2
    return Branch(
        pivot=middle,
        below=_build(values, low, middle, resolve),
        above=_build(values, middle + 1, high, resolve),
    )


# //4.- Walk the tree using comparisons only.
def lookup(node: Node, index: int) -> int:
    while isinstance(node, Branch):
        node = node.below if index <= node.pivot else node.above
    return node.hit if index == node.index else node.miss


def tree_depth(node: Node) -> int:
    """Comparisons on the longest root-to-leaf path, leaf equality included."""
    if isinstance(node, Leaf):
        return 1
    return 1 + max(tree_depth(node.below), tree_depth(node.above))


def leaf_count(node: Node) -> int:
    if isinstance(node, Leaf):
        return 1
    return leaf_count(node.below) + leaf_count(node.above)


def materialize(node: Node, low: int, high: int) -> Tuple[int, ...]:
    """Flatten the tree back into an indexable tuple over ``[low, high]``."""
    return tuple(lookup(node, index) for index in range(low, high + 1))


# //5.- Emit the tree as a Python function built from nested conditionals.
def render_lookup(node: Node, name: str, *, argument: str = "i", indent: str = "    ") -> List[str]:
    lines = [f"def {name}({argument}):"]
    _render(node, argument, indent, 1, lines)
    return lines


def _render(node: Node, argument: str, indent: str, level: int, lines: List[str]) -> None:
    pad = indent * level
    if isinstance(node, Leaf):
        lines.append(f"{pad}if {argument} == {node.index}:")
        lines.append(f"{pad}{indent}return {node.hit}")
        lines.append(f"{pad}else:")
        lines.append(f"{pad}{indent}return {node.miss}")
        return
    lines.append(f"{pad}if {argument} <= {node.pivot}:")
    _render(node.below, argument, indent, level + 1, lines)
    lines.append(f"{pad}else:")
    _render(node.above, argument, indent, level + 1, lines)
