"""
Normalization of a freshly built pattern tree.

Two passes, run once before any matching:

1. identities: leaves that are structurally equal anywhere in the tree are
   replaced by one shared instance taken from a LeafTable, so a value written
   through one occurrence is seen by all of them;
2. repeating arguments: leaves that occur more than once within one
   alternative of the expanded tree switch to an accumulating value, a list
   for arguments and valued options, a counter for commands and flags.

normalize() is idempotent: a second run finds every leaf already canonical
and every accumulating value already in place.
"""
from .lists import count, index, unique
from .patterns import Argument, Command, Kind, Option, kindof
from .transformer import transform


class LeafTable:
    """
    Canonical leaf instances of one tree.

    Built from the de-duplicated leaves of the tree (first occurrence wins) and
    passed explicitly through the identity pass instead of being recomputed
    for every branch.
    """
    __slots__ = ("_leaves",)

    def __init__(self, pattern, /):
        self._leaves = unique(pattern.flat())

    def __len__(self):
        return len(self._leaves)

    def __iter__(self):
        return iter(self._leaves)

    def resolve(self, leaf, /):
        """
        Return the canonical instance equal to `leaf` (LeafNotFoundError otherwise).
        """
        return self._leaves[index(self._leaves, leaf)]


def fix_identities(pattern, table=None, /):
    """
    Make every leaf child of every branch point to its canonical instance.
    """
    if not kindof(pattern) & Kind.BRANCH:
        return pattern
    if table is None:
        table = LeafTable(pattern)
    for position, child in enumerate(pattern.children):
        if kindof(child) & Kind.BRANCH:
            fix_identities(child, table)
        else:
            pattern._children[position] = table.resolve(child)
    return pattern


def fix_repeating_arguments(pattern, /):
    """
    Switch leaves that repeat within one alternative to accumulating values.

    - Argument, or Option taking a value: list of strings (an existing string
      value is split on whitespace, an existing list is kept);
    - Command, or Option without value: integer counter starting at 0.
    """
    for term in transform(pattern).children:
        children = term.children
        for leaf in [child for child in children if count(children, child) > 1]:
            match leaf:
                case Argument() | Option(argcount=1):
                    if isinstance(leaf.value, str):
                        leaf.value = leaf.value.split()
                    elif not isinstance(leaf.value, list):
                        leaf.value = []
                case Command() | Option(argcount=0):
                    leaf.value = 0
    return pattern


def normalize(pattern, /):
    """
    Run both normalization passes on `pattern` and return it.

    Errors from the passes (LeafNotFoundError, UnknownPatternKindError)
    propagate unchanged.
    """
    return fix_repeating_arguments(fix_identities(pattern))


__all__ = (
    "LeafTable",
    "fix_identities",
    "fix_repeating_arguments",
    "normalize",
)
