"""
List helpers over sequences of patterns.

All comparisons are structural (Pattern.__eq__), never by identity, because
the same option or argument may legitimately appear several times in a tree
or in a command line. Every helper returns a new list and leaves its inputs
untouched.
"""
from .faults import FaultCode, LeafNotFoundError, trigger


def unique(patterns, /):
    """
    Stable de-duplication keyed on the canonical rendering; first occurrence wins.
    """
    seen = set()
    result = []
    for pattern in patterns:
        if (key := str(pattern)) not in seen:
            seen.add(key)
            result.append(pattern)
    return result


def index(patterns, pattern, /):
    """
    Position of the first element structurally equal to `pattern`.

    Raises LeafNotFoundError when there is none.
    """
    for position, candidate in enumerate(patterns):
        if candidate == pattern:
            return position
    trigger(
        LeafNotFoundError(f"{pattern} not in list"),
        code=FaultCode.LEAF_NOT_FOUND,
        title="leaf not found",
        hint="the tree changed between collecting its leaves and looking them up",
    )


def count(patterns, pattern, /):
    return sum(1 for candidate in patterns if candidate == pattern)


def diff(patterns, removed, /):
    """
    Multiset subtraction: each element of `removed` cancels at most one equal element.
    """
    pending = list(removed)
    result = []
    for pattern in patterns:
        for position, candidate in enumerate(pending):
            if candidate == pattern:
                del pending[position]
                break
        else:
            result.append(pattern)
    return result


def remove(patterns, pattern, /):
    return diff(patterns, [pattern])


def double(patterns, /):
    return [*patterns, *patterns]


def dictionary(patterns, /):
    """
    Project bound leaves to a {name: value} mapping; later names win.
    """
    return {pattern.name: pattern.value for pattern in patterns}


__all__ = (
    "unique",
    "index",
    "count",
    "diff",
    "remove",
    "double",
    "dictionary",
)
