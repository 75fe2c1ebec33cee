"""
Expansion of a pattern tree into a single top-level Either.

    ((-a | -b) (-c | -d))  =>  (-a -c | -a -d | -b -c | -b -d)

Each alternative of the result is a Required holding leaves only. The rewrite is
(almost) equivalent to the input:
- [-a] contributes (-a): optionality is decided while matching, not here;
- (-a...) contributes (-a -a): two copies are enough to see that -a repeats.
"""
from collections import deque

from .lists import double, remove
from .patterns import Either, Kind, Required, kindof


def transform(pattern, /):
    """
    Rewrite `pattern` into Either(Required(...), Required(...), ...).

    A FIFO worklist of groups starts with [pattern]. For every group, the
    first branch member is taken out and expanded in front of the rest:
    Either forks one group per child, OneOrMore contributes its child twice,
    any other branch contributes its children. A group without branches is
    finished and becomes one Required term.
    """
    terms = []
    groups = deque([[pattern]])
    while groups:
        children = groups.popleft()
        branch = next((child for child in children if kindof(child) & Kind.BRANCH), None)
        if branch is None:
            terms.append(Required(*children))
            continue
        children = remove(children, branch)
        match kindof(branch):
            case Kind.EITHER:
                for child in branch.children:
                    groups.append([child, *children])
            case Kind.ONE_OR_MORE:
                groups.append([*double(branch.children), *children])
            case _:
                groups.append([*branch.children, *children])
    return Either(*terms)


__all__ = ("transform",)
