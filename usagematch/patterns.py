r"""
usagematch pattern model.

Overview
- Kind: flag set naming every pattern kind plus the aggregate masks used by
  flatten() (LEAF, BRANCH, ALL) and DEFAULT, which flatten() reads as “all leaves”.
- Leaves (bind to one token)
  • Argument: positional slot, bound by position and never by name.
  • Command: literal word that must appear at the head of the remaining input.
  • Option: -s/--long spelling with an optional argument (argcount 0 or 1).
- Branches (combinators over ordered children)
  • Required: every child, in order.
  • Optional / OptionsShortcut: every child that can match; failures are tolerated.
  • OneOrMore: its single child, repeated at least once.
  • Either: exactly one child, the one consuming the most input.

Representation
- str(pattern) is the canonical rendering, e.g.
    required(command(go, False), option(-f, --file, 1, None))
  Two structurally equal patterns always render identically; the rendering is
  the de-duplication key of lists.unique().
- Patterns render as a rich Tree through __rich__ for pretty printing.

Equality
- == is structural: same kind, same spellings/name/argcount, same value (type
  included, so 0 and False differ) and recursively equal children.

Mutation
- The tree structure is read-only from the outside (children is a tuple view).
  Only leaf values change, and only while normalizing.

Quick example:
    >>> tree = Required(Command("go"), OneOrMore(Argument("<x>")))
    >>> [str(leaf) for leaf in tree.flat()]
    ['command(go, False)', 'argument(<x>, None)']
"""
import enum

from rich.text import Text
from rich.tree import Tree

from .faults import FaultCode, InvalidPatternError, UnknownPatternKindError, trigger
from .utils import mirror, rename


class Kind(enum.IntFlag):
    """
    pattern kinds as combinable flags.

    masks
    - LEAF: ARGUMENT | COMMAND | OPTION
    - BRANCH: REQUIRED | OPTIONAL | OPTIONS_SHORTCUT | ONE_OR_MORE | EITHER
    - ALL: LEAF | BRANCH
    - DEFAULT: empty mask, read by flatten() as “every leaf”
    """
    DEFAULT = 0

    ARGUMENT = 1 << 0
    COMMAND = 1 << 1
    OPTION = 1 << 2

    REQUIRED = 1 << 3
    OPTIONAL = 1 << 4
    OPTIONS_SHORTCUT = 1 << 5  # the [options] placeholder
    ONE_OR_MORE = 1 << 6
    EITHER = 1 << 7

    LEAF = ARGUMENT | COMMAND | OPTION
    BRANCH = REQUIRED | OPTIONAL | OPTIONS_SHORTCUT | ONE_OR_MORE | EITHER
    ALL = LEAF | BRANCH

    def __str__(self):
        # "options_shortcut" -> "optionsshortcut", "one_or_more" -> "oneormore"
        return (self.name or "").lower().replace("_", "")


class PatternType(type):
    """
    Metaclass of the pattern family.

    Responsibilities
    - Attach __kind__ (from the `kind` class keyword) and __typename__.
    - Expose names listed in __introspectable__ as read-only properties via mirror().
    - Seal concrete kinds: a class declared with a kind cannot be subclassed, so
      the family stays closed and every consumer can dispatch exhaustively.
    """
    def __new__(cls, name, bases, namespace, **options):
        kind = options.get("kind", Kind.DEFAULT)
        if not isinstance(kind, Kind):
            raise TypeError(f"pattern kind must be a Kind, not {type(kind).__name__}")

        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__kind__": kind,
                "__typename__": str(kind) if kind else name.lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        if kind:
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def kindof(pattern, /):
    """
    Return the Kind of a pattern node.

    Anything that is not a concrete member of the pattern family is an invariant
    violation and surfaces as UnknownPatternKindError.
    """
    kind = getattr(type(pattern), "__kind__", Kind.DEFAULT)
    if not isinstance(pattern, Pattern) or not kind:
        trigger(
            UnknownPatternKindError(f"{type(pattern).__name__!r} is not a pattern kind"),
            code=FaultCode.UNKNOWN_PATTERN_KIND,
            title="unknown pattern kind",
            hint="build trees only from Argument, Command, Option and the branch combinators",
        )
    return kind


def _invalid(message, hint, /):
    trigger(
        InvalidPatternError(message),
        code=FaultCode.INVALID_PATTERN,
        title="invalid pattern",
        hint=hint,
    )


class Pattern(metaclass=PatternType):
    """
    Base of every pattern node. Not instantiable by itself.
    """

    def flat(self, kinds=Kind.DEFAULT, /):
        """
        Shortcut for flatten(self, kinds).
        """
        return flatten(self, kinds)

    def _signature(self):
        raise NotImplementedError

    def __eq__(self, other):
        if not isinstance(other, Pattern):
            return NotImplemented
        return type(self) is type(other) and self._signature() == other._signature()

    __hash__ = None

    def __repr__(self):
        return str(self)


class LeafPattern(Pattern):
    """
    A terminal pattern: binds to exactly one token.

    The value field is the only mutable part of a pattern. Depending on the
    normalization it holds a plain value (None/str/bool), a list of strings
    (the leaf collects every value it matches) or an int (the leaf counts
    how often it matched).
    """
    __introspectable__ = ("name",)

    def _signature(self):
        return self.name, type(self.value), self.value

    def __str__(self):
        return f"{type(self).__typename__}({self.name}, {self.value!r})"

    def __rich__(self):
        return Text(str(self))


class BranchPattern(Pattern):
    """
    A combinator over an ordered sequence of child patterns.
    """
    __introspectable__ = ("children",)

    def __init__(self, *children):
        for child in children:
            kindof(child)
        self._children = list(children)

    def _signature(self):
        return self._children

    def __str__(self):
        return f"{type(self).__typename__}({", ".join(map(str, self._children))})"

    def __rich__(self):
        tree = Tree(Text(type(self).__typename__, style="bold"))

        def grow(node, pattern):
            for child in pattern.children:
                if isinstance(child, BranchPattern):
                    grow(node.add(Text(type(child).__typename__, style="bold")), child)
                else:
                    node.add(child.__rich__())

        grow(tree, self)
        return tree


class Argument(LeafPattern, kind=Kind.ARGUMENT):
    """
    Positional slot, e.g. <file>. Tokens are arguments too (with name None).
    """

    def __init__(self, name=None, value=None):
        self._name = name
        self.value = value

    def __replace__(self, /, **changes):
        return Argument(self.name, changes.get("value", self.value))


class Command(LeafPattern, kind=Kind.COMMAND):
    """
    Literal word. Its value is True once matched, or a count when it repeats.
    """

    def __init__(self, name, value=False):
        self._name = name
        self.value = value

    def __replace__(self, /, **changes):
        return Command(self.name, changes.get("value", self.value))


class Option(LeafPattern, kind=Kind.OPTION):
    """
    Named option with a short (-f) and/or long (--file) spelling.

    Construction
    - name is the long spelling when present, the short one otherwise.
    - argcount is 0 (flag) or 1 (the option takes a value).
    - value defaults to False; a valued option (argcount 1) left at False
      starts as None instead, meaning “no value given”.
    """
    __introspectable__ = ("short", "long", "argcount")

    def __init__(self, short=None, long=None, argcount=0, value=False):
        if not (short or long):
            _invalid("an option needs a short or a long spelling", "pass short='-x' and/or long='--name'")
        if argcount not in (0, 1):
            _invalid(f"option argcount must be 0 or 1, not {argcount!r}", "options take at most one value")
        self._short = short or None
        self._long = long or None
        self._name = self._long or self._short
        self._argcount = argcount
        self.value = None if value is False and argcount > 0 else value

    def _signature(self):
        return self.short, self.long, self.argcount, type(self.value), self.value

    def __str__(self):
        return f"{type(self).__typename__}({self.short}, {self.long}, {self.argcount}, {self.value!r})"

    def __replace__(self, /, **changes):
        return Option(self.short, self.long, self.argcount, changes.get("value", self.value))


class Required(BranchPattern, kind=Kind.REQUIRED):
    """
    Conjunction: all children must match, in order.
    """


class Optional(BranchPattern, kind=Kind.OPTIONAL):
    """
    Best effort: every child is tried, failures are tolerated.
    """


class OptionsShortcut(BranchPattern, kind=Kind.OPTIONS_SHORTCUT):
    """
    The [options] placeholder; matches like Optional.
    """


class OneOrMore(BranchPattern, kind=Kind.ONE_OR_MORE):
    """
    Repetition of exactly one child, at least once.
    """

    def __init__(self, *children):
        if len(children) != 1:
            _invalid(f"oneormore takes exactly one child, got {len(children)}", "wrap several children in Required")
        super().__init__(*children)


class Either(BranchPattern, kind=Kind.EITHER):
    """
    Disjunction: one child must match; the one leaving the fewest tokens wins.
    """


def flatten(pattern, kinds=Kind.DEFAULT, /):
    """
    Lazily yield the nodes of a tree selected by a kind mask.

    Rules
    - a leaf is yielded when its kind intersects the mask (DEFAULT means every kind);
    - a branch whose own kind intersects the mask is yielded whole, children skipped;
    - any other branch is flattened child by child, in order.

    So flatten(tree) yields every leaf, while flatten(tree, Kind.ONE_OR_MORE)
    yields the repeated groups themselves. Each call starts a fresh generator.
    """
    kind = kindof(pattern)
    if kind & Kind.LEAF:
        if kind & (kinds or Kind.ALL):
            yield pattern
    elif kind & kinds:
        yield pattern
    else:
        for child in pattern.children:
            yield from flatten(child, kinds)


__all__ = (
    # Kinds
    "Kind",
    "kindof",

    # Classes
    "Pattern",
    "LeafPattern",
    "BranchPattern",
    "Argument",
    "Command",
    "Option",
    "Required",
    "Optional",
    "OptionsShortcut",
    "OneOrMore",
    "Either",

    # Functions
    "flatten",
)

# The metaclass is an implementation detail of the pattern family.
del PatternType
