"""
usagematch matcher: backtracking consumption of a token list by a pattern tree.

State
- left: tuple of tokens still to consume (tokens are leaf patterns: Argument
  tokens carry a word, Option tokens carry their parsed value).
- collected: tuple of leaves bound so far.
Each step returns a new (left, collected) pair and never edits the previous
one, so a failed alternative leaves nothing behind.

Combinators
- Required: all children in order; on failure the original state comes back.
- Optional / OptionsShortcut: every child is tried; failures are skipped.
- OneOrMore: the child again and again until it fails or stops consuming;
  succeeds when it matched at least once.
- Either: every child from the same starting state; the matched outcome with
  the fewest leftover tokens wins, the earliest one on ties (fewest_leftovers).

Leaves
- Argument takes the first Argument token, whatever its position.
- Command only looks at the first Argument token: it matches when the word
  equals the command name and gives up otherwise.
- Option takes the first token with the same name.
A leaf whose value is a counter (int) or a list accumulates: the first match
binds 1 / [value], later matches fold into that same binding.

Non-matching input is a negative Outcome, never an exception.
"""
import copy
from typing import NamedTuple

from . import lists
from .faults import FaultCode, UnknownPatternKindError, trigger
from .normalizer import normalize
from .patterns import Argument, Command, Kind, kindof


class Outcome(NamedTuple):
    """
    Result of a match step: whether it matched, the leftover tokens and the bindings.
    """
    matched: bool
    left: tuple
    collected: tuple

    def dictionary(self):
        """
        {name: value} view of the bindings.
        """
        return lists.dictionary(self.collected)


def _accumulates(value, /):
    return isinstance(value, list) or isinstance(value, int) and not isinstance(value, bool)


def _merge(existing, increment, /):
    # A binding of another shape under the same name is kept as it is.
    if isinstance(existing, list) and isinstance(increment, list):
        return existing + increment
    if isinstance(existing, int) and not isinstance(existing, bool) and isinstance(increment, int):
        return existing + increment
    return existing


def fewest_leftovers(outcomes, /):
    """
    Pick the outcome that left the fewest tokens (most input consumed).

    The minimum is tracked while scanning, and the first outcome reaching it
    wins ties, so the choice depends only on the order of the alternatives.
    """
    best = None
    for outcome in outcomes:
        if best is None or len(outcome.left) < len(best.left):
            best = outcome
    if best is None:
        raise ValueError("fewest_leftovers() argument must not be empty")
    return best


def single_match(pattern, tokens, /):
    """
    Find the token a leaf pattern would bind to.

    Returns (position, bound leaf), or None when no token fits.
    """
    match kindof(pattern):
        case Kind.ARGUMENT:
            for position, token in enumerate(tokens):
                if isinstance(token, Argument):
                    return position, Argument(pattern.name, token.value)
        case Kind.COMMAND:
            for position, token in enumerate(tokens):
                if isinstance(token, Argument):
                    if token.value == pattern.name:
                        return position, Command(pattern.name, True)
                    break
        case Kind.OPTION:
            for position, token in enumerate(tokens):
                if token.name == pattern.name:
                    return position, token
        case _:
            trigger(
                UnknownPatternKindError(f"{type(pattern).__name__!r} is not a leaf pattern"),
                code=FaultCode.UNKNOWN_PATTERN_KIND,
                title="unknown pattern kind",
                hint="single_match() only binds Argument, Command and Option",
            )
    return None


def _bind(pattern, left, collected, /):
    if (found := single_match(pattern, left)) is None:
        return Outcome(False, left, collected)

    position, bound = found
    left = left[:position] + left[position + 1:]

    if not _accumulates(pattern.value):
        return Outcome(True, left, collected + (bound,))

    if isinstance(pattern.value, list):
        match bound.value:
            case str():
                increment = [bound.value]
            case list() | tuple():
                increment = list(bound.value)
            case _:
                increment = []
    else:
        increment = 1

    for index, entry in enumerate(collected):
        if entry.name == pattern.name:
            merged = copy.replace(entry, value=_merge(entry.value, increment))
            return Outcome(True, left, collected[:index] + (merged,) + collected[index + 1:])

    return Outcome(True, left, collected + (copy.replace(bound, value=increment),))


def match(pattern, tokens, collected=(), /):
    """
    Match `tokens` against `pattern`, starting from the bindings in `collected`.

    The tree should have been normalized first (see normalize()); otherwise
    repeated elements bind separately instead of accumulating.
    """
    left = tuple(tokens)
    collected = tuple(collected)

    match kindof(pattern):
        case Kind.REQUIRED:
            state = Outcome(True, left, collected)
            for child in pattern.children:
                if not (state := match(child, state.left, state.collected)).matched:
                    return Outcome(False, left, collected)
            return state

        case Kind.OPTIONAL | Kind.OPTIONS_SHORTCUT:
            state = Outcome(True, left, collected)
            for child in pattern.children:
                _, state_left, state_collected = match(child, state.left, state.collected)
                state = Outcome(True, state_left, state_collected)
            return state

        case Kind.ONE_OR_MORE:
            child, = pattern.children
            state = Outcome(True, left, collected)
            previous = None
            times = 0
            while True:
                state = match(child, state.left, state.collected)
                times += state.matched
                # stop once the child no longer consumes anything
                if not state.matched or state.left == previous:
                    break
                previous = state.left
            if times:
                return Outcome(True, state.left, state.collected)
            return Outcome(False, left, collected)

        case Kind.EITHER:
            outcomes = [
                outcome for child in pattern.children
                if (outcome := match(child, left, collected)).matched
            ]
            if outcomes:
                return fewest_leftovers(outcomes)
            return Outcome(False, left, collected)

        case Kind.ARGUMENT | Kind.COMMAND | Kind.OPTION:
            return _bind(pattern, left, collected)

    trigger(
        UnknownPatternKindError(f"no matching rule for {type(pattern).__name__!r}"),
        code=FaultCode.UNKNOWN_PATTERN_KIND,
        title="unknown pattern kind",
        hint="every pattern kind needs a matching rule",
    )


def parse(build, usage, tokens, /):
    """
    Build a tree from `usage` with `build`, normalize it, then match `tokens`.

    `build` is the external usage reader; anything it raises (typically
    MalformedGrammarError) reaches the caller unchanged.
    """
    return match(normalize(build(usage)), tokens)


__all__ = (
    "Outcome",
    "fewest_leftovers",
    "single_match",
    "match",
    "parse",
)
