"""
usagematch faults (errors) and rendering.

Scope
- FaultCode: stable numeric identifiers for every error the engine can surface.
- PatternException: base type that carries message + options and knows how to
  render itself through rich (header, message, hint).
- trigger(): central entry point to surface a fault (raise, or print in shell mode).

What is an error here
- A grammar/token combination that does not match is NOT a fault; match()
  reports it as a normal negative outcome.
- Faults are invariant violations: a node outside the closed pattern family,
  a leaf missing from the canonical table during normalization, or a builder
  that could not read its usage text.

Integration
- Engine code calls trigger(fault, code=..., title=..., hint=...). Outside shell
  mode the fault is raised; in shell mode it is rendered on stderr via rich.
- The host may customize output via __main__ attributes:
  __prog__ (program name), __styles__ (style overrides), __codes__ (code labels).
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)

class FaultCode(IntEnum):
    """
    canonical fault codes used across the engine (stable identifiers).

    grouping
    - grammar (2110x)
      • MALFORMED_GRAMMAR: raised by external builders while reading usage text.
      • INVALID_PATTERN: a pattern was constructed with inconsistent fields.
    - engine invariants (2120x)
      • UNKNOWN_PATTERN_KIND: a node is outside the closed pattern family.
      • LEAF_NOT_FOUND: a leaf is missing from the canonical leaf table.
    """
    # --- grammar errors (21xxx) ---
    MALFORMED_GRAMMAR    = 21101
    INVALID_PATTERN      = 21102

    # --- engine invariant errors (21xxx) ---
    UNKNOWN_PATTERN_KIND = 21201
    LEAF_NOT_FOUND       = 21202

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))

class PatternException(Exception):
    """
    base class of every usagematch fault.

    options
    - code: FaultCode shown in the header.
    - title: short title shown in the header.
    - hint: one-sentence suggestion shown under the message.
    - shell: print instead of raising (see __trigger__).
    - fancy: render inside a rich Panel.
    - colorful: apply styles.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return coalesce(self.message, "")

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", "usagematch"), styler("prog-name"))
        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code is not None else "?", styler("code")),
            " | ",
            text(self.options.get("title", type(self).__name__).title(), styler("error-title")),
            " ]"
        )
        message = text(str(self), styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint"), styler("hint")))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})

class MalformedGrammarError(PatternException): ...
class InvalidPatternError(PatternException, ValueError): ...
class UnknownPatternKindError(PatternException, TypeError): ...
class LeafNotFoundError(PatternException, LookupError): ...

def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see PatternException).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, rendering happens via the rich console; otherwise the fault is raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()

__all__ = (
    "FaultCode",
    "PatternException",
    "MalformedGrammarError",
    "InvalidPatternError",
    "UnknownPatternKindError",
    "LeafNotFoundError",
    "trigger",
)
