"""
Covenant faults (validation and parse failures) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every failure the package
  can signal. Parse faults live in 111xx, validation faults in 211xx.
- ValidationFailure: structured rejection raised by validators. Carries a code, a
  read-only payload (expected/actual, offending key, allowed set, ...) and the
  rendered message.
- ParseFailure: rendered message plus the caller-supplied help text. Knows how
  to render itself with rich and how to surface itself depending on the
  FailureMode it was triggered with.
- FailureMode: LIVE (print + exit 1) or STUB (raise, for test harnesses). The
  mode travels with every matcher as an explicit parameter.
- trigger(): central entry point to surface a fault with runtime options.
- getdoc(): optional description lookup for a code from the host application.

Integration
- Validators raise ValidationFailure directly; combinators propagate it as-is.
- Parsers build a ParseFailure and call trigger(fault, mode=..., ...). In STUB
  mode the exception is raised; in LIVE mode it is rendered to stderr and the
  process terminates with status 1.
"""
import copy
import os.path
import sys
from collections import defaultdict
from enum import Enum, IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - routing (1110x)
      • MISSING_COMMAND, UNKNOWN_COMMAND
    - options (1111x)
      • INVALID_OPTION, MISSING_OPTION_ARGUMENT, INVALID_OPTION_ARGUMENT
    - positionals (1112x)
      • MISSING_ARGUMENT, TOO_MANY_ARGUMENTS
    - validation (211xx)
      • NOT_EQUAL, NOT_A_MEMBER, WRONG_TYPE, PREDICATE_FAILED, NO_ALTERNATIVE,
        MISSING_ELEMENT, NOT_A_MAPPING, UNEXPECTED_KEYS, NOT_A_SEQUENCE

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- routing errors (11xxx) ---
    MISSING_COMMAND             = 11100
    UNKNOWN_COMMAND             = 11101

    # --- option errors (11xxx) ---
    INVALID_OPTION              = 11111
    MISSING_OPTION_ARGUMENT     = 11112
    INVALID_OPTION_ARGUMENT     = 11113

    # --- positional errors (11xxx) ---
    MISSING_ARGUMENT            = 11121
    TOO_MANY_ARGUMENTS          = 11122

    # --- validation errors (21xxx) ---
    NOT_EQUAL                   = 21101
    NOT_A_MEMBER                = 21102
    WRONG_TYPE                  = 21103
    PREDICATE_FAILED            = 21104
    NO_ALTERNATIVE              = 21105
    MISSING_ELEMENT             = 21111
    NOT_A_MAPPING               = 21112
    UNEXPECTED_KEYS             = 21113
    NOT_A_SEQUENCE              = 21114

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class FailureMode(Enum):
    """
    how a triggered ParseFailure is surfaced.

    - LIVE: render message and help to stderr, then sys.exit(1).
    - STUB: raise the ParseFailure so callers (tests) can catch it.
    """
    LIVE = "live"
    STUB = "stub"


class ValidationFailure(ValueError):
    """
    structured rejection signaled by a validator.

    attributes
    - message: rendered, human-readable text (see covenant.messages).
    - code: FaultCode identifying the failing combinator.
    - payload: read-only mapping with the combinator's diagnostic fields, e.g.
      {"expected": 0, "actual": 1} for equals().
    """

    def __init__(self, message, /, code, **payload):
        assert isinstance(message, str)
        assert isinstance(code, FaultCode)
        super().__init__(message)
        self.message = message
        self.code = code
        self.payload = MappingProxyType(payload)

    def __str__(self):
        return self.message

    def __repr__(self):
        return "%s(%r, code=%s)" % (type(self).__name__, self.message, self.code.name)


class ParseFailure(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def help(self):
        return self.options.get("help", "")

    def __str__(self):
        if not self.help:
            return str(self.message)
        return "%s\n%s" % (self.message, self.help)

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "docs": "dim",
            "help": "",
        } | getattr(main, "__styles__", {}))

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

        prog = text(getattr(main, "__prog__", self.options.get("prog") or os.path.basename(sys.argv[0])), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " - ",
            text(self.code.normalize() if self.code else "", styler("code")),
            " | ",
            text(self.options.get("title", "parse failure").title(), styler("error-title")),
            " ]"
        )
        parts = [text(self.message, styler("error-message"))]
        if self.options.get("hint"):
            parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.options["hint"], styler("hint"))))
        if self.options.get("docs"):
            parts.append(text(self.options["docs"], styler("docs")))
        if self.help:
            parts.extend((Text(""), text(self.help, styler("help"))))

        if fancy:
            return Panel(Group(*parts), title=header, title_align="left")

        return Group(header, *parts)

    def __trigger__(self) -> None:
        if self.options.get("mode", FailureMode.LIVE) is FailureMode.STUB:
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ParseFailure).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in STUB mode the fault is raised; in LIVE mode it is rendered via rich and
      the process exits with status 1.

    typical options
    - mode, fancy, colorful, prog, title, code, hint, docs, help and any other
      context the reporter may want to keep (e.g., token/key/value/choices).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "FailureMode",
    "ValidationFailure",
    "ParseFailure",
    "trigger",
    "getdoc",
)
