"""
Argbind faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse fault.
  Codes are grouped by domain so logs and searches stay predictable.
- ParseError: base type carrying message + options; knows how to render itself
  in a friendly, lowercased, actionable way through rich.
- ErrorResult / Policy: the continue/terminate signal a handler may return and
  the switch that decides whether unknown keys are reported.
- report(): default handler; prints the fault on stderr and keeps parsing.
- collect(): handler factory accumulating faults into a list.
- getdoc(): optional description lookup for a code from the host application.

Protocol
- Faults are values: the parser builds them and hands them to the handler.
  They are never raised across the parse boundary.
- A handler returning None means "continue"; returning an ErrorResult is
  honored, except for faults marked fatal, which always stop the scan.
"""
import copy
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
    - structural (111xx)
      • UNKNOWN_COMMAND, MALFORMED_TOKEN, UNEXPECTED_FORMAT, UNKNOWN_FLAG,
        MISSING_PARAMETER
    - coercion (112xx)
      • UNCASTABLE_PARAMETER
    - warnings (12xxx)
      • SHADOWED_KEY
    """
    # --- structural errors (111xx) ---
    UNKNOWN_COMMAND      = 11101
    MALFORMED_TOKEN      = 11111
    UNEXPECTED_FORMAT    = 11112
    UNKNOWN_FLAG         = 11113
    MISSING_PARAMETER    = 11114

    # --- coercion errors (112xx) ---
    UNCASTABLE_PARAMETER = 11211

    # --- warnings (12xxx) ---
    SHADOWED_KEY         = 12111

    @property
    def structural(self):
        return 11100 <= self.value < 11200

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ErrorResult(Enum):
    TERMINATE = "terminate"
    CONTINUE  = "continue"


class Policy(Enum):
    """
    what to do with keys that match no registered entry.
    """
    IGNORE = "ignore"
    ERROR  = "error"


def _styles(defaults):
    return defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))


class ParseError(Exception):
    """
    structured parse fault.

    attributes
    - message: str
      one lowercased sentence, position first ("... at second position").
    - options: MappingProxyType
      context for handlers and renderers; the parser always provides
      code, title, hint, token, index and fatal, plus key/value where they
      apply, and the rendering switches prog, colorful and fancy.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code", Unset)

    @property
    def fatal(self):
        return self.options.get("fatal", False)

    def __rich__(self):
        styles = _styles({
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })
        colorful = self.options.get("colorful", True)

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        prog = getattr(__import__("__main__"), "__prog__", self.options.get("prog", ""))
        code = self.options.get("code", Unset)

        header = Text.assemble(
            "[ ",
            text(prog or "argbind", "prog-name"),
            " — ",
            text(code.normalize() if code else "", "code"),
            " | ",
            text(self.options.get("title", "").title(), "error-title"),
            " ]"
        )
        message = text(self.message, "error-message")
        body = [message]
        if hint := self.options.get("hint"):
            body.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

        if self.options.get("fancy", False):
            return Panel(Group(*body), title=header, title_align="left")

        return Group(header, *body)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MalformedTokenError(ParseError): ...
class UnexpectedFormatError(ParseError): ...
class UnknownCommandError(ParseError): ...
class UnknownFlagError(ParseError): ...
class MissingParameterError(ParseError): ...
class UncastableParameterError(ParseError): ...


class ShadowedKeyWarning(UserWarning):
    """
    emitted when an entry is registered with uniqueness checks waived and one
    of its keys is already taken; the earlier entry keeps winning lookups.
    """


def report(fault, /):
    """
    default fault handler: render on stderr and continue.

    returning None is the "always continue" handler shape.
    """
    console.print(fault)


def collect(faults=Unset, /, *, result=ErrorResult.CONTINUE):
    """
    build a handler that appends every fault to `faults` and returns `result`.

    usage
        faults = []
        parser.parse(argv, collect(faults))
    """
    if faults is Unset:
        faults = []

    def collector(fault, /):
        faults.append(fault)
        return result

    collector.faults = faults
    return collector


def replace(fault, /, **options):
    """
    return a copy of the fault with its options updated.
    """
    if not hasattr(fault, "__replace__") or not callable(fault.__replace__):
        raise TypeError("replace() argument must have a __replace__ method")
    return copy.replace(fault, **options)


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "ErrorResult",
    "Policy",
    "ParseError",
    "MalformedTokenError",
    "UnexpectedFormatError",
    "UnknownCommandError",
    "UnknownFlagError",
    "MissingParameterError",
    "UncastableParameterError",
    "ShadowedKeyWarning",
    "report",
    "collect",
    "replace",
    "getdoc",
)
