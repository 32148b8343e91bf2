"""
Getoptic faults (errors and warnings) and rendering.

Scope
- FaultCode: stable numeric identifiers for every user-facing issue.
- ParseError / ParseWarning: base types carrying a message plus context options,
  able to render themselves through rich.
- report(): host-side helper that prints a fault (and optionally the help
  listing) to stderr and hands back an exit status.

Messages
- The message text of each error keeps the classic getopt wording
  ("unrecognized option: --foo", "argument required: -c", ...), so callers that
  only look at str(error) can still tell the kinds apart.

Integration
- The engine raises errors synchronously; it never prints.
- Hosts catch ParseError, call report(error, parser=..., header=...) and exit
  with the returned status.
"""
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - parse errors (211xx)
      • UNRECOGNIZED_OPTION, AMBIGUOUS_OPTION, ARGUMENT_NOT_ALLOWED,
        ARGUMENT_REQUIRED, INVALID_VALUE
    - declaration warnings (221xx)
      • AMBIGUOUS_DECLARATION

    normalize() allows the host to remap codes to its own labels.
    """
    # --- parse errors (21xxx) ---
    UNRECOGNIZED_OPTION         = 21101
    AMBIGUOUS_OPTION            = 21102
    ARGUMENT_NOT_ALLOWED        = 21103
    ARGUMENT_REQUIRED           = 21104
    INVALID_VALUE               = 21105

    # --- warnings (22xxx) ---
    AMBIGUOUS_DECLARATION       = 22101

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host can provide a __codes__ mapping in __main__ to override the
        numeric ids; otherwise the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _progname():
    main = __import__("__main__")
    try:
        return getattr(main, "__prog__")
    except AttributeError:
        return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "getoptic"


def _render(fault, colorful):
    """
    build the rich renderable shared by errors and warnings.

    layout
        [ prog — code | title ]
        message
    """
    styles = defaultdict(str, fault.palette | getattr(__import__("__main__"), "__styles__", {}))

    def text(fragment, style):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    header = Text.assemble(
        "[ ",
        text(_progname(), "prog-name"),
        " — ",
        text(fault.code.normalize(), "code"),
        " | ",
        text(fault.title, "title"),
        " ]"
    )
    return Group(header, text(fault.message, "message"))


class ParseError(Exception):
    """
    base class of every failure raised while running a Parser.

    attributes
    - message: human readable text (also what str() returns).
    - code: the FaultCode of the concrete class.
    - options: read-only mapping with the context of the fault
      (input, token, value, ... depending on the kind).
    """
    code = Unset
    title = "parse error"
    palette = {
        "prog-name": "bold #E6E6F0",  # near-white program name
        "code": "bold #00E5FF",  # neon cyan fault code
        "title": "bold #FF4DA6",  # friendly pinky title
        "message": "#C8C8D0",  # soft light gray message
    }

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __reduce__(self):
        return _rebuild, (type(self), self.message, dict(self.options))

    def __rich__(self):
        return _render(self, self.options.get("colorful", True))


def _rebuild(cls, message, options):
    return cls(message, **options)


class UnrecognizedOptionError(ParseError):
    code = FaultCode.UNRECOGNIZED_OPTION
    title = "unrecognized option"


class AmbiguousOptionError(ParseError):
    code = FaultCode.AMBIGUOUS_OPTION
    title = "ambiguous option"


class ArgumentNotAllowedError(ParseError):
    code = FaultCode.ARGUMENT_NOT_ALLOWED
    title = "argument not allowed"


class ArgumentRequiredError(ParseError):
    code = FaultCode.ARGUMENT_REQUIRED
    title = "argument required"


class InvalidValueError(ParseError):
    code = FaultCode.INVALID_VALUE
    title = "invalid value"


class ParseWarning(UserWarning):
    """
    base class of declaration-time warnings, emitted through warnings.warn.
    """
    code = Unset
    title = "warning"
    palette = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #FFB400",  # amber fault code for warnings
        "title": "bold #FFC2E0",
        "message": "#D6D6DE",
    }

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        return _render(self, self.options.get("colorful", True))


class AmbiguousDeclarationWarning(ParseWarning):
    code = FaultCode.AMBIGUOUS_DECLARATION
    title = "ambiguous declaration"


def report(fault, /, *, parser=Unset, header=Unset, colorful=True, file=Unset):
    """
    print a fault to stderr, followed by the help listing when a parser is given.

    parameters
    - fault: ParseError | ParseWarning
    - parser: Parser whose render_help(header) output is appended.
    - header: first line of the help listing (defaults to "Usage: <prog> [OPTION...]").
    - colorful: style the fault header and message.
    - file: text stream to write to instead of stderr.

    returns
    - 1, the exit status hosts conventionally use after a parse failure.
    """
    if not isinstance(fault, ParseError | ParseWarning):
        raise TypeError("report() argument must be a parse error or a parse warning")

    if file is Unset:
        console = Console(stderr=True, no_color=not colorful)
    else:
        console = Console(file=file, no_color=not colorful)

    console.print(_render(fault, colorful))

    if parser is not Unset:
        console.print()
        console.print(
            parser.render_help(header if header is not Unset else "Usage: %s [OPTION...]" % _progname()),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
    return 1


__all__ = (
    "FaultCode",
    "ParseError",
    "UnrecognizedOptionError",
    "AmbiguousOptionError",
    "ArgumentNotAllowedError",
    "ArgumentRequiredError",
    "InvalidValueError",
    "ParseWarning",
    "AmbiguousDeclarationWarning",
    "report",
)
