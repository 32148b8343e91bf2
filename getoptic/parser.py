"""
Getoptic parser: classify argument tokens and dispatch option handlers.

What this module provides
- Mode: STANDARD (options and operands may be interleaved) or POSIXLY_CORRECT
  (the first operand ends option scanning).
- Parser: owns the declared Options plus the operand handler, the
  unrecognized-option handler and the mode.
  • run(tokens): a single left-to-right scan that runs handlers as it goes.
  • render_help(header): plain-text listing of every Option.

Token classification (first rule that applies)
1. "--"                  → every following token is an operand; stop.
2. "--NAME[=VALUE]"      → long option, NAME matched exactly or by a unique prefix.
3. "-CHARS"              → cluster of short options ("-abVALUE").
4. POSIXLY_CORRECT mode  → this and every following token are operands; stop.
5. anything else         → one operand; keep scanning.

Failures
- The scan stops at the first ParseError raised (by the engine or by a handler).
  Handlers already run are not undone.

Quick start
    from getoptic import Option, Parser, Arity, handlers

    settings = {}
    files = []
    parser = Parser((
        Option("h", "help", handler=handlers.store_true(settings, "help"), descr="show help"),
        Option("c", "count", Arity.REQUIRED, handlers.store(settings, "count", int), "N", "repeat N times"),
    ), handlers.append(files))
    parser.run(["-c3", "hello"])        # settings == {"count": 3}, files == ["hello"]
"""
import enum
import re
import shlex
import sys
import warnings
from collections import Counter
from collections.abc import Iterable

from rich.console import Console

from .faults import *
from .options import Arity, Match, Option
from .utils import *

_LONG = re.compile(r"--(?P<name>[^=]*)(?:=(?P<value>.*))?", re.DOTALL)
_SHORT = re.compile(r"-(?P<chars>.+)", re.DOTALL)


class Mode(enum.Enum):
    """
    Option scanning mode.
    """
    STANDARD = "standard"
    POSIXLY_CORRECT = "posixly-correct"


def _unrecognized(token, /):
    """
    Default unrecognized-option handler: raise UnrecognizedOptionError.
    """
    raise UnrecognizedOptionError("unrecognized option: %s" % token, token=token)


def _warn_duplicates(options, /):
    """
    Emit AmbiguousDeclarationWarning for names declared by several Options.

    Such declarations are legal, but using the shared name fails at parse time.
    """
    shorts = Counter(name for option in options for name in option.shorts)
    longs = Counter(name for option in options for name in option.longs)
    for name in [*("-" + name for name, count in shorts.items() if count > 1),
                 *("--" + name for name, count in longs.items() if count > 1)]:
        warnings.warn(AmbiguousDeclarationWarning(
            "option %s is declared more than once" % name,
            input=name,
        ), stacklevel=3)


def _tokens(tokens, /):
    """
    Normalize the argument of Parser.run into a tuple of strings.

    - Unset: sys.argv[1:]
    - str: shell-like string split with shlex.split
    - Iterable[str]: used as-is (tokens are not stripped; "" is an operand)
    """
    if tokens is Unset:
        return tuple(sys.argv[1:])
    if isinstance(tokens, str):
        return tuple(shlex.split(tokens))
    if not isinstance(tokens, Iterable):
        raise TypeError("run() argument must be a string or an iterable of strings")
    tokens = tuple(tokens)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("run() argument must be a string or an iterable of strings")
    return tokens


class Parser:
    """
    Callback-driven command-line parser.

    A Parser is immutable after construction and keeps no per-run state, so the
    same instance can run any number of token sequences independently.

    Parameters
    - options: Iterable[Option]
      Declared options. Order only breaks ties deterministically.
    - nonopt: Callable[[str], Any]
      Invoked once per operand, in input order.
    - unrecognized: Callable[[str], Any] | Unset
      Invoked with the offending text for unknown options. The default raises
      UnrecognizedOptionError; a custom handler may record the token and let
      the scan continue.
    - mode: Mode
    """
    __typename__ = "parser"

    options = mirror("options")
    mode = mirror("mode")

    __slots__ = ("_options", "_nonopt", "_unrecognized", "_mode")

    def __init__(self, options, nonopt, unrecognized=Unset, mode=Mode.STANDARD):
        cls = type(self)
        if not isinstance(options, Iterable):
            raise TypeError(f"{cls.__typename__} 'options' must be an iterable of options")
        options = tuple(options)
        for option in options:
            if not isinstance(option, Option):
                raise TypeError(f"{cls.__typename__} 'options' must be an iterable of options")
        if not callable(nonopt):
            raise TypeError(f"{cls.__typename__} non-option handler must be callable")
        if unrecognized is not Unset and not callable(unrecognized):
            raise TypeError(f"{cls.__typename__} unrecognized-option handler must be callable")
        if not isinstance(mode, Mode):
            raise TypeError(f"{cls.__typename__} 'mode' must be a Mode")

        _warn_duplicates(options)

        object.__setattr__(self, "_options", options)
        object.__setattr__(self, "_nonopt", nonopt)
        object.__setattr__(self, "_unrecognized", coalesce(unrecognized, _unrecognized))
        object.__setattr__(self, "_mode", mode)

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} is read-only")

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__typename__} is read-only")

    def __repr__(self):
        return "%s(options=%r, mode=%r)" % (type(self).__typename__, self._options, self._mode)

    def __rich_repr__(self):
        yield "options", self._options
        yield "mode", self._mode

    def _lookup_long(self, name, /):
        """
        Select the Option for a long name, or return Unset when nothing matches.

        Exact matches are considered first and must be unique; only when there
        is none, partial matches are considered and must be unique too.
        """
        for kind in (Match.EXACT, Match.PARTIAL):
            candidates = [option for option in self._options if option.match_long(name) is kind]
            if len(candidates) > 1:
                raise AmbiguousOptionError("ambiguous option: --%s" % name, input="--" + name)
            if candidates:
                return candidates[0]
        return Unset

    def _lookup_short(self, char, /):
        candidates = [option for option in self._options if option.match_short(char) is Match.EXACT]
        if len(candidates) > 1:
            raise AmbiguousOptionError("ambiguous option: -%s" % char, input="-" + char)
        return candidates[0] if candidates else Unset

    def _parse_long(self, token, groups, stream, /):
        """
        Handle one "--NAME[=VALUE]" token; may consume the next token of stream.
        """
        name = groups["name"]
        value = groups["value"]  # None without '=', possibly '' with it

        option = self._lookup_long(name)
        if option is Unset:
            self._unrecognized(token)
            return

        match option.arity:
            case Arity.NONE:
                if value is not None:
                    raise ArgumentNotAllowedError(
                        "argument not allowed: --%s" % name, input="--" + name, value=value
                    )
                option.execute()
            case Arity.OPTIONAL:
                if value is None:
                    option.execute()
                else:
                    option.execute(value)
            case Arity.REQUIRED:
                if value is None:
                    try:
                        value = next(stream)
                    except StopIteration:
                        raise ArgumentRequiredError("argument required: --%s" % name, input="--" + name) from None
                option.execute(value)

    def _parse_short(self, chars, stream, /):
        """
        Handle one "-CHARS" cluster; may consume the next token of stream.
        """
        for index, char in enumerate(chars):
            rest = chars[index + 1:]
            option = self._lookup_short(char)
            if option is Unset:
                # the unmatched character and everything after it are reported together
                self._unrecognized("-" + chars[index:])
                return

            match option.arity:
                case Arity.NONE:
                    option.execute()
                case Arity.OPTIONAL:
                    if rest:
                        option.execute(rest)
                    else:
                        option.execute()
                    return
                case Arity.REQUIRED:
                    if not rest:
                        try:
                            rest = next(stream)
                        except StopIteration:
                            raise ArgumentRequiredError("argument required: -%s" % char, input="-" + char) from None
                    option.execute(rest)
                    return

    def run(self, tokens=Unset, /):
        """
        Scan tokens once, left to right, dispatching handlers as they are classified.

        Parameters
        - tokens:
          • Unset: sys.argv[1:]
          • str: split with shlex.split
          • Iterable[str]: the argument vector without the program name

        Raises
        - UnrecognizedOptionError (default unrecognized handler only)
        - AmbiguousOptionError, ArgumentNotAllowedError, ArgumentRequiredError
        - whatever a handler raises (e.g. InvalidValueError from a converter)
        """
        stream = iter(_tokens(tokens))
        for token in stream:
            if token == "--":
                for token in stream:
                    self._nonopt(token)
                return
            if match := _LONG.fullmatch(token):
                self._parse_long(token, match, stream)
            elif match := _SHORT.fullmatch(token):
                self._parse_short(match["chars"], stream)
            elif self._mode is Mode.POSIXLY_CORRECT:
                self._nonopt(token)
                for token in stream:
                    self._nonopt(token)
                return
            else:
                self._nonopt(token)

    def render_help(self, header, /):
        """
        Render the option listing as plain text.

        Layout
        - the header line;
        - one block per Option: short column padded to col0, long column padded
          to col1, then the first description line; further description lines
          are indented by col0 + col1 spaces.
        - col0/col1 are one more than the widest short/long column.
        - blocks are separated by a line break; no trailing newline.
        """
        if not isinstance(header, str):
            raise TypeError("render_help() argument must be a string")

        rows = [option.helprow() for option in self._options]
        col0 = max((len(short) for short, _, _ in rows), default=0) + 1
        col1 = max((len(long) for _, long, _ in rows), default=0) + 1

        blocks = []
        for short, long, descr in rows:
            lines = descr.split("\n")
            if len(lines) > 1 and not lines[-1]:
                lines.pop()
            blocks.append("\n".join([
                short.ljust(col0) + long.ljust(col1) + lines[0],
                *(" " * (col0 + col1) + line for line in lines[1:]),
            ]))
        return "\n".join([header, *blocks])

    def print_help(self, header, /, *, file=Unset):
        """
        Print render_help(header) through a rich console (markup disabled).
        """
        console = Console() if file is Unset else Console(file=file)
        console.print(self.render_help(header), markup=False, highlight=False, soft_wrap=True)


__all__ = (
    "Mode",
    "Parser",
)
