r"""
Getoptic option declarations.

Overview
- Arity: NONE (flag), OPTIONAL (may take an attached value), REQUIRED.
- Match: result of matching a name against a declaration (NONE, EXACT, PARTIAL).
- Option: immutable declaration of short aliases, long aliases, arity, bound
  handler, metavar and description. It only answers matching queries, runs its
  handler and renders its help row; it keeps no parsing state.
- option(...): decorator binding a function as the handler of a new Option.

Handler contract
- Arity.NONE      → handler()
- Arity.OPTIONAL  → handler(value) when a value was attached, handler() otherwise
- Arity.REQUIRED  → handler(value)

Quick example:
    >>> from getoptic import Option, Arity, option
    >>> verbose = Option("v", ("verbose",), handler=lambda: None, descr="chatty output")
    >>> @option("L", ("libdir",), Arity.REQUIRED, metavar="DIR")
    ... def libdir(path): ...
    ...
"""
import enum
import functools
import operator
from collections.abc import Iterable

from .utils import *


class Arity(enum.Enum):
    """
    Argument arity of an option.
    """
    NONE = "none"
    OPTIONAL = "optional"
    REQUIRED = "required"


class Match(enum.Enum):
    """
    Outcome of matching a short character or a long name against an Option.
    """
    NONE = "none"
    EXACT = "exact"
    PARTIAL = "partial"


def _sanitize_names(cls, shorts, longs, /):
    """
    Internal: validate and normalize the alias collections of an Option.

    Rules
    - shorts: iterable of single-character strings (a plain str such as "vV?"
      is accepted as an iterable of characters).
    - longs: iterable of non-empty strings (a plain str is taken as
      one long name, not as its characters).
    - at least one alias overall; no duplicates within each collection.

    Returns
    - (tuple[str, ...], tuple[str, ...]) in declaration order.
    """
    if isinstance(longs, str):
        longs = (longs,)
    if not isinstance(shorts, Iterable):
        raise TypeError(f"{cls.__typename__} short names must be an iterable of characters")
    if not isinstance(longs, Iterable):
        raise TypeError(f"{cls.__typename__} long names must be an iterable of strings")

    sanitized = []
    for name in shorts:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} short names must be strings")
        elif len(name) != 1:
            raise ValueError(f"{cls.__typename__} short names must be single characters")
        elif name in sanitized:
            raise ValueError(f"{cls.__typename__} short names cannot contain duplicates")
        sanitized.append(name)
    shorts = tuple(sanitized)

    sanitized = []
    for name in longs:
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} long names must be strings")
        elif not name:
            raise ValueError(f"{cls.__typename__} long names cannot be empty-strings")
        elif name in sanitized:
            raise ValueError(f"{cls.__typename__} long names cannot contain duplicates")
        sanitized.append(name)
    longs = tuple(sanitized)

    if not shorts and not longs:
        raise TypeError(f"{cls.__typename__} must specify at least one name")
    return shorts, longs


def _sanitize_metavar(cls, arity, metavar, /):
    """
    Internal: a flag has no metavar; value-bearing options need one, kept verbatim.
    """
    if arity is Arity.NONE:
        if metavar is not Unset:
            raise TypeError(f"{cls.__typename__} without argument cannot specify a 'metavar'")
        return ""
    if metavar is Unset:
        raise TypeError(f"{cls.__typename__} with {arity.value} argument must specify a 'metavar'")
    if not isinstance(metavar, str):
        raise TypeError(f"{cls.__typename__} 'metavar' must be a string")
    return metavar


class Option:
    """
    Named option declaration.

    An Option is immutable after construction. Its fields are exposed through
    read-only properties (see __introspectable__).

    Matching
    - match_short(c): EXACT when c is one of the short names.
    - match_long(name): EXACT on equality with a long name, PARTIAL when name is
      a non-empty proper prefix of at least one long name, NONE otherwise.
      Comparison is case-sensitive.

    Execution
    - execute() / execute(value): runs the bound handler once. Calling the form
      the arity does not allow is a programming error and fails an assertion.
    """
    __typename__ = "option"
    __introspectable__ = (
        "shorts",
        "longs",
        "arity",
        "metavar",
        "descr",
    )

    shorts = mirror("shorts")
    longs = mirror("longs")
    arity = mirror("arity")
    metavar = mirror("metavar")
    descr = mirror("descr")

    __slots__ = ("_shorts", "_longs", "_arity", "_handler", "_metavar", "_descr")

    def __init__(self, shorts=(), longs=(), arity=Arity.NONE, handler=Unset, metavar=Unset, descr=""):
        """
        Construct an Option.

        Parameters
        - shorts: Iterable[str]
          Single-character aliases, used as "-c". A string is read character by
          character, so "vV" declares -v and -V.
        - longs: Iterable[str] | str
          Long aliases, used as "--name". A single string declares one alias.
        - arity: Arity
          Selects which handler form is legal.
        - handler: Callable
          Bound action (required). Use handlers.ignore for a no-op.
        - metavar: str
          Value placeholder for help. Forbidden for Arity.NONE, required otherwise.
        - descr: str
          Help text; embedded line breaks render as continuation lines.
        """
        cls = type(self)
        if not isinstance(arity, Arity):
            raise TypeError(f"{cls.__typename__} 'arity' must be an Arity")
        if handler is Unset:
            raise TypeError(f"{cls.__typename__} must specify a 'handler'")
        if not callable(handler):
            raise TypeError(f"{cls.__typename__} 'handler' must be callable")
        if not isinstance(descr, str):
            raise TypeError(f"{cls.__typename__} 'descr' must be a string")

        shorts, longs = _sanitize_names(cls, shorts, longs)
        for name, value in {
            "shorts": shorts,
            "longs": longs,
            "arity": arity,
            "handler": handler,
            "metavar": _sanitize_metavar(cls, arity, metavar),
            "descr": descr,
        }.items():
            object.__setattr__(self, "_" + name, value)

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} is read-only")

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__typename__} is read-only")

    def __repr__(self):
        return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    @property
    def handler(self):
        return self._handler

    def match_short(self, char, /):
        """
        Return Match.EXACT if char is one of the short names, Match.NONE otherwise.
        """
        return Match.EXACT if char in self._shorts else Match.NONE

    def match_long(self, name, /):
        """
        Match a long name (without the leading "--").

        Exactness wins over prefixes within this Option; across Options the
        parser looks for exact matches first anyway.
        """
        result = Match.NONE
        for candidate in self._longs:
            if candidate == name:
                return Match.EXACT
            if name and len(name) < len(candidate) and candidate.startswith(name):
                result = Match.PARTIAL
        return result

    def execute(self, value=Unset, /):
        """
        Run the bound handler once.

        - execute()      : legal for Arity.NONE and Arity.OPTIONAL
        - execute(value) : legal for Arity.OPTIONAL and Arity.REQUIRED
        """
        if value is Unset:
            assert self._arity is not Arity.REQUIRED, "option with required argument executed without a value"
            self._handler()
        else:
            assert self._arity is not Arity.NONE, "option without argument executed with a value"
            assert isinstance(value, str)
            self._handler(value)

    def helprow(self):
        """
        Return the (shorts, longs, description) display fields of this Option.

        - shorts: "-c" per alias, followed by "[METAVAR]" (optional argument) or
          " METAVAR" (required argument), joined by ",".
        - longs: "--name" per alias, followed by "[=METAVAR]" or "=METAVAR",
          joined by ",".
        - description: unchanged.
        """
        match self._arity:
            case Arity.OPTIONAL:
                short, long = "[%s]" % self._metavar, "[=%s]" % self._metavar
            case Arity.REQUIRED:
                short, long = " %s" % self._metavar, "=%s" % self._metavar
            case _:
                short, long = "", ""
        return (
            ",".join("-" + name + short for name in self._shorts),
            ",".join("--" + name + long for name in self._longs),
            self._descr,
        )


def option(shorts=(), longs=(), arity=Arity.NONE, /, *, metavar=Unset, descr=""):
    """
    Decorator/factory for declaring an Option around a handler function.

    Usage
        @option("v", ("verbose",), descr="chatty output")
        def verbose(): ...

        @option("o", ("output",), Arity.OPTIONAL, metavar="FILE")
        def output(path="stdout"): ...

    Behavior
    - Validates the declaration immediately (a bad declaration fails before the
      function is even decorated).
    - The decorated name is bound to the resulting Option, not to the function;
      the function stays reachable as Option.handler.
    - A given decorator can be applied only once.
    """
    blueprint = Option(shorts, longs, arity, lambda *value: None, metavar, descr)
    applied = []

    @rename("option")
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@option() must be applied to a callable")
        if applied:
            raise TypeError("@option() must be applied only once")
        applied.append(callback)
        return Option(blueprint.shorts, blueprint.longs, blueprint.arity, callback, metavar, blueprint.descr)

    return wrapper


__all__ = (
    "Arity",
    "Match",
    "Option",
    "option",
)
