"""
Convenience handler factories.

Each factory returns a small closure suitable as an Option handler. The closure
keeps a reference to the host's target (an object, a mutable mapping or a
list), never a copy, so the effect is visible after Parser.run returns.

Targets
- store-like factories take (target, name): attribute `name` is set on plain
  objects, key `name` is set on mutable mappings.
- append-like factories take the list itself.

Factories
- ignore                           : accepts zero or one argument, does nothing
- store_const(target, name, const) : assign const, value ignored
- store_true / store_false         : store_const with True / False
- append_const(list, const)        : append const, value ignored
- store_or(target, name, default, type=str)
                                   : no value → default, value → convert(type, value)
- append_or(list, default, type=str)
- store(target, name, type=str)    : assign convert(type, value)
- append(list, type=str)           : append convert(type, value)

Example
    settings = types.SimpleNamespace(verbose=False, output="")
    files = []
    Option("v", "verbose", handler=store_true(settings, "verbose"))
    Option("o", "output", Arity.OPTIONAL, store_or(settings, "output", "stdout"), "FILE")
    Parser(options, append(files))
"""
from collections.abc import MutableMapping, MutableSequence

from .utils import *
from .values import convert


def _setter(target, name, /):
    if not isinstance(name, str):
        raise TypeError("handler target name must be a string")
    if isinstance(target, MutableMapping):
        def assign(value):
            target[name] = value
    else:
        def assign(value):
            setattr(target, name, value)
    return assign


def _appender(target, /):
    if not isinstance(target, MutableSequence):
        raise TypeError("handler target must be a mutable sequence")
    return target.append


@rename("ignore")
def ignore(*value):
    """
    Handler that accepts zero or one argument and does nothing.
    """
    if len(value) > 1:
        raise TypeError("ignore() takes at most 1 argument (%d given)" % len(value))


def store_const(target, name, const, /):
    assign = _setter(target, name)

    @rename("store_const")
    def handler(value=Unset, /):
        assign(const)

    return handler


def store_true(target, name, /):
    return rename(store_const(target, name, True), "store_true")


def store_false(target, name, /):
    return rename(store_const(target, name, False), "store_false")


def append_const(target, const, /):
    push = _appender(target)

    @rename("append_const")
    def handler(value=Unset, /):
        push(const)

    return handler


def store_or(target, name, default, /, type=str):
    """
    Optional-argument handler: assign default when no value was attached,
    otherwise the converted value.
    """
    assign = _setter(target, name)

    @rename("store_or")
    def handler(value=Unset, /):
        assign(default if value is Unset else convert(type, value))

    return handler


def append_or(target, default, /, type=str):
    push = _appender(target)

    @rename("append_or")
    def handler(value=Unset, /):
        push(default if value is Unset else convert(type, value))

    return handler


def store(target, name, /, type=str):
    """
    Required-argument handler: assign convert(type, value).
    """
    assign = _setter(target, name)

    @rename("store")
    def handler(value, /):
        assign(convert(type, value))

    return handler


def append(target, /, type=str):
    """
    Required-argument (or non-option) handler: append convert(type, value).
    """
    push = _appender(target)

    @rename("append")
    def handler(value, /):
        push(convert(type, value))

    return handler


__all__ = (
    "ignore",
    "store_const",
    "store_true",
    "store_false",
    "append_const",
    "store_or",
    "append_or",
    "store",
    "append",
)
