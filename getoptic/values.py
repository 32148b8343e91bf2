"""
Getoptic value conversion.

convert(type, text) turns a raw option value into a typed value. It lives
outside the parsing engine: only the handler factories in getoptic.handlers
call it.

Rules
- str: returned unchanged (no stripping, empty string included).
- bool: "1"/"true" → True, "0"/"false" → False (case-insensitive).
- anything else: type(text). ValueError/TypeError raised by the converter
  becomes InvalidValueError. Since the converter receives the whole string,
  a valid prefix followed by garbage ("12abc" for int) is rejected.
- surrounding whitespace ("12 ") is rejected for every type but str, and
  digit-grouping underscores ("1_000") for numeric types, although Python's
  own constructors would accept both.
"""
import builtins
import numbers

from .faults import InvalidValueError

_BOOLEANS = {
    "1": True,
    "true": True,
    "0": False,
    "false": False,
}


def _numeric(type, /):
    return isinstance(type, builtins.type) and issubclass(type, numbers.Number)


def convert(type, text, /):
    """
    Convert text into an instance of type, failing with InvalidValueError.

    Parameters
    - type: Callable[[str], T] (usually a class such as int, float, pathlib.Path)
    - text: str

    Raises
    - InvalidValueError("invalid value: <text>") carrying value=text and type.
    """
    if not callable(type):
        raise TypeError("convert() first argument must be callable")
    if not isinstance(text, str):
        raise TypeError("convert() second argument must be a string")

    if type is str:
        return text
    if type is bool:
        try:
            return _BOOLEANS[text.lower()]
        except KeyError:
            raise InvalidValueError("invalid value: %s" % text, value=text, type=type) from None
    if text != text.strip() or (_numeric(type) and "_" in text):
        raise InvalidValueError("invalid value: %s" % text, value=text, type=type)
    try:
        return type(text)
    except (ValueError, TypeError):
        raise InvalidValueError("invalid value: %s" % text, value=text, type=type) from None


__all__ = (
    "convert",
)
