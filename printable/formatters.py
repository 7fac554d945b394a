"""
Bounded value formatting for development and debugging.

Produces short, human-readable representations of arbitrary values for logs,
error and assertion messages. Strings and containers are cut according to
PrintOptions so that output size stays bounded. The fmt_printable() function
classifies a value once and dispatches to the formatter of its kind. It never
raises on any value; at worst it returns "(unknown type)".

Two presentation modes exist:
    - prefixed (default): "(int) 42", "(string) 'abc'", "(array) [0 => (int) 1]"
    - compact: "42", "'abc'", "[1]"
"""

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import decimal
import logging
from dataclasses import dataclass, field
from itertools import islice
from typing import Any, Iterable, Iterator, Tuple

# Local ----------------------------------------------------------------------------------------------------------------
from .kinds import (
    Invocable,
    Kind,
    Shape,
    classify,
    invocable_from_object,
    invocable_from_pair,
    invocable_from_string,
    is_type_name,
    resource_id,
)
from .options import InvalidConfiguration, PrintOptions
from .utils import class_label

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

DEFAULT_OPTIONS = PrintOptions()

ELLIPSIS = "..."
NULL = "NULL"
UNKNOWN = "(unknown type)"

# Templates per invocable shape, signature form and compact callable form
SIGNATURES = {
    Shape.FUNCTION: "function {name}()",
    Shape.METHOD: "function {target}::{name}()",
    Shape.CLOSURE: "function {{closure}}()",
    Shape.INVOKABLE: "function {target}::__call__()",
}
CALLABLES = {
    Shape.FUNCTION: "(callable) {name}",
    Shape.METHOD: "(callable) {target}::{name}",
    Shape.CLOSURE: "function {{closure}}()",
    Shape.INVOKABLE: "(callable) {target}",
}


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True, eq=False, repr=False)
class Printable:
    """
    A value paired with the options used to display it.

    str() of a Printable is the bounded representation of the wrapped value,
    so it can be embedded directly into f-strings and exception messages.

    Examples:
        >>> str(Printable("0123456789", PrintOptions(string_limit=5)))
        "(string) '01234...'"
        >>> f"expected list, got {Printable(42)}"
        'expected list, got (int) 42'
    """
    value: Any
    opts: PrintOptions = field(default=DEFAULT_OPTIONS)

    def __post_init__(self):
        if not isinstance(self.opts, PrintOptions):
            raise InvalidConfiguration(f"opts must be PrintOptions, but got {type(self.opts).__name__}")

    def __str__(self) -> str:
        return fmt_printable(self.value, opts=self.opts)

    def __repr__(self) -> str:
        return f"<Printable: {self}>"

    def with_string_limit(self, string_limit: int) -> "Printable":
        """Return a new Printable of the same value with the given string limit."""
        return Printable(self.value, self.opts.with_string_limit(string_limit))

    def with_container_limit(self, container_limit: int) -> "Printable":
        """Return a new Printable of the same value with the given container limit."""
        return Printable(self.value, self.opts.with_container_limit(container_limit))


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_printable(obj: Any, *, opts: PrintOptions | None = None) -> str:
    """
    Format any value as a bounded, human-readable string.

    Args:
        obj: Any Python object.
        opts: Formatting options, PrintOptions() when None.

    Returns:
        The representation of obj. Never raises for any obj.

    Raises:
        InvalidConfiguration: If opts is not a PrintOptions instance.

    Dispatch Logic:
        - None → "NULL"
        - bool, int, float, str → primitive formatters
        - Mapping, Sequence, Set → container formatter with nested placeholders
        - open file or socket → "Resource id #<fileno>"
        - values of undeterminable kind → "(unknown type)"
        - everything else → class label, or signature for invocables

    Examples:
        >>> fmt_printable(True)
        '(bool) true'
        >>> fmt_printable("0123456789", opts=PrintOptions(string_limit=5))
        "(string) '01234...'"
        >>> fmt_printable([1, [2, 3]], opts=PrintOptions.compact())
        '[1, [...]]'
        >>> fmt_printable({"k": None})
        '(array) [k => NULL]'
        >>> fmt_printable("len", opts=PrintOptions.callables())
        'function len()'
    """
    if opts is None:
        opts = DEFAULT_OPTIONS
    elif not isinstance(opts, PrintOptions):
        raise InvalidConfiguration(f"opts must be PrintOptions, but got {type(opts).__name__}")

    return _fmt_kind(obj, classify(obj), opts)


# Private Methods ------------------------------------------------------------------------------------------------------

def _fmt_kind(obj: Any, kind: Kind, opts: PrintOptions) -> str:
    """Dispatch on an already classified kind, degrading to UNKNOWN on failure."""
    try:
        if kind is Kind.NULL:
            return NULL
        if kind is Kind.BOOL:
            return _labeled(kind, "true" if obj else "false", opts)
        if kind is Kind.INT:
            return _labeled(kind, _fmt_int(obj, opts), opts)
        if kind is Kind.FLOAT:
            return _labeled(kind, repr(float(obj)), opts)
        if kind is Kind.STRING:
            return _fmt_string(obj, opts)
        if kind is Kind.ARRAY:
            return _fmt_array(obj, opts)
        if kind is Kind.OBJECT:
            return _fmt_object(obj, opts)
        if kind is Kind.RESOURCE:
            return _fmt_resource(obj, opts)
    except Exception as exc:
        logger.debug("Formatting %s value of kind %r failed: %s", type(obj).__name__, kind, exc)
    return UNKNOWN


def _fmt_string(s: str, opts: PrintOptions) -> str:
    """
    Quote the string, cut to string_limit characters plus '...'.

    Strings naming a class (when type_names is on) or an invocable are never cut.
    In callable mode invocable names render as signatures instead.
    """
    invocable = None
    if opts.callable_mode or len(s) > opts.string_limit:
        invocable = invocable_from_string(s)

    if opts.callable_mode and invocable is not None:
        return _fmt_invocable(invocable, opts)

    keep = (
        len(s) <= opts.string_limit
        or invocable is not None
        or (opts.type_names and is_type_name(s))
    )
    text = s if keep else s[: opts.string_limit] + ELLIPSIS
    return _labeled(Kind.STRING, _quoted(text), opts)


def _fmt_array(container: Any, opts: PrintOptions) -> str:
    """
    Format the first container_limit entries of a container.

    Prefixed mode always shows 'key => value' pairs with bare keys.
    Compact mode shows pairs with quoted string keys only when the shown
    entries are associative, bare values otherwise.
    """
    if opts.callable_mode:
        invocable = invocable_from_pair(container)
        if invocable is not None:
            return _fmt_invocable(invocable, opts)

    entries, had_more = _fmt_head(_fmt_entries(container), opts.container_limit)

    if opts.label_primitives:
        parts = [f"{_fmt_key(k, opts, quote=False)} => {_fmt_element(v, opts)}" for k, v in entries]
    elif _is_associative(entries):
        parts = [f"{_fmt_key(k, opts, quote=True)} => {_fmt_element(v, opts)}" for k, v in entries]
    else:
        parts = [_fmt_element(v, opts) for _, v in entries]

    if had_more:
        parts.append(ELLIPSIS)
    return _labeled(Kind.ARRAY, "[" + ", ".join(parts) + "]", opts)


def _fmt_element(value: Any, opts: PrintOptions) -> str:
    # Nested containers are never expanded
    kind = classify(value)
    if kind is Kind.ARRAY:
        return _labeled(Kind.ARRAY, "[...]", opts)
    return _fmt_kind(value, kind, opts)


def _fmt_entries(container: Any) -> Iterator[Tuple[Any, Any]]:
    if isinstance(container, abc.Mapping):
        return iter(container.items())
    return enumerate(container)


def _fmt_head(iterable: Iterable[Any], n: int) -> Tuple[list[Any], bool]:
    """Take up to n items and indicate whether there were more items."""
    buf = list(islice(iterable, n + 1))
    if len(buf) <= n:
        return buf, False
    return buf[:n], True


def _fmt_key(key: Any, opts: PrintOptions, *, quote: bool) -> str:
    if _is_int_key(key):
        return _fmt_int(key, opts)
    if isinstance(key, str):
        text = _fmt_truncate(key, opts.string_limit)
        return _quoted(text) if quote else text
    return _fmt_truncate(_safe_repr(key), opts.string_limit)


def _fmt_object(obj: Any, opts: PrintOptions) -> str:
    """
    Closures always render as 'function {closure}()'. In callable mode other
    invocables render as signatures, everything else as its class label.
    """
    invocable = invocable_from_object(obj)
    if invocable is not None and (invocable.shape is Shape.CLOSURE or opts.callable_mode):
        return _fmt_invocable(invocable, opts)

    marker = Kind.OBJECT.value if opts.label_primitives else "instance"
    return f"({marker}) {class_label(obj)}"


def _fmt_resource(handle: Any, opts: PrintOptions) -> str:
    fd = resource_id(handle)
    if fd is None:
        return UNKNOWN
    return _labeled(Kind.RESOURCE, f"Resource id #{fd}", opts)


def _fmt_invocable(invocable: Invocable, opts: PrintOptions) -> str:
    templates = SIGNATURES if opts.label_primitives else CALLABLES
    return templates[invocable.shape].format(name=invocable.name, target=invocable.target)


def _fmt_int(value: Any, opts: PrintOptions) -> str:
    """
    Decimal digits of an integer.

    Integers beyond the interpreter's int-to-str digit limit are converted
    through Decimal and cut to string_limit digits plus '...'.
    """
    try:
        return str(int(value))
    except ValueError:
        digits = str(decimal.Decimal(int(value)))
        return _fmt_truncate(digits, opts.string_limit)


def _fmt_truncate(s: str, max_len: int) -> str:
    """Cut s to max_len characters followed by the ellipsis."""
    if len(s) <= max_len:
        return s
    return s[:max_len] + ELLIPSIS


def _is_associative(entries: list[Tuple[Any, Any]]) -> bool:
    return any(not _is_int_key(k) for k, _ in entries)


def _is_int_key(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


def _labeled(kind: Kind, text: str, opts: PrintOptions) -> str:
    """Prefix text with its kind tag in prefixed mode."""
    return f"({kind.value}) {text}" if opts.label_primitives else text


def _quoted(s: str) -> str:
    # Embedded quotes are not escaped
    return f"'{s}'"


def _safe_repr(obj: Any) -> str:
    """
    Defensive repr() call - handle broken __repr__ methods gracefully
    """
    try:
        return repr(obj)
    except Exception as exc:
        logger.debug("repr() of %s failed: %s", type(obj).__name__, exc)
        return f"<{type(obj).__name__} object (repr failed: {type(exc).__name__})>"
