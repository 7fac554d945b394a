"""
Runtime kind classification for the bounded value formatter.

Every value maps to exactly one Kind. Invocable values map to one of a small
closed set of shapes, each rendered by its own fixed template. All name
lookups go through builtins and already imported modules only: nothing is
ever imported as a side effect of formatting.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import builtins
import collections.abc as abc
import io
import logging
import socket
import sys
import types
from dataclasses import dataclass
from enum import StrEnum, unique
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import NOT_FOUND
from .utils import class_label

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

# Open OS handles exposing a numeric descriptor
RESOURCE_TYPES = (io.IOBase, socket.socket)

# Longest dotted name considered for resolution
MAX_NAME_LENGTH = 256


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Kind(StrEnum):
    """
    Closed set of runtime kinds.

    Values double as the kind tags of prefixed formatting, e.g. "(string) 'abc'".
    """
    NULL = "null"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    RESOURCE = "resource"
    UNKNOWN = "unknown type"


@unique
class Shape(StrEnum):
    """Closed set of invocable shapes."""
    FUNCTION = "function"
    METHOD = "method"
    CLOSURE = "closure"
    INVOKABLE = "invokable"


@dataclass(frozen=True)
class Invocable:
    """
    An invocable value classified up front.

    Attributes:
        shape: One of FUNCTION, METHOD, CLOSURE or INVOKABLE.
        name: Function or method name; empty for CLOSURE and INVOKABLE.
        target: Owner label for METHOD and INVOKABLE; empty otherwise.
    """
    shape: Shape
    name: str = ""
    target: str = ""


# Methods --------------------------------------------------------------------------------------------------------------

def classify(value: Any) -> Kind:
    """
    Return the Kind of value.

    Never raises: values whose kind cannot be determined, for example because
    their __class__ attribute is broken, classify as Kind.UNKNOWN.

    Examples:
        >>> classify(None)
        <Kind.NULL: 'null'>
        >>> classify({"a": 1})
        <Kind.ARRAY: 'array'>
        >>> classify(object())
        <Kind.OBJECT: 'object'>
    """
    try:
        return _classify(value)
    except Exception as exc:
        logger.debug("Kind of %s value not determined: %s", type(value).__name__, exc)
        return Kind.UNKNOWN


def resource_id(value: Any) -> int | None:
    """
    Return the OS-level descriptor of an open handle, or None.

    Closed sockets report -1, closed files raise; both yield None.
    """
    try:
        fd = value.fileno()
    except (OSError, ValueError, AttributeError) as exc:
        logger.debug("No descriptor for %s handle: %s", type(value).__name__, exc)
        return None
    if isinstance(fd, int) and not isinstance(fd, bool) and fd >= 0:
        return fd
    return None


def resolve_name(name: str) -> Any:
    """
    Resolve a builtin or dotted name to an object, or return NOT_FOUND.

    Dotted names are resolved against the longest module prefix present in
    sys.modules, then attribute by attribute. Names without an imported
    module prefix are resolved from builtins, e.g. 'len' or 'str.upper'.

    Modules are never imported. Module attributes are read from the module
    namespace only, so a module-level __getattr__ hook is never triggered.
    Attributes of classes and other objects go through getattr(), which can
    still run descriptors.

    Examples:
        >>> resolve_name("len") is len
        True
        >>> resolve_name("no.such.thing") is NOT_FOUND
        True
    """
    if not isinstance(name, str) or not name or len(name) > MAX_NAME_LENGTH:
        return NOT_FOUND
    parts = name.split(".")
    if not all(part.isidentifier() for part in parts):
        return NOT_FOUND

    for i in range(len(parts) - 1, 0, -1):
        module = sys.modules.get(".".join(parts[:i]))
        if module is not None:
            return _getattr_chain(module, parts[i:])

    return _getattr_chain(builtins, parts)


def is_type_name(name: str) -> bool:
    """Return True if name resolves to a class, e.g. 'int' or 'collections.OrderedDict'."""
    return isinstance(resolve_name(name), type)


def invocable_from_string(value: str) -> Invocable | None:
    """
    Classify a string naming an invocable.

    Recognizes function names ('len', 'os.path.join') and 'Type::method'
    names whose type resolves to a class with a callable attribute.
    Class names themselves are not invocables.
    """
    if "::" in value:
        type_name, _, method = value.partition("::")
        cls = resolve_name(type_name)
        if isinstance(cls, type) and method.isidentifier() and callable(_safe_getattr(cls, method)):
            return Invocable(Shape.METHOD, name=method, target=type_name)
        return None

    obj = resolve_name(value)
    if obj is not NOT_FOUND and callable(obj) and not isinstance(obj, type):
        return Invocable(Shape.FUNCTION, name=value)
    return None


def invocable_from_pair(value: Any) -> Invocable | None:
    """
    Classify a two-element [target, 'method'] list or tuple.

    The target is either a string naming a class, rendered literally, or any
    object, rendered by its class label.
    """
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return None
    target, method = value
    if not isinstance(method, str) or not method.isidentifier():
        return None

    if isinstance(target, str):
        owner = resolve_name(target)
        if not isinstance(owner, type):
            return None
        label = target
    else:
        owner = target
        label = class_label(target)

    if not callable(_safe_getattr(owner, method)):
        return None
    return Invocable(Shape.METHOD, name=method, target=label)


def invocable_from_object(value: Any) -> Invocable | None:
    """
    Classify a callable object, or return None for non-invocables and classes.

    Lambdas and functions defined inside other functions are closures.
    Bound methods and method descriptors are methods of their owner's class.
    Other instances with __call__ are invokable objects.
    """
    if isinstance(value, types.FunctionType):
        if is_closure(value):
            return Invocable(Shape.CLOSURE)
        qualname = value.__qualname__.rpartition("<locals>.")[2]
        owner, dot, name = qualname.rpartition(".")
        if dot:
            return Invocable(Shape.METHOD, name=name, target=owner)
        return Invocable(Shape.FUNCTION, name=value.__name__)

    if isinstance(value, types.MethodType):
        return Invocable(Shape.METHOD, name=value.__func__.__name__, target=class_label(value.__self__))

    if isinstance(value, (types.BuiltinFunctionType, types.MethodWrapperType)):
        owner = value.__self__
        if owner is None or isinstance(owner, types.ModuleType):
            return Invocable(Shape.FUNCTION, name=value.__name__)
        return Invocable(Shape.METHOD, name=value.__name__, target=class_label(owner))

    if isinstance(value, (types.MethodDescriptorType,
                          types.WrapperDescriptorType,
                          types.ClassMethodDescriptorType)):
        return Invocable(Shape.METHOD, name=value.__name__, target=class_label(value.__objclass__))

    if isinstance(value, type):
        return None

    if callable(value):
        return Invocable(Shape.INVOKABLE, target=class_label(value))

    return None


def is_closure(func: types.FunctionType) -> bool:
    """
    Return True for lambdas and for functions defined directly inside another function.

    Methods of a class declared inside a function are not closures.
    """
    if func.__name__ == "<lambda>":
        return True
    head, sep, tail = func.__qualname__.rpartition("<locals>.")
    return bool(sep) and tail == func.__name__


# Private Methods ------------------------------------------------------------------------------------------------------

def _classify(value: Any) -> Kind:
    # bool comes before int, it is a subclass of int
    if value is None:
        return Kind.NULL
    if isinstance(value, bool):
        return Kind.BOOL
    if isinstance(value, int):
        return Kind.INT
    if isinstance(value, float):
        return Kind.FLOAT
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Kind.OBJECT
    if isinstance(value, RESOURCE_TYPES):
        return _classify_handle(value)
    if isinstance(value, (abc.Mapping, abc.Sequence, abc.Set)):
        return Kind.ARRAY
    return Kind.OBJECT


def _classify_handle(value: Any) -> Kind:
    """Open handles are resources, closed ones are unknown, in-memory streams are objects."""
    if getattr(value, "closed", False) is True:
        return Kind.UNKNOWN
    if resource_id(value) is not None:
        return Kind.RESOURCE
    if isinstance(value, socket.socket):
        # closed sockets report fileno() == -1
        return Kind.UNKNOWN
    return Kind.OBJECT


def _getattr_chain(obj: Any, attrs: list[str]) -> Any:
    for attr in attrs:
        if isinstance(obj, types.ModuleType):
            obj = vars(obj).get(attr, NOT_FOUND)
        else:
            obj = _safe_getattr(obj, attr)
        if obj is NOT_FOUND:
            break
    return obj


def _safe_getattr(obj: Any, attr: str) -> Any:
    """getattr() returning NOT_FOUND instead of raising."""
    try:
        return getattr(obj, attr)
    except Exception as exc:
        if not isinstance(exc, AttributeError):
            logger.debug("Attribute %r lookup failed on %s: %s", attr, type(obj).__name__, exc)
        return NOT_FOUND
