"""
Printable utilities shared across the package.

Class naming helpers used by both kind classification and formatting.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any

ANONYMOUS_LABEL = "class@anonymous"


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.

    Parameters:
        obj (Any): An object or a class.

    Returns:
        str: The declared class name, without module qualification.
    """
    cls = obj if isinstance(obj, type) else type(obj)
    return cls.__name__


def is_anonymous_class(cls: type) -> bool:
    """
    Return True if the class has no declared name.

    A class counts as anonymous when its name is not a Python identifier,
    as with generated names like ``type("<anon>", (), {})``. Classes declared
    inside a function body keep their declared name.
    """
    name = getattr(cls, "__name__", "")
    return not isinstance(name, str) or not name.isidentifier()


def class_label(obj: Any) -> str:
    """
    Display label for the class of obj, or for obj itself when it is a class.

    Anonymous classes collapse to the constant 'class@anonymous'.

    Examples:
        >>> class_label(object())
        'object'
        >>> class_label(type("<anon>", (), {})())
        'class@anonymous'
    """
    cls = obj if isinstance(obj, type) else type(obj)
    if is_anonymous_class(cls):
        return ANONYMOUS_LABEL
    return class_name(cls)
