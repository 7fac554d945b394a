"""
Sentinel objects for omitted arguments and failed lookups.

Sentinels:
    UNSET: Keyword argument that was not passed at all (distinguishes from None, 0 or False)
    NOT_FOUND: Result of a lookup that found nothing (distinguishes from a found None)

All sentinels are falsy singletons compared by identity.

Example:
    >>> obj = resolve_name("collections.OrderedDict")
    >>> if obj is NOT_FOUND:
    ...     ...
"""

from typing import Any, Final

__all__ = [
    'UNSET',
    'NOT_FOUND',
    'UnsetType',
    'NotFoundType',
    'ifnotunset',
]


# Base Sentinel --------------------------------------------------------------------------------------------------------

class _Sentinel:
    """Falsy singleton with identity-based equality and a clean repr."""
    __slots__ = ()

    _name: str = "SENTINEL"

    def __new__(cls):
        instance = cls.__dict__.get("_instance")
        if instance is None:
            instance = super().__new__(cls)
            setattr(cls, "_instance", instance)
        return instance

    def __repr__(self) -> str:
        return f'<{self._name}>'

    def __eq__(self, other: Any) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (type(self), ())


# Sentinel Types -------------------------------------------------------------------------------------------------------

class UnsetType(_Sentinel):
    """Type of UNSET, a keyword argument which was not provided."""
    __slots__ = ()
    _name = "UNSET"


class NotFoundType(_Sentinel):
    """Type of NOT_FOUND, the result of a lookup which found nothing."""
    __slots__ = ()
    _name = "NOT_FOUND"


UNSET: Final[UnsetType] = UnsetType()
NOT_FOUND: Final[NotFoundType] = NotFoundType()


# Methods --------------------------------------------------------------------------------------------------------------

def ifnotunset(value: Any, *, default: Any = None) -> Any:
    """Return default if value is UNSET, otherwise return value."""
    return default if value is UNSET else value
