"""
Formatting options for fmt_printable().

PrintOptions is an immutable configuration record. Derived options are
always new instances, so a single base can be shared between call sites.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import UNSET, UnsetType, ifnotunset


# Classes --------------------------------------------------------------------------------------------------------------

class InvalidConfiguration(ValueError):
    """Raised when PrintOptions are constructed with invalid values."""


@dataclass(frozen=True)
class PrintOptions:
    """
    Immutable options of the bounded value formatter.

    Attributes:
        string_limit: Max characters of a string to show before cutting it with '...'.
            A limit of 0 cuts every non-empty string.
        container_limit: Max container entries to show before appending '...'.
            A limit of 0 shows no entries at all.
        callable_mode: Render invocables (function names, bound methods,
            [target, 'method'] pairs, objects with __call__) as signatures.
        label_primitives: Prefixed mode when True, e.g. "(int) 42".
            Compact mode when False, e.g. "42".
        type_names: Never cut strings which name a known class.

    Raises:
        InvalidConfiguration: If a limit is not an int or is negative.

    Examples:
        >>> opts = PrintOptions(string_limit=5)
        >>> opts.with_container_limit(8).string_limit
        5
    """
    string_limit: int = 20
    container_limit: int = 3
    callable_mode: bool = False
    label_primitives: bool = True
    type_names: bool = True

    def __post_init__(self):
        for name in ("string_limit", "container_limit"):
            _validate_limit(name, getattr(self, name))

        object.__setattr__(self, "callable_mode", bool(self.callable_mode))
        object.__setattr__(self, "label_primitives", bool(self.label_primitives))
        object.__setattr__(self, "type_names", bool(self.type_names))

    def merge(self,
              string_limit: int | UnsetType = UNSET,
              container_limit: int | UnsetType = UNSET,
              callable_mode: bool | UnsetType = UNSET,
              label_primitives: bool | UnsetType = UNSET,
              type_names: bool | UnsetType = UNSET,
              ) -> "PrintOptions":
        """
        Create a new PrintOptions instance with merged configuration options.

        Parameters not provided (UNSET) are inherited from the current instance.

        Returns:
            New PrintOptions instance, validated like any other.
        """
        return PrintOptions(
            string_limit=ifnotunset(string_limit, default=self.string_limit),
            container_limit=ifnotunset(container_limit, default=self.container_limit),
            callable_mode=ifnotunset(callable_mode, default=self.callable_mode),
            label_primitives=ifnotunset(label_primitives, default=self.label_primitives),
            type_names=ifnotunset(type_names, default=self.type_names),
        )

    def with_string_limit(self, string_limit: int) -> "PrintOptions":
        """Return new options with the given string limit."""
        return self.merge(string_limit=string_limit)

    def with_container_limit(self, container_limit: int) -> "PrintOptions":
        """Return new options with the given container limit."""
        return self.merge(container_limit=container_limit)

    @classmethod
    def prefixed(cls) -> "PrintOptions":
        """Default preset: every value is tagged with its kind, e.g. "(string) 'abc'"."""
        return cls()

    @classmethod
    def compact(cls) -> "PrintOptions":
        """Compact preset: bare primitives, two container entries."""
        return cls(container_limit=2, label_primitives=False)

    @classmethod
    def callables(cls) -> "PrintOptions":
        """Prefixed preset which renders invocables as signatures."""
        return cls(callable_mode=True)


# Private Methods ------------------------------------------------------------------------------------------------------

def _validate_limit(name: str, value: Any) -> None:
    # bool is an int subclass but never a meaningful limit
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidConfiguration(f"{name} must be int >= 0, but got {type(value).__name__}")
    if value < 0:
        raise InvalidConfiguration(f"{name} must be int >= 0, but got {value}")
