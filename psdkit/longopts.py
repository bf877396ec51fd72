"""Long option descriptions and the scanner's ordering modes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class HasArg(IntEnum):
    """Whether a long option takes an argument."""

    NO_ARGUMENT = 0
    REQUIRED = 1
    OPTIONAL = 2


class Ordering(Enum):
    """How options that follow non-option arguments are treated.

    REQUIRE_ORDER stops at the first non-option argument.
    PERMUTE moves non-options to the end so that options come first.
    RETURN_IN_ORDER reports each non-option as the argument of option 1.
    """

    REQUIRE_ORDER = 0
    PERMUTE = 1
    RETURN_IN_ORDER = 2


@dataclass(eq=False)
class Flag:
    """A mutable cell that a long option stores its value into when found.

    Two flags are the same only if they are the same object.
    """

    value: int | str = 0


@dataclass(frozen=True)
class LongOption:
    """A long-named option.

    When ``flag`` is set, finding the option stores ``val`` in the flag and
    the scanner reports 0; otherwise the scanner reports ``val`` itself.
    """

    name: str
    has_arg: HasArg = HasArg.NO_ARGUMENT
    flag: Flag | None = None
    val: int | str = 0

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("a long option needs a non-empty name")
        try:
            has_arg = HasArg(self.has_arg)
        except ValueError:
            raise ValueError(f"invalid has_arg value: {self.has_arg!r}") from None
        object.__setattr__(self, "has_arg", has_arg)