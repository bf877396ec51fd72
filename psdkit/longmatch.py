"""Lookup of a possibly abbreviated long option name."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from psdkit.longopts import LongOption


class AmbiguousOptionError(ValueError):
    """Raised when an abbreviation matches more than one distinct long option."""

    def __init__(self, name: str):
        super().__init__(f"option '{name}' is ambiguous")
        self.name = name


@dataclass(frozen=True)
class LongMatch:
    """The long option found for a name.

    ``index`` is the option's position in the table, ``exact`` tells whether
    the name was spelled in full, and ``argument`` holds the text after an
    ``=`` in the name, or None when there was no ``=``.
    """

    option: LongOption
    index: int
    exact: bool
    argument: str | None = None


def _same_meaning(a: LongOption, b: LongOption) -> bool:
    return a.has_arg == b.has_arg and a.flag is b.flag and a.val == b.val


def find_long_option(
    longopts: Sequence[LongOption], name: str, long_only: bool = False
) -> LongMatch | None:
    """Find the long option that ``name`` names or abbreviates.

    ``name`` is the option text without its leading dashes and may carry an
    argument after ``=``. An exact match always wins. Otherwise the first
    option the name abbreviates is chosen, unless another one is also
    abbreviated: that is ambiguous when ``long_only`` is set or when the two
    options differ in argument, flag or value. Returns None when nothing
    matches.
    """
    key, sep, argument = name.partition("=")
    found: tuple[int, LongOption] | None = None
    ambiguous = False
    for index, option in enumerate(longopts):
        if not option.name.startswith(key):
            continue
        if option.name == key:
            return LongMatch(option, index, True, argument if sep else None)
        if found is None:
            found = (index, option)
        elif long_only or not _same_meaning(found[1], option):
            ambiguous = True
    if ambiguous:
        raise AmbiguousOptionError(key)
    if found is None:
        return None
    index, option = found
    return LongMatch(option, index, False, argument if sep else None)