"""Argument permutation used while scanning options in permute mode."""

from __future__ import annotations

from collections.abc import MutableSequence


def is_nonoption(arg: str) -> bool:
    """Tell whether ``arg`` lacks option syntax.

    An argument is an option element only if it starts with ``-`` and is
    longer than that single character.
    """
    return not arg.startswith("-") or len(arg) == 1


def exchange(
    argv: MutableSequence[str], first_nonopt: int, last_nonopt: int, optind: int
) -> tuple[int, int]:
    """Swap the skipped non-options with the options processed after them.

    ``argv[first_nonopt:last_nonopt]`` holds non-options that were skipped and
    ``argv[last_nonopt:optind]`` the options handled since. The two blocks are
    swapped in place so the options come first. Returns the new
    ``(first_nonopt, last_nonopt)`` describing where the non-options now are.
    """
    if first_nonopt < last_nonopt < optind:
        argv[first_nonopt:optind] = (
            list(argv[last_nonopt:optind]) + list(argv[first_nonopt:last_nonopt])
        )
    return first_nonopt + (optind - last_nonopt), optind