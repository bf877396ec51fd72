"""Command-line option scanning with short options, long options and permutation."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Iterator, Sequence
from typing import TextIO

from psdkit.longmatch import AmbiguousOptionError, LongMatch, find_long_option
from psdkit.longopts import HasArg, LongOption, Ordering
from psdkit.permute import exchange, is_nonoption

OptionCode = int | str
Result = tuple[OptionCode, "str | None"]


class Getopt:
    """A scanner over an argument vector.

    ``argv`` holds the program name first, as on a command line. The scanner
    works on its own copy, available as ``argv``, which it permutes so that
    options come before non-options. Each call of :meth:`next_option` returns
    ``(code, optarg)`` or None when the options are exhausted; ``code`` is the
    option character, ``'?'`` or ``':'`` for errors, ``1`` for a non-option
    reported in order, ``0`` for a long option that set its flag, or a long
    option's ``val``.
    """

    def __init__(
        self,
        argv: Sequence[str],
        optstring: str,
        longopts: Iterable[LongOption] | None = None,
        long_only: bool = False,
        opterr: bool = True,
        posixly_correct: bool | None = None,
        stderr: TextIO | None = None,
    ):
        self.argv: list[str] = list(argv)
        self.longopts: list[LongOption] | None = (
            None if longopts is None else list(longopts)
        )
        self.long_only = bool(long_only)
        self.opterr = bool(opterr)
        self.optind = 1
        self.optarg: str | None = None
        self.optopt: OptionCode = "?"
        self.longind: int | None = None
        self._print_errors_allowed = not optstring.startswith(":")
        self._stderr = stderr
        if posixly_correct is None:
            posixly_correct = "POSIXLY_CORRECT" in os.environ
        self.posixly_correct = bool(posixly_correct)

        if optstring.startswith("-"):
            self.ordering = Ordering.RETURN_IN_ORDER
            optstring = optstring[1:]
        elif optstring.startswith("+"):
            self.ordering = Ordering.REQUIRE_ORDER
            optstring = optstring[1:]
        elif self.posixly_correct:
            self.ordering = Ordering.REQUIRE_ORDER
        else:
            self.ordering = Ordering.PERMUTE
        self.optstring = optstring
        self._initialize()

    def _initialize(self) -> None:
        self._first_nonopt = self._last_nonopt = self.optind
        self._nextchar: str | None = None

    @property
    def _prog(self) -> str:
        return self.argv[0]

    def _error(self, message: str) -> None:
        if self.opterr and self._print_errors_allowed:
            stream = self._stderr if self._stderr is not None else sys.stderr
            stream.write(f"{self._prog}: {message}\n")

    def _missing_code(self) -> str:
        return ":" if self.optstring.startswith(":") else "?"

    def _exchange(self) -> None:
        self._first_nonopt, self._last_nonopt = exchange(
            self.argv, self._first_nonopt, self._last_nonopt, self.optind
        )

    def _advance(self) -> Result | None:
        """Move to the next argument element; return a result if scanning stops there."""
        argv = self.argv
        argc = len(argv)
        if self._last_nonopt > self.optind:
            self._last_nonopt = self.optind
        if self._first_nonopt > self.optind:
            self._first_nonopt = self.optind

        if self.ordering is Ordering.PERMUTE:
            if (
                self._first_nonopt != self._last_nonopt
                and self._last_nonopt != self.optind
            ):
                self._exchange()
            elif self._last_nonopt != self.optind:
                self._first_nonopt = self.optind
            while self.optind < argc and is_nonoption(argv[self.optind]):
                self.optind += 1
            self._last_nonopt = self.optind

        if self.optind != argc and argv[self.optind] == "--":
            self.optind += 1
            if (
                self._first_nonopt != self._last_nonopt
                and self._last_nonopt != self.optind
            ):
                self._exchange()
            elif self._first_nonopt == self._last_nonopt:
                self._first_nonopt = self.optind
            self._last_nonopt = argc
            self.optind = argc

        if self.optind >= argc:
            if self._first_nonopt != self._last_nonopt:
                self.optind = self._first_nonopt
            return None

        current = argv[self.optind]
        if is_nonoption(current):
            if self.ordering is Ordering.REQUIRE_ORDER:
                return None
            self.optarg = current
            self.optind += 1
            return (1, self.optarg)

        skip = 2 if self.longopts is not None and current[1] == "-" else 1
        self._nextchar = current[skip:]
        return (-1, None)

    def next_option(self) -> Result | None:
        """Scan the next option; return ``(code, optarg)`` or None at the end."""
        argv = self.argv
        if not argv:
            return None
        self.optarg = None
        if self.optind == 0:
            self.optind = 1
            self._initialize()

        if not self._nextchar:
            outcome = self._advance()
            if outcome is None or outcome[0] != -1:
                return outcome

        current = argv[self.optind]
        if self.longopts is not None and (
            current[1] == "-"
            or (
                self.long_only
                and (len(current) > 2 or current[1] not in self.optstring)
            )
        ):
            outcome = self._long_option(current)
            if outcome is not None:
                return outcome

        return self._short_option()

    def _long_option(self, current: str) -> Result | None:
        assert self.longopts is not None and self._nextchar is not None
        try:
            match = find_long_option(self.longopts, self._nextchar, self.long_only)
        except AmbiguousOptionError:
            self._error(f"option '{current}' is ambiguous")
            self._nextchar = ""
            self.optind += 1
            self.optopt = 0
            return ("?", None)

        if match is not None:
            self.optind += 1
            option = match.option
            if match.argument is not None:
                if option.has_arg:
                    self.optarg = match.argument
                else:
                    if current[1] == "-":
                        self._error(
                            f"option '--{option.name}' doesn't allow an argument"
                        )
                    else:
                        self._error(
                            f"option '{current[0]}{option.name}' "
                            "doesn't allow an argument"
                        )
                    self._nextchar = ""
                    self.optopt = option.val
                    return ("?", None)
            elif option.has_arg == HasArg.REQUIRED:
                if self.optind < len(self.argv):
                    self.optarg = self.argv[self.optind]
                    self.optind += 1
                else:
                    self._error(f"option '{current}' requires an argument")
                    self._nextchar = ""
                    self.optopt = option.val
                    return (self._missing_code(), None)
            return self._found(match)

        if not self.long_only or current[1] == "-" or (
            self._nextchar[0] not in self.optstring
        ):
            if current[1] == "-":
                self._error(f"unrecognized option '--{self._nextchar}'")
            else:
                self._error(f"unrecognized option '{current[0]}{self._nextchar}'")
            self._nextchar = ""
            self.optind += 1
            self.optopt = 0
            return ("?", None)
        return None

    def _found(self, match: LongMatch) -> Result:
        option = match.option
        self._nextchar = ""
        self.longind = match.index
        if option.flag is not None:
            option.flag.value = option.val
            return (0, self.optarg)
        return (option.val, self.optarg)

    def _short_option(self) -> Result:
        assert self._nextchar
        argv = self.argv
        argc = len(argv)
        c = self._nextchar[0]
        self._nextchar = self._nextchar[1:]
        position = self.optstring.find(c)

        if not self._nextchar:
            self.optind += 1

        if position < 0 or c == ":":
            self._error(f"invalid option -- '{c}'")
            self.optopt = c
            return ("?", None)

        spec = self.optstring[position + 1 : position + 3]

        if c == "W" and spec.startswith(";"):
            return self._w_option(c)

        if spec.startswith(":"):
            if spec[1:2] == ":":
                if self._nextchar:
                    self.optarg = self._nextchar
                    self.optind += 1
                else:
                    self.optarg = None
            else:
                if self._nextchar:
                    self.optarg = self._nextchar
                    self.optind += 1
                elif self.optind == argc:
                    self._error(f"option requires an argument -- '{c}'")
                    self.optopt = c
                    c = self._missing_code()
                else:
                    self.optarg = argv[self.optind]
                    self.optind += 1
            self._nextchar = None
        return (c, self.optarg)

    def _w_option(self, c: str) -> Result:
        """Treat ``-W foo`` as the long option ``--foo``."""
        argv = self.argv
        argc = len(argv)
        if self._nextchar:
            self.optarg = self._nextchar
            self.optind += 1
        elif self.optind == argc:
            self._error(f"option requires an argument -- '{c}'")
            self.optopt = c
            return (self._missing_code(), None)
        else:
            self.optarg = argv[self.optind]
            self.optind += 1

        text = self.optarg
        self._nextchar = text
        try:
            match = find_long_option(self.longopts or [], text, long_only=True)
        except AmbiguousOptionError:
            self._error(f"option '-W {text}' is ambiguous")
            self._nextchar = ""
            self.optind = min(self.optind + 1, argc)
            return ("?", None)

        if match is None:
            self._nextchar = None
            return ("W", self.optarg)

        option = match.option
        if match.argument is not None:
            if option.has_arg:
                self.optarg = match.argument
            else:
                self._error(f"option '-W {option.name}' doesn't allow an argument")
                self._nextchar = ""
                return ("?", None)
        elif option.has_arg == HasArg.REQUIRED:
            if self.optind < argc:
                self.optarg = argv[self.optind]
                self.optind += 1
            else:
                self._error(f"option '{argv[self.optind - 1]}' requires an argument")
                self._nextchar = ""
                return (self._missing_code(), None)
        return self._found(match)

    def __iter__(self) -> Iterator[Result]:
        while (result := self.next_option()) is not None:
            yield result

    def remaining(self) -> list[str]:
        """Return the arguments left after the options, in their final order."""
        return self.argv[self.optind :]


def getopt(argv: Sequence[str], optstring: str) -> tuple[list[Result], list[str]]:
    """Scan short options; return the options found and the remaining arguments."""
    scanner = Getopt(argv, optstring)
    return list(scanner), scanner.remaining()


def getopt_long(
    argv: Sequence[str], optstring: str, longopts: Iterable[LongOption]
) -> tuple[list[Result], list[str]]:
    """Scan short and ``--`` long options."""
    scanner = Getopt(argv, optstring, longopts)
    return list(scanner), scanner.remaining()


def getopt_long_only(
    argv: Sequence[str], optstring: str, longopts: Iterable[LongOption]
) -> tuple[list[Result], list[str]]:
    """Scan options where a single ``-`` may also introduce a long option."""
    scanner = Getopt(argv, optstring, longopts, long_only=True)
    return list(scanner), scanner.remaining()