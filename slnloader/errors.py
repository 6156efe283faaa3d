"""Exceptions raised while loading a solution."""

from __future__ import annotations


class InvalidSolutionError(Exception):
    """The solution document is malformed or unsupported.

    Carries the source position in the same shape MSBuild reports invalid
    project files: a 1-based line and a column range on that line.
    """

    def __init__(
        self,
        message: str,
        file_name: str = "",
        line: int = 0,
        column: int = 1,
        end_line: int | None = None,
        end_column: int = 1,
        error_code: str = "",
        help_keyword: str = "",
        help_link: str = "",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.file_name = file_name
        self.line = line
        self.column = column
        self.end_line = line if end_line is None else end_line
        self.end_column = end_column
        self.error_code = error_code
        self.help_keyword = help_keyword
        self.help_link = help_link

    def __str__(self) -> str:
        location = self.file_name or "<stream>"
        return f"{location}({self.line},{self.column}): {self.message}"


class SolutionFormatTooOldError(InvalidSolutionError):
    """Format Version 7.00 / 8.00 solutions are not supported."""


class UnknownSolutionVersionError(InvalidSolutionError):
    """The format header names a version we do not recognise."""


class DependencyCycleError(InvalidSolutionError):
    """ProjectDependencies sections form a cycle."""


class LoadCancelled(Exception):
    """The caller cancelled the load before projects were instantiated."""
