"""Line-at-a-time cursor over a solution document."""

from __future__ import annotations

from typing import TextIO

from slnloader.errors import InvalidSolutionError

_BOM = "\ufeff"


class LineCursor:
    """Exposes one logical line at a time.

    Blank lines and lines starting with '#' are skipped, but still counted
    so that line_number always refers to the physical source line.
    """

    def __init__(self, stream: TextIO, file_name: str = "") -> None:
        self.stream = stream
        self.file_name = file_name
        self.line_number = 0
        self.current: str | None = None
        self.advance()

    def advance(self) -> None:
        """Discard the current line and load the next logical one."""
        while True:
            try:
                raw = self.stream.readline()
            except UnicodeDecodeError as e:
                raise InvalidSolutionError(
                    f"Cannot decode solution text as {e.encoding}: {e.reason}",
                    file_name=self.file_name,
                    line=self.line_number + 1,
                ) from None
            if not raw:
                self.current = None
                return
            self.line_number += 1
            line = raw.rstrip("\r\n")
            if self.line_number == 1:
                line = line.lstrip(_BOM)
            if line.strip() and not line.startswith("#"):
                self.current = line
                return

    @property
    def at_end(self) -> bool:
        return self.current is None

    def error(self, message: str = "Invalid solution file", *args,
              kind: type[InvalidSolutionError] = InvalidSolutionError) -> InvalidSolutionError:
        """Build an error pinned to the current line."""
        if args:
            message = message.format(*args)
        if self.current is None:
            message = f"{message} (unexpected end of file)"
        length = len(self.current) if self.current is not None else 0
        return kind(
            message,
            file_name=self.file_name,
            line=self.line_number,
            column=1,
            end_line=self.line_number,
            end_column=length + 1,
        )
