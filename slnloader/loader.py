"""Two-phase solution loader with timing."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TextIO

from slnloader.config import LoaderConfig, ProjectLoadInformation
from slnloader.items.solution import Solution
from slnloader.phases.materialise import run_materialise_phase
from slnloader.phases.structure import run_structure_phase
from slnloader.preferences import DefaultPreferences
from slnloader.progress import CancellationToken, ProgressCallback, ProgressMonitor
from slnloader.reader.cursor import LineCursor

logger = logging.getLogger(__name__)


@dataclass
class LoadResult:
    solution: Solution
    repaired_ids: bool = False
    project_count: int = 0
    entries: list[ProjectLoadInformation] = field(default_factory=list)
    phase_timings: dict[str, float] = field(default_factory=dict)


class SolutionLoader:
    """Reads one solution document. Owns the underlying stream.

    Use as a context manager so the stream is closed however the load ends.
    """

    def __init__(
        self,
        stream: TextIO,
        file_name: str = "",
        directory: str | None = None,
        config: LoaderConfig | None = None,
    ) -> None:
        self.stream = stream
        self.config = config or LoaderConfig()
        self.solution = Solution(file_name, directory)
        self.cursor = LineCursor(stream, self.solution.file_name)

    @classmethod
    def open(cls, file_name: str, config: LoaderConfig | None = None) -> SolutionLoader:
        config = config or LoaderConfig()
        stream = open(file_name, "r", encoding=config.encoding)
        try:
            return cls(stream, file_name=file_name, config=config)
        except BaseException:
            stream.close()
            raise

    def close(self) -> None:
        self.stream.close()

    def __enter__(self) -> SolutionLoader:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def read_solution(self, progress: ProgressMonitor | None = None) -> LoadResult:
        """Run the structural pass, then load projects.

        Raises InvalidSolutionError for malformed input and LoadCancelled if
        cancellation is requested before projects are loaded.
        """
        progress = progress or ProgressMonitor()
        solution = self.solution
        timings: dict[str, float] = {}

        start = time.monotonic()
        structure = run_structure_phase(self.cursor, solution)
        timings["structure"] = time.monotonic() - start

        progress.cancellation.raise_if_cancelled()

        preferences = self.config.preferences or DefaultPreferences(self.config.active_configuration)
        preferences.load_preferences(solution)

        start = time.monotonic()
        run_materialise_phase(structure, solution, progress, self.config.bindings)
        timings["materialise"] = time.monotonic() - start

        if structure.repaired_ids:
            logger.info(f"Solution {solution.file_name or '<stream>'} had duplicate GUIDs repaired")

        return LoadResult(
            solution=solution,
            repaired_ids=structure.repaired_ids,
            project_count=structure.project_count,
            entries=structure.entries,
            phase_timings=timings,
        )


def load_solution(
    file_name: str,
    config: LoaderConfig | None = None,
    progress_callback: ProgressCallback | None = None,
    cancellation: CancellationToken | None = None,
) -> LoadResult:
    """Load a .sln file from disk.

    Args:
        file_name: Path to the solution file.
        config: Loader configuration.
        progress_callback: Optional callable(progress, task_name) invoked as
            projects load. Used by the CLI for Rich progress.
        cancellation: Token checked once between the structural pass and
            project loading.
    """
    progress = ProgressMonitor(progress_callback, cancellation)
    with SolutionLoader.open(file_name, config) as loader:
        return loader.read_solution(progress)


def load_solution_from_stream(
    stream: TextIO,
    directory: str | None = None,
    config: LoaderConfig | None = None,
    progress_callback: ProgressCallback | None = None,
    cancellation: CancellationToken | None = None,
) -> LoadResult:
    """Load a solution from an open text stream; relative paths resolve against `directory`."""
    progress = ProgressMonitor(progress_callback, cancellation)
    with SolutionLoader(stream, directory=directory, config=config) as loader:
        return loader.read_solution(progress)
