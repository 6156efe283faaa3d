"""slnloader - Structural parser and resolver for Visual Studio solution files."""

from slnloader.config import ConfigurationAndPlatform, LoaderConfig, SolutionSection
from slnloader.errors import InvalidSolutionError, LoadCancelled
from slnloader.loader import LoadResult, SolutionLoader, load_solution, load_solution_from_stream

__version__ = "0.1.0"
__all__ = [
    "ConfigurationAndPlatform",
    "InvalidSolutionError",
    "LoadCancelled",
    "LoadResult",
    "LoaderConfig",
    "SolutionLoader",
    "SolutionSection",
    "load_solution",
    "load_solution_from_stream",
]
