"""Solution preferences - chooses the active configuration before projects load."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from slnloader.config import ConfigurationAndPlatform
from slnloader.items.solution import Solution

logger = logging.getLogger(__name__)

_PREFERRED_DEFAULT = ConfigurationAndPlatform("Debug", "Any CPU")


@runtime_checkable
class PreferencesProvider(Protocol):
    def load_preferences(self, solution: Solution) -> None:
        """Populate user preferences (at least active_configuration) on the solution."""
        ...


class DefaultPreferences:
    """Picks the active configuration without a persisted preference store."""

    def __init__(self, active_configuration: str | None = None) -> None:
        self.active_configuration = active_configuration

    def load_preferences(self, solution: Solution) -> None:
        if self.active_configuration:
            chosen = ConfigurationAndPlatform.from_key(self.active_configuration)
            if chosen is None:
                logger.warning(
                    f"Ignoring active configuration '{self.active_configuration}' (expected Name|Platform)"
                )
            else:
                solution.active_configuration = chosen
                return

        declared = {c.casefold() for c in solution.configuration_names}
        platforms = {p.casefold() for p in solution.platform_names}
        if (_PREFERRED_DEFAULT.configuration.casefold() in declared
                and _PREFERRED_DEFAULT.platform.casefold() in platforms):
            solution.active_configuration = _PREFERRED_DEFAULT
        elif solution.configuration_names and solution.platform_names:
            solution.active_configuration = ConfigurationAndPlatform(
                solution.configuration_names[0], solution.platform_names[0]
            )
        else:
            solution.active_configuration = None
        logger.debug(f"Active configuration: {solution.active_configuration}")
