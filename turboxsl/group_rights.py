"""Group-based access rights: libraries define groups of allowed actions."""

from __future__ import annotations

import logging
from typing import Iterable

logger = logging.getLogger(__name__)


class UnknownLibraryError(LookupError):
    """Raised when rights are requested for a library never defined."""


class RightsRegistry:
    """Holds, per library, the actions each group is allowed."""

    def __init__(self) -> None:
        self._libraries: dict[str, dict[str, tuple[str, ...]]] = {}

    def define_group(self, library: str, group: str, actions: Iterable[str]) -> None:
        """Define (or redefine) the actions of ``group`` in ``library``."""
        self._libraries.setdefault(library, {})[group] = tuple(actions)

    def user_rights(self, library: str, groups: Iterable[str]) -> frozenset[str]:
        """Return every action granted by ``groups`` in ``library``.

        Unknown groups are skipped.
        """
        try:
            known = self._libraries[library]
        except KeyError:
            raise UnknownLibraryError(f"unknown library: {library}") from None

        rights: set[str] = set()
        for group in groups:
            actions = known.get(group)
            if actions is None:
                logger.error("unknown group: %s", group)
                continue
            rights.update(actions)
        return frozenset(rights)