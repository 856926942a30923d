"""Host extension registry.

Extensions are grouped by the extension point (base class) they implement.
Each list is ordered by descending ordinal; equal ordinals keep registration
order, so lookups over the list are deterministic.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from importlib.metadata import entry_points
from typing import Any, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class _Entry:
    extension: Any
    ordinal: float
    sequence: int


class ExtensionRegistry:
    """Ordered lists of extension instances, keyed by extension point."""

    def __init__(self) -> None:
        self._entries: dict[type, list[_Entry]] = {}
        self._sequence = 0

    def register(
        self,
        extension: Any,
        *,
        extension_type: type | None = None,
        ordinal: float = 0,
    ) -> None:
        """Registers an extension instance.

        Args:
            extension: The extension instance.
            extension_type: Extension point to register under. Defaults to
                the nearest class in the MRO of ``extension`` that declares
                ``extension_point = True``, or its own class.
            ordinal: Sort priority. Higher ordinals are listed first.
        """

        point = extension_type or self._infer_extension_type(extension)
        if not isinstance(extension, point):
            raise TypeError(
                f"{type(extension).__qualname__} does not implement {point.__qualname__}"
            )
        self._entries.setdefault(point, []).append(
            _Entry(extension=extension, ordinal=ordinal, sequence=self._sequence)
        )
        self._sequence += 1
        _logger.debug(
            "extension registered: point=%s extension=%s ordinal=%s",
            point.__qualname__,
            type(extension).__qualname__,
            ordinal,
        )

    def unregister(self, extension: Any) -> bool:
        """Removes an extension instance. Returns True if it was registered."""

        removed = False
        for point, entries in self._entries.items():
            kept = [entry for entry in entries if entry.extension is not extension]
            if len(kept) != len(entries):
                self._entries[point] = kept
                removed = True
        return removed

    def get_extension_list(self, extension_type: type[T]) -> list[T]:
        """Returns the registered extensions of ``extension_type`` in order."""

        entries = sorted(
            self._entries.get(extension_type, []),
            key=lambda entry: (-entry.ordinal, entry.sequence),
        )
        return [entry.extension for entry in entries]

    def load_entry_points(
        self,
        group: str,
        *,
        extension_type: type[T],
        factory: Callable[[Any], T],
    ) -> int:
        """Registers extensions advertised by installed distributions.

        Each entry point in ``group`` must resolve to an object accepted by
        ``factory`` (typically an extension class). An ``ordinal`` attribute
        on the loaded object is used as its sort priority.

        Returns:
            Number of extensions registered.
        """

        count = 0
        for entry_point in entry_points(group=group):
            loaded = entry_point.load()
            extension = factory(loaded)
            self.register(
                extension,
                extension_type=extension_type,
                ordinal=getattr(loaded, "ordinal", 0),
            )
            _logger.info("plugin extension loaded: group=%s name=%s", group, entry_point.name)
            count += 1
        return count

    @staticmethod
    def _infer_extension_type(extension: Any) -> type:
        # Extension points mark themselves with `extension_point = True` in their own body.
        for klass in type(extension).__mro__:
            if klass.__dict__.get("extension_point") is True:
                return klass
        return type(extension)
