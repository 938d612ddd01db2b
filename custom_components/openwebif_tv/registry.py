"""Configured channel list and user-chosen channel names."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import logging

from .api.errors import InvalidChannelError
from .api.models import ChannelEntry
from .const import PLACEHOLDER_CHANNEL_NAME, PLACEHOLDER_CHANNEL_REFERENCE
from .storage import PersistenceStore, StoreResult

_LOGGER = logging.getLogger(__name__)


class ChannelRegistry:
    """Ordered channels, indexed by position and by reference.

    Indexes are assigned once at load and stay stable for the lifetime of
    the registry. Renames go to the store, which holds reference -> name.
    """

    def __init__(
        self, entries: list[ChannelEntry], store: PersistenceStore
    ) -> None:
        self._entries = entries
        self._store = store
        self._by_reference = {entry.reference: entry for entry in entries}

    @classmethod
    def load(
        cls,
        store: PersistenceStore,
        channels: Iterable[tuple[str, str]],
    ) -> ChannelRegistry:
        """Build the registry from (reference, default name) pairs.

        Blocks on the store; run it in a worker thread from async code.
        """
        result = store.load()
        if not result.ok:
            _LOGGER.warning(
                "Ignoring saved channel names: %s", result.error
            )

        pairs = list(channels)
        if not pairs:
            pairs = [(PLACEHOLDER_CHANNEL_REFERENCE, PLACEHOLDER_CHANNEL_NAME)]

        entries: list[ChannelEntry] = []
        for index, (reference, default_name) in enumerate(pairs):
            saved = store.get(reference)
            display_name = saved if isinstance(saved, str) and saved else default_name
            entries.append(
                ChannelEntry(
                    reference=reference,
                    default_name=default_name,
                    display_name=display_name,
                    index=index,
                )
            )

        return cls(entries, store)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ChannelEntry]:
        return iter(self._entries)

    @property
    def names(self) -> list[str]:
        return [entry.display_name for entry in self._entries]

    def get(self, identifier: int) -> ChannelEntry:
        """Return the entry at identifier or raise InvalidChannelError."""
        if not 0 <= identifier < len(self._entries):
            raise InvalidChannelError(
                f"Channel identifier {identifier} outside 0..{len(self._entries) - 1}"
            )

        return self._entries[identifier]

    def index_of(self, reference: str) -> int:
        """Return the index for reference, 0 when it is not configured."""
        entry = self._by_reference.get(reference)
        if entry is None:
            return 0

        return entry.index

    def by_reference(self, reference: str) -> ChannelEntry | None:
        return self._by_reference.get(reference)

    def by_name(self, name: str) -> ChannelEntry | None:
        for entry in self._entries:
            if entry.display_name == name:
                return entry

        return None

    def rename(self, reference: str, name: str) -> StoreResult:
        """Apply a new display name and write the whole name map.

        The in-memory rename sticks even when the write fails.
        """
        entry = self._by_reference[reference]
        entry.display_name = name
        self._store.set(reference, name)

        return self._store.flush()
