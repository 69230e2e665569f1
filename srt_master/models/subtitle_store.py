"""Single-writer store for the subtitle item collection."""

import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace

from srt_master.exceptions import DuplicateItemError, InvalidTransitionError

from .subtitle import ItemStatus, SubtitleItem
from .tier import ModelTier

ItemUpdater = Callable[[SubtitleItem], SubtitleItem]


@dataclass
class StoreStats:
    """Counts shown while monitoring a run."""

    total: int
    done: int
    failed: int
    done_by_tier: dict[ModelTier, int]

    @property
    def completion_percentage(self) -> float:
        """Share of items that finished successfully."""
        return (self.done / self.total) * 100 if self.total else 0.0


class SubtitleStore:
    """Ordered, id-keyed collection of subtitle items.

    Readers only ever get copies (``get_snapshot``); every write goes
    through ``apply_patch`` which updates the named ids one by one under a
    lock, so a pipeline update never clobbers an unrelated user action
    such as applying a suggestion.
    """

    def __init__(self, items: Iterable[SubtitleItem] | None = None):
        """Initialize the store.

        Args:
            items: Optional initial items (see ``load``)
        """
        self._lock = threading.RLock()
        self._order: list[int] = []
        self._items: dict[int, SubtitleItem] = {}
        if items is not None:
            self.load(items)

    def load(self, items: Iterable[SubtitleItem]) -> None:
        """Replace the whole collection (a new file was loaded).

        Args:
            items: Items in file order

        Raises:
            DuplicateItemError: If two items share an id
        """
        order: list[int] = []
        by_id: dict[int, SubtitleItem] = {}
        for item in items:
            if item.id in by_id:
                raise DuplicateItemError(f"Duplicate subtitle id: {item.id}")
            order.append(item.id)
            by_id[item.id] = replace(item)

        with self._lock:
            self._order = order
            self._items = by_id

    def get_snapshot(self) -> list[SubtitleItem]:
        """Get copies of all items in their original order."""
        with self._lock:
            return [replace(self._items[item_id]) for item_id in self._order]

    def get_items(self, ids: Iterable[int]) -> list[SubtitleItem]:
        """Get copies of the given items, in the order requested.

        Raises:
            KeyError: If an id is not in the store
        """
        with self._lock:
            return [replace(self._items[item_id]) for item_id in ids]

    def get(self, item_id: int) -> SubtitleItem:
        """Get a copy of a single item.

        Raises:
            KeyError: If the id is not in the store
        """
        with self._lock:
            return replace(self._items[item_id])

    def apply_patch(self, ids: Iterable[int], updater: ItemUpdater) -> list[SubtitleItem]:
        """Update the given items in place of the stored ones.

        The updater receives a copy of each current item and returns the
        new version. Status changes are checked against the transition
        table before anything is written.

        Args:
            ids: Ids of the items to update
            updater: Function producing the updated item

        Returns:
            Copies of the updated items

        Raises:
            KeyError: If an id is not in the store
            InvalidTransitionError: If the updater makes a disallowed
                status change or changes the item id
        """
        with self._lock:
            staged: dict[int, SubtitleItem] = {}
            for item_id in ids:
                current = self._items[item_id]
                updated = updater(replace(current))
                if updated.id != item_id:
                    raise InvalidTransitionError(
                        f"Item {item_id} cannot change its id to {updated.id}"
                    )
                if not current.status.can_transition_to(updated.status):
                    raise InvalidTransitionError(
                        f"Item {item_id}: {current.status.value} -> {updated.status.value} "
                        "is not allowed"
                    )
                staged[item_id] = updated

            self._items.update(staged)
            return [replace(item) for item in staged.values()]

    def apply_suggestion(self, item_id: int) -> bool:
        """Mark an item's context suggestion as applied.

        Only the translation input changes; ``original_text`` is kept.
        Items without a suggestion are left untouched.

        Args:
            item_id: Id of the item

        Returns:
            True if the item changed, False otherwise

        Raises:
            KeyError: If the id is not in the store
        """
        with self._lock:
            item = self._items[item_id]
            if not item.context_suggestion or item.is_context_applied:
                return False
            self._items[item_id] = replace(item, is_context_applied=True)
            return True

    def reset_for_run(self) -> None:
        """Return every item to PENDING for an explicit new run.

        Translation results are cleared; context suggestions and the
        applied flag are kept.
        """

        def _reset(item: SubtitleItem) -> SubtitleItem:
            return replace(
                item,
                status=ItemStatus.PENDING,
                translated_text=None,
                model_used=None,
                error_message=None,
            )

        with self._lock:
            for item_id in self._order:
                self._items[item_id] = _reset(self._items[item_id])

    def stats(self) -> StoreStats:
        """Compute completion statistics."""
        with self._lock:
            items = list(self._items.values())

        done_by_tier = {tier: 0 for tier in ModelTier}
        for item in items:
            if item.status == ItemStatus.DONE and item.model_used is not None:
                done_by_tier[item.model_used] += 1

        return StoreStats(
            total=len(items),
            done=sum(1 for item in items if item.status == ItemStatus.DONE),
            failed=sum(1 for item in items if item.status == ItemStatus.ERROR),
            done_by_tier=done_by_tier,
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._order)

    def __contains__(self, item_id: object) -> bool:
        with self._lock:
            return item_id in self._items

    @property
    def ids(self) -> list[int]:
        """Get all item ids in order."""
        with self._lock:
            return list(self._order)
