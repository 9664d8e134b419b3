"""
Display order calculations.

Pure functions (no database access) behind the sorting screen:
drag-and-drop re-sequencing, unique random orders and the initial
per-artist/global order backfill.
"""
import random
from typing import Dict, Iterable, List, Optional, Sequence

from gallery_admin.schemas import GlobalOrderUpdate, SortableArtwork


def move_item(items: Sequence, source_index: int, target_index: int) -> list:
    """
    Remove the item at source_index and reinsert it at target_index.

    Args:
        items: Current ordered items
        source_index: Position the item is dragged from
        target_index: Position it is dropped at (in the list after removal)

    Returns:
        list: New ordered list; the input is not modified

    Raises:
        IndexError: If either index is outside the list
    """
    size = len(items)
    if not 0 <= source_index < size:
        raise IndexError(f"Source index {source_index} out of range for {size} items")
    if not 0 <= target_index < size:
        raise IndexError(f"Target index {target_index} out of range for {size} items")

    reordered = list(items)
    dragged = reordered.pop(source_index)
    reordered.insert(target_index, dragged)
    return reordered


def renumber(items: Iterable[SortableArtwork]) -> List[SortableArtwork]:
    """Assign global_display_order = position + 1 to every item."""
    return [
        item.model_copy(update={"global_display_order": position})
        for position, item in enumerate(items, start=1)
    ]


class ReorderSession:
    """
    Client-side state of the global sorting list.

    Holds the full ordered list. Every drop re-normalises the whole list to a
    dense 1..N sequence matching visual position and marks the session dirty.
    Nothing is saved automatically; to_updates() produces the payload for the
    save endpoint and mark_saved() clears the dirty flag after a successful save.
    """

    def __init__(self, artworks: Iterable[SortableArtwork]):
        self.items: List[SortableArtwork] = sorted(
            artworks, key=lambda a: a.global_display_order
        )
        self.dirty = False
        self._drag_index: Optional[int] = None

    def drag_start(self, index: int) -> None:
        if not 0 <= index < len(self.items):
            raise IndexError(f"Cannot drag item {index}; list has {len(self.items)} items")
        self._drag_index = index

    def drop(self, target_index: int) -> None:
        if self._drag_index is None:
            raise RuntimeError("drop() called without drag_start()")

        source_index, self._drag_index = self._drag_index, None
        if source_index == target_index:
            return

        self.items = renumber(move_item(self.items, source_index, target_index))
        self.dirty = True

    def move(self, source_index: int, target_index: int) -> None:
        """Drag and drop in one step."""
        self.drag_start(source_index)
        self.drop(target_index)

    def to_updates(self) -> List[GlobalOrderUpdate]:
        # Position based, so saving an untouched list still yields a dense 1..N order
        return [
            GlobalOrderUpdate(id=item.id, global_display_order=position)
            for position, item in enumerate(self.items, start=1)
        ]

    def mark_saved(self) -> None:
        self.dirty = False


def shuffled_orders(count: int, rng: Optional[random.Random] = None) -> List[int]:
    """
    Return a uniformly shuffled permutation of 1..count (Fisher-Yates).

    Args:
        count: Number of order values to generate
        rng: Random source (defaults to the module-level generator)

    Returns:
        list[int]: Every integer in 1..count exactly once
    """
    rng = rng or random
    orders = list(range(1, count + 1))
    for i in range(len(orders) - 1, 0, -1):
        j = rng.randint(0, i)
        orders[i], orders[j] = orders[j], orders[i]
    return orders


def plan_random_orders(artwork_ids: Sequence[int], rng: Optional[random.Random] = None) -> Dict[int, int]:
    """Map each artwork id to a unique random global order."""
    return dict(zip(artwork_ids, shuffled_orders(len(artwork_ids), rng)))


def plan_populated_orders(artworks: Iterable) -> List[dict]:
    """
    Build initial artist and global display orders.

    Artworks must be given oldest first. They are grouped by artist, groups taken
    in ascending artist id; inside each group visible artworks are numbered 1..
    for artist_display_order while global_display_order counts across all
    groups. Hidden artworks get no entry.

    Returns:
        list[dict]: {"id", "artist_display_order", "global_display_order"} rows
    """
    by_artist: Dict[int, list] = {}
    for artwork in artworks:
        by_artist.setdefault(artwork.artist_id, []).append(artwork)

    plan = []
    global_order = 1
    for artist_id in sorted(by_artist):
        artist_artworks = by_artist[artist_id]
        artist_order = 1
        for artwork in artist_artworks:
            if not artwork.is_visible:
                continue
            plan.append({
                "id": artwork.id,
                "artist_display_order": artist_order,
                "global_display_order": global_order,
            })
            artist_order += 1
            global_order += 1
    return plan
