"""
Plant: the stem hierarchy and its shared resources.

Stems are stored in a ``StemPool``: fixed-size pools of slots addressed by
integer handles. Freed slots go onto a per-pool free list and are reused
last-in first-out, so a stem deleted and re-added lands on the same handle.

Structural edits come in two flavours. ``delete_stem`` destroys a stem and
its whole subtree. ``extract_stem``/``extract_stems`` detach stems and hand
them to the caller as ``ExtractedStem`` records, which ``reinsert_stem``/
``reinsert_stems`` put back on their original handles and neighbours.
"""

from dataclasses import dataclass
from typing import Any, Iterator, List, Optional
import logging

from plant_policies import PathPolicy

from ..math import vec3
from .curve import Curve
from .ids import IDGenerator
from .path import RadiusProfile, VolumetricPath
from .spline import Spline
from .stem import Stem

logger = logging.getLogger(__name__)

POOL_CAPACITY = 100


class PlantError(Exception):
    """Raised for operations on stems that do not belong to the plant."""
    pass


class _Pool:
    __slots__ = ("id", "slots", "free")

    def __init__(self, pool_id: int, capacity: int):
        self.id = pool_id
        self.slots: List[Optional[Stem]] = [None] * capacity
        self.free: List[int] = list(reversed(range(capacity)))


class StemPool:
    """
    Arena of stem slots grouped into pools of ``capacity`` slots.

    Handles are stable for the lifetime of a stem: handle ``h`` lives in
    pool ``h // capacity + 1`` at slot ``h % capacity``.

    Parameters
    ----------
    capacity : int
        Slots per pool
    id_gen : IDGenerator, optional
        Handed to every allocated stem for leaf IDs
    """

    def __init__(self, capacity: int = POOL_CAPACITY, id_gen: Optional[IDGenerator] = None):
        self.capacity = capacity
        self.id_gen = id_gen
        self._pools: List[_Pool] = []

    def _locate(self, handle: int):
        index, slot = divmod(handle, self.capacity)
        if handle < 0 or index >= len(self._pools):
            return None, slot
        return self._pools[index], slot

    def _occupy(self, pool: _Pool, slot: int) -> Stem:
        handle = (pool.id - 1) * self.capacity + slot
        stem = Stem(handle, self, self.id_gen)
        pool.slots[slot] = stem
        return stem

    def allocate(self) -> Stem:
        """Create a stem in the first pool with a free slot."""
        for pool in self._pools:
            if pool.free:
                return self._occupy(pool, pool.free.pop())
        pool = _Pool(len(self._pools) + 1, self.capacity)
        self._pools.append(pool)
        logger.debug(f"Created stem pool {pool.id}")
        return self._occupy(pool, pool.free.pop())

    def allocate_at(self, handle: int) -> bool:
        """
        Reserve the slot of ``handle`` for a stem placed with ``place``.

        Returns ``False`` if the slot is already live.
        """
        while handle // self.capacity >= len(self._pools):
            self._pools.append(_Pool(len(self._pools) + 1, self.capacity))
        pool, slot = self._locate(handle)
        if pool.slots[slot] is not None or slot not in pool.free:
            return False
        pool.free.remove(slot)
        return True

    def place(self, stem: Stem) -> None:
        """Store an existing stem record in its reserved slot."""
        pool, slot = self._locate(stem.handle)
        stem._pool = self
        pool.slots[slot] = stem

    def deallocate(self, stem: Stem) -> int:
        """
        Free the slot of ``stem`` without touching the stem record.

        Returns
        -------
        int
            Free slots remaining in the stem's pool
        """
        if stem.handle is None:
            raise ValueError("Stem was not allocated from a pool")
        pool, slot = self._locate(stem.handle)
        if pool is None or pool.slots[slot] is not stem:
            raise ValueError(f"Handle {stem.handle} is not live")
        pool.slots[slot] = None
        pool.free.append(slot)
        return len(pool.free)

    def get(self, handle: int) -> Optional[Stem]:
        pool, slot = self._locate(handle)
        if pool is None:
            return None
        return pool.slots[slot]

    def contains(self, stem: Stem) -> bool:
        return stem.handle is not None and self.get(stem.handle) is stem

    def pool_id(self, stem: Stem) -> int:
        return stem.handle // self.capacity + 1

    def remaining(self, pool_id: int) -> int:
        return len(self._pools[pool_id - 1].free)

    @property
    def pool_count(self) -> int:
        return len(self._pools)

    @property
    def pool_capacity(self) -> int:
        return self.capacity

    def clear(self) -> None:
        self._pools = []


@dataclass
class ExtractedStem:
    """
    A stem detached from the plant, owned by the caller.

    Attributes:
        stem: The detached stem record.
        handle: Handle the stem occupied.
        parent: Handle of the former parent (``None`` for the root).
        next_sibling: Handle of the former next sibling.
        prev_sibling: Handle of the former previous sibling.
    """
    stem: Stem
    handle: int
    parent: Optional[int] = None
    next_sibling: Optional[int] = None
    prev_sibling: Optional[int] = None


class Plant:
    """
    Stem hierarchy plus shared curve and material libraries.

    Parameters
    ----------
    id_gen : IDGenerator, optional
        ID source for leaves; a new generator is created if omitted
    path_policy : PathPolicy, optional
        Sampling and radius defaults for new stems
    """

    def __init__(self, id_gen: Optional[IDGenerator] = None, path_policy=None):
        self.id_gen = id_gen or IDGenerator()
        self.path_policy = path_policy or PathPolicy()
        self.pool = StemPool(POOL_CAPACITY, self.id_gen)
        self.root_handle: Optional[int] = None
        self.curves: List[Curve] = []
        self.materials: List[Any] = []

    def __repr__(self) -> str:
        return f"Plant(stems={sum(1 for _ in self.iter_stems())})"

    def _check_member(self, stem: Stem) -> None:
        if stem is None or not self.pool.contains(stem):
            raise PlantError(f"{stem!r} does not belong to this plant")

    def _new_path(self) -> VolumetricPath:
        policy = self.path_policy
        profile = RadiusProfile(
            Spline(policy.radius_curve), policy.min_radius, policy.max_radius
        )
        return VolumetricPath(resolution=policy.resolution, profile=profile)

    def get_root(self) -> Optional[Stem]:
        if self.root_handle is None:
            return None
        return self.pool.get(self.root_handle)

    def create_root(self) -> Stem:
        """Replace the whole hierarchy with a single new root."""
        self.remove_root()
        return self.add_stem(None)

    def add_stem(self, parent: Optional[Stem]) -> Stem:
        """
        Create a stem as the first child of ``parent``.

        A ``None`` parent creates the root.
        """
        if parent is None:
            if self.root_handle is not None:
                raise PlantError("Plant already has a root")
        else:
            self._check_member(parent)

        stem = self.pool.allocate()
        stem.path = self._new_path()
        if parent is None:
            self.root_handle = stem.handle
        else:
            self._link_first(stem, parent)
            stem._reposition(parent)
        logger.debug(f"Added stem {stem.handle} under {parent.handle if parent else None}")
        return stem

    def _link_first(self, stem: Stem, parent: Stem) -> None:
        stem.parent_handle = parent.handle
        stem.depth = parent.depth + 1
        stem.prev_handle = None
        stem.next_handle = parent.child_handle
        first = parent.child
        if first is not None:
            first.prev_handle = stem.handle
        parent.child_handle = stem.handle

    def _link_after(self, stem: Stem, previous: Stem) -> None:
        stem.parent_handle = previous.parent_handle
        stem.depth = previous.depth
        stem.prev_handle = previous.handle
        stem.next_handle = previous.next_handle
        following = previous.sibling
        if following is not None:
            following.prev_handle = stem.handle
        previous.next_handle = stem.handle

    def _link_last(self, stem: Stem, parent: Stem) -> None:
        last = None
        for last in parent.iter_children():
            pass
        if last is None:
            self._link_first(stem, parent)
        else:
            self._link_after(stem, last)

    def _unlink(self, stem: Stem) -> None:
        previous = stem.prev_sibling
        following = stem.sibling
        parent = stem.parent
        if previous is not None:
            previous.next_handle = stem.next_handle
        if following is not None:
            following.prev_handle = stem.prev_handle
        if parent is not None and parent.child_handle == stem.handle:
            parent.child_handle = stem.next_handle
        if self.root_handle == stem.handle:
            self.root_handle = None

    def delete_stem(self, stem: Stem) -> None:
        """Destroy ``stem`` and its entire subtree."""
        self._check_member(stem)
        self._unlink(stem)
        for descendant in list(_iter_subtree(stem)):
            self.pool.deallocate(descendant)
        logger.debug(f"Deleted stem {stem.handle} and its descendants")

    def remove_root(self) -> None:
        root = self.get_root()
        if root is not None:
            self.delete_stem(root)
        self.pool.clear()
        self.root_handle = None

    def extract_stem(self, stem: Stem) -> ExtractedStem:
        """
        Detach a childless stem and transfer it to the caller.

        The stem's slot is freed but the stem is not destroyed; hand the
        record to ``reinsert_stem`` to undo the extraction.
        """
        self._check_member(stem)
        if stem.child_handle is not None:
            raise ValueError(f"{stem!r} has children; use extract_stems")
        extracted = ExtractedStem(
            stem, stem.handle, stem.parent_handle, stem.next_handle, stem.prev_handle
        )
        self._unlink(stem)
        self.pool.deallocate(stem)
        stem.parent_handle = None
        stem.next_handle = None
        stem.prev_handle = None
        logger.debug(f"Extracted stem {stem.handle}")
        return extracted

    def extract_stems(self, stem: Stem) -> List[ExtractedStem]:
        """
        Detach ``stem`` and its subtree, children before parents.

        Earlier siblings are extracted first, so when the records are
        restored in reverse each next sibling is already back in place.
        """
        self._check_member(stem)
        extractions: List[ExtractedStem] = []
        self._extract_recursive(stem, extractions)
        return extractions

    def _extract_recursive(self, stem: Stem, extractions: List[ExtractedStem]) -> None:
        for child in list(stem.iter_children()):
            self._extract_recursive(child, extractions)
        extractions.append(self.extract_stem(stem))

    def reinsert_stem(self, extracted: ExtractedStem) -> Stem:
        """
        Put an extracted stem back on its handle and former neighbours.

        Raises
        ------
        PlantError
            If the handle is taken or the former parent is gone
        """
        stem = extracted.stem
        parent = None
        if extracted.parent is not None:
            parent = self.pool.get(extracted.parent)
            if parent is None:
                raise PlantError(f"Parent {extracted.parent} of stem {extracted.handle} is gone")
        elif self.root_handle is not None:
            raise PlantError("Plant already has a root")

        if not self.pool.allocate_at(extracted.handle):
            raise PlantError(f"Handle {extracted.handle} is already in use")
        stem.handle = extracted.handle
        stem.child_handle = None
        self.pool.place(stem)

        if parent is None:
            stem.parent_handle = None
            stem.depth = 0
            self.root_handle = stem.handle
        else:
            following = self.pool.get(extracted.next_sibling) \
                if extracted.next_sibling is not None else None
            previous = self.pool.get(extracted.prev_sibling) \
                if extracted.prev_sibling is not None else None
            if following is not None and following.parent_handle == parent.handle:
                if following.prev_sibling is None:
                    self._link_first(stem, parent)
                else:
                    self._link_after(stem, following.prev_sibling)
            elif extracted.next_sibling is None:
                self._link_last(stem, parent)
            elif previous is not None and previous.parent_handle == parent.handle:
                self._link_after(stem, previous)
            else:
                self._link_first(stem, parent)
            stem._reposition(parent)
        logger.debug(f"Reinserted stem {stem.handle}")
        return stem

    def reinsert_stems(self, extractions: List[ExtractedStem]) -> None:
        """Undo ``extract_stems``; records are restored parents first."""
        for extracted in reversed(extractions):
            self.reinsert_stem(extracted)

    def insert_stem(self, extracted: ExtractedStem, parent: Stem) -> Stem:
        """
        Attach an extracted stem as the first child of a new parent.

        The stem keeps its handle when it is free, otherwise it moves to a
        fresh slot.
        """
        self._check_member(parent)
        stem = extracted.stem
        if self.pool.contains(stem):
            raise ValueError(f"{stem!r} is still attached")
        if self.pool.allocate_at(extracted.handle):
            stem.handle = extracted.handle
            self.pool.place(stem)
        else:
            replacement = self.pool.allocate()
            stem.handle = replacement.handle
            self.pool.place(stem)
        stem.child_handle = None
        self._link_first(stem, parent)
        stem.path.generate(True)
        stem._reposition(parent)
        logger.debug(f"Inserted stem {stem.handle} under {parent.handle}")
        return stem

    def iter_stems(self) -> Iterator[Stem]:
        """Pre-order traversal from the root."""
        root = self.get_root()
        if root is not None:
            yield from _iter_subtree(root)

    def get_radius(self, stem: Stem, index: int) -> float:
        """Radius of ``stem`` at sample ``index`` of its path."""
        return stem.path.get_radius(index)

    def get_intermediate_radius(self, stem: Stem, t: float) -> float:
        """Radius of ``stem`` at arc-length fraction ``t``."""
        return stem.path.get_intermediate_radius(t)

    def add_curve(self, curve: Curve) -> int:
        self.curves.append(curve.copy())
        return len(self.curves) - 1

    def update_curve(self, curve: Curve, index: int) -> None:
        self.curves[index] = curve.copy()

    def remove_curve(self, index: int) -> None:
        del self.curves[index]

    def get_curve(self, index: int) -> Curve:
        return self.curves[index].copy()

    def get_curves(self) -> List[Curve]:
        return self.curves

    def add_material(self, material: Any) -> int:
        self.materials.append(material)
        return len(self.materials) - 1

    def update_material(self, material: Any, index: int) -> None:
        self.materials[index] = material

    def remove_material(self, index: int) -> None:
        """Drop a material; stems using it or later entries are renumbered."""
        del self.materials[index]
        for stem in self.iter_stems():
            for kind, material in enumerate(stem.materials):
                if material == index:
                    stem.materials[kind] = 0
                elif material > index:
                    stem.materials[kind] = material - 1

    def get_material(self, index: int) -> Any:
        return self.materials[index]

    def set_default(self) -> Stem:
        """Replace the plant with a single upright root stem."""
        root = self.create_root()
        spline = Spline(controls=[
            vec3(0.0, 0.0, 0.0),
            vec3(0.0, 1.0, 0.0),
            vec3(0.0, 2.0, 0.0),
            vec3(0.0, 3.0, 0.0),
        ])
        path = self._new_path()
        path.set_spline(spline)
        path.set_radius(Spline(controls=[vec3(0.0, 0.0, 1.0), vec3(1.0, 0.0, 0.0)], degree=1))
        root.set_path(path)
        return root


def _iter_subtree(stem: Stem) -> Iterator[Stem]:
    stack = [stem]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(current.iter_children())))


__all__ = [
    "Plant",
    "PlantError",
    "StemPool",
    "ExtractedStem",
    "POOL_CAPACITY",
]
