"""
Bulk-loaded R-tree for radius and nearest-neighbor queries over 2D points.
"""

from typing import Any, Callable, Iterable, List, Optional, Tuple
import heapq
import itertools
import math


BBox = Tuple[float, float, float, float]  # (min_x, min_y, max_x, max_y)


def node_bbox(item: Any) -> BBox:
    """Degenerate bounding box of anything with a ``position`` point."""
    p = item.position
    return (p.x, p.y, p.x, p.y)


class _Entry:
    """Leaf item. The stored box is only used to pack the tree."""

    __slots__ = ["item", "min_x", "min_y", "max_x", "max_y"]

    def __init__(self, item: Any, bbox: BBox):
        self.item = item
        self.min_x, self.min_y, self.max_x, self.max_y = bbox


class _TreeNode:
    __slots__ = ["children", "leaf", "min_x", "min_y", "max_x", "max_y"]

    def __init__(self, children: list, leaf: bool):
        self.children = children
        self.leaf = leaf
        if children:
            self.min_x = min(c.min_x for c in children)
            self.min_y = min(c.min_y for c in children)
            self.max_x = max(c.max_x for c in children)
            self.max_y = max(c.max_y for c in children)
        else:
            self.min_x = self.min_y = math.inf
            self.max_x = self.max_y = -math.inf


def _axis_dist(k: float, lo: float, hi: float) -> float:
    if k < lo:
        return lo - k
    if k <= hi:
        return 0.0
    return k - hi


def _box_dist_sq(x: float, y: float, box) -> float:
    """Squared distance from a point to a box (0 inside)."""
    dx = _axis_dist(x, box.min_x, box.max_x)
    dy = _axis_dist(y, box.min_y, box.max_y)
    return dx * dx + dy * dy


def _bbox_dist_sq(x: float, y: float, bbox: BBox) -> float:
    dx = _axis_dist(x, bbox[0], bbox[2])
    dy = _axis_dist(y, bbox[1], bbox[3])
    return dx * dx + dy * dy


def _center_x(box) -> float:
    return box.min_x + box.max_x


def _center_y(box) -> float:
    return box.min_y + box.max_y


class SpatialIndex:
    """
    Balanced bounding-box tree rebuilt from scratch on every ``load``.

    Tree node boxes are computed once per ``load``. Leaf items are measured
    with ``to_bbox`` at query time, so an item that moved after the load is
    found and ordered by its current position as long as its leaf is still
    reached through the (stale) tree node boxes.
    Packing uses Sort-Tile-Recursive so all leaves sit at the same depth
    and every tree node holds at most ``max_entries`` children.
    """

    def __init__(
        self,
        max_entries: int = 9,
        to_bbox: Optional[Callable[[Any], BBox]] = None,
    ):
        """
        Initialize an empty index.

        Parameters
        ----------
        max_entries : int
            Maximum children per tree node (>= 2)
        to_bbox : callable, optional
            Maps an item to (min_x, min_y, max_x, max_y). Defaults to the
            degenerate box of ``item.position``.
        """
        if max_entries < 2:
            raise ValueError(f"max_entries must be >= 2, got {max_entries}")
        self.max_entries = max_entries
        self.to_bbox = to_bbox or node_bbox
        self._root = _TreeNode([], leaf=True)
        self._size = 0

    def clear(self) -> None:
        """Remove all items."""
        self._root = _TreeNode([], leaf=True)
        self._size = 0

    def load(self, items: Iterable[Any]) -> "SpatialIndex":
        """
        Replace the index contents with ``items`` (bulk load).

        Returns
        -------
        SpatialIndex
            self, for chaining
        """
        entries = [_Entry(item, self.to_bbox(item)) for item in items]
        self._size = len(entries)
        self._root = self._pack(entries)
        return self

    def _pack(self, entries: List[_Entry]) -> _TreeNode:
        m = self.max_entries
        level: list = entries
        leaf = True

        while len(level) > m:
            node_count = math.ceil(len(level) / m)
            slice_count = math.ceil(math.sqrt(node_count))
            slice_size = slice_count * m

            by_x = sorted(level, key=_center_x)
            parents = []
            for start in range(0, len(by_x), slice_size):
                column = sorted(by_x[start:start + slice_size], key=_center_y)
                for offset in range(0, len(column), m):
                    parents.append(_TreeNode(column[offset:offset + m], leaf))

            level = parents
            leaf = False

        return _TreeNode(list(level), leaf)

    def __len__(self) -> int:
        return self._size

    def height(self) -> int:
        """Number of tree levels (1 for a single leaf node)."""
        depth = 1
        node = self._root
        while not node.leaf:
            node = node.children[0]
            depth += 1
        return depth

    def all(self) -> List[Any]:
        """All indexed items, in leaf order."""
        result = []
        stack = [self._root]
        while stack:
            node = stack.pop()
            if node.leaf:
                result.extend(entry.item for entry in node.children)
            else:
                stack.extend(reversed(node.children))
        return result

    def search(self, min_x: float, min_y: float, max_x: float, max_y: float) -> List[Any]:
        """Items whose bounding box intersects the query box (edges inclusive)."""
        result = []
        stack = [self._root]
        while stack:
            node = stack.pop()
            for child in node.children:
                if node.leaf:
                    c_min_x, c_min_y, c_max_x, c_max_y = self.to_bbox(child.item)
                    if (
                        c_min_x <= max_x and c_max_x >= min_x
                        and c_min_y <= max_y and c_max_y >= min_y
                    ):
                        result.append(child.item)
                elif (
                    child.min_x <= max_x and child.max_x >= min_x
                    and child.min_y <= max_y and child.max_y >= min_y
                ):
                    stack.append(child)
        return result

    def knn(
        self,
        x: float,
        y: float,
        n: Optional[int] = None,
        predicate: Optional[Callable[[Any], bool]] = None,
        max_distance: Optional[float] = None,
    ) -> List[Any]:
        """
        Best-first nearest-neighbor search.

        Tree nodes and items share one priority queue keyed by squared
        distance from (x, y) to their bounding box. A tree node is expanded
        before any item at the same distance is emitted, so results come out
        in ascending distance. Candidates farther than ``max_distance`` are
        never queued.

        Parameters
        ----------
        x, y : float
            Query point
        n : int, optional
            Stop after this many results
        predicate : callable, optional
            Only items for which it returns True are emitted
        max_distance : float, optional
            Search radius (inclusive). None means unbounded.

        Returns
        -------
        list
            Matching items, nearest first. Empty when nothing matches.
        """
        if max_distance is not None and max_distance < 0:
            raise ValueError(f"max_distance must be >= 0, got {max_distance}")
        max_sq = None if max_distance is None else max_distance * max_distance

        result: List[Any] = []
        if n is not None and n <= 0:
            return result

        queue: list = []
        tiebreak = itertools.count()
        node: Optional[_TreeNode] = self._root

        while node is not None:
            is_item = 1 if node.leaf else 0
            for child in node.children:
                if is_item:
                    dist = _bbox_dist_sq(x, y, self.to_bbox(child.item))
                else:
                    dist = _box_dist_sq(x, y, child)
                if max_sq is None or dist <= max_sq:
                    heapq.heappush(queue, (dist, is_item, next(tiebreak), child))

            while queue and queue[0][1] == 1:
                candidate = heapq.heappop(queue)[3].item
                if predicate is None or predicate(candidate):
                    result.append(candidate)
                    if n is not None and len(result) >= n:
                        return result

            node = heapq.heappop(queue)[3] if queue else None

        return result

    def query_radius(self, x: float, y: float, radius: float) -> List[Any]:
        """All items within ``radius`` of (x, y), nearest first."""
        return self.knn(x, y, max_distance=radius)
