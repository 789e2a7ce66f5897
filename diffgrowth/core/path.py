"""
Path: an ordered, open or closed chain of nodes that grows every tick.

Each tick visits the nodes in index order and runs, per node:

1. jitter (optional, applied to the committed position)
2. attraction toward the next and previous neighbors
3. repulsion away from nodes found in the shared spatial index
4. alignment toward the midpoint of both neighbors
5. boundary check (pins or releases the node)
6. commit

and then runs the split pass followed by the prune pass over the sequence.

Force stages blend the staged position toward their own target instead of
summing forces, so their order matters. In the default repulsion mode every
neighbor returned by the index overwrites the staged position in turn, and
since results come nearest first, the farthest neighbor in range decides the
push for that tick.
"""

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple
import logging
import numpy as np

from growth_policies import GrowthPolicy
from .bounds import BoundaryRegion, violates_any
from .node import Node
from .types import lerp_scalar
from ..spatial.rtree_index import SpatialIndex

logger = logging.getLogger(__name__)


class Path:
    """
    Ordered sequence of Nodes owning the growth algorithm.

    If ``closed``, the first node's previous neighbor is the last node and
    vice versa. If open, the ends have a single neighbor. Insertions and
    removals are positional and never reorder the remaining nodes.
    """

    def __init__(
        self,
        nodes: Optional[Iterable[Node]] = None,
        policy: Optional[GrowthPolicy] = None,
        closed: bool = True,
        bounds: Optional[Iterable[BoundaryRegion]] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Initialize path.

        Parameters
        ----------
        nodes : iterable of Node, optional
            Initial nodes in traversal order
        policy : GrowthPolicy, optional
            Forces, spacing and node cap. Defaults to GrowthPolicy().
        closed : bool
            Whether the last node connects back to the first
        bounds : iterable of BoundaryRegion, optional
            Regions attached from the start
        rng : np.random.Generator, optional
            Random source for jitter and node injection
        """
        if policy is None:
            policy = GrowthPolicy()
        self.policy = policy.ensure_valid()
        self.closed = bool(closed)

        self._nodes: List[Node] = list(nodes) if nodes is not None else []
        self._bounds: List[BoundaryRegion] = []
        for region in bounds or ():
            self.attach_bound(region)

        self._rng = rng

    @classmethod
    def from_points(
        cls,
        points,
        policy: Optional[GrowthPolicy] = None,
        closed: bool = True,
        bounds: Optional[Iterable[BoundaryRegion]] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> "Path":
        """Build a path from an (N, 2) array-like of positions."""
        if policy is None:
            policy = GrowthPolicy()
        policy.ensure_valid()
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        nodes = [Node(x, y, policy, check_policy=False) for x, y in pts]
        return cls(nodes, policy=policy, closed=closed, bounds=bounds, rng=rng)

    # ------------------------------------------------------------------
    # Sequence access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __getitem__(self, index: int) -> Node:
        return self._nodes[index]

    def __repr__(self) -> str:
        kind = "closed" if self.closed else "open"
        return f"Path({len(self._nodes)} nodes, {kind}, {len(self._bounds)} bounds)"

    @property
    def nodes(self) -> Tuple[Node, ...]:
        """Read-only view of the nodes in traversal order."""
        return tuple(self._nodes)

    @property
    def rng(self) -> np.random.Generator:
        if self._rng is None:
            self._rng = np.random.default_rng()
        return self._rng

    @rng.setter
    def rng(self, value: Optional[np.random.Generator]) -> None:
        self._rng = value

    @property
    def has_rng(self) -> bool:
        """Whether a random source was injected or already created."""
        return self._rng is not None

    @property
    def exceeds_max_nodes(self) -> bool:
        """True once the node count is above the policy cap."""
        return len(self._nodes) > self.policy.max_nodes

    def to_array(self) -> np.ndarray:
        """Node positions as an (N, 2) float array in traversal order."""
        coords = [(node.position.x, node.position.y) for node in self._nodes]
        return np.array(coords, dtype=np.float64).reshape(-1, 2)

    # ------------------------------------------------------------------
    # Topology edits
    # ------------------------------------------------------------------

    def create_node(self, x: float, y: float) -> Node:
        """Create a node using this path's policy (not added)."""
        return Node(x, y, self.policy, check_policy=False)

    def midpoint_node(self, a: Node, b: Node) -> Node:
        """Create a node halfway between two nodes (not added)."""
        mid = a.position.midpoint(b.position)
        return Node(mid.x, mid.y, self.policy, check_policy=False)

    def add_node(self, node: Node) -> None:
        """Append a node at the end of the sequence."""
        self._nodes.append(node)

    def insert_node_at(self, index: int, node: Node) -> None:
        """
        Insert a node so that it ends up at ``index``.

        ``index == len(path)`` appends. Raises IndexError outside [0, len].
        """
        if not 0 <= index <= len(self._nodes):
            raise IndexError(f"Insert index {index} out of range for {len(self._nodes)} nodes")
        self._nodes.insert(index, node)

    def remove_node_at(self, index: int) -> Node:
        """Remove and return the node at ``index``."""
        if not 0 <= index < len(self._nodes):
            raise IndexError(f"Node index {index} out of range for {len(self._nodes)} nodes")
        return self._nodes.pop(index)

    def get_connected_nodes(self, index: int) -> Tuple[Optional[Node], Optional[Node]]:
        """
        Get the (previous, next) neighbors of the node at ``index``.

        Missing neighbors are None: both for paths with fewer than two
        nodes, and at the ends of an open path.
        """
        n = len(self._nodes)
        if not 0 <= index < n:
            raise IndexError(f"Node index {index} out of range for {n} nodes")
        if n < 2:
            return None, None

        if self.closed:
            return self._nodes[(index - 1) % n], self._nodes[(index + 1) % n]

        previous = self._nodes[index - 1] if index > 0 else None
        following = self._nodes[index + 1] if index < n - 1 else None
        return previous, following

    # ------------------------------------------------------------------
    # Boundary regions
    # ------------------------------------------------------------------

    @property
    def bounds(self) -> Tuple[BoundaryRegion, ...]:
        return tuple(self._bounds)

    def attach_bound(self, region: BoundaryRegion) -> None:
        """Attach a region; attaching the same region twice is a no-op."""
        if not any(region is attached for attached in self._bounds):
            self._bounds.append(region)

    def detach_bound(self, region: BoundaryRegion) -> None:
        """Detach a region. Raises ValueError if it is not attached."""
        for i, attached in enumerate(self._bounds):
            if attached is region:
                del self._bounds[i]
                return
        raise ValueError("Boundary region is not attached to this path")

    # ------------------------------------------------------------------
    # Growth
    # ------------------------------------------------------------------

    def update(self, index: SpatialIndex) -> dict:
        """
        Run one growth tick.

        Parameters
        ----------
        index : SpatialIndex
            Index over every node of every path, rebuilt by the caller

        Returns
        -------
        dict
            Metadata with nodes_split, nodes_pruned and node_count
        """
        use_jitter = self.policy.use_brownian_motion

        for i in range(len(self._nodes)):
            node = self._nodes[i]

            if use_jitter:
                self.apply_brownian_motion(i)

            node.begin_tick()
            self.apply_attraction(i)
            self.apply_repulsion(i, index)
            self.apply_alignment(i)
            self.apply_bounds(i)

            node.commit()

        nodes_split = self.split_edges()
        nodes_pruned = self.prune_nodes()

        logger.debug(
            f"Path tick: split={nodes_split} pruned={nodes_pruned} nodes={len(self._nodes)}"
        )

        return {
            "nodes_split": nodes_split,
            "nodes_pruned": nodes_pruned,
            "node_count": len(self._nodes),
        }

    def apply_brownian_motion(self, index: int) -> None:
        """Offset the committed position by a uniform random amount per axis."""
        half = self.policy.brownian_motion_range / 2
        position = self._nodes[index].position
        position.x += float(self.rng.uniform(-half, half))
        position.y += float(self.rng.uniform(-half, half))

    def apply_attraction(self, index: int) -> None:
        """
        Blend toward each neighbor farther than the smaller min_distance.

        The next neighbor is blended first, then the previous one.
        """
        node = self._nodes[index]
        if node.is_fixed:
            return

        previous, following = self.get_connected_nodes(index)
        for neighbor in (following, previous):
            if neighbor is None:
                continue
            least_min_distance = min(node.min_distance, neighbor.min_distance)
            if node.distance_to(neighbor) > least_min_distance:
                node.next_position.lerp(neighbor.position, self.policy.attraction_force)

    def apply_repulsion(self, index: int, spatial_index: SpatialIndex) -> None:
        """
        Push away from every indexed node within repulsion_radius.

        ``last_write``: each neighbor in query order overwrites the staged
        position with a push computed from the current position.
        ``accumulate``: the pushes of all neighbors are summed and added to
        the staged position.
        """
        node = self._nodes[index]
        position = node.position
        neighbors = spatial_index.query_radius(position.x, position.y, node.repulsion_radius)
        if not neighbors:
            return

        force = self.policy.repulsion_force

        if self.policy.repulsion_mode == "accumulate":
            push_x = 0.0
            push_y = 0.0
            for other in neighbors:
                push_x += (position.x - other.position.x) * force
                push_y += (position.y - other.position.y) * force
            node.next_position.x += push_x
            node.next_position.y += push_y
            return

        for other in neighbors:
            node.next_position.x = lerp_scalar(position.x, other.position.x, -force)
            node.next_position.y = lerp_scalar(position.y, other.position.y, -force)

    def apply_alignment(self, index: int) -> None:
        """Blend toward the midpoint of both neighbors when both exist."""
        node = self._nodes[index]
        if node.is_fixed:
            return

        previous, following = self.get_connected_nodes(index)
        if previous is None or following is None:
            return

        midpoint = previous.position.midpoint(following.position)
        node.next_position.lerp(midpoint, self.policy.alignment_force)

    def apply_bounds(self, index: int) -> None:
        """Pin the node if it violates any attached region, release it otherwise."""
        node = self._nodes[index]
        node.is_fixed = violates_any(node.position, self._bounds)

    def split_edges(self) -> int:
        """
        Insert a midpoint node on every edge at least max_distance long.

        Edges are those present when the pass starts; new edges are not
        re-examined until the next tick. The closing edge of a closed path
        gets its midpoint appended at the end of the sequence.

        Returns
        -------
        int
            Number of nodes inserted
        """
        nodes = self._nodes
        if len(nodes) < 2:
            return 0

        max_distance = self.policy.max_distance
        result: List[Node] = []
        closing_midpoint: Optional[Node] = None
        inserted = 0

        for i, node in enumerate(nodes):
            if i == 0:
                if self.closed and node.distance_to(nodes[-1]) >= max_distance:
                    closing_midpoint = self.midpoint_node(node, nodes[-1])
                    inserted += 1
            else:
                previous = nodes[i - 1]
                if node.distance_to(previous) >= max_distance:
                    result.append(self.midpoint_node(node, previous))
                    inserted += 1
            result.append(node)

        if closing_midpoint is not None:
            result.append(closing_midpoint)

        self._nodes = result
        return inserted

    def prune_nodes(self) -> int:
        """
        Remove the previous neighbor of any node closer than min_distance.

        Indices are visited once, in ascending order, against the live
        sequence. When the previous neighbor of index i is removed, the
        node at i shifts into slot i - 1 and is not compared again; the
        pass carries on at i + 1. For i == 0 of a closed path the previous
        neighbor is the last node. Fixed neighbors are never removed.
        There is no lower limit on the node count: a path can shrink to a
        single node, after which the pass is a no-op.

        Returns
        -------
        int
            Number of nodes removed
        """
        nodes = self._nodes
        min_distance = self.policy.min_distance
        removed = 0

        i = 0
        while i < len(nodes) and len(nodes) >= 2:
            previous, _ = self.get_connected_nodes(i)
            if (
                previous is not None
                and not previous.is_fixed
                and nodes[i].distance_to(previous) <= min_distance
            ):
                nodes.pop(-1 if i == 0 else i - 1)
                removed += 1
            i += 1

        return removed

    def inject_random_node(self) -> bool:
        """
        Insert a midpoint before a randomly chosen node.

        The node is drawn from indices [1, N). Insertion only happens when
        the node has both neighbors and its edge to the previous one is
        longer than min_distance.

        Returns
        -------
        bool
            Whether a node was inserted
        """
        n = len(self._nodes)
        if n < 2:
            return False

        index = int(self.rng.integers(1, n))
        previous, following = self.get_connected_nodes(index)
        if previous is None or following is None:
            return False

        node = self._nodes[index]
        if node.distance_to(previous) <= self.policy.min_distance:
            return False

        self.insert_node_at(index, self.midpoint_node(node, previous))
        return True

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization (bounds stored by value)."""
        return {
            "closed": self.closed,
            "policy": self.policy.to_dict(),
            "nodes": [node.to_dict() for node in self._nodes],
            "bounds": [region.to_dict() for region in self._bounds],
        }

    @classmethod
    def from_dict(
        cls,
        d: dict,
        bounds: Optional[Sequence[BoundaryRegion]] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> "Path":
        """
        Create from dictionary.

        ``bounds`` replaces the regions stored in ``d`` so that callers can
        relink regions shared between paths.
        """
        policy = GrowthPolicy.from_dict(d.get("policy", {})).ensure_valid()
        nodes = [Node.from_dict(nd, policy, check_policy=False) for nd in d.get("nodes", [])]
        if bounds is None:
            bounds = [BoundaryRegion.from_dict(bd) for bd in d.get("bounds", [])]
        return cls(nodes, policy=policy, closed=d.get("closed", True), bounds=bounds, rng=rng)
