"""
World: owns the paths and drives one growth tick per external frame.
"""

from typing import Callable, Iterable, List, Optional, Tuple
import logging
import numpy as np
from tqdm import tqdm

from growth_policies import OperationReport
from .errors import ConfigurationError
from .path import Path
from ..spatial.rtree_index import SpatialIndex

logger = logging.getLogger(__name__)


Renderer = Callable[[np.ndarray, bool], None]


class World:
    """
    Collection of paths sharing one spatial index.

    Every tick rebuilds the index from all nodes of all paths (bulk load,
    never incremental) and then updates each path in order. A path whose
    node count is above its cap is skipped and reported as done; the path
    itself never stops on its own.
    """

    def __init__(
        self,
        paths: Optional[Iterable[Path]] = None,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        max_entries: int = 9,
    ):
        """
        Initialize world.

        Parameters
        ----------
        paths : iterable of Path, optional
            Initial paths
        seed : int, optional
            Seed for the world random source (ignored if ``rng`` is given)
        rng : np.random.Generator, optional
            Random source handed to paths that have none
        max_entries : int
            Fan-out of the spatial index tree
        """
        if max_entries < 2:
            raise ConfigurationError(f"max_entries must be >= 2, got {max_entries}")

        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.spatial_index = SpatialIndex(max_entries=max_entries)

        self._paths: List[Path] = []
        self._cap_logged: set = set()
        self.is_paused = False
        self.tick_count = 0

        for path in paths or ():
            self.add_path(path)

        self.build_index()

    # ------------------------------------------------------------------
    # Path management
    # ------------------------------------------------------------------

    @property
    def paths(self) -> Tuple[Path, ...]:
        return tuple(self._paths)

    def add_path(self, path: Path) -> None:
        """Add a path; it inherits the world random source if it has none."""
        if not path.has_rng:
            path.rng = self.rng
        self._paths.append(path)

    def add_paths(self, paths: Iterable[Path]) -> None:
        for path in paths:
            self.add_path(path)

    def remove_path(self, path: Path) -> None:
        """Remove a path. Raises ValueError if the world does not own it."""
        for i, owned in enumerate(self._paths):
            if owned is path:
                del self._paths[i]
                self._cap_logged.discard(id(path))
                return
        raise ValueError("Path is not part of this world")

    def clear_paths(self) -> None:
        self._paths = []
        self._cap_logged.clear()

    @property
    def node_count(self) -> int:
        return sum(len(path) for path in self._paths)

    @property
    def done_paths(self) -> List[int]:
        """Indices of paths that hit their node cap."""
        return [i for i, path in enumerate(self._paths) if path.exceeds_max_nodes]

    @property
    def done(self) -> bool:
        """True when every path has hit its node cap (False with no paths)."""
        return bool(self._paths) and all(path.exceeds_max_nodes for path in self._paths)

    # ------------------------------------------------------------------
    # Pause control
    # ------------------------------------------------------------------

    def pause(self) -> None:
        self.is_paused = True
        logger.info("World paused")

    def resume(self) -> None:
        self.is_paused = False
        logger.info("World resumed")

    def toggle_pause(self) -> None:
        if self.is_paused:
            self.resume()
        else:
            self.pause()

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def build_index(self) -> None:
        """Rebuild the spatial index from every node of every path."""
        self.spatial_index.load(node for path in self._paths for node in path)

    def update(self) -> OperationReport:
        """
        Run one tick unless paused.

        Returns
        -------
        OperationReport
            Report with tick counters in ``metrics``
        """
        nodes_before = self.node_count
        report = OperationReport(operation="tick")

        if self.is_paused:
            report.metrics.update({
                "tick": self.tick_count,
                "paused": True,
                "nodes_before": nodes_before,
                "nodes_after": nodes_before,
                "nodes_split": 0,
                "nodes_pruned": 0,
                "nodes_injected": 0,
                "done_paths": self.done_paths,
            })
            return report

        self.build_index()
        self.tick_count += 1

        nodes_split = 0
        nodes_pruned = 0
        nodes_injected = 0

        for i, path in enumerate(self._paths):
            if path.exceeds_max_nodes:
                if id(path) not in self._cap_logged:
                    self._cap_logged.add(id(path))
                    logger.info(
                        f"Path {i} reached its node cap ({len(path)} > {path.policy.max_nodes}); "
                        f"no further updates"
                    )
                continue

            meta = path.update(self.spatial_index)
            nodes_split += meta["nodes_split"]
            nodes_pruned += meta["nodes_pruned"]

            interval = path.policy.node_injection_interval
            if interval > 0 and self.tick_count % interval == 0:
                if path.inject_random_node():
                    nodes_injected += 1

        report.metrics.update({
            "tick": self.tick_count,
            "paused": False,
            "nodes_before": nodes_before,
            "nodes_after": self.node_count,
            "nodes_split": nodes_split,
            "nodes_pruned": nodes_pruned,
            "nodes_injected": nodes_injected,
            "done_paths": self.done_paths,
        })
        return report

    def run(self, ticks: int, progress: bool = False) -> OperationReport:
        """
        Run up to ``ticks`` ticks, stopping early once every path is done.

        Parameters
        ----------
        ticks : int
            Maximum number of ticks
        progress : bool
            Show a tqdm progress bar

        Returns
        -------
        OperationReport
            Aggregate report (operation "run")
        """
        if ticks < 0:
            raise ValueError(f"ticks must be >= 0, got {ticks}")

        summary = OperationReport(operation="run")
        ticks_run = 0
        nodes_split = 0
        nodes_pruned = 0
        nodes_injected = 0

        pbar = tqdm(total=ticks, desc="Growing", unit="tick", disable=not progress)
        try:
            for _ in range(ticks):
                if self.done:
                    break
                report = self.update()
                if report.metrics["paused"]:
                    summary.add_warning("World is paused; no ticks were run")
                    break
                ticks_run += 1
                nodes_split += report.metrics["nodes_split"]
                nodes_pruned += report.metrics["nodes_pruned"]
                nodes_injected += report.metrics["nodes_injected"]
                pbar.update(1)
                pbar.set_postfix(nodes=report.metrics["nodes_after"])
        finally:
            pbar.close()

        summary.metrics.update({
            "ticks_run": ticks_run,
            "tick": self.tick_count,
            "node_count": self.node_count,
            "nodes_split": nodes_split,
            "nodes_pruned": nodes_pruned,
            "nodes_injected": nodes_injected,
            "done": self.done,
            "done_paths": self.done_paths,
        })
        return summary

    def draw(self, renderer: Renderer) -> None:
        """Hand each path's (points, closed) to a renderer callable."""
        for path in self._paths:
            renderer(path.to_array(), path.closed)
