"""
Snapshot export and import for growth worlds.

A snapshot is a JSON document holding the tick counter, the pause flag,
every path (policy, closed flag, nodes) and the boundary regions. Regions
attached to several paths are written once and relinked on load, so the
sharing survives a round trip.
"""

from typing import Any, Dict, List, Optional, Union
from pathlib import Path as FilePath
import json
import logging

from growth_policies import OperationReport
from ..core.bounds import BoundaryRegion
from ..core.path import Path
from ..core.world import World

logger = logging.getLogger(__name__)

SNAPSHOT_FORMAT = "diffgrowth-snapshot"
SNAPSHOT_VERSION = 1


def world_to_dict(world: World) -> Dict[str, Any]:
    """Convert a world to a JSON-serializable snapshot dict."""
    regions: List[BoundaryRegion] = []
    paths = []

    for path in world.paths:
        refs = []
        for region in path.bounds:
            for i, known in enumerate(regions):
                if known is region:
                    refs.append(i)
                    break
            else:
                regions.append(region)
                refs.append(len(regions) - 1)

        path_dict = path.to_dict()
        del path_dict["bounds"]
        path_dict["bound_refs"] = refs
        paths.append(path_dict)

    return {
        "format": SNAPSHOT_FORMAT,
        "version": SNAPSHOT_VERSION,
        "tick_count": world.tick_count,
        "is_paused": world.is_paused,
        "bounds": [region.to_dict() for region in regions],
        "paths": paths,
    }


def world_from_dict(d: Dict[str, Any], seed: Optional[int] = None) -> World:
    """
    Rebuild a world from a snapshot dict.

    Parameters
    ----------
    d : dict
        Snapshot produced by world_to_dict()
    seed : int, optional
        Seed for the new world's random source (random state is not saved)
    """
    if d.get("format") != SNAPSHOT_FORMAT:
        raise ValueError(f"Not a growth snapshot (format={d.get('format')!r})")

    regions = [BoundaryRegion.from_dict(bd) for bd in d.get("bounds", [])]

    world = World(seed=seed)
    for path_dict in d.get("paths", []):
        refs = path_dict.get("bound_refs")
        if refs is None:
            logger.warning("Snapshot path has no bound_refs; loading it without bounds")
            refs = []
        path = Path.from_dict(path_dict, bounds=[regions[i] for i in refs])
        world.add_path(path)

    if "tick_count" not in d:
        logger.warning("Snapshot has no tick_count; starting from 0")
    world.tick_count = int(d.get("tick_count", 0))
    world.is_paused = bool(d.get("is_paused", False))
    world.build_index()
    return world


def save_world_json(world: World, path: Union[str, FilePath]) -> FilePath:
    """
    Write a world snapshot as JSON.

    Returns
    -------
    Path
        The written file path
    """
    out = FilePath(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "w", encoding="utf-8") as fh:
        json.dump(world_to_dict(world), fh, indent=2)
    logger.info(f"Saved snapshot with {world.node_count} nodes to {out}")
    return out


def load_world_json(path: Union[str, FilePath], seed: Optional[int] = None) -> World:
    """Read a world snapshot written by save_world_json()."""
    with open(path, "r", encoding="utf-8") as fh:
        data = json.load(fh)
    return world_from_dict(data, seed=seed)


def save_report_json(report: OperationReport, path: Union[str, FilePath]) -> FilePath:
    """Write an OperationReport as JSON."""
    out = FilePath(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "w", encoding="utf-8") as fh:
        fh.write(report.to_json())
    return out
