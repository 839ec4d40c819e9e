"""
Tile planning

Small areas are fetched with one Overpass query over the polygon itself.
Large areas are split into a regular grid of square tiles; only tiles that
touch the polygon are kept so no query is wasted on empty cells.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from loguru import logger
from shapely.prepared import prep

from .geometry_utils import BoundingBox, Coord, Polygon
from ..config import TilingConfig, get_config


@dataclass(frozen=True)
class ProcessingUnit:
    """One Overpass query and the region its segments are attributed to"""
    index: int
    query_ring: Tuple[Coord, ...]  # Closed [lon, lat] ring sent to Overpass
    bounds: BoundingBox  # Midpoint pre-filter
    is_tile: bool = False

    @property
    def exclusive_max(self) -> bool:
        # Grid cells share edges; the whole-polygon unit does not
        return self.is_tile


class TilePlanner:
    """Chooses between single-query mode and tile-subdivision mode"""

    def __init__(self, tiling: Optional[TilingConfig] = None):
        self.tiling = tiling or get_config().tiling

    def plan(self, polygon: Polygon, bbox: BoundingBox, area_km2: float) -> List[ProcessingUnit]:
        """
        Build the ordered list of processing units for a polygon

        Args:
            polygon: Normalized polygon
            bbox: Bounding box of the polygon
            area_km2: Geodesic area of the polygon

        Returns:
            A single unit covering the polygon when area is at or below the
            threshold, otherwise one unit per intersecting grid tile
        """
        if area_km2 <= self.tiling.area_threshold_km2:
            logger.info(f"Area {area_km2:.2f} km² <= {self.tiling.area_threshold_km2} km², using single query")
            return [ProcessingUnit(index=0, query_ring=polygon.ring, bounds=bbox)]

        units = [
            ProcessingUnit(index=i, query_ring=tile.ring(), bounds=tile, is_tile=True)
            for i, tile in enumerate(self.grid_tiles(polygon, bbox))
        ]
        logger.info(f"Area {area_km2:.2f} km² > {self.tiling.area_threshold_km2} km², "
                    f"split into {len(units)} tiles of {self.tiling.tile_size_deg}°")
        return units

    def grid_tiles(self, polygon: Polygon, bbox: BoundingBox) -> List[BoundingBox]:
        """Square grid cells over bbox that intersect the polygon, row-major from south-west"""
        step = self.tiling.tile_size_deg
        # One extra cell when the extent is an exact multiple of step, so the
        # polygon max edge never lands on an excluded half-open tile edge
        cols = math.floor(bbox.width / step) + 1
        rows = math.floor(bbox.height / step) + 1

        shape = prep(polygon.to_shapely())
        tiles = []
        skipped = 0
        # Edges come from the grid index so neighbours share them bit for bit
        xs = [bbox.min_x + i * step for i in range(cols + 1)]
        ys = [bbox.min_y + j * step for j in range(rows + 1)]
        for row in range(rows):
            for col in range(cols):
                tile = BoundingBox(xs[col], ys[row], xs[col + 1], ys[row + 1])
                if shape.intersects(tile.to_shapely()):
                    tiles.append(tile)
                else:
                    skipped += 1

        logger.debug(f"Grid {cols}x{rows}: kept {len(tiles)} tiles, skipped {skipped} outside polygon")
        return tiles
