"""
Pydantic models for the process-area request and result
Field aliases match the JSON keys the map client reads
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# [lat, lon]
LatLon = List[float]


class ProcessAreaRequest(BaseModel):
    # Shape is checked by the polygon normalizer so it can report a client error
    polygon: Optional[Any] = None
    client_id: Optional[str] = Field(default=None, alias="clientId")

    model_config = ConfigDict(populate_by_name=True)


class AreaResult(BaseModel):
    area: float  # km²
    total_km_roads: float = Field(alias="totalKmRoads")
    total_km_trails: float = Field(alias="totalKmTrails")
    total_km: float = Field(alias="totalKm")
    density_roads: Optional[float] = Field(alias="densityRoads")  # km/km²
    density_trails: Optional[float] = Field(alias="densityTrails")
    density: Optional[float] = None
    density_defined: bool = Field(default=True, alias="densityDefined")
    road_segments: int = Field(default=0, alias="roadSegments")
    trail_segments: int = Field(default=0, alias="trailSegments")
    roads: Optional[List[List[LatLon]]] = None
    trails: Optional[List[List[LatLon]]] = None
    geometry_omitted: bool = Field(default=False, alias="geometryOmitted")
    units_total: int = Field(default=1, alias="unitsTotal")
    units_failed: int = Field(default=0, alias="unitsFailed")

    model_config = ConfigDict(populate_by_name=True)

    def to_response(self) -> dict:
        """JSON body for the map client; per-unit failures stay internal"""
        return self.model_dump(by_alias=True, exclude={"units_total", "units_failed"})
