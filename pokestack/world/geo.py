"""Geographic helpers: locations, metric offsets and random placement.

Offsets are expressed in meters on an equirectangular approximation of a
spherical earth; longitudes wrap into [-180, 180] and latitudes reflect over
the poles.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional

from pokestack.core.rng import RandomSource, default_rng

EARTH_RADIUS_MT = 6378137
MAX_MOVE_DIST_SQ = 25e8  # 50 km per move

@dataclass(frozen=True)
class Location:
    lng: float = 0.0
    lat: float = 0.0

    def to_dict(self) -> dict:
        return {"lng": self.lng, "lat": self.lat}

@dataclass(frozen=True)
class Offset:
    horz: float
    vert: float

def offset_dist_sq(offset: Offset) -> float:
    return offset.horz * offset.horz + offset.vert * offset.vert

def _sign(v: float) -> float:
    return math.copysign(1.0, v) if v else 0.0

def offset_location(loc: Location, offset: Offset) -> Location:
    new_lat = loc.lat + 180 * offset.vert / (math.pi * EARTH_RADIUS_MT)
    lat_rad = ((loc.lat + new_lat) / 2) * math.pi / 180
    new_lng = loc.lng + 180 * offset.horz / (math.pi * EARTH_RADIUS_MT * math.cos(lat_rad))

    # remainders keep the sign of the dividend
    new_lng = math.fmod(new_lng, 360)
    new_lat = math.fmod(new_lat, 180)
    if new_lng > 180 or new_lng < -180:
        new_lng = new_lng - _sign(new_lng) * 360
    if new_lat > 90 or new_lat < -90:
        new_lat = _sign(new_lat) * 180 - new_lat
        new_lng = new_lng - _sign(new_lng) * 180
    return Location(new_lng, new_lat)

def random_location(center: Optional[Location] = None, max_radius: float = 10000,
                    rng: Optional[RandomSource] = None) -> Location:
    """Uniform point on the globe, or within ``max_radius`` meters of ``center``."""
    rng = rng or default_rng()
    if center is None:
        return Location(rng.uniform(-180, 180), rng.uniform(-90, 90))
    radius = rng.uniform(0, max_radius)
    angle = rng.uniform(-math.pi, math.pi)
    return offset_location(center, Offset(radius * math.cos(angle), radius * math.sin(angle)))

__all__ = ["Location", "Offset", "offset_dist_sq", "offset_location", "random_location",
           "EARTH_RADIUS_MT", "MAX_MOVE_DIST_SQ"]
