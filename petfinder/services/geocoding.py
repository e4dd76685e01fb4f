"""
Neighborhood geocoding table.

A fixed, ordered list of neighborhoods with one reference point each, loaded
once from a JSON data file. Forward lookup is a case-insensitive name match;
reverse lookup is a linear scan for the closest point.
"""

import json
import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path

from petfinder.config import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Neighborhood:
    name: str
    lat: float
    lng: float


@dataclass(frozen=True)
class Coordinates:
    lat: float | None
    lng: float | None


def _key(name: str) -> str:
    return name.strip().casefold()


class NeighborhoodTable:
    """Immutable name -> point table. Iteration order is the file order."""

    def __init__(self, city: str, neighborhoods: list[Neighborhood]):
        self.city = city
        self._entries = list(neighborhoods)
        self._by_key = {_key(n.name): n for n in self._entries}

    @classmethod
    def from_json(cls, raw: str) -> "NeighborhoodTable":
        data = json.loads(raw)
        entries = [
            Neighborhood(name=item["name"], lat=float(item["lat"]), lng=float(item["lng"]))
            for item in data["neighborhoods"]
        ]
        if not entries:
            raise ValueError("neighborhood table has no entries")
        return cls(city=data.get("city", ""), neighborhoods=entries)

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, name: str | None) -> Neighborhood | None:
        if not name:
            return None
        return self._by_key.get(_key(name))

    def names(self) -> list[str]:
        return [n.name for n in self._entries]

    def resolve_coordinates(
        self,
        neighborhood: str | None,
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> Coordinates:
        """Caller GPS wins when both values are given; otherwise use the table.

        An unknown neighborhood yields (None, None): never a partial pair.
        """
        if latitude is not None and longitude is not None:
            return Coordinates(lat=latitude, lng=longitude)
        entry = self.lookup(neighborhood)
        if entry is None:
            logger.info("No coordinates for neighborhood %r; announcement will have no map pin", neighborhood)
            return Coordinates(lat=None, lng=None)
        return Coordinates(lat=entry.lat, lng=entry.lng)

    def nearest(self, latitude: float, longitude: float) -> Neighborhood:
        """Closest entry by straight-line distance in degree space.

        Not geodesic: longitude degrees are not rescaled by latitude. Good
        enough inside one city. Ties go to the earlier entry.
        """
        best = self._entries[0]
        best_distance = math.inf
        for entry in self._entries:
            distance = math.hypot(entry.lat - latitude, entry.lng - longitude)
            if distance < best_distance:
                best, best_distance = entry, distance
        return best

    def address_for(self, neighborhood: str) -> str:
        return f"{neighborhood}, {self.city}" if self.city else neighborhood


def _read_table_source(path: str | None) -> str:
    if path:
        return Path(path).read_text(encoding="utf-8")
    return resources.files("petfinder").joinpath("data/neighborhoods.json").read_text(encoding="utf-8")


@lru_cache
def get_neighborhood_table() -> NeighborhoodTable:
    """Load the table once per process."""
    settings = get_settings()
    table = NeighborhoodTable.from_json(_read_table_source(settings.neighborhoods_file))
    logger.info("Loaded %d neighborhoods for %s", len(table), table.city)
    return table
