"""Built-in destination catalogue (Kenitra, Morocco) and text search."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from .models import Coordinate, Destination

_CATALOGUE: Tuple[Tuple[str, str, str, float, float], ...] = (
    ("1", "Ouled Oujih", "Quartier Ouled Oujih, Kénitra, Maroc", 34.2702, -6.5802),
    ("2", "Centre-ville de Kénitra", "Centre-ville, Kénitra, Maroc", 34.261, -6.583),
    ("3", "Gare de Kénitra", "Avenue Mohammed V, Kénitra, Maroc", 34.2587, -6.58),
    ("4", "Université Ibn Tofail", "Campus Universitaire, Kénitra, Maroc", 34.251, -6.5868),
    ("5", "Quartier Mimosas", "Mimosas, Kénitra, Maroc", 34.255, -6.575),
    ("6", "Quartier Saknia", "Saknia, Kénitra, Maroc", 34.273, -6.572),
    ("7", "Zone Industrielle", "Zone Industrielle, Kénitra, Maroc", 34.28, -6.6),
    ("8", "Port de Kénitra", "Port de Kénitra, Mehdia, Maroc", 34.259, -6.65),
    ("9", "Marché Central", "Souk El Had, Centre-ville, Kénitra, Maroc", 34.262, -6.584),
    ("10", "Hôpital Régional", "Avenue Mohammed V, Kénitra, Maroc", 34.264, -6.579),
    (
        "11",
        "Société Générale Nafoura Kenitra",
        "Rond point El Harrati, Oulad Oujih, Kénitra, Maroc",
        34.2702,
        -6.5802,
    ),
    ("12", "Quartier Bir Rami", "Bir Rami, Kénitra, Maroc", 34.248, -6.59),
    ("13", "Quartier Val Fleuri", "Val Fleuri, Kénitra, Maroc", 34.253, -6.578),
    ("14", "Stade Municipal", "Avenue Mohammed V, Kénitra, Maroc", 34.257, -6.585),
    ("15", "Plage de Mehdia", "Mehdia, Kénitra, Maroc", 34.259, -6.67),
)


def default_destinations() -> List[Destination]:
    return [
        Destination(id=ident, name=name, address=address, coordinate=Coordinate(lat, lon))
        for ident, name, address, lat, lon in _CATALOGUE
    ]


def search(query: str, destinations: Iterable[Destination] | None = None) -> List[Destination]:
    """Case-insensitive substring match on name or address."""

    pool: Sequence[Destination] = (
        list(destinations) if destinations is not None else default_destinations()
    )
    needle = query.strip().casefold()
    if not needle:
        return list(pool)
    return [
        dest
        for dest in pool
        if needle in dest.name.casefold() or needle in dest.address.casefold()
    ]


__all__ = [
    "default_destinations",
    "search",
]
