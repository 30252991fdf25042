"""Land outlines: flatten a land-boundary dataset into (lat, lng) line strips.

Accepts either plain GeoJSON (Feature, FeatureCollection or a bare geometry)
or a TopoJSON topology such as world-atlas ``land-110m.json``, whose ``land``
object is decoded here. Every polygon ring becomes one strip.
"""

from __future__ import annotations

import json
from pathlib import Path

import structlog

log = structlog.get_logger()

LatLng = tuple[float, float]

BUNDLED_LAND_PATH = Path(__file__).parent / "data" / "land.geojson"


def _ring_to_strip(ring: list) -> list[LatLng] | None:
    strip = [(float(c[1]), float(c[0])) for c in ring]
    return strip if len(strip) > 1 else None


def extract_land_lines(geometry: dict | None) -> list[list[LatLng]]:
    """Collect every polygon ring of a GeoJSON geometry as a line strip.

    Points, lines and unknown types are ignored. Strips need at least two
    points to be drawable.
    """
    lines: list[list[LatLng]] = []

    def add_ring(ring: list) -> None:
        strip = _ring_to_strip(ring)
        if strip is not None:
            lines.append(strip)

    def handle(geom: dict | None) -> None:
        if not geom:
            return
        kind = geom.get("type")
        if kind == "GeometryCollection":
            for child in geom.get("geometries", []):
                handle(child)
        elif kind == "Polygon":
            for ring in geom["coordinates"]:
                add_ring(ring)
        elif kind == "MultiPolygon":
            for polygon in geom["coordinates"]:
                for ring in polygon:
                    add_ring(ring)

    handle(geometry)
    return lines


# --- TopoJSON -------------------------------------------------------------

def _decode_arcs(topology: dict) -> list[list[tuple[float, float]]]:
    """Return absolute (lng, lat) positions for every arc in the topology.

    Quantized topologies store delta-encoded integers plus a transform.
    """
    transform = topology.get("transform")
    arcs = []
    for arc in topology.get("arcs", []):
        if transform:
            sx, sy = transform["scale"]
            tx, ty = transform["translate"]
            x = y = 0
            points = []
            for position in arc:
                x += position[0]
                y += position[1]
                points.append((x * sx + tx, y * sy + ty))
        else:
            points = [(p[0], p[1]) for p in arc]
        arcs.append(points)
    return arcs


def _stitch_ring(arc_indexes: list[int], arcs: list[list[tuple[float, float]]]) -> list:
    """Join arcs into one ring; ``~i`` means arc ``i`` reversed."""
    ring: list[tuple[float, float]] = []
    for index in arc_indexes:
        points = arcs[~index][::-1] if index < 0 else arcs[index]
        # Consecutive arcs share their junction point.
        if ring:
            points = points[1:]
        ring.extend(points)
    return ring


def _topo_geometry(obj: dict, arcs: list) -> dict | None:
    kind = obj.get("type")
    if kind == "GeometryCollection":
        return {
            "type": "GeometryCollection",
            "geometries": [g for g in (_topo_geometry(o, arcs) for o in obj.get("geometries", [])) if g],
        }
    if kind == "Polygon":
        return {"type": "Polygon",
                "coordinates": [_stitch_ring(r, arcs) for r in obj["arcs"]]}
    if kind == "MultiPolygon":
        return {"type": "MultiPolygon",
                "coordinates": [[_stitch_ring(r, arcs) for r in poly] for poly in obj["arcs"]]}
    return None


def topology_to_geometry(topology: dict, object_name: str = "land") -> dict | None:
    """Convert one named TopoJSON object to a GeoJSON geometry."""
    obj = topology.get("objects", {}).get(object_name)
    if obj is None:
        return None
    return _topo_geometry(obj, _decode_arcs(topology))


# --- Loading --------------------------------------------------------------

def outlines_from_document(doc: dict) -> list[list[LatLng]]:
    """Flatten any supported land document into line strips."""
    kind = doc.get("type")
    if kind == "Topology":
        return extract_land_lines(topology_to_geometry(doc))
    if kind == "FeatureCollection":
        lines: list[list[LatLng]] = []
        for feature in doc.get("features", []):
            lines.extend(extract_land_lines(feature.get("geometry")))
        return lines
    if kind == "Feature":
        return extract_land_lines(doc.get("geometry"))
    return extract_land_lines(doc)


def load_outlines(path: str | Path | None = None) -> list[list[LatLng]]:
    """Load land outlines from ``path`` (default: the bundled dataset).

    A missing or unreadable dataset is logged and yields no outlines; the
    globe still renders without them.
    """
    path = Path(path) if path else BUNDLED_LAND_PATH
    try:
        doc = json.loads(path.read_text(encoding="utf-8"))
        lines = outlines_from_document(doc)
    except (OSError, ValueError, AttributeError, KeyError, TypeError, IndexError):
        log.error("land_outlines_load_failed", path=str(path), exc_info=True)
        return []
    log.debug("land_outlines_loaded", path=str(path), strips=len(lines))
    return lines
