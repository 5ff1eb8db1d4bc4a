"""Builders for small snapshots and catalogs used across the tests."""

from src.catalog.models import LineDefinition, LineOverride, Usage


def way(way_id, coordinates, railway="rail"):
    return {
        "type": "Feature",
        "geometry": {"type": "LineString", "coordinates": coordinates},
        "properties": {"@id": way_id, "railway": railway, "subway": "no"},
    }


def station(node_id, coordinate, name=None):
    properties = {"@id": node_id, "railway": "station", "subway": "no"}
    if name:
        properties["name"] = name
    return {
        "type": "Feature",
        "geometry": {"type": "Point", "coordinates": coordinate},
        "properties": properties,
    }


def line(ways, local_number="100", usage=(Usage.REGULAR,), last_ride=None, note=None,
         from_place="Praha", to_place="Brno", operator="České dráhy"):
    custom = LineOverride(last_ride=last_ride, note=note) if (last_ride or note) else None
    return LineDefinition(
        local_number=local_number,
        from_place=from_place,
        to_place=to_place,
        ways=ways,
        usage=list(usage),
        operator=operator,
        custom=custom,
    )


def scenario_features():
    """Three connected ways and one station."""
    return [
        way(1, [[14.0, 50.0], [14.1, 50.0]]),
        way(2, [[14.1, 50.0], [14.2, 50.1]]),
        way(3, [[14.5, 50.5], [14.6, 50.6]]),
        station(4, [14.0, 50.0], name="Praha hl.n."),
    ]
