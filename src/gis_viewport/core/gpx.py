"""GPX file reading for fitting the view to tracks, routes and waypoints."""

import gpxpy

from gis_viewport.models import LatLon

from .bbox import bbox_of_lat_lons


def parse_gpx_file(filepath: str) -> dict:
    """Parse a GPX file and collect every position it contains, plus its bounds."""
    with open(filepath, "r") as f:
        gpx = gpxpy.parse(f)

    points = []
    for track in gpx.tracks:
        for segment in track.segments:
            for point in segment.points:
                points.append(LatLon(lat=point.latitude, lon=point.longitude))
    for route in gpx.routes:
        for point in route.points:
            points.append(LatLon(lat=point.latitude, lon=point.longitude))
    for wp in gpx.waypoints:
        points.append(LatLon(lat=wp.latitude, lon=wp.longitude))

    # Bounds of every track, route and waypoint position
    bbox = bbox_of_lat_lons(points) if points else None

    return {
        "points": points,
        "bounds": bbox,
        "counts": {
            "tracks": len(gpx.tracks),
            "routes": len(gpx.routes),
            "waypoints": len(gpx.waypoints),
        },
        "metadata": {
            "name": gpx.name,
            "description": gpx.description,
        },
    }
