import logging
import os

import uvicorn
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.gzip import GZipMiddleware

from geo_math import Point, distance
from overpass_client import NetworkFetchError
from road_graph import PathIntegrityError
from router import NearestNode, Router, RouterConfiguration, TripPlan, TripPlanner

app = FastAPI()
app.add_middleware(GZipMiddleware)

logger = logging.getLogger(__name__)
road_router = Router()
trip_planner = TripPlanner(road_router)


@app.get("/configuration")
def configuration() -> RouterConfiguration:
    """
    Returns the routing configuration, including the tariff used for fares.
    """
    return road_router.configuration


@app.get("/route")
def route(
    origin_lat: float = Query(ge=-90, le=90),
    origin_lon: float = Query(ge=-180, le=180),
    destination_lat: float = Query(ge=-90, le=90),
    destination_lon: float = Query(ge=-180, le=180),
) -> TripPlan:
    """
    Returns the route between origin and destination with its distance,
    estimated travel time and fare.

    When no road route exists, a straight line between both points is returned
    with `is_fallback` set.
    """
    origin = Point(latitude=origin_lat, longitude=origin_lon)
    destination = Point(latitude=destination_lat, longitude=destination_lon)

    try:
        return trip_planner.plan_trip(origin, destination)
    except NetworkFetchError as exc:
        raise HTTPException(502, str(exc))
    except PathIntegrityError as exc:
        logger.exception(
            "Inconsistent road graph for route %s -> %s",
            origin.coordinates,
            destination.coordinates,
            exc_info=exc,
        )
        raise HTTPException(500, "Route computation failed")


@app.get("/nearest-node")
def nearest_node(
    lat: float = Query(ge=-90, le=90),
    lon: float = Query(ge=-180, le=180),
    radius: float | None = Query(None, gt=0),
    fetch_radius: float = Query(1000.0, gt=0),
) -> NearestNode:
    """
    Returns the road network node closest to the given point, searching roads
    within `fetch_radius` meters of it.
    """
    point = Point(latitude=lat, longitude=lon)

    try:
        with road_router.lock:
            road_router.fetch_road_network(point, fetch_radius)
            node_id = road_router.find_nearest_osm_node(point, radius)
            if node_id is None:
                raise HTTPException(404, "No road network found near the point")

            node_point = road_router.graph.point(node_id)
    except NetworkFetchError as exc:
        raise HTTPException(502, str(exc))

    return NearestNode(
        node_id=node_id, point=node_point, distance=distance(point, node_point)
    )


if __name__ == "__main__":
    uvicorn.run(
        app,
        host=os.environ.get("APP_HOST", "127.0.0.1"),
        port=int(os.environ.get("APP_PORT", 8000)),
    )
