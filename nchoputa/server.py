"""HTTP server exposing the sea level datasets and the viewer's static files."""

from __future__ import annotations

import argparse
import logging
import struct
from collections.abc import Mapping, Sequence
from pathlib import Path

from flask import Flask, Response, redirect, send_from_directory

from nchoputa.codec import encode_graph_data, encode_graph_list
from nchoputa.graphs import build_index, default_graphs
from nchoputa.response import Graph, GraphData, GraphList, GraphSummary, NaiveDate

DEFAULT_PORT = 8999
DEV_GRAPH_NAME = "Dev"
_BINARY = "application/octet-stream"

logger = logging.getLogger(__name__)


def dev_graph() -> GraphData:
    """A tiny fixed dataset served under the name "Dev" for development."""
    return GraphData(
        name=DEV_GRAPH_NAME,
        color=(0xEA, 0xFD, 0xCF),
        points=[
            (NaiveDate(0, 1, 1), 0.0),
            (NaiveDate(0, 1, 2), 1.0),
            (NaiveDate(0, 1, 3), 2.0),
        ],
    )


def _summary(graph: Graph) -> GraphSummary:
    return GraphSummary(
        name=graph.name,
        uri=f"/api/graphs/{graph.name}",
        description=graph.description,
        color=graph.color,
    )


def _internal_error(message: str) -> Response:
    return Response(message, status=500, mimetype="text/plain")


def create_app(index: Mapping[str, Graph], static_dir: str | Path = "static") -> Flask:
    """Build the application serving the graphs in index and files from static_dir."""
    static_path = Path(static_dir).resolve()
    app = Flask(__name__, static_folder=str(static_path), static_url_path="/s")

    @app.get("/favicon.ico")
    def favicon():
        return send_from_directory(static_path, "favicon.ico")

    @app.get("/")
    def root():
        return redirect("/s/index.html", code=302)

    @app.get("/api/graphs")
    def list_graphs():
        listing = GraphList(graphs=[_summary(graph) for graph in index.values()])
        try:
            body = encode_graph_list(listing)
        except (ValueError, struct.error, OverflowError) as exc:
            logger.error("error encoding graph index: %s", exc)
            return _internal_error("error encoding graph index")
        return Response(body, mimetype=_BINARY)

    @app.get("/api/graphs/<name>")
    def show_graph(name: str):
        graph = index.get(name)
        if graph is not None:
            data = GraphData(name=graph.name, color=graph.color, points=list(graph.points))
        elif name == DEV_GRAPH_NAME:
            data = dev_graph()
        else:
            return Response(f"no graph with name {name}", status=404, mimetype="text/plain")
        try:
            body = encode_graph_data(data)
        except (ValueError, struct.error, OverflowError) as exc:
            logger.error("error encoding dataset %s: %s", name, exc)
            return _internal_error("error encoding dataset")
        return Response(body, mimetype=_BINARY)

    return app


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="nchoputa", description="Serve sea level datasets and their viewer."
    )
    parser.add_argument("-p", "--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    if not 0 <= args.port <= 0xFFFF:
        parser.error(f"port out of range: {args.port}")
    return args


def main(argv: Sequence[str] | None = None) -> None:
    """Load the datasets and serve them until interrupted."""
    logging.basicConfig(level=logging.INFO)
    args = _parse_args(argv)
    index = build_index(default_graphs("data"))
    app = create_app(index, "static")
    logger.info("Listening on http://localhost:%d/ ...", args.port)
    app.run(host="0.0.0.0", port=args.port, threaded=False)