from unittest import mock

import flask
import pytest

from nchoputa.codec import decode_graph_data, decode_graph_list
from nchoputa.response import Graph, NaiveDate
from nchoputa.server import create_app, dev_graph, main

DESCRIPTION = "Sample sea level series."


@pytest.fixture
def graph():
    return Graph(
        name="CSIRO",
        description=DESCRIPTION,
        color=(0xB1, 0xF8, 0xF2),
        points=[(NaiveDate(1880, 1, 15), -1.5), (NaiveDate(1880, 2, 15), 2.25)],
    )


@pytest.fixture
def static_dir(tmp_path):
    directory = tmp_path / "static"
    directory.mkdir()
    (directory / "favicon.ico").write_bytes(b"\x00\x01icon")
    (directory / "index.html").write_text("<html>viewer</html>", encoding="utf-8")
    return directory


@pytest.fixture
def client(graph, static_dir):
    app = create_app({graph.name: graph}, static_dir)
    return app.test_client()


def test_root_redirects_to_index(client):
    response = client.get("/")
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/s/index.html")


def test_static_files_served(client):
    response = client.get("/s/index.html")
    assert response.status_code == 200
    assert response.data == b"<html>viewer</html>"


def test_missing_static_file_is_404(client):
    assert client.get("/s/absent.js").status_code == 404


def test_favicon_served(client):
    response = client.get("/favicon.ico")
    assert response.status_code == 200
    assert response.data == b"\x00\x01icon"


def test_list_graphs(client, graph):
    response = client.get("/api/graphs")
    assert response.status_code == 200
    listing = decode_graph_list(response.data)
    assert len(listing.graphs) == 1
    summary = listing.graphs[0]
    assert summary.name == graph.name
    assert summary.uri == "/api/graphs/CSIRO"
    assert summary.description == DESCRIPTION
    assert summary.color == graph.color


def test_list_graphs_empty(static_dir):
    client = create_app({}, static_dir).test_client()
    response = client.get("/api/graphs")
    assert response.status_code == 200
    assert decode_graph_list(response.data).graphs == []


def test_show_graph_round_trip(client, graph):
    response = client.get("/api/graphs/CSIRO")
    assert response.status_code == 200
    data = decode_graph_data(response.data)
    assert data.name == graph.name
    assert data.color == graph.color
    assert data.points == graph.points


def test_listed_uri_resolves(client, graph):
    uri = decode_graph_list(client.get("/api/graphs").data).graphs[0].uri
    data = decode_graph_data(client.get(uri).data)
    assert data.points == graph.points


def test_dev_graph_values():
    data = dev_graph()
    assert data.name == "Dev"
    assert data.color == (0xEA, 0xFD, 0xCF)
    assert data.points == [
        (NaiveDate(0, 1, 1), 0.0),
        (NaiveDate(0, 1, 2), 1.0),
        (NaiveDate(0, 1, 3), 2.0),
    ]


def test_dev_graph_served(client):
    response = client.get("/api/graphs/Dev")
    assert response.status_code == 200
    assert decode_graph_data(response.data) == dev_graph()


def test_index_entry_named_dev_takes_precedence(static_dir, graph):
    own = Graph(name="Dev", description="", color=(1, 2, 3), points=graph.points)
    client = create_app({"Dev": own}, static_dir).test_client()
    data = decode_graph_data(client.get("/api/graphs/Dev").data)
    assert data.color == (1, 2, 3)
    assert data.points == graph.points


def test_unknown_graph_is_404(client):
    response = client.get("/api/graphs/Nowhere")
    assert response.status_code == 404
    assert response.get_data(as_text=True) == "no graph with name Nowhere"


def test_unencodable_graph_is_500(static_dir):
    bad = Graph(name="Bad", description="", color=(300, 0, 0), points=[])
    client = create_app({"Bad": bad}, static_dir).test_client()
    response = client.get("/api/graphs/Bad")
    assert response.status_code == 500
    assert response.get_data(as_text=True) == "error encoding dataset"
    listing = client.get("/api/graphs")
    assert listing.status_code == 500
    assert listing.get_data(as_text=True) == "error encoding graph index"


@pytest.fixture
def data_cwd(tmp_path, monkeypatch):
    sealevel = tmp_path / "data" / "sealevel"
    sealevel.mkdir(parents=True)
    for name in ("csiro", "uhslc"):
        (sealevel / f"{name}.tsv").write_text(
            "Date\tValue\n1993-01-15\t0.5\n", encoding="utf-8"
        )
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _served_app(run):
    return run.call_args.args[0]


def test_main_runs_with_given_port(data_cwd):
    with mock.patch.object(flask.Flask, "run", autospec=True) as run:
        main(["--port", "1234"])
    run.assert_called_once()
    assert run.call_args.kwargs["port"] == 1234
    assert run.call_args.kwargs["host"] == "0.0.0.0"
    client = _served_app(run).test_client()
    listing = decode_graph_list(client.get("/api/graphs").data)
    assert sorted(summary.name for summary in listing.graphs) == ["CSIRO", "UHSLC"]


def test_main_default_port(data_cwd):
    with mock.patch.object(flask.Flask, "run", autospec=True) as run:
        main([])
    assert run.call_args.kwargs["port"] == 8999
    client = _served_app(run).test_client()
    data = decode_graph_data(client.get("/api/graphs/UHSLC").data)
    assert data.points == [(NaiveDate(1993, 1, 15), 0.5)]


def test_main_rejects_bad_port(data_cwd):
    with mock.patch.object(flask.Flask, "run") as run:
        with pytest.raises(SystemExit):
            main(["--port", "70000"])
    run.assert_not_called()