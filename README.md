# nchoputa

nchoputa serves sea level time series over HTTP in a compact binary
encoding, and provides the geometry a client needs to plot them: axis
ticks, line vertices, nearest-point lookup and zoom factors.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
nchoputa --port 8999
```

`-p`/`--port` sets the port (default 8999, must be 0–65535). The server
listens on all interfaces using Flask's built-in server, single-threaded.

It must be started from a directory that holds:

- `data/sealevel/csiro.tsv` and `data/sealevel/uhslc.tsv`: tab-separated
  files with a header row containing `Date` (YYYY-MM-DD) and `Value`
  columns. Both are read at start-up; a missing file or a malformed row
  stops the server with an error.
- `static/`: files served under `/s/`, including `favicon.ico`.

Endpoints:

- `GET /` redirects (302) to `/s/index.html`.
- `GET /s/<path>` serves files from the static directory.
- `GET /favicon.ico` serves `static/favicon.ico`.
- `GET /api/graphs` returns the encoded list of graphs: name, URI
  (`/api/graphs/<name>`), description and RGB colour of each.
- `GET /api/graphs/<name>` returns one graph with its points. The name
  `Dev`, when no loaded graph has that name, answers with a fixed
  three-point series dated 0000-01-01 to 0000-01-03. Other unknown names
  answer with 404 and the text `no graph with name <name>`.

Responses are sent as `application/octet-stream`.

## Using the library

### Data model: `nchoputa.response`

`NaiveDate` is a calendar date that allows year zero and years outside
the range of `datetime.date`. `NaiveDate.parse("1993-01-15")` reads ISO
text, `isoformat()` writes it back, and `days_since_year_zero()` counts
days from 0000-01-01.

```python
from nchoputa.response import GraphData, NaiveDate

data = GraphData(
    name="Example",
    color=(0xEA, 0xFD, 0xCF),
    points=[(NaiveDate.parse("1993-01-15"), -3.5), (NaiveDate.parse("1993-02-15"), 1.25)],
)
data.min_x(), data.max_x(), data.min_y(), data.max_y()
```

`min_x()` and `max_x()` return the dates of the first and last points
(points are assumed to be in time order), or 1970-01-01 when there are
none. `min_y()` and `max_y()` ignore NaN values and, for no points,
return the largest and smallest single-precision values respectively.

The other types are `GraphSummary`, `GraphList`, `GraphIndex` and `Graph`.

### Encoding: `nchoputa.codec`

`encode_graph_list` / `decode_graph_list` and `encode_graph_data` /
`decode_graph_data` convert between the types above and bytes. Lengths
are unsigned LEB128 varints, strings are length-prefixed UTF-8, colours
are three raw bytes, values are little-endian 32-bit floats and dates are
their ISO text. Truncated or malformed input raises `DecodeError` (a
`ValueError`); bytes after a complete message are ignored.

### Loading datasets: `nchoputa.graphs`

`points_from_tsv(path)` reads the points of one file, `default_graphs(data_dir)`
loads the CSIRO and UHSLC datasets from `<data_dir>/sealevel/`, and
`build_index(graphs)` maps names to graphs.

### Serving: `nchoputa.server`

`create_app(index, static_dir)` builds the Flask application for a
name-to-graph mapping; `dev_graph()` returns the `Dev` series; `main()`
is the `nchoputa` command.

### Plotting geometry: `nchoputa.axes` and `nchoputa.plot`

`Axes` holds an x and a y `Scale` (both 0–100 by default), a view `Size`
and `max_ticks` (10). It computes `tick_spacing()` (10 for the defaults),
tick-aligned bounds with `scale_x_min()`, `scale_x_max()`,
`scale_y_min()` and `scale_y_max()`, the bare frame with
`frame_vertices()` and the frame with tick marks as a line strip with
`tick_vertices()`. `nice_num(value, rround)` rounds to 1, 2 or 5 times a
power of ten. Arithmetic is rounded to single precision.

`nchoputa.plot` provides `date_scale(date)` (days since 0000-01-01),
`graph_points(graph_data)`, `line_graph_vertices(points)`,
`crosshair_vertices()`, `find_closest_point(to, points)` returning
`(index, distance, point)` or `None`, and `zoom_factor(delta_y)`, which
is `delta_y / 16` for non-negative steps and `16 / |delta_y|` otherwise.

## What this package does not do

It does not include a graphical viewer: nothing here opens a window,
draws the graphs or handles the mouse. The plotting modules only compute
coordinates and vertices for a client to render. The datasets and the
contents of `static/` (such as `index.html`) are not shipped with the
package and must be supplied by whoever runs the server.