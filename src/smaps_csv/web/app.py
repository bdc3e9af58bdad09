"""Flask application factory for the smaps-csv HTTP interface.

The ``create_app`` function returns a Flask app with two endpoints:

- ``POST /api/convert`` — body is ``/proc/<pid>/smaps`` text; the
  response is ``text/csv``.  The ``sep`` query parameter picks the
  column separator (default ``,``).  Any conversion failure returns
  400 with a JSON ``error`` field and no partial table.
- ``GET /api/status`` — return running state and the line limit.
"""

from __future__ import annotations

import io

from flask import Flask, Response, jsonify, request

from smaps_csv.config import DEFAULT_DELIMITER
from smaps_csv.converter import convert
from smaps_csv.errors import SmapsError
from smaps_csv.reader import ENCODING, ENCODING_ERRORS, MAX_LINE_LENGTH
from smaps_csv.sink import CsvRowSink

_HTTP_BAD_REQUEST = 400
_CSV_MIMETYPE = "text/csv"


def create_app(*, max_line_length: int = MAX_LINE_LENGTH) -> Flask:
    """Create and configure the Flask application.

    Args:
        max_line_length: Per-line byte limit applied to posted input.

    Returns:
        A configured Flask application ready to serve.

    """
    app = Flask(__name__)

    @app.route("/api/convert", methods=["POST"])
    def convert_smaps() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Convert the posted smaps text to CSV.

        Returns:
            The CSV table, or JSON with an ``error`` field.

        """
        try:
            out = io.StringIO(newline="")
            sink = CsvRowSink(out, delimiter=request.args.get("sep", DEFAULT_DELIMITER))
            result = convert(
                io.BytesIO(request.get_data()),
                sink,
                max_line_length=max_line_length,
            )
        except SmapsError as e:
            return jsonify({"error": str(e)}), _HTTP_BAD_REQUEST

        body = out.getvalue().encode(ENCODING, ENCODING_ERRORS)
        response = Response(body, mimetype=_CSV_MIMETYPE)
        response.headers["X-Smaps-Regions"] = str(result.regions)
        return response

    @app.route("/api/status")
    def status() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return service status.

        Returns:
            JSON with ``running`` and ``max_line_length`` fields.

        """
        return jsonify({"running": True, "max_line_length": max_line_length})

    return app
