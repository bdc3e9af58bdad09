"""HTTP interface for smaps-csv.

This package provides a Flask application that converts smaps text
posted over HTTP.  It is an **optional** extra — install with::

    pip install smaps-csv[web]

The ``create_app`` factory in ``app.py`` serves two endpoints:

- ``POST /api/convert`` — convert the request body and return CSV.
- ``GET /api/status`` — report that the service is up and its limits.
"""
