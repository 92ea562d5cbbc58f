#!/usr/bin/env python3
"""Restlet Kit: RESTlet-style endpoints for schema validation and table shaping."""

import argparse
import logging

from flask import Flask, jsonify

from config import PORT, SCHEMA_DIR, get_environment, get_timezone

app = Flask(__name__)

from routes.schemas import bp as schemas_bp  # noqa: E402
from routes.tables import bp as tables_bp  # noqa: E402

app.register_blueprint(schemas_bp)
app.register_blueprint(tables_bp)


@app.route("/api/health")
def health():
    return jsonify({"ok": True, "environment": get_environment(), "timezone": get_timezone()})


def main():
    """Entry point for `restlet-kit` CLI command."""
    parser = argparse.ArgumentParser(description="Restlet Kit")
    parser.add_argument(
        "--port", type=int, default=PORT, help=f"Port to listen on (default: {PORT})"
    )
    parser.add_argument("--debug", action="store_true", help="Log debug output")
    cli_args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if cli_args.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    print("\n  Restlet Kit v0.1.0")
    print(f"  Port: {cli_args.port}")
    print(f"  Environment: {get_environment()}")
    print(f"  Schemas: {SCHEMA_DIR}\n")

    app.run(port=cli_args.port, threaded=True)


if __name__ == "__main__":
    main()
