"""Mock JWT Pizza API served over HTTP.

Exposes the same ``InterceptionRouter`` behind a Flask app so the storefront
can be pointed at a real host instead of relying on in-browser interception.

Usage:
    # Standalone
    jwt-pizza-mock --port 5555 --login-as diner

    # In tests
    with MockPizzaApiServer(port=0) as server:
        httpx.get(f"{server.url}/api/order/menu")
"""
from __future__ import annotations

import argparse
import logging
import threading
from typing import Any, Optional

from flask import Flask, Response, jsonify, request
from werkzeug.serving import BaseWSGIServer, make_server

from jwt_pizza_mock.config import MockApiSettings
from jwt_pizza_mock.exceptions import PayloadDecodeError
from jwt_pizza_mock.fixtures import TEST_USERS, find_identity
from jwt_pizza_mock.router import InterceptionRouter, parse_payload

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def create_mock_pizza_api_app(router: InterceptionRouter | None = None) -> Flask:
    """Create the Flask app; one app serves exactly one router (one session)."""
    app = Flask(__name__)
    app.extensions["pizza_router"] = router or InterceptionRouter()

    @app.after_request
    def add_cors_headers(response: Response) -> Response:
        response.headers.update(CORS_HEADERS)
        return response

    @app.route("/api", defaults={"subpath": ""}, methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"])
    @app.route("/api/<path:subpath>", methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"])
    def api_endpoint(subpath: str):
        if request.method == "OPTIONS":
            return Response(status=204)

        try:
            payload = parse_payload(request.get_data())
        except PayloadDecodeError as exc:
            logger.warning(f"Rejected {request.method} {request.full_path}: {exc}")
            return jsonify({"message": str(exc)}), 400

        url = request.full_path if request.query_string else request.path
        response = app.extensions["pizza_router"].handle(request.method, url, payload)
        if response is None:
            return jsonify({"message": "unknown endpoint"}), 404
        return jsonify(response.body), response.status

    return app


class MockPizzaApiServer:
    """Runs the mock API app in a background thread."""

    def __init__(
        self,
        host: str = "127.0.0.1",
        port: int = 5555,
        router: InterceptionRouter | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self.router = router or InterceptionRouter()
        self.app = create_mock_pizza_api_app(self.router)
        self.server: Optional[BaseWSGIServer] = None
        self.thread: Optional[threading.Thread] = None

    def start(self) -> "MockPizzaApiServer":
        self.server = make_server(self.host, self.port, self.app, threaded=True)
        # Port 0 asks the OS for a free port.
        self.port = self.server.server_port
        self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)
        self.thread.start()
        logger.info(f"Mock pizza API listening on {self.url}")
        return self

    def stop(self) -> None:
        if self.server:
            self.server.shutdown()
            self.server.server_close()
            self.server = None
        if self.thread:
            self.thread.join(timeout=5)
            self.thread = None

    def __enter__(self) -> "MockPizzaApiServer":
        return self.start()

    def __exit__(self, *exc_info: Any) -> None:
        self.stop()

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"


def build_parser(settings: MockApiSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the mocked JWT Pizza API")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    parser.add_argument(
        "--login-as",
        choices=sorted(TEST_USERS),
        help="Start with this fixture user already authenticated",
    )
    parser.add_argument("--debug", action="store_true", help="Log every dispatched call")
    return parser


def main(argv: list[str] | None = None) -> int:
    settings = MockApiSettings.from_env()
    args = build_parser(settings).parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logged_in_user = find_identity(args.login_as) if args.login_as else None
    app = create_mock_pizza_api_app(InterceptionRouter(logged_in_user=logged_in_user))
    logger.info(f"Serving mock pizza API on http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=False)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
