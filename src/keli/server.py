"""
HTTP front end.

Routes::

    /w, /api     ?city=<name>[&format=text]   JSON (default) or plain text
    /places                                   JSON list of known place names
    /<city>                                   HTML page (empty path: default city)

``route`` is a pure function of the request so it can be tested without a
socket; ``serve`` wires it into a ``ThreadingHTTPServer``.
"""

from __future__ import annotations

import json
import logging
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import NamedTuple
from urllib.parse import parse_qs, unquote, urlsplit

from keli.config import Settings
from keli.places import load_places
from keli.renderers import render_html, render_json, render_text
from keli.service import CityNotFoundError, WeatherService

logger = logging.getLogger(__name__)

JSON = "application/json; charset=utf-8"
TEXT = "text/plain; charset=utf-8"
HTML = "text/html; charset=utf-8"


class Response(NamedTuple):
    status: HTTPStatus
    content_type: str
    body: str


def _weather_api(query: dict[str, list[str]], service: WeatherService) -> Response:
    city = query.get("city", [""])[0].strip()
    if not city:
        return Response(HTTPStatus.BAD_REQUEST, TEXT, "Missing 'city' parameter\n")

    try:
        record = service.get_weather_data(city)
    except CityNotFoundError as exc:
        return Response(HTTPStatus.NOT_FOUND, TEXT, f"{exc}\n")

    if query.get("format", [""])[0] == "text":
        return Response(HTTPStatus.OK, TEXT, render_text(record))
    return Response(HTTPStatus.OK, JSON, render_json(record))


def _places(settings: Settings) -> Response:
    try:
        places = load_places(settings.places_file)
    except OSError as exc:
        logger.error("Could not read places from %s: %s", settings.places_file, exc)
        return Response(HTTPStatus.INTERNAL_SERVER_ERROR, TEXT, "Place list unavailable\n")
    return Response(HTTPStatus.OK, JSON, json.dumps(places, ensure_ascii=False))


def _weather_page(path: str, service: WeatherService, settings: Settings) -> Response:
    city = unquote(path.strip("/")) or settings.default_city
    try:
        record = service.get_weather_data(city)
    except CityNotFoundError as exc:
        return Response(HTTPStatus.NOT_FOUND, TEXT, f"{exc}\n")
    return Response(HTTPStatus.OK, HTML, render_html(record))


def route(target: str, service: WeatherService, settings: Settings) -> Response:
    """Dispatch a request target (path + query string) to its handler."""
    parts = urlsplit(target)
    query = parse_qs(parts.query)

    if parts.path in ("/w", "/api"):
        return _weather_api(query, service)
    if parts.path == "/places":
        return _places(settings)
    if parts.path == "/favicon.ico":
        return Response(HTTPStatus.NOT_FOUND, TEXT, "")
    return _weather_page(parts.path, service, settings)


def handle_request(target: str, service: WeatherService, settings: Settings) -> Response:
    """``route`` with a 500 fallback, so every request gets a response."""
    try:
        return route(target, service, settings)
    except Exception:  # noqa: BLE001 - the client still needs an answer
        logger.exception("Unhandled error serving %s", target)
        return Response(HTTPStatus.INTERNAL_SERVER_ERROR, TEXT, "Internal server error\n")


def make_handler(service: WeatherService, settings: Settings) -> type[BaseHTTPRequestHandler]:
    """Build a request handler class bound to ``service`` and ``settings``."""

    class WeatherRequestHandler(BaseHTTPRequestHandler):
        server_version = f"{settings.app_name}/0.1"

        def do_GET(self) -> None:  # noqa: N802 - http.server naming
            logger.info("Received request for %s", self.path)
            response = handle_request(self.path, service, settings)
            body = response.body.encode("utf-8")
            self.send_response(response.status)
            self.send_header("Content-Type", response.content_type)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, format: str, *args: object) -> None:  # noqa: A002
            logger.debug(format, *args)

    return WeatherRequestHandler


def serve(service: WeatherService, settings: Settings, port: int | None = None) -> None:
    """Serve until interrupted."""
    address = (settings.api_host, port if port is not None else settings.api_port)
    with ThreadingHTTPServer(address, make_handler(service, settings)) as httpd:
        logger.info("Serving weather on http://%s:%d/", *address)
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info("Server stopped")
