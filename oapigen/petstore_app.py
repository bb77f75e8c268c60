"""A WSGI application serving the pet store API, with request validation."""

from __future__ import annotations

import argparse
import json
import re
from collections.abc import Callable, Iterable, Sequence
from http import HTTPStatus
from typing import Any
from urllib.parse import parse_qs
from wsgiref.simple_server import make_server

from .petstore import ApiError, NewPet, PetStore

_INTEGER = re.compile(r"[+-]?\d+")
_INT64 = (-(2**63), 2**63 - 1)
_INT32 = (-(2**31), 2**31 - 1)


class _BadRequest(Exception):
    """A request that does not conform to the API description."""


def _parse_int(text: str, bounds: tuple[int, int], what: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise _BadRequest(f'parameter "{what}": parsing "{text}": invalid syntax')
    value = int(text)
    if not bounds[0] <= value <= bounds[1]:
        raise _BadRequest(f'parameter "{what}": value {text} out of range')
    return value


def _json_body(data: Any) -> bytes:
    return (json.dumps(data) + "\n").encode("utf-8")


class PetStoreApp:
    """Routes pet store requests to a PetStore, rejecting requests that break the API."""

    def __init__(self, store: PetStore | None = None) -> None:
        self.store = store if store is not None else PetStore()

    def __call__(
        self, environ: dict[str, Any], start_response: Callable[..., Any]
    ) -> Iterable[bytes]:
        method = environ.get("REQUEST_METHOD", "GET").upper()
        path = environ.get("PATH_INFO") or "/"
        try:
            status, payload = self._dispatch(method, path, environ)
            body = b"" if payload is None else _json_body(payload)
            content_type = "application/json"
        except _BadRequest as exc:
            status = HTTPStatus.BAD_REQUEST
            body = (str(exc) + "\n").encode("utf-8")
            content_type = "text/plain; charset=utf-8"
        except ApiError as exc:
            status = exc.code
            body = _json_body(exc.to_dict())
            content_type = "application/json"
        headers = []
        if body:
            headers = [("Content-Type", content_type), ("Content-Length", str(len(body)))]
        start_response(f"{int(status)} {HTTPStatus(status).phrase}", headers)
        return [body]

    def _dispatch(self, method: str, path: str, environ: dict[str, Any]) -> tuple[int, Any]:
        if path == "/pets":
            if method == "GET":
                return self._find_pets(environ.get("QUERY_STRING", ""))
            if method == "POST":
                return self._add_pet(environ)
        elif path.startswith("/pets/"):
            segment = path[len("/pets/"):]
            if segment and "/" not in segment:
                if method == "GET":
                    pet_id = _parse_int(segment, _INT64, "id")
                    return HTTPStatus.OK, self.store.find_pet_by_id(pet_id).to_dict()
                if method == "DELETE":
                    pet_id = _parse_int(segment, _INT64, "id")
                    self.store.delete_pet(pet_id)
                    return HTTPStatus.NO_CONTENT, None
        raise _BadRequest("no matching operation was found")

    def _find_pets(self, query: str) -> tuple[int, Any]:
        params = parse_qs(query, keep_blank_values=True)
        tags = params.get("tags")
        limit = None
        if "limit" in params:
            limit = _parse_int(params["limit"][0], _INT32, "limit")
        pets = self.store.find_pets(tags=tags, limit=limit)
        return HTTPStatus.OK, [pet.to_dict() for pet in pets]

    def _add_pet(self, environ: dict[str, Any]) -> tuple[int, Any]:
        new_pet = _read_new_pet(environ)
        return HTTPStatus.CREATED, self.store.add_pet(new_pet).to_dict()


def _read_new_pet(environ: dict[str, Any]) -> NewPet:
    content_type = (environ.get("CONTENT_TYPE") or "").split(";")[0].strip().lower()
    if content_type != "application/json":
        raise _BadRequest(f'request body has an error: unsupported content type "{content_type}"')
    try:
        length = int(environ.get("CONTENT_LENGTH") or 0)
    except ValueError:
        length = 0
    raw = environ["wsgi.input"].read(length) if length > 0 else b""
    if not raw:
        raise _BadRequest("request body has an error: value is required but missing")
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise _BadRequest(f"request body has an error: failed to decode request body: {exc}") from exc
    if not isinstance(data, dict):
        raise _BadRequest("request body has an error: value must be an object")
    if "name" not in data:
        raise _BadRequest('request body has an error: property "name" is missing')
    if not isinstance(data["name"], str):
        raise _BadRequest('request body has an error: property "name": value must be a string')
    if "tag" in data and not isinstance(data["tag"], str):
        raise _BadRequest('request body has an error: property "tag": value must be a string')
    return NewPet.from_dict(data)


def main(argv: Sequence[str] | None = None) -> None:
    """Serve the pet store over HTTP until interrupted."""
    parser = argparse.ArgumentParser(prog="petstore")
    parser.add_argument("-port", "--port", type=int, default=8080,
                        help="Port for test HTTP server")
    args = parser.parse_args(argv)
    with make_server("0.0.0.0", args.port, PetStoreApp()) as server:
        server.serve_forever()