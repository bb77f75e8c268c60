import io
import json
from wsgiref.util import setup_testing_defaults

import pytest

from oapigen.petstore import Pet
from oapigen.petstore_app import PetStoreApp


def call(app, method, path, query="", body=None, raw=None):
    if raw is None:
        raw = b"" if body is None else json.dumps(body).encode()
    environ = {}
    setup_testing_defaults(environ)
    environ.update(
        {
            "REQUEST_METHOD": method,
            "PATH_INFO": path,
            "QUERY_STRING": query,
            "CONTENT_LENGTH": str(len(raw)),
            "CONTENT_TYPE": "application/json" if raw else "",
            "wsgi.input": io.BytesIO(raw),
        }
    )
    captured = {}

    def start_response(status, headers, exc_info=None):
        captured["status"] = status

    data = b"".join(app(environ, start_response))
    return int(captured["status"].split()[0]), data


@pytest.fixture
def app():
    return PetStoreApp()


def test_add_pet(app):
    code, data = call(app, "POST", "/pets", body={"name": "Spot", "tag": "TagOfSpot"})
    assert code == 201
    pet = json.loads(data)
    assert pet["name"] == "Spot"
    assert pet["tag"] == "TagOfSpot"


def test_find_pet_by_id(app):
    app.store.pets[100] = Pet(id=100, name="")
    code, data = call(app, "GET", "/pets/100")
    assert code == 200
    assert json.loads(data) == {"id": 100, "name": ""}


def test_pet_not_found(app):
    code, data = call(app, "GET", "/pets/27179095781")
    assert code == 404
    assert json.loads(data)["code"] == 404


def test_list_all_pets(app):
    app.store.pets = {1: Pet(id=1, name=""), 2: Pet(id=2, name="")}
    code, data = call(app, "GET", "/pets")
    assert code == 200
    assert len(json.loads(data)) == 2


def test_filter_pets_by_tag(app):
    app.store.pets = {1: Pet(id=1, name="", tag="TagOfFido"), 2: Pet(id=2, name="")}
    code, data = call(app, "GET", "/pets", query="tags=TagOfFido")
    assert code == 200
    assert len(json.loads(data)) == 1


def test_filter_pets_by_missing_tag(app):
    app.store.pets = {1: Pet(id=1, name=""), 2: Pet(id=2, name="")}
    code, data = call(app, "GET", "/pets", query="tags=NotExists")
    assert code == 200
    assert len(json.loads(data)) == 0


def test_delete_pets(app):
    app.store.pets = {1: Pet(id=1, name=""), 2: Pet(id=2, name="")}
    code, data = call(app, "DELETE", "/pets/7")
    assert code == 404
    assert json.loads(data)["code"] == 404

    code, data = call(app, "DELETE", "/pets/1")
    assert code == 204
    assert data == b""
    code, _ = call(app, "DELETE", "/pets/2")
    assert code == 204

    code, data = call(app, "GET", "/pets")
    assert code == 200
    assert len(json.loads(data)) == 0


def test_bad_id_is_rejected(app):
    code, _ = call(app, "GET", "/pets/foo")
    assert code == 400


def test_malformed_body_is_rejected(app):
    code, _ = call(app, "POST", "/pets", body={"name": 7})
    assert code == 400
    assert app.store.pets == {}


def test_missing_name_is_rejected(app):
    code, _ = call(app, "POST", "/pets", body={"tag": "TagOfSpot"})
    assert code == 400


def test_unknown_route_is_rejected(app):
    code, _ = call(app, "GET", "/resource")
    assert code == 400


def test_limit_query(app):
    app.store.pets = {i: Pet(id=i, name="") for i in range(1, 4)}
    code, data = call(app, "GET", "/pets", query="limit=2")
    assert code == 200
    assert len(json.loads(data)) == 2