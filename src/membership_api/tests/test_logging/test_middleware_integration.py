import json
import logging
import uuid

from fastapi import FastAPI
from starlette.testclient import TestClient

from membership_api.config.settings import Settings
from membership_api.core.logging.builder import setup_logging
from membership_api.core.logging.middleware import REQUEST_ID_HEADER, RequestIDMiddleware


def make_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/hello")
    def hello():
        logging.getLogger("membership_api.test").info("handling hello")
        return {"ok": True}

    return app


def json_lines(text: str):
    for line in text.splitlines():
        try:
            yield json.loads(line)
        except ValueError:
            continue


def test_request_id_in_response_and_logs(tmp_path, capsys):
    setup_logging(Settings(ENV="production", LOG_FORMAT="json", LOG_LEVEL="INFO", LOG_TO_STDOUT=True, LOG_DIR=tmp_path))

    resp = TestClient(make_app()).get("/hello")
    assert resp.status_code == 200

    rid = resp.headers.get(REQUEST_ID_HEADER)
    assert rid is not None
    uuid.UUID(rid)

    stderr = capsys.readouterr().err
    assert any(rec.get("request_id") == rid for rec in json_lines(stderr)), "no log line carries the request id"


def test_incoming_uuid_request_id_is_kept():
    incoming = str(uuid.uuid4())

    resp = TestClient(make_app()).get("/hello", headers={REQUEST_ID_HEADER: incoming})

    assert resp.headers[REQUEST_ID_HEADER] == incoming


def test_non_uuid_request_id_is_replaced():
    resp = TestClient(make_app()).get("/hello", headers={REQUEST_ID_HEADER: "evil\nline"})

    rid = resp.headers[REQUEST_ID_HEADER]
    assert rid != "evil\nline"
    assert str(uuid.UUID(rid)) == rid
