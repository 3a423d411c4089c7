import json

import pytest
from fastapi.testclient import TestClient

from api import create_app
from durability.influx_writer import InfluxWriter
from reportparser.timestamps import WallClockPolicy

from tests.conftest import FIXED_NOW, SETTINGS, FakeClientFactory


def _client(logger, factory):
    writer = InfluxWriter(SETTINGS, logger, client_factory=factory)
    app = create_app(SETTINGS, logger, writer=writer, timestamp_policy=WallClockPolicy(clock=lambda: FIXED_NOW))
    return TestClient(app)


def test_healthz(logger):
    resp = _client(logger, FakeClientFactory()).get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


@pytest.mark.parametrize("path", ["/data/", "/data/checkout", "/data/eu/west/node-3"])
def test_post_report_writes_three_points(logger, full_report, path):
    factory = FakeClientFactory()
    resp = _client(logger, factory).post(path, content=json.dumps(full_report))

    assert resp.status_code == 200
    assert resp.text == "OK"
    [write] = factory.clients[0].writes
    lines = [point.to_line_protocol() for point in write["record"]]
    assert [line.split(",")[0] for line in lines] == ["test_timing", "test_byte", "test_counter"]
    assert all(line.endswith(f" {int(FIXED_NOW.timestamp())}") for line in lines)
    # the server stamps points with the current time and adds no calendar fields
    assert "year-month" not in lines[2]


def test_invalid_json_is_500(logger):
    factory = FakeClientFactory()
    resp = _client(logger, factory).post("/data/", content="{broken")

    assert resp.status_code == 500
    assert resp.text.startswith("JSON decode error:")
    assert resp.headers["content-type"].startswith("text/plain")
    assert factory.clients == []


def test_connection_error_is_500(logger, full_report):
    factory = FakeClientFactory(connect_error=ValueError("no host"))
    resp = _client(logger, factory).post("/data/", content=json.dumps(full_report))

    assert resp.status_code == 500
    assert resp.text == "InfluxDB error: no host"


def test_write_error_is_500(logger, full_report):
    factory = FakeClientFactory(write_error=ConnectionError("connection refused"))
    resp = _client(logger, factory).post("/data/", content=json.dumps(full_report))

    assert resp.status_code == 500
    assert resp.text == "InfluxDB error: connection refused"
    assert "OK" not in resp.text


def test_point_error_is_500(logger):
    factory = FakeClientFactory()
    resp = _client(logger, factory).post("/data/", content='{"Summary": {"Timing": {"Total": NaN}}}')

    assert resp.status_code == 500
    assert resp.text.startswith("InfluxDB point error:")
    assert factory.clients[0].writes == []


def test_other_routes_are_not_served(logger, full_report):
    resp = _client(logger, FakeClientFactory()).post("/metrics", content=json.dumps(full_report))
    assert resp.status_code == 404


def test_integer_beyond_float_range_is_500(logger):
    factory = FakeClientFactory()
    body = '{"Summary": {"Timing": {"Total": 1' + "0" * 400 + "}}}"
    resp = _client(logger, factory).post("/data/", content=body)

    assert resp.status_code == 500
    assert resp.text.startswith("JSON decode error:")
    assert factory.clients == []
