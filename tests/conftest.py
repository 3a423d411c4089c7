"""Shared fixtures: sample reports, a fixed clock and a fake InfluxDB client."""

import json
import logging
from datetime import datetime, timezone

import pytest

from durability.influx_writer import InfluxWriter
from util.config import Settings

FIXED_NOW = datetime(2024, 2, 29, 8, 15, 42, tzinfo=timezone.utc)

FULL_REPORT = {
    "TestDetail": {"Name": "checkout"},
    "NodeName": "eu-west-node-3",
    "Summary": {
        "Timestamp": "20230615143000123",
        "Timing": {
            "Total": 2150.0,
            "Dns": 12.0,
            "Wait": 310.5,
            "Connect": 45.0,
            "Send": 1.0,
            "Ssl": 60.0,
            "Wire": 880.0,
            "Client": 842.5,
            "DocumentComplete": 1900.0,
            "renderStart": 620.0,
            "domLoad": 1500.0,
        },
        "Byte": {
            "Response": {
                "TotalContent": 1048576,
                "Image": 524288,
                "Script": 262144,
                "Css": 65536,
                "Html": 32768,
            }
        },
        "Counter": {
            "Hosts": 7,
            "Requests": 84,
            "FailedRequests": 2,
            "JsFailures": 1,
        },
    },
}

SETTINGS = Settings(
    influx_url="http://influxdb:8086",
    influx_username="c2i",
    influx_password="secret",
    influx_database="perfdata",
)


class FakeInfluxClient:
    def __init__(self, write_error=None, **kwargs):
        self.kwargs = kwargs
        self.write_error = write_error
        self.writes = []
        self.closed = False

    def write(self, record=None, database=None, **kwargs):
        if self.write_error is not None:
            raise self.write_error
        self.writes.append({"record": list(record), "database": database, **kwargs})

    def close(self):
        self.closed = True


class FakeClientFactory:
    def __init__(self, write_error=None, connect_error=None):
        self.write_error = write_error
        self.connect_error = connect_error
        self.clients = []

    def __call__(self, **kwargs):
        if self.connect_error is not None:
            raise self.connect_error
        client = FakeInfluxClient(write_error=self.write_error, **kwargs)
        self.clients.append(client)
        return client


@pytest.fixture
def full_report():
    return json.loads(json.dumps(FULL_REPORT))


@pytest.fixture
def logger():
    return logging.getLogger("c2i.tests")


@pytest.fixture
def client_factory():
    return FakeClientFactory()


@pytest.fixture
def writer(client_factory, logger):
    return InfluxWriter(SETTINGS, logger, client_factory=client_factory)
