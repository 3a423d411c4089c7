import logging
from typing import Callable, Iterable, List, Optional

from influxdb_client_3 import InfluxDBClient3, Point, WritePrecision

from durability.influx_point import InfluxPoint
from util.config import Settings
from util.errors import BackendBatchError, BackendConnectionError, BackendWriteError

_PRECISIONS = (WritePrecision.NS, WritePrecision.US, WritePrecision.MS, WritePrecision.S)


class BatchPoints:
    """Points bound for one database, written in a single call."""

    def __init__(self, database: str, precision: str = WritePrecision.S):
        if not database:
            raise BackendBatchError("InfluxDB error: no target database configured")
        if precision not in _PRECISIONS:
            raise BackendBatchError(f"InfluxDB error: unsupported precision {precision!r}")
        self.database = database
        self.precision = precision
        self.points: List[Point] = []

    def add_point(self, point: InfluxPoint) -> Point:
        built = point.to_point(self.precision)
        self.points.append(built)
        return built

    def __len__(self):
        return len(self.points)


class InfluxWriter:
    def __init__(self, settings: Settings, logger: Optional[logging.Logger] = None,
                 client_factory: Callable[..., InfluxDBClient3] = InfluxDBClient3):
        self.settings = settings
        self.logger = logger or logging.getLogger(__name__)
        self.client_factory = client_factory

    def connect(self) -> InfluxDBClient3:
        try:
            client = self.client_factory(
                host=self.settings.influx_url,
                database=self.settings.influx_database,
                token=self.settings.influx_token,
            )
        except Exception as e:
            raise BackendConnectionError(f"InfluxDB error: {e}") from e
        self.logger.debug(f"init db connection host={self.settings.influx_url} dbname={self.settings.influx_database}")
        return client

    def write(self, points: Iterable[InfluxPoint]) -> int:
        """
        Write all points in one batch.

        Args:
            points: The points of a single report

        Returns:
            The number of points written
        """
        client = self.connect()
        try:
            batch = BatchPoints(self.settings.influx_database, WritePrecision.S)
            for point in points:
                built = batch.add_point(point)
                self.logger.debug(f"InfluxDB {point.measurement} batch point: {built.to_line_protocol()}")

            try:
                client.write(record=batch.points, database=batch.database, write_precision=batch.precision)
            except Exception as e:
                raise BackendWriteError(f"InfluxDB error: {e}") from e
            return len(batch)
        finally:
            client.close()
