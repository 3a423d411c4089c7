import math
from datetime import datetime, timezone
from typing import Dict, Union

from influxdb_client_3 import Point, WritePrecision

from util.errors import PointConstructionError

FieldValue = Union[float, str]

# points stamped with the zero time are written without a timestamp
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


class InfluxPoint:
    def __init__(self, measurement: str, tags: Dict[str, str], fields: Dict[str, FieldValue], timestamp: datetime):
        self.measurement = measurement
        self.tags = tags
        self.fields = fields
        self.timestamp = timestamp

    def validate(self) -> None:
        if not self.measurement:
            raise PointConstructionError("InfluxDB point error: measurement name is empty")
        if not self.fields:
            raise PointConstructionError(
                f"InfluxDB point error: {self.measurement} point without fields is unsupported"
            )
        for key, value in self.fields.items():
            if isinstance(value, float) and not math.isfinite(value):
                raise PointConstructionError(
                    f"InfluxDB point error: {self.measurement} field {key} is not a finite number ({value})"
                )

    def to_point(self, precision: str = WritePrecision.S) -> Point:
        self.validate()
        point = Point(self.measurement)
        for key, value in self.tags.items():
            point.tag(key, value)
        for key, value in self.fields.items():
            point.field(key, value)
        if self.timestamp == ZERO_TIME:
            return point
        return point.time(self.timestamp, precision)

    def to_line_protocol(self, precision: str = WritePrecision.S) -> str:
        return self.to_point(precision).to_line_protocol()

    def to_dict(self):
        return {
            "measurement": self.measurement,
            "tags": self.tags,
            "fields": self.fields,
            "timestamp": self.timestamp
        }

    def __eq__(self, other):
        if not isinstance(other, InfluxPoint):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self):
        return f"InfluxPoint(measurement={self.measurement}, tags={self.tags}, fields={self.fields}, timestamp={self.timestamp})"
