from durability.influx_point import InfluxPoint
from durability.influx_writer import BatchPoints, InfluxWriter
