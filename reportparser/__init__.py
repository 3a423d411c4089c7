import json
from typing import Dict, Any, List, Union
from abc import ABC, abstractmethod
from durability.influx_point import InfluxPoint
from reportparser.fields import FieldSpec, exists, extract_fields, get_string
from reportparser.timestamps import TimestampPolicy, ReportTimestampPolicy, WallClockPolicy, calendar_fields
from util.errors import InputError

TIMING_FIELDS = (
    FieldSpec("total", "Total"),
    FieldSpec("dns", "Dns"),
    FieldSpec("wait", "Wait"),
    FieldSpec("connect", "Connect"),
    FieldSpec("send", "Send"),
    FieldSpec("ssl", "Ssl"),
    FieldSpec("wire", "Wire"),
    FieldSpec("client", "Client"),
    FieldSpec("doccomplete", "DocumentComplete", 0.0),
    FieldSpec("renderstart", "renderStart", 0.0),
    FieldSpec("domload", "domLoad", 0.0),
)

BYTE_FIELDS = (
    FieldSpec("totalcontent", "TotalContent", 0.0),
    FieldSpec("image", "Image", 0.0),
    FieldSpec("script", "Script", 0.0),
    FieldSpec("css", "Css", 0.0),
    FieldSpec("html", "Html", 0.0),
)

COUNTER_FIELDS = (
    FieldSpec("hosts", "Hosts"),
    FieldSpec("requests", "Requests"),
    FieldSpec("failedrequests", "FailedRequests"),
    FieldSpec("jsfailures", "JsFailures", 0.0),
)


def _parse_int(text: str) -> int:
    value = int(text)
    # numeric fields are floats; reject integers beyond float range while decoding
    float(value)
    return value


class JsonHandler(ABC):
    """Interface for handling specific JSON data structures."""

    @abstractmethod
    def can_handle(self, data: Any) -> bool:
        """
        Determine if this handler can process the given JSON data.

        Args:
            data: The parsed JSON data

        Returns:
            True if this handler can process the data, False otherwise
        """
        pass

    @abstractmethod
    def process(self, data: Any) -> Any:
        """
        Process the JSON data.

        Args:
            data: The parsed JSON data

        Returns:
            The processing result
        """
        pass


class ReportProcessor:
    """
    Decodes request bodies and hands them to registered handlers.
    """

    def __init__(self):
        self.handlers = []

    def register_handler(self, handler: JsonHandler) -> None:
        """
        Register a new handler.

        Args:
            handler: The handler to register
        """
        self.handlers.append(handler)

    def process_body(self, body: Union[str, bytes]) -> Any:
        """
        Decode a request body and process it with the first matching handler.

        Args:
            body: The raw JSON request body

        Returns:
            The result from the first matching handler

        Raises:
            InputError: The body is empty, is not JSON, or no handler accepts it
        """
        if not body:
            raise InputError("no name was provided in the HTTP body")
        try:
            data = json.loads(body, parse_int=_parse_int)
        except (ValueError, OverflowError) as e:
            raise InputError(f"JSON decode error: {e}") from e

        for handler in self.handlers:
            if handler.can_handle(data):
                return handler.process(data)

        raise InputError(f"invalid report: root must be a JSON object, got {type(data).__name__}")


class TestReportHandler(JsonHandler):
    """Maps a performance test report onto test_timing, test_byte and test_counter points."""

    # not a pytest test class
    __test__ = False

    def __init__(self, timestamp_policy: TimestampPolicy):
        self.timestamp_policy = timestamp_policy

    def can_handle(self, data: Any) -> bool:
        return isinstance(data, dict)

    def process(self, data: Dict[str, Any]) -> List[InfluxPoint]:
        timestamp = self.timestamp_policy.resolve(data)
        tags = self.tags(data)

        return [
            InfluxPoint("test_timing", tags, extract_fields(data, "Summary.Timing", TIMING_FIELDS), timestamp),
            InfluxPoint("test_byte", tags, extract_fields(data, "Summary.Byte.Response", BYTE_FIELDS), timestamp),
            InfluxPoint("test_counter", tags, self.counter_fields(data, timestamp), timestamp),
        ]

    def tags(self, data: Dict[str, Any]) -> Dict[str, str]:
        tags = {}
        testname = get_string(data, "TestDetail.Name")
        if testname is not None:
            tags["testname"] = testname
        nodename = get_string(data, "NodeName")
        if nodename is not None:
            tags["nodename"] = nodename
        return tags

    def counter_fields(self, data: Dict[str, Any], timestamp) -> Dict[str, Any]:
        fields = extract_fields(data, "Summary.Counter", COUNTER_FIELDS)
        if exists(data, "Summary.Error") and exists(data, "Summary.Error.Code"):
            fields["availability"] = 0.0
        else:
            fields["availability"] = 100.0
        if self.timestamp_policy.adds_calendar_fields:
            fields.update(calendar_fields(timestamp))
        return fields


def report_processor(timestamp_policy: TimestampPolicy) -> ReportProcessor:
    processor = ReportProcessor()
    processor.register_handler(TestReportHandler(timestamp_policy))
    return processor
