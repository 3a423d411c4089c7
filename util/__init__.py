from util.config import Settings
from util.errors import (
    BackendBatchError,
    BackendConnectionError,
    BackendWriteError,
    IngestError,
    InputError,
    PointConstructionError,
    TimestampError,
)
