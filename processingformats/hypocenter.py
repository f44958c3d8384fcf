from __future__ import annotations

from dataclasses import dataclass, field

from .base import (
    ProcessingEntity,
    ValidationFinding,
    check_number,
    check_time,
    clean_number,
    normalize_fields,
    read_number,
    read_time,
    require_object,
    write_number,
    write_time,
)

LATITUDE_KEY = "Latitude"
LONGITUDE_KEY = "Longitude"
TIME_KEY = "Time"
DEPTH_KEY = "Depth"
LATITUDE_ERROR_KEY = "LatitudeError"
LONGITUDE_ERROR_KEY = "LongitudeError"
TIME_ERROR_KEY = "TimeError"
DEPTH_ERROR_KEY = "DepthError"


@dataclass(frozen=True)
class Hypocenter(ProcessingEntity):
    """Earthquake source location.

    ``time`` is decimal epoch seconds; on the wire it is an ISO-8601 string.
    The four error fields are optional. NaN passed to any numeric field is
    stored as ``None`` (not provided). ``time_malformed`` records a Time value
    that was present in the source but could not be parsed.
    """

    latitude: float | None = None
    longitude: float | None = None
    time: float | None = None
    depth: float | None = None
    latitude_error: float | None = None
    longitude_error: float | None = None
    time_error: float | None = None
    depth_error: float | None = None
    time_malformed: bool = field(default=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        normalize_fields(
            self,
            latitude=clean_number,
            longitude=clean_number,
            time=clean_number,
            depth=clean_number,
            latitude_error=clean_number,
            longitude_error=clean_number,
            time_error=clean_number,
            depth_error=clean_number,
        )

    @classmethod
    def from_json(cls, node: dict) -> Hypocenter:
        node = require_object(node, "Hypocenter")
        time = read_time(node, TIME_KEY)
        return cls(
            latitude=read_number(node, LATITUDE_KEY),
            longitude=read_number(node, LONGITUDE_KEY),
            time=time,
            depth=read_number(node, DEPTH_KEY),
            latitude_error=read_number(node, LATITUDE_ERROR_KEY),
            longitude_error=read_number(node, LONGITUDE_ERROR_KEY),
            time_error=read_number(node, TIME_ERROR_KEY),
            depth_error=read_number(node, DEPTH_ERROR_KEY),
            time_malformed=time is None and node.get(TIME_KEY) is not None,
        )

    def to_json(self) -> dict:
        out: dict = {}
        write_number(out, LATITUDE_KEY, self.latitude, required=True)
        write_number(out, LONGITUDE_KEY, self.longitude, required=True)
        write_time(out, TIME_KEY, self.time, required=True)
        write_number(out, DEPTH_KEY, self.depth, required=True)
        write_number(out, LATITUDE_ERROR_KEY, self.latitude_error)
        write_number(out, LONGITUDE_ERROR_KEY, self.longitude_error)
        write_number(out, TIME_ERROR_KEY, self.time_error)
        write_number(out, DEPTH_ERROR_KEY, self.depth_error)
        return out

    def get_findings(self) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        check_number(findings, "Hypocenter", LATITUDE_KEY, self.latitude)
        check_number(findings, "Hypocenter", LONGITUDE_KEY, self.longitude)
        check_time(findings, "Hypocenter", TIME_KEY, self.time, self.time_malformed)
        check_number(findings, "Hypocenter", DEPTH_KEY, self.depth)
        return findings
