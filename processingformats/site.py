from __future__ import annotations

from dataclasses import dataclass

from .base import (
    ProcessingEntity,
    ValidationFinding,
    check_string,
    clean_number,
    clean_string,
    normalize_fields,
    read_number,
    read_string,
    require_object,
    write_number,
    write_string,
)

STATION_KEY = "Station"
NETWORK_KEY = "Network"
CHANNEL_KEY = "Channel"
LOCATION_KEY = "Location"
LATITUDE_KEY = "Latitude"
LONGITUDE_KEY = "Longitude"
ELEVATION_KEY = "Elevation"


@dataclass(frozen=True)
class Site(ProcessingEntity):
    """Station/network/channel/location code of a recording site.

    Station and network are required. Channel, location and the geographic
    coordinates are optional; an empty string counts as not provided.
    """

    station: str | None = None
    network: str | None = None
    channel: str | None = None
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    elevation: float | None = None

    def __post_init__(self) -> None:
        normalize_fields(
            self,
            station=clean_string,
            network=clean_string,
            channel=clean_string,
            location=clean_string,
            latitude=clean_number,
            longitude=clean_number,
            elevation=clean_number,
        )

    @classmethod
    def from_json(cls, node: dict) -> Site:
        node = require_object(node, "Site")
        return cls(
            station=read_string(node, STATION_KEY),
            network=read_string(node, NETWORK_KEY),
            channel=read_string(node, CHANNEL_KEY),
            location=read_string(node, LOCATION_KEY),
            latitude=read_number(node, LATITUDE_KEY),
            longitude=read_number(node, LONGITUDE_KEY),
            elevation=read_number(node, ELEVATION_KEY),
        )

    def to_json(self) -> dict:
        out: dict = {}
        write_string(out, STATION_KEY, self.station, required=True)
        write_string(out, NETWORK_KEY, self.network, required=True)
        write_string(out, CHANNEL_KEY, self.channel)
        write_string(out, LOCATION_KEY, self.location)
        write_number(out, LATITUDE_KEY, self.latitude)
        write_number(out, LONGITUDE_KEY, self.longitude)
        write_number(out, ELEVATION_KEY, self.elevation)
        return out

    def get_findings(self) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        check_string(findings, "Site", STATION_KEY, self.station)
        check_string(findings, "Site", NETWORK_KEY, self.network)
        # channel and location are free text and optional; nothing else to check
        return findings
