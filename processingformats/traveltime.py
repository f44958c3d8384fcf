from __future__ import annotations

from dataclasses import dataclass

from .base import (
    INVALID,
    ProcessingEntity,
    ValidationFinding,
    check_entities,
    check_number,
    check_numbers,
    check_string,
    clean_flag,
    clean_number,
    clean_numbers,
    clean_string,
    entity_cleaner,
    normalize_fields,
    read_entities,
    read_flag,
    read_number,
    read_numbers,
    read_string,
    require_object,
    write_flag,
    write_number,
    write_string,
)

PHASE_KEY = "Phase"
TRAVEL_TIME_KEY = "TravelTime"
DISTANCE_DERIVATIVE_KEY = "DistanceDerivative"
DEPTH_DERIVATIVE_KEY = "DepthDerivative"
RAY_DERIVATIVE_KEY = "RayDerivative"
STATISTICAL_SPREAD_KEY = "StatisticalSpread"
OBSERVABILITY_KEY = "Observability"
TELESEISMIC_PHASE_GROUP_KEY = "TeleseismicPhaseGroup"
AUXILIARY_PHASE_GROUP_KEY = "AuxiliaryPhaseGroup"
LOCATION_USE_FLAG_KEY = "LocationUseFlag"
ASSOCIATION_WEIGHT_FLAG_KEY = "AssociationWeightFlag"

DISTANCE_KEY = "Distance"

TYPE_KEY = "Type"
ELEVATION_KEY = "Elevation"
LATITUDE_KEY = "Latitude"
LONGITUDE_KEY = "Longitude"
DATA_KEY = "Data"
PLOT_DATA_KEY = "PlotData"

STANDARD = "Standard"
PLOT = "Plot"
PLOT_STATISTICS = "PlotStatistics"
REQUEST_TYPES = (STANDARD, PLOT, PLOT_STATISTICS)


@dataclass(frozen=True)
class TravelTimeData(ProcessingEntity):
    """Travel time of one seismic phase at a given distance."""

    phase: str | None = None
    travel_time: float | None = None
    distance_derivative: float | None = None
    depth_derivative: float | None = None
    ray_derivative: float | None = None
    statistical_spread: float | None = None
    observability: float | None = None
    teleseismic_phase_group: str | None = None
    auxiliary_phase_group: str | None = None
    location_use_flag: bool | None = None
    association_weight_flag: bool | None = None

    def __post_init__(self) -> None:
        normalize_fields(
            self,
            phase=clean_string,
            travel_time=clean_number,
            distance_derivative=clean_number,
            depth_derivative=clean_number,
            ray_derivative=clean_number,
            statistical_spread=clean_number,
            observability=clean_number,
            teleseismic_phase_group=clean_string,
            auxiliary_phase_group=clean_string,
            location_use_flag=clean_flag,
            association_weight_flag=clean_flag,
        )

    @classmethod
    def from_json(cls, node: dict) -> TravelTimeData:
        node = require_object(node, "TravelTimeData")
        return cls(
            phase=read_string(node, PHASE_KEY),
            travel_time=read_number(node, TRAVEL_TIME_KEY),
            distance_derivative=read_number(node, DISTANCE_DERIVATIVE_KEY),
            depth_derivative=read_number(node, DEPTH_DERIVATIVE_KEY),
            ray_derivative=read_number(node, RAY_DERIVATIVE_KEY),
            statistical_spread=read_number(node, STATISTICAL_SPREAD_KEY),
            observability=read_number(node, OBSERVABILITY_KEY),
            teleseismic_phase_group=read_string(node, TELESEISMIC_PHASE_GROUP_KEY),
            auxiliary_phase_group=read_string(node, AUXILIARY_PHASE_GROUP_KEY),
            location_use_flag=read_flag(node, LOCATION_USE_FLAG_KEY),
            association_weight_flag=read_flag(node, ASSOCIATION_WEIGHT_FLAG_KEY),
        )

    def to_json(self) -> dict:
        out: dict = {}
        write_string(out, PHASE_KEY, self.phase, required=True)
        write_number(out, TRAVEL_TIME_KEY, self.travel_time, required=True)
        write_number(out, DISTANCE_DERIVATIVE_KEY, self.distance_derivative, required=True)
        write_number(out, DEPTH_DERIVATIVE_KEY, self.depth_derivative, required=True)
        write_number(out, RAY_DERIVATIVE_KEY, self.ray_derivative, required=True)
        write_number(out, STATISTICAL_SPREAD_KEY, self.statistical_spread, required=True)
        write_number(out, OBSERVABILITY_KEY, self.observability, required=True)
        write_string(out, TELESEISMIC_PHASE_GROUP_KEY, self.teleseismic_phase_group)
        write_string(out, AUXILIARY_PHASE_GROUP_KEY, self.auxiliary_phase_group)
        write_flag(out, LOCATION_USE_FLAG_KEY, self.location_use_flag)
        write_flag(out, ASSOCIATION_WEIGHT_FLAG_KEY, self.association_weight_flag)
        return out

    def get_findings(self) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        check_string(findings, "TravelTimeData", PHASE_KEY, self.phase)
        check_number(findings, "TravelTimeData", TRAVEL_TIME_KEY, self.travel_time)
        check_number(findings, "TravelTimeData", DISTANCE_DERIVATIVE_KEY, self.distance_derivative)
        check_number(findings, "TravelTimeData", DEPTH_DERIVATIVE_KEY, self.depth_derivative)
        check_number(findings, "TravelTimeData", RAY_DERIVATIVE_KEY, self.ray_derivative)
        check_number(findings, "TravelTimeData", STATISTICAL_SPREAD_KEY, self.statistical_spread)
        check_number(findings, "TravelTimeData", OBSERVABILITY_KEY, self.observability)
        return findings


@dataclass(frozen=True)
class TravelTimePlotData(ProcessingEntity):
    """Sampled travel time curve of one phase, one array entry per sample."""

    phase: str | None = None
    distance: tuple[float, ...] = ()
    travel_time: tuple[float, ...] = ()
    statistical_spread: tuple[float, ...] = ()
    observability: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        normalize_fields(
            self,
            phase=clean_string,
            distance=clean_numbers,
            travel_time=clean_numbers,
            statistical_spread=clean_numbers,
            observability=clean_numbers,
        )

    @classmethod
    def from_json(cls, node: dict) -> TravelTimePlotData:
        node = require_object(node, "TravelTimePlotData")
        return cls(
            phase=read_string(node, PHASE_KEY),
            distance=read_numbers(node, DISTANCE_KEY),
            travel_time=read_numbers(node, TRAVEL_TIME_KEY),
            statistical_spread=read_numbers(node, STATISTICAL_SPREAD_KEY),
            observability=read_numbers(node, OBSERVABILITY_KEY),
        )

    def to_json(self) -> dict:
        out: dict = {}
        write_string(out, PHASE_KEY, self.phase, required=True)
        out[DISTANCE_KEY] = list(self.distance)
        out[TRAVEL_TIME_KEY] = list(self.travel_time)
        out[STATISTICAL_SPREAD_KEY] = list(self.statistical_spread)
        out[OBSERVABILITY_KEY] = list(self.observability)
        return out

    def get_findings(self) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        check_string(findings, "TravelTimePlotData", PHASE_KEY, self.phase)
        check_numbers(findings, "TravelTimePlotData", DISTANCE_KEY, self.distance)
        check_numbers(findings, "TravelTimePlotData", TRAVEL_TIME_KEY, self.travel_time)
        check_numbers(findings, "TravelTimePlotData", STATISTICAL_SPREAD_KEY, self.statistical_spread)
        check_numbers(findings, "TravelTimePlotData", OBSERVABILITY_KEY, self.observability)
        return findings


def _clean_type(value) -> str:
    cleaned = clean_string(value)
    return STANDARD if cleaned is None else cleaned


@dataclass(frozen=True)
class TravelTimeRequest(ProcessingEntity):
    """Travel time request, optionally carrying the returned data.

    ``data`` and ``plot_data`` are empty for requests and filled in on the
    response. ``type`` falls back to "Standard" when not provided.
    """

    type: str = STANDARD
    distance: float | None = None
    elevation: float | None = None
    latitude: float | None = None
    longitude: float | None = None
    data: tuple[TravelTimeData, ...] = ()
    plot_data: tuple[TravelTimePlotData, ...] = ()

    def __post_init__(self) -> None:
        normalize_fields(
            self,
            type=_clean_type,
            distance=clean_number,
            elevation=clean_number,
            latitude=clean_number,
            longitude=clean_number,
            data=entity_cleaner(TravelTimeData),
            plot_data=entity_cleaner(TravelTimePlotData),
        )

    @classmethod
    def from_json(cls, node: dict) -> TravelTimeRequest:
        node = require_object(node, "TravelTimeRequest")
        return cls(
            type=read_string(node, TYPE_KEY),
            distance=read_number(node, DISTANCE_KEY),
            elevation=read_number(node, ELEVATION_KEY),
            latitude=read_number(node, LATITUDE_KEY),
            longitude=read_number(node, LONGITUDE_KEY),
            data=read_entities(node, DATA_KEY, TravelTimeData),
            plot_data=read_entities(node, PLOT_DATA_KEY, TravelTimePlotData),
        )

    def to_json(self) -> dict:
        out: dict = {TYPE_KEY: self.type}
        write_number(out, DISTANCE_KEY, self.distance, required=True)
        write_number(out, ELEVATION_KEY, self.elevation, required=True)
        write_number(out, LATITUDE_KEY, self.latitude)
        write_number(out, LONGITUDE_KEY, self.longitude)
        if self.data:
            out[DATA_KEY] = [item.to_json() for item in self.data]
        if self.plot_data:
            out[PLOT_DATA_KEY] = [item.to_json() for item in self.plot_data]
        return out

    def get_findings(self) -> list[ValidationFinding]:
        findings: list[ValidationFinding] = []
        check_number(findings, "TravelTimeRequest", DISTANCE_KEY, self.distance)
        check_number(findings, "TravelTimeRequest", ELEVATION_KEY, self.elevation)
        if self.type not in REQUEST_TYPES:
            findings.append(ValidationFinding(INVALID, TYPE_KEY, "TravelTimeRequest"))
        check_entities(findings, DATA_KEY, self.data)
        check_entities(findings, PLOT_DATA_KEY, self.plot_data)
        return findings
