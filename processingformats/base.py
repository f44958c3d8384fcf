from __future__ import annotations

import dataclasses
import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar, runtime_checkable

from .errors import EntityTypeError, TimeFormatError
from .jsoncodec import deserialize, serialize
from .timecodec import format_epoch, parse_iso8601

logger = logging.getLogger(__name__)

EMPTY = "empty"
MISSING = "missing"
INVALID = "invalid"

_MESSAGE_PREFIX = {
    EMPTY: "Empty",
    MISSING: "No",
    INVALID: "Invalid",
}

E = TypeVar("E", bound="ProcessingEntity")


@dataclass(frozen=True)
class ValidationFinding:
    kind: str
    field: str
    entity: str
    path: str = ""

    @property
    def message(self) -> str:
        text = f"{_MESSAGE_PREFIX[self.kind]} {self.field} in {self.entity} class."
        if self.path:
            return f"{self.path}: {text}"
        return text

    def under(self, prefix: str) -> ValidationFinding:
        path = f"{prefix}.{self.path}" if self.path else prefix
        return dataclasses.replace(self, path=path)


@runtime_checkable
class ConvertibleEntity(Protocol):
    @classmethod
    def from_json(cls, node: dict): ...

    def to_json(self) -> dict: ...

    def get_errors(self) -> list[str]: ...


class ProcessingEntity(ABC):
    """Behaviour shared by every entity on top of its own field table."""

    @abstractmethod
    def to_json(self) -> dict:
        ...

    @abstractmethod
    def get_findings(self) -> list[ValidationFinding]:
        ...

    def get_errors(self) -> list[str]:
        return [finding.message for finding in self.get_findings()]

    def is_valid(self) -> bool:
        return not self.get_findings()

    def copy(self: E) -> E:
        return dataclasses.replace(self)

    def to_json_string(self) -> str:
        return serialize(self.to_json())

    @classmethod
    def from_json_string(cls: type[E], text: str) -> E:
        return cls.from_json(deserialize(text))


def require_object(node: Any, entity: str) -> dict:
    if not isinstance(node, dict):
        raise EntityTypeError(
            f"{entity} must be built from a JSON object, got {type(node).__name__}"
        )
    return node


# field normalization

def normalize_fields(entity: Any, **cleaners) -> None:
    """Apply a cleaner to each named field of a frozen dataclass in place."""
    for name, cleaner in cleaners.items():
        object.__setattr__(entity, name, cleaner(getattr(entity, name)))


def clean_string(value: Any) -> str | None:
    if isinstance(value, str) and value != "":
        return value
    return None


def clean_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    if not math.isfinite(value):
        return None
    return value


def clean_flag(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    return None


def clean_numbers(values: Any) -> tuple[float, ...]:
    if not isinstance(values, (list, tuple)):
        return ()
    cleaned = tuple(clean_number(value) for value in values)
    if any(value is None for value in cleaned):
        return ()
    return cleaned


def entity_cleaner(entity_cls: type[E]):
    """Build a cleaner that stores a sequence of ``entity_cls`` as a tuple."""

    def clean(values: Any) -> tuple[E, ...]:
        if not values:
            return ()
        values = tuple(values)
        for index, value in enumerate(values):
            if not isinstance(value, entity_cls):
                raise EntityTypeError(
                    f"Element {index} must be a {entity_cls.__name__}, got {type(value).__name__}"
                )
        return values

    return clean


# readers

def read_string(node: dict, key: str) -> str | None:
    value = node.get(key)
    if value is not None and not isinstance(value, str):
        logger.debug("Ignoring %s: expected string, got %s", key, type(value).__name__)
    return clean_string(value)


def read_number(node: dict, key: str) -> float | None:
    value = node.get(key)
    cleaned = clean_number(value)
    if value is not None and cleaned is None:
        logger.debug("Ignoring %s: %r is not a finite number", key, value)
    return cleaned


def read_flag(node: dict, key: str) -> bool | None:
    value = node.get(key)
    if value is not None and not isinstance(value, bool):
        logger.debug("Ignoring %s: expected boolean, got %s", key, type(value).__name__)
    return clean_flag(value)


def read_time(node: dict, key: str) -> float | None:
    value = node.get(key)
    if value is None:
        return None
    try:
        return parse_iso8601(value)
    except TimeFormatError as exc:
        logger.debug("Ignoring %s: %s", key, exc)
        return None


def read_numbers(node: dict, key: str) -> tuple[float, ...]:
    value = node.get(key)
    cleaned = clean_numbers(value)
    if value and not cleaned:
        logger.debug("Ignoring %s: expected an array of finite numbers", key)
    return cleaned


def read_entities(node: dict, key: str, entity_cls: type[E]) -> tuple[E, ...]:
    """Read an array of nested objects, keeping one entry per source element.

    Elements that are not objects become empty entities so their position is
    preserved and validation reports them.
    """
    value = node.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        logger.debug("Ignoring %s: expected array, got %s", key, type(value).__name__)
        return ()

    out = []
    for index, element in enumerate(value):
        if isinstance(element, dict):
            out.append(entity_cls.from_json(element))
        else:
            logger.debug("%s[%d] is not an object; treating it as empty", key, index)
            out.append(entity_cls())
    return tuple(out)


# writers

def write_string(out: dict, key: str, value: str | None, required: bool = False) -> None:
    if value is not None:
        out[key] = value
    elif required:
        out[key] = ""


def write_number(out: dict, key: str, value: float | None, required: bool = False) -> None:
    if value is not None or required:
        out[key] = value


def write_flag(out: dict, key: str, value: bool | None) -> None:
    if value is not None:
        out[key] = value


def write_time(out: dict, key: str, value: float | None, required: bool = False) -> None:
    if value is not None:
        out[key] = format_epoch(value)
    elif required:
        out[key] = None


# checks

def check_string(findings: list, entity: str, key: str, value: str | None) -> None:
    if value is None:
        findings.append(ValidationFinding(EMPTY, key, entity))


def check_number(findings: list, entity: str, key: str, value: float | None) -> None:
    if value is None:
        findings.append(ValidationFinding(MISSING, key, entity))


def check_time(findings: list, entity: str, key: str, value: float | None,
               malformed: bool = False) -> None:
    if value is None:
        findings.append(ValidationFinding(INVALID if malformed else MISSING, key, entity))


def check_numbers(findings: list, entity: str, key: str, values: tuple) -> None:
    if not values:
        findings.append(ValidationFinding(EMPTY, key, entity))


def check_entities(findings: list, key: str, entities: tuple) -> None:
    for index, entity in enumerate(entities):
        prefix = f"{key}[{index}]"
        findings.extend(finding.under(prefix) for finding in entity.get_findings())
