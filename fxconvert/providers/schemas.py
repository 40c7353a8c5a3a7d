"""Normalized rate snapshot and the schema used to decode provider payloads."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any, Dict, Mapping

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load, validate


def _ensure_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _normalize_code(code: str) -> str:
    normalized = code.strip().upper()
    if not normalized or not normalized.isascii():
        raise ValueError(f"Currency code must be non-empty ASCII: {code!r}")
    return normalized


def _normalize_rates(rates: Mapping[str, Decimal | float | int]) -> Dict[str, Decimal]:
    normalized: Dict[str, Decimal] = {}
    for code, value in rates.items():
        normalized[_normalize_code(code)] = Decimal(str(value))
    return normalized


@dataclass(frozen=True)
class RateSnapshot:
    """Rates captured at fetch time, expressed against `base_currency`."""

    base_currency: str
    source: str
    timestamp: datetime
    rates: Dict[str, Decimal] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_currency", _normalize_code(self.base_currency))
        object.__setattr__(self, "rates", _normalize_rates(self.rates))
        object.__setattr__(self, "timestamp", _ensure_utc(self.timestamp))
        if not self.source or not self.source.strip():
            raise ValueError("source must be provided for RateSnapshot")


class LatestRatesSchema(Schema):
    """Payload of a fixer.io style `latest` endpoint."""

    class Meta:
        unknown = EXCLUDE

    success = fields.Boolean(load_default=True)
    base = fields.String(required=True, validate=validate.Length(min=1))
    date = fields.Date(load_default=None)
    timestamp = fields.Integer(load_default=None)
    rates = fields.Dict(
        keys=fields.String(validate=validate.Length(min=1)),
        values=fields.Decimal(validate=validate.Range(min=0, min_inclusive=False)),
        required=True,
    )

    @post_load
    def resolve_timestamp(self, data: dict[str, Any], **kwargs: Any) -> dict[str, Any]:
        if data.get("timestamp") is not None:
            try:
                data["as_of"] = datetime.fromtimestamp(data["timestamp"], tz=UTC)
            except (OverflowError, OSError, ValueError) as exc:
                raise ValidationError("timestamp out of range", field_name="timestamp") from exc
        elif data.get("date") is not None:
            data["as_of"] = datetime(data["date"].year, data["date"].month, data["date"].day, tzinfo=UTC)
        else:
            data["as_of"] = datetime.now(UTC)
        return data


def load_snapshot(payload: Mapping[str, Any], *, source: str) -> RateSnapshot:
    """Decode a provider payload into a RateSnapshot.

    Raises:
        marshmallow.ValidationError: If the payload does not match the schema.
    """

    data = LatestRatesSchema().load(payload)
    try:
        return RateSnapshot(
            base_currency=data["base"],
            source=source,
            timestamp=data["as_of"],
            rates=data["rates"],
        )
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
