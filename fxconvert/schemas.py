"""Schemas for API requests and responses."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class HealthStatusSchema(Schema):
    status = fields.String(required=True)
    app = fields.String()


class HealthRatesSchema(Schema):
    status = fields.String(required=True)
    sequence = fields.Integer(required=True)
    base_currency = fields.String(allow_none=True)
    last_updated = fields.String(allow_none=True)
    error = fields.String(allow_none=True)
    message = fields.String(allow_none=True)


class CurrencyCatalogSchema(Schema):
    currencies = fields.List(fields.String(), required=True)
    default_source = fields.String(required=True)
    default_source_index = fields.Integer(required=True)
    default_target = fields.String(required=True)
    default_target_index = fields.Integer(required=True)


class SelectionRequestSchema(Schema):
    source_index = fields.Integer(required=True, validate=validate.Range(min=0))
    target_index = fields.Integer(required=True, validate=validate.Range(min=0))
    changed = fields.String(required=True, validate=validate.OneOf(["source", "target"]))


class SelectionResponseSchema(Schema):
    source_index = fields.Integer(required=True)
    source = fields.String(required=True)
    target_index = fields.Integer(required=True)
    target = fields.String(required=True)


class ConversionRequestSchema(Schema):
    source = fields.String(required=True, data_key="from")
    target = fields.String(required=True, data_key="to")
    amount = fields.Raw(required=True)


class ConversionResponseSchema(Schema):
    source = fields.String(required=True, data_key="from")
    target = fields.String(required=True, data_key="to")
    amount = fields.Decimal(required=True, as_string=True)
    result = fields.Decimal(required=True, as_string=True)
    formatted = fields.String(required=True)
    base_currency = fields.String(required=True)
    as_of = fields.String(allow_none=True)


class RefreshResponseSchema(Schema):
    message = fields.String(required=True)
    sequence = fields.Integer(required=True)
    base_currency = fields.String(allow_none=True)
    as_of = fields.String(allow_none=True)
