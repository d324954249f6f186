#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PositiveFloat,
    PositiveInt,
    ValidationError,
    model_validator,
)

from tsproc.exceptions import InvalidInput
from tsproc.lib.types import (
    INTERP_LITERALS,
    REDUCTION_LITERALS,
    TIMESTAMP_QUANTUM_LITERALS,
    TRANSFORM_LITERALS,
)


class FieldSchema(BaseModel):
    """A value field of a series and its optional quantization step."""

    name: str = Field(validation_alias=AliasChoices("name", "field"))
    quantum: Optional[PositiveFloat] = None


class TimestampSchema(BaseModel):
    name: str = Field(validation_alias=AliasChoices("name", "field"))
    format: str
    quantum: TIMESTAMP_QUANTUM_LITERALS = "none"


class SeriesSchema(BaseModel):
    """Description of the records of a single series."""

    timestamp: TimestampSchema
    fields: List[FieldSchema] = Field(default_factory=list)

    @property
    def fieldNames(self) -> List[str]:
        return [f.name for f in self.fields]


class TransformConfig(BaseModel):
    type: TRANSFORM_LITERALS = "interp"
    interp_type: INTERP_LITERALS = "linear"


class ReductionConfig(BaseModel):
    type: REDUCTION_LITERALS = "skip"
    size: PositiveInt = 1
    target_field: Optional[str] = None


class DateBorder(BaseModel):
    date: str


class DateBorders(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: Optional[DateBorder] = Field(default=None, alias="from")
    to: Optional[DateBorder] = None


class CorrelationConfig(BaseModel):
    enabled: bool = True
    count_negative: bool = False
    max_coef: bool = True


class Config(BaseModel):
    """
    The processing configuration.

    A ``correlation`` section enables the correlation detection, all other
    sections are optional and default to the values documented on the
    section models.
    """

    timeseries: List[SeriesSchema] = Field(min_length=1)
    transform: TransformConfig = Field(default_factory=TransformConfig)
    reduction: ReductionConfig = Field(default_factory=ReductionConfig)
    date_borders: Optional[DateBorders] = None
    correlation: Optional[CorrelationConfig] = None

    @model_validator(mode="before")
    @classmethod
    def _legacyInterpolation(cls, data: Any) -> Any:
        # the former 'interpolation.type' key maps to 'transform.interp_type'
        if not isinstance(data, dict) or "interpolation" not in data:
            return data
        data = dict(data)
        legacy = data.pop("interpolation") or {}
        transform = dict(data.get("transform") or {})
        if "type" in legacy:
            transform.setdefault("interp_type", legacy["type"])
        data["transform"] = transform
        return data

    @property
    def correlationEnabled(self) -> bool:
        return self.correlation is not None and self.correlation.enabled

    @property
    def borders(self) -> tuple[str | None, str | None]:
        if self.date_borders is None:
            return None, None
        lower, upper = self.date_borders.from_, self.date_borders.to
        return (
            lower.date if lower is not None else None,
            upper.date if upper is not None else None,
        )


def parseConfig(config: Config | dict) -> Config:
    """
    Validate a configuration mapping.

    Raises
    ------
    InvalidInput
        If the configuration is unset or does not validate.
    """
    if config is None:
        raise InvalidInput("config is not set")
    if isinstance(config, Config):
        return config.model_copy(deep=True)
    try:
        return Config.model_validate(config)
    except ValidationError as e:
        raise InvalidInput(f"invalid config:\n{e}") from e
