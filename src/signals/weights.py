"""Declarative weight tables for signal extraction."""

import hashlib
from pathlib import Path
from typing import Annotated

import structlog
import yaml
from pydantic import Field, ValidationError, model_validator

from src.data_model import StrictBaseModel
from src.signals.constants import (
    JOB_BOARD_FIELD,
    JOB_SKILL_FIELD,
    JOB_SKILL_RATIO,
    USER_CUSTOM_WEIGHTS,
    USER_DIRECT_FIELDS,
    USER_MOST_RECENT_FIELDS,
    USER_TRUNCATED_FIELDS,
)


logger = structlog.get_logger()


class CustomWeight(StrictBaseModel):
    """Contribution of one field to the estimated user count.

    When the field is present and truthy it contributes
    ``constant + factor * numeric(value)``.

    Attributes:
        path: Space-delimited field path.
        constant: Flat contribution for the field being present.
        factor: Multiplier applied to the field's numeric value.
        truncate: Parse the value as an integer (dropping any fraction)
            before applying the factor.
    """

    path: Annotated[str, Field(min_length=1)]
    constant: Annotated[float, Field(ge=0.0)] = 0.0
    factor: Annotated[float, Field(ge=0.0)] = 0.0
    truncate: bool = False


class JobWeights(StrictBaseModel):
    """Weights for the estimated job count.

    Attributes:
        skill_field: Time-series field with professional-network skill counts.
        skill_ratio: Share of skill holders assumed to be job openings.
        board_field: Time-series field with job-board posting counts.
    """

    skill_field: Annotated[str, Field(min_length=1)] = JOB_SKILL_FIELD
    skill_ratio: Annotated[float, Field(ge=0.0, le=1.0)] = JOB_SKILL_RATIO
    board_field: Annotated[str, Field(min_length=1)] = JOB_BOARD_FIELD


def _default_custom_weights() -> list[CustomWeight]:
    return [
        CustomWeight(
            path=path,
            constant=constant,
            factor=factor,
            truncate=path in USER_TRUNCATED_FIELDS,
        )
        for path, (constant, factor) in USER_CUSTOM_WEIGHTS.items()
    ]


class SignalWeights(StrictBaseModel):
    """Complete heuristic table used by the signal extractor.

    Attributes:
        most_recent_fields: Time-series fields summed by their latest value.
        direct_fields: Numeric fields summed as-is.
        custom: Per-field constant/linear contributions.
        jobs: Job estimate weights.
    """

    most_recent_fields: list[str] = Field(
        default_factory=lambda: list(USER_MOST_RECENT_FIELDS)
    )
    direct_fields: list[str] = Field(default_factory=lambda: list(USER_DIRECT_FIELDS))
    custom: list[CustomWeight] = Field(default_factory=_default_custom_weights)
    jobs: JobWeights = Field(default_factory=JobWeights)

    @model_validator(mode="after")
    def validate_unique_custom_paths(self) -> "SignalWeights":
        """Ensure each custom field is weighted at most once."""
        paths = [weight.path for weight in self.custom]
        duplicates = sorted({p for p in paths if paths.count(p) > 1})
        if duplicates:
            msg = f"Duplicate custom weight paths: {', '.join(duplicates)}"
            raise ValueError(msg)
        return self


class ConfigValidationError(Exception):
    """Raised when a weights file fails validation."""

    def __init__(self, errors: list[dict[str, str]], file_path: str) -> None:
        """Initialize the error.

        Args:
            errors: List of validation error details.
            file_path: Path to the file that failed validation.
        """
        self.errors = errors
        self.file_path = file_path
        super().__init__(f"Validation failed for {file_path}: {len(errors)} errors")


def load_signal_weights(file_path: Path) -> SignalWeights:
    """Load and validate a YAML weights file.

    Keys missing from the file fall back to the default heuristic table.

    Args:
        file_path: Path to the weights YAML file.

    Returns:
        Validated weights.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the file does not match the schema.
    """
    content_bytes = file_path.read_bytes()
    checksum = hashlib.sha256(content_bytes).hexdigest()
    log = logger.bind(component="signals", path=str(file_path), checksum=checksum)

    try:
        parsed = yaml.safe_load(content_bytes.decode("utf-8")) or {}
    except yaml.YAMLError as e:
        errors = [{"loc": "", "msg": f"YAML parse error: {e}", "type": "yaml"}]
        log.error("weights_parse_failed", error=str(e))
        raise ConfigValidationError(errors, str(file_path)) from e

    try:
        weights = SignalWeights.model_validate(parsed)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(part) for part in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        log.error("weights_validation_failed", error_count=len(errors))
        raise ConfigValidationError(errors, str(file_path)) from e

    log.info("weights_loaded", custom_fields=len(weights.custom))
    return weights
