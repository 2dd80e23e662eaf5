"""Configuration for a MockTracer instance."""

from __future__ import annotations

from pydantic import BaseModel, Field


class MockTracerConfig(BaseModel):
    """Validated configuration for a MockTracer. Passed via DI at construction."""

    prefix_tracer_state: str = Field(default="ot-tracer-", min_length=1)
    prefix_baggage: str = Field(default="ot-baggage-", min_length=1)
    binary_version: int = Field(default=1, ge=1, le=255)
    max_finished_spans: int | None = Field(default=None, ge=1)
    first_id: int = Field(default=1, ge=1)
