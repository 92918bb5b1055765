# path: config/models.py
from __future__ import annotations

from pydantic import BaseModel, field_validator


class ConnectionRetryStrategy(BaseModel):
    """Reconnect backoff knobs as they arrive from configuration.

    Delays are ``factor * exponent_base**i`` ms for i in 1..number_of_retries.
    Out-of-range values are not rejected here; the backoff plan replaces them.
    """

    exponent_base: int = 2
    factor: int = 100
    number_of_retries: int = 5

    @field_validator("exponent_base", "factor", mode="before")
    @classmethod
    def _blank_means_default(cls, v):
        """An empty YAML value maps to 0, which the plan swaps for its default"""
        return 0 if v is None or v == "" else v
