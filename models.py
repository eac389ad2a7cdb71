"""
Pydantic models for the striding views.

Validated configuration for building a view plus the summary model a view
reports about itself.
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, field_validator
from enum import Enum


class Tier(str, Enum):
    """Traversal capability tier, weakest first"""
    FORWARD = "forward"
    INDEXABLE = "indexable"
    BIDIRECTIONAL = "bidirectional"
    RANDOM_ACCESS = "random_access"

    @property
    def rank(self) -> int:
        return list(Tier).index(self)

    def supports(self, other: "Tier") -> bool:
        """True when this tier offers at least the guarantees of `other`."""
        return self.rank >= other.rank


class StrideConfig(BaseModel):
    """Parameters accepted when building a strided view."""
    model_config = ConfigDict(frozen=True)

    step: int = Field(
        ...,
        description="Distance between two exposed elements of the base",
        ge=1,
        strict=True,
    )

    @field_validator('step', mode='before')
    @classmethod
    def reject_bool(cls, v):
        """bool is an int subclass"""
        if isinstance(v, bool):
            raise ValueError("step must be an integer, not a boolean")
        return v


class ViewSummary(BaseModel):
    """Description of a strided view"""
    model_config = ConfigDict(frozen=True)

    tier: Tier = Field(..., description="Capability tier of the view")
    step: int = Field(..., description="Step size", ge=1)
    base_type: str = Field(..., description="Class name of the wrapped base")
    count: Optional[int] = Field(
        None,
        description="Number of exposed elements, only known in O(1) for random-access views",
        ge=0,
    )
