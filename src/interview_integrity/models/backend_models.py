"""
Pydantic models describing the generation backend's models.
"""
from typing import List, Optional, Set
from pydantic import BaseModel, Field

from interview_integrity import config


class ModelDescriptor(BaseModel):
    """One model offered by the generation backend."""
    name: str = Field(description="Model name with any 'models/' prefix removed")
    display_name: str = Field(default="", description="Human readable model name")
    supported_methods: Set[str] = Field(
        default_factory=set,
        description="Capabilities the model supports, e.g. 'generateContent'"
    )

    @property
    def supports_generation(self) -> bool:
        return config.REQUIRED_GENERATION_METHOD in self.supported_methods


class ProbeResult(BaseModel):
    """Verdict of a backend probe."""
    models: List[ModelDescriptor] = Field(
        default_factory=list,
        description="Models that support content generation"
    )
    total_models: int = Field(default=0, description="Number of models the backend listed")
    required_model: Optional[str] = None
    required_model_available: bool = True

    @property
    def is_ready(self) -> bool:
        return bool(self.models) and self.required_model_available
