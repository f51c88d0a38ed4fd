from pydantic import BaseModel, ConfigDict
from typing import Any, Optional, Union

# Callers send whatever their form produced; these are interpolated, not checked
Scalar = Union[str, int, float, bool]


class PetInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: Optional[Any] = None
    species: Optional[Any] = None
    breed: Optional[Any] = None
    age: Optional[Any] = None
    weight: Optional[Any] = None


class AnalysisRequest(BaseModel):
    notes: str
    petInfo: PetInfo
    action: Optional[Scalar] = None


class AnalysisResponse(BaseModel):
    success: bool = True
    analysis: str
    timestamp: str
    petName: Optional[Any] = None
    action: Scalar


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: str


class HealthResponse(BaseModel):
    message: str
    status: str
    timestamp: str
    version: str
    environment: str
