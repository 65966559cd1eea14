# File: skyglow/schemas/light.py

from pydantic import BaseModel


class LightReading(BaseModel):
    latitude: float
    longitude: float
    raw_value: float
    sqm: str
    bortle: float


class ErrorResponse(BaseModel):
    error: str
