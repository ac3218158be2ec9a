from datetime import date, datetime
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict
from typing import List

class ObservationPayload(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    time: datetime
    characteristics: List[str] = Field(default_factory=list)
    temperature: int
    wind_direction: int = Field(ge=0, le=359)
    wind_speed: Decimal = Field(ge=0, decimal_places=1)
    pressure: int = Field(gt=0)
    humidity: int = Field(ge=0, le=100)

class DailyDocument(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    place: str = Field(min_length=1)
    date: date
    observations: List[ObservationPayload] = Field(default_factory=list)
