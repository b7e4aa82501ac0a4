"""SOS Pydantic schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SosRequest(BaseModel):
    """Location ping sent by a traveller in distress."""

    model_config = ConfigDict(extra="allow")

    lat: Optional[float] = Field(None, ge=-90, le=90)
    lng: Optional[float] = Field(None, ge=-180, le=180)
    message: Optional[str] = Field(None, max_length=1000)


class SosAck(BaseModel):
    """Acknowledgement for an SOS submitted over HTTP."""

    success: bool = True
    message: str = "SOS request received and emergency services have been notified"
    timestamp: datetime
