from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RESTCommandRepresentation(BaseModel):
    """Stored dictionary form of a command; field aliases are the wire contract."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    http_path: str = Field(alias="httpPath")
    http_method: Optional[str] = Field(default=None, alias="httpMethod")
    parameters: Optional[Dict[str, Any]] = None
    session_token: Optional[str] = Field(default=None, alias="sessionToken")
    local_id: Optional[str] = Field(default=None, alias="localId")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class PlaceholderDTO(BaseModel):
    class_name: str
    local_id: str


class InspectResponse(BaseModel):
    http_path: str
    http_method: Optional[str] = None
    local_id: Optional[str] = None
    cache_key: str
    placeholders: List[PlaceholderDTO] = []
