"""
MCP HTTP API schemas.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ToolRequest(BaseModel):
    params: dict[str, Any] = Field(default_factory=dict)


class ToolError(BaseModel):
    code: str
    message: str
    detail: Any | None = None


class ResourceReadRequest(BaseModel):
    uri: str


class ResourceContent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    uri: str
    mime_type: str = Field(default="application/json", alias="mimeType")
    text: str


class ResourceResponse(BaseModel):
    success: bool
    contents: list[ResourceContent] = Field(default_factory=list)
    error: ToolError | None = None
