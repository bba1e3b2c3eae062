"""Configuration API endpoints"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from services.config_manager import ConfigManager

router = APIRouter()


class DiffSettings(BaseModel):
    """Diff defaults as stored in config.json"""

    ignoreWhitespace: bool
    ignoreCase: bool
    trimLines: bool
    contextLines: int
    maxCells: int


class DiffSettingsUpdate(BaseModel):
    """Partial update of the diff defaults"""

    ignoreWhitespace: bool | None = None
    ignoreCase: bool | None = None
    trimLines: bool | None = None
    contextLines: int | None = Field(default=None, ge=0)
    maxCells: int | None = Field(default=None, ge=0)  # 0 disables the size guard


class ConfigUpdateRequest(BaseModel):
    """Request to update configuration"""

    diff: DiffSettingsUpdate | None = None
    server: dict | None = None


class ConfigResponse(BaseModel):
    """Configuration response"""

    diff: DiffSettings
    server: dict


@router.get("", response_model=ConfigResponse)
async def get_config() -> ConfigResponse:
    """Get current configuration"""
    config = ConfigManager.get_instance().get_config()
    return ConfigResponse(diff=DiffSettings(**config["diff"]), server=config["server"])


@router.put("")
async def update_config(request: ConfigUpdateRequest) -> dict[str, Any]:
    """Update configuration"""
    update: dict[str, Any] = {}

    # Update only provided fields
    if request.diff:
        update["diff"] = request.diff.model_dump(exclude_none=True)
    if request.server:
        update["server"] = request.server

    try:
        ConfigManager.get_instance().save_config(update)
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"status": "success", "message": "Configuration updated"}
