"""
Models for the STT/LLM/TTS option catalog
"""

from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field


class ModelOption(BaseModel):
    value: str
    label: str
    description: Optional[str] = None


class ModelCategory(BaseModel):
    category: str
    options: List[ModelOption]


class ProviderInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    env_key: str = Field(..., alias="envKey")
    models: List[str]
    description: str


class ModelDefaults(BaseModel):
    stt: str
    llm: str
    tts: str
    instructions: str
