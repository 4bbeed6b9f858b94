"""
Model catalog endpoints for the selection dropdowns
"""

from fastapi import APIRouter

from testbench.services.model_catalog import DEFAULTS, model_options, providers

router = APIRouter(tags=["catalog"])


@router.get("/models")
async def list_models():
    """STT, LLM and TTS options grouped by provider, with the default selections"""
    options = model_options()
    return {
        "stt": [category.model_dump(by_alias=True) for category in options["stt"]],
        "llm": [category.model_dump(by_alias=True) for category in options["llm"]],
        "tts": [category.model_dump(by_alias=True) for category in options["tts"]],
        "defaults": DEFAULTS.model_dump(by_alias=True)
    }


@router.get("/plugins")
async def list_plugins():
    """Providers per pipeline stage with the env key each one needs"""
    return {
        kind: [provider.model_dump(by_alias=True) for provider in items]
        for kind, items in providers().items()
    }
