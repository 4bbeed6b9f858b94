"""
Static catalog of speech-to-text, LLM and text-to-speech choices

The values are the model ids understood by the agent worker behind the
Control API.
"""

from typing import Dict, List

from testbench.models.catalog import ModelOption, ModelCategory, ProviderInfo, ModelDefaults


def _category(name: str, *options: tuple) -> ModelCategory:
    return ModelCategory(
        category=name,
        options=[ModelOption(value=v, label=l, description=d) for v, l, d in options]
    )


STT_OPTIONS: List[ModelCategory] = [
    _category(
        "AssemblyAI",
        ("assemblyai/universal-streaming:en", "Universal Streaming", "Best accuracy, real-time"),
    ),
    _category(
        "Deepgram",
        ("deepgram/nova-2", "Nova 2 (Recommended)", "Lowest latency ~100-200ms"),
        ("deepgram/nova-3:en", "Nova 3", "Latest model"),
        ("deepgram/enhanced", "Enhanced", "Better for noisy environments"),
        ("deepgram/base", "Base", "Cost-effective"),
    ),
    _category(
        "OpenAI",
        ("openai/whisper-1", "Whisper", "High accuracy, higher latency"),
    ),
]

LLM_OPTIONS: List[ModelCategory] = [
    _category(
        "OpenAI",
        ("openai/gpt-4o-mini", "GPT-4o Mini (Recommended)", "Best latency/quality balance"),
        ("openai/gpt-4o", "GPT-4o", "Highest quality"),
        ("openai/gpt-4-turbo", "GPT-4 Turbo", "Fast, high quality"),
        ("openai/gpt-3.5-turbo", "GPT-3.5 Turbo", "Fastest, lowest cost"),
    ),
]

TTS_OPTIONS: List[ModelCategory] = [
    _category(
        "ElevenLabs",
        ("elevenlabs:pNInz6obpgDQGcFmaJgB", "Adam (Male)", "Professional, default voice"),
        ("elevenlabs:21m00Tcm4TlvDq8ikWAM", "Rachel (Female)", "Natural, clear"),
        ("elevenlabs:EXAVITQu4vr4xnSDxMaL", "Bella (Female)", "Warm, friendly"),
        ("elevenlabs:ErXwobaYiN019PkySvjV", "Antoni (Male)", "Warm, conversational"),
        ("elevenlabs:MF3mGyEYCl7XYWbV9V6O", "Elli (Female)", "Young, energetic"),
        ("elevenlabs:TxGEqnHWrfWFTfGW9XjX", "Josh (Male)", "Deep, authoritative"),
        ("elevenlabs:VR6AewLTigWG4xSOukaG", "Arnold (Male)", "Confident, strong"),
        ("elevenlabs:AZnzlk1XvdvUeBnXmlld", "Domi (Female)", "Assertive, clear"),
    ),
    _category(
        "OpenAI",
        ("openai/tts-1", "TTS-1", "Standard quality"),
        ("openai/tts-1-hd", "TTS-1 HD", "Higher quality"),
    ),
]

DEFAULT_STT = "assemblyai/universal-streaming:en"
DEFAULT_LLM = "openai/gpt-4o-mini"
DEFAULT_TTS = "elevenlabs:pNInz6obpgDQGcFmaJgB"
DEFAULT_INSTRUCTIONS = (
    "You are a helpful voice AI assistant for phone calls.\n"
    "Be concise, friendly, and professional.\n"
    "Keep responses brief since users are on the phone."
)

DEFAULTS = ModelDefaults(
    stt=DEFAULT_STT,
    llm=DEFAULT_LLM,
    tts=DEFAULT_TTS,
    instructions=DEFAULT_INSTRUCTIONS
)

STT_PROVIDERS: List[ProviderInfo] = [
    ProviderInfo(
        name="AssemblyAI",
        env_key="ASSEMBLYAI_API_KEY",
        models=["universal-streaming"],
        description="High accuracy speech recognition with real-time streaming",
    ),
    ProviderInfo(
        name="Deepgram",
        env_key="DEEPGRAM_API_KEY",
        models=["nova-2", "nova-3", "enhanced", "base"],
        description="Fast, accurate speech recognition with lowest latency",
    ),
    ProviderInfo(
        name="OpenAI",
        env_key="OPENAI_API_KEY",
        models=["whisper-1"],
        description="Whisper model for high accuracy transcription",
    ),
]

LLM_PROVIDERS: List[ProviderInfo] = [
    ProviderInfo(
        name="OpenAI",
        env_key="OPENAI_API_KEY",
        models=["gpt-4o", "gpt-4o-mini", "gpt-4-turbo", "gpt-3.5-turbo"],
        description="GPT models for conversational AI",
    ),
]

TTS_PROVIDERS: List[ProviderInfo] = [
    ProviderInfo(
        name="ElevenLabs",
        env_key="ELEVEN_API_KEY",
        models=["eleven_turbo_v2_5", "eleven_multilingual_v2"],
        description="Natural-sounding voice synthesis with many voice options",
    ),
    ProviderInfo(
        name="OpenAI",
        env_key="OPENAI_API_KEY",
        models=["tts-1", "tts-1-hd"],
        description="Text-to-speech with multiple voice presets",
    ),
]


def flatten_options(categories: List[ModelCategory]) -> List[ModelOption]:
    """Flatten grouped options for simple dropdowns"""
    return [option for category in categories for option in category.options]


def model_options() -> Dict[str, List[ModelCategory]]:
    return {"stt": STT_OPTIONS, "llm": LLM_OPTIONS, "tts": TTS_OPTIONS}


def providers() -> Dict[str, List[ProviderInfo]]:
    return {"stt": STT_PROVIDERS, "llm": LLM_PROVIDERS, "tts": TTS_PROVIDERS}


def is_known_option(kind: str, value: str) -> bool:
    """Whether a model id appears in the catalog for stt, llm or tts"""
    categories = model_options().get(kind, [])
    return any(option.value == value for option in flatten_options(categories))
