"""Engine module - turn orchestration and text generation."""

from gitbrand.engine.orchestrator import BrandingOrchestrator, TurnOutcome, TurnState
from gitbrand.engine.providers import (
    GeminiGenerator,
    GroqGenerator,
    TextGenerator,
    generate_narrative,
    generate_text,
    get_generator,
)

__all__ = [
    "BrandingOrchestrator",
    "TurnOutcome",
    "TurnState",
    "GeminiGenerator",
    "GroqGenerator",
    "TextGenerator",
    "generate_narrative",
    "generate_text",
    "get_generator",
]
