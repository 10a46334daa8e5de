"""AI/LLM adapters for market research summaries."""
from agency.services.adapters.ai.openai_adapter import OpenAIAdapter
from agency.services.adapters.ai.mock import MockSummarizerAdapter

__all__ = ["OpenAIAdapter", "MockSummarizerAdapter"]
