"""AI summaries of uploaded market research files."""
from typing import Optional
import structlog

from agency.core.config import settings
from agency.db.models.client import Client
from agency.schemas.client import MarketResearchFile
from agency.services.adapters.ai.mock import MockSummarizerAdapter
from agency.services.adapters.ai.openai_adapter import OpenAIAdapter
from agency.services.adapters.base import SummarizerAdapter

logger = structlog.get_logger()


def get_summarizer_adapter(provider: Optional[str] = None) -> SummarizerAdapter:
    """Get the configured summarizer adapter."""
    provider = provider or settings.AI_PROVIDER

    if provider == "openai":
        return OpenAIAdapter()
    else:
        return MockSummarizerAdapter()


def summarize_research_file(adapter: SummarizerAdapter, client: Client, research_file: MarketResearchFile) -> str:
    """Summarize ``research_file`` and store the result on the client.

    The caller commits. ``SummaryUnavailableError`` from the adapter
    propagates and leaves the stored summary untouched.
    """
    result = adapter.summarize_research_file(
        file_name=research_file.file_name,
        file_url=research_file.file_url,
        client_name=client.name,
    )
    client.market_research_summary = result["summary"]
    logger.info(
        "Research file summarized",
        client_id=client.client_id,
        file_name=research_file.file_name,
        provider=result.get("provider"),
    )
    return result["summary"]
