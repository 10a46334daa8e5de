"""Summarizer adapter dependency."""
from agency.services.adapters.base import SummarizerAdapter
from agency.services.research_summary import get_summarizer_adapter


def get_summarizer() -> SummarizerAdapter:
    """Adapter selected by ``AI_PROVIDER``; tests override this dependency."""
    return get_summarizer_adapter()
