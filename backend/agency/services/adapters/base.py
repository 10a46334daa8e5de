"""Base adapter interfaces for external providers."""
from abc import ABC, abstractmethod
from typing import Any, Dict


class SummaryUnavailableError(RuntimeError):
    """Raised when a provider cannot produce a summary."""
    pass


class BaseAdapter(ABC):
    """Base class for all adapters."""

    @abstractmethod
    def test_connection(self) -> bool:
        """Test connection to the provider."""
        pass


class SummarizerAdapter(BaseAdapter):
    """Base adapter for AI/LLM providers that summarize market research files."""

    @abstractmethod
    def summarize_research_file(
        self,
        file_name: str,
        file_url: str,
        client_name: str,
    ) -> Dict[str, Any]:
        """
        Summarize the key findings of a research file for the creative team.

        Returns dict with keys:
        - summary: Short actionable summary
        - provider: Name of the provider that produced it

        Raises SummaryUnavailableError when the provider fails.
        """
        pass
