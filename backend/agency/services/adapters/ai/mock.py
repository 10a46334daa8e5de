"""Mock summarizer adapter for development and testing."""
from typing import Any, Dict
from agency.services.adapters.base import SummarizerAdapter


class MockSummarizerAdapter(SummarizerAdapter):
    """Mock adapter that builds a canned summary from the file metadata."""

    def test_connection(self) -> bool:
        """Mock always returns successful connection."""
        return True

    def summarize_research_file(
        self,
        file_name: str,
        file_url: str,
        client_name: str,
    ) -> Dict[str, Any]:
        """Return a deterministic summary naming the file and client."""
        return {
            "summary": (
                f"Key findings from {file_name} for {client_name}: "
                "local demand is steady and short video formats perform best."
            ),
            "provider": "mock",
        }
