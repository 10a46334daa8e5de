"""OpenAI adapter for market research summaries."""
from typing import Any, Dict, List
import httpx
import structlog
from agency.core.config import settings
from agency.services.adapters.base import SummarizerAdapter, SummaryUnavailableError

logger = structlog.get_logger()


class OpenAIAdapter(SummarizerAdapter):
    """Adapter for the OpenAI chat completions API.

    To use:
    1. Create an API key at https://platform.openai.com/
    2. Set ``AI_PROVIDER=openai`` and ``OPENAI_API_KEY`` in the environment
    3. Optionally pick a model with ``OPENAI_MODEL``
    """

    BASE_URL = "https://api.openai.com/v1"

    DEFAULT_MODEL = "gpt-4o-mini"

    SYSTEM_PROMPT = (
        "You are an expert marketing analyst. Summarize the key findings of the "
        "market research file you are given. Be concise and focus on actionable "
        "insights for a creative team."
    )

    def __init__(self, api_key: str = None, model: str = None, max_tokens: int = None):
        self.api_key = api_key or settings.OPENAI_API_KEY
        self.model = model or settings.OPENAI_MODEL or self.DEFAULT_MODEL
        self.max_tokens = max_tokens or settings.AI_SUMMARY_MAX_TOKENS

    def test_connection(self) -> bool:
        """Test connection to OpenAI API."""
        if not self.api_key:
            return False

        try:
            with httpx.Client() as client:
                response = client.get(
                    f"{self.BASE_URL}/models",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    timeout=10
                )
                return response.status_code == 200
        except httpx.HTTPError:
            return False

    def _call_api(self, messages: List[Dict], temperature: float = 0.3) -> str:
        """Make API call to OpenAI."""
        if not self.api_key:
            raise SummaryUnavailableError("OpenAI API key not configured")

        with httpx.Client() as client:
            response = client.post(
                f"{self.BASE_URL}/chat/completions",
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json"
                },
                json={
                    "model": self.model,
                    "messages": messages,
                    "temperature": temperature,
                    "max_tokens": self.max_tokens
                },
                timeout=60
            )
            response.raise_for_status()
            data = response.json()
            return data["choices"][0]["message"]["content"]

    def summarize_research_file(
        self,
        file_name: str,
        file_url: str,
        client_name: str,
    ) -> Dict[str, Any]:
        """Ask the model for a short summary of the file at ``file_url``."""
        user_prompt = f"""Client: {client_name}
File name: {file_name}
File URL: {file_url}

Reply with the summary only, in a few short paragraphs or bullet points."""

        try:
            summary = self._call_api([
                {"role": "system", "content": self.SYSTEM_PROMPT},
                {"role": "user", "content": user_prompt}
            ])
        except (httpx.HTTPError, KeyError, IndexError, ValueError) as e:
            logger.warning("OpenAI summary failed", file_name=file_name, error=str(e))
            raise SummaryUnavailableError(f"OpenAI request failed: {e}") from e

        summary = (summary or "").strip()
        if not summary:
            raise SummaryUnavailableError("OpenAI returned an empty summary")
        return {"summary": summary, "provider": "openai"}
