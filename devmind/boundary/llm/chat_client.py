"""
Gemini completion client.

Dependencies: langchain_google_genai, langchain_core
System role: Completion model adapter for answers and workspace insights
"""

import logging
import os

from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_google_genai import ChatGoogleGenerativeAI

from devmind.boundary.llm.errors import classify_upstream_error

logger = logging.getLogger(__name__)


class GeminiCompletionClient:
    """Single-turn completion of a prompt template."""

    def __init__(
        self,
        model: str,
        temperature: float = 0.3,
        max_retries: int = 2,
        google_api_key: str | None = None,
    ) -> None:
        """
        Initialize chat model and string output chain.

        Args:
            model: Gemini chat model ID
            temperature: Sampling temperature
            max_retries: Retries performed by the client library
            google_api_key: API key (defaults to GOOGLE_API_KEY)
        """
        api_key = google_api_key or os.getenv("GOOGLE_API_KEY", "")
        if not api_key:
            raise ValueError("GOOGLE_API_KEY is missing from environment variables.")

        self.model = model
        self._llm = ChatGoogleGenerativeAI(
            model=model,
            temperature=temperature,
            max_retries=max_retries,
            google_api_key=api_key,
        )
        self._parser = StrOutputParser()

    async def complete(self, prompt: ChatPromptTemplate, **variables: str) -> str:
        """
        Render a prompt template and generate a completion.

        Args:
            prompt: Chat prompt template
            **variables: Template variables

        Returns:
            str: Generated text

        Raises:
            UpstreamRateLimited: Upstream reported HTTP 429
            UpstreamFailure: Any other completion failure
        """
        logger.info(f"{__name__}:complete - model={self.model}", extra={"variables": sorted(variables)})
        chain = prompt | self._llm | self._parser
        try:
            return await chain.ainvoke(variables)
        except Exception as e:
            raise classify_upstream_error(e, operation="complete") from e
