import logging
from typing import Optional, Protocol

from openai import AzureOpenAI, OpenAI, OpenAIError

from azure_explorer.config import Settings
from azure_explorer.constants import DEFAULT_TOP_P
from azure_explorer.errors import ConfigurationError, LanguageModelError

logger = logging.getLogger(__name__)


class LanguageModel(Protocol):
    def complete(self, system_prompt: str, user_content: str, temperature: float, max_tokens: int) -> str:
        ...


class OpenAIChatModel:
    """Chat completion model backed by the OpenAI SDK (Azure OpenAI or api.openai.com)."""

    def __init__(self, client: OpenAI, model: str, top_p: float = DEFAULT_TOP_P):
        self.client = client
        self.model = model
        self.top_p = top_p

    def complete(self, system_prompt: str, user_content: str, temperature: float, max_tokens: int) -> str:
        """
        Make a single chat completion call. No retries: failures are raised to the caller.

        Args:
            system_prompt: The system prompt to use
            user_content: The user's message
            temperature: Sampling temperature
            max_tokens: Upper bound on the completion length

        Returns:
            The stripped completion text
        """
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_content}
                ],
                temperature=temperature,
                max_tokens=max_tokens,
                top_p=self.top_p,
            )
        except OpenAIError as e:
            logger.error(f"OpenAI API call failed: {e}")
            raise LanguageModelError(str(e)) from e

        content = None
        if response.choices:
            content = response.choices[0].message.content

        text = (content or "").strip()
        if not text:
            logger.error(f"OpenAI returned empty response: {response}")
            raise LanguageModelError("OpenAI returned empty response")

        return text


def get_language_model(settings: Settings, provider: Optional[str] = None) -> OpenAIChatModel:
    """
    Factory function to get the chat model for the configured provider.
    Returns a model over either Azure OpenAI or the public OpenAI API.
    """
    provider = (provider or settings.llm_provider).lower()

    if provider == "azure":
        client = AzureOpenAI(
            api_key=settings.azure_openai_api_key,
            azure_endpoint=settings.azure_openai_endpoint,
            api_version=settings.azure_openai_api_version,
        )
        return OpenAIChatModel(client, settings.azure_openai_deployment)
    elif provider == "openai":
        client = OpenAI(api_key=settings.openai_api_key)
        return OpenAIChatModel(client, settings.openai_model)
    else:
        raise ConfigurationError(f"Unknown LLM_PROVIDER={provider}")
