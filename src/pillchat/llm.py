"""Concrete implementations for LLM providers."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from .config import DEFAULT_LLM_BASE_URL, DEFAULT_MODEL


class LLM(ABC):
    """Abstract Base Class for all LLM providers."""

    @abstractmethod
    def generate_response(
        self, messages: List[Dict[str, Any]], model: Optional[str] = None, **kwargs: Any
    ) -> Any:
        """Generates a response from the LLM provider.

        This method should return the provider's native, rich response object
        directly from their SDK.

        Parameters
        ----------
        messages : List[Dict[str, Any]]
            Chat-style message dictionaries. User content may be a list of
            ``text`` and ``image_url`` blocks.
        model : str, optional
            The specific model to use for the generation. Defaults to the
            provider's configured model.
        **kwargs : Any
            Provider-specific parameters (e.g., max_tokens, temperature) to be
            passed directly to the SDK.

        Returns
        -------
        Any
            The provider's native, rich response object.
        """
        pass

    @abstractmethod
    def extract_content(self, response: Any) -> Optional[str]:
        """Extracts the text content from the provider's native response object.

        Parameters
        ----------
        response : Any
            The provider's native response object from generate_response.

        Returns
        -------
        str or None
            The extracted text content, or None when the completion is empty.
        """
        pass


class OpenAI(LLM):
    def __init__(
        self,
        default_model: str = DEFAULT_MODEL,
        api_key: Optional[str] = None,
        base_url: Optional[str] = DEFAULT_LLM_BASE_URL,
    ):
        from openai import OpenAI

        self.client = OpenAI(api_key=api_key, base_url=base_url)
        self.model = default_model

    def generate_response(self, messages, model=None, **kwargs: Any) -> Any:
        return self.client.chat.completions.create(
            messages=messages, model=model or self.model, **kwargs
        )

    def extract_content(self, response: Any) -> Optional[str]:
        return response.choices[0].message.content


class Echo(LLM):
    """Offline provider that answers with a fixed summary quoting the prompt."""

    def __init__(self, default_model: str = "echo-v1"):
        self.model = default_model

    def generate_response(self, messages, model=None, **kwargs):
        user_prompt = _last_user_text(messages) or "No message provided"
        content = f"**Echo LLM - static response for testing**\n{user_prompt}"

        return {
            "content": content,
            "raw_response": "Echo LLM - static response for testing",
        }

    def extract_content(self, response: Any) -> Optional[str]:
        if isinstance(response, dict) and "content" in response:
            return response["content"]
        return str(response)


def _last_user_text(messages: List[Dict[str, Any]]) -> Optional[str]:
    for message in reversed(messages):
        if message.get("role") != "user":
            continue
        content = message.get("content")
        if isinstance(content, str):
            return content
        for block in content or []:
            if block.get("type") == "text":
                return block.get("text")
    return None
