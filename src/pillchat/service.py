"""Backend logic that turns a user request into one model completion."""

from typing import Any, Dict, List, Optional

from loguru import logger

from . import prompts
from .llm import LLM


class InvalidRequest(ValueError):
    """The request is missing the input it needs. Maps to HTTP 400."""


class EmptyCompletion(RuntimeError):
    """The model returned no text."""


class Pharmacist:
    """Builds the chat request for each kind of question and asks the LLM.

    Every call is stateless: only the system instruction and the current
    question are sent, never earlier turns.
    """

    def __init__(self, llm: LLM, max_tokens: int = 1500):
        self.llm = llm
        self.max_tokens = max_tokens

    def analyze(self, image_data: Optional[str], prompt: Optional[str]) -> str:
        """Describe a drug, or list a prescription, from a photo and/or a name."""
        prompt = (prompt or "").strip()
        if not image_data and not prompt:
            raise InvalidRequest(prompts.MISSING_INPUT_ERROR)

        content: List[Dict[str, Any]] = [
            {"type": "text", "text": prompt or prompts.IMAGE_ONLY_PROMPT}
        ]
        if image_data:
            content.append({"type": "image_url", "image_url": {"url": image_data}})

        messages = [
            {"role": "system", "content": prompts.ANALYZE_SYSTEM_PROMPT},
            {"role": "user", "content": content},
        ]
        return self._complete(messages)

    def drug_details(self, drug_name: Optional[str], dosage: Optional[str]) -> str:
        """Describe one prescription item, keeping the prescribed dosage."""
        drug_name = (drug_name or "").strip()
        if not drug_name:
            raise InvalidRequest(prompts.MISSING_DRUG_NAME_ERROR)

        messages = [
            {"role": "system", "content": prompts.drug_details_system_prompt(dosage)},
            {"role": "user", "content": prompts.drug_details_user_prompt(drug_name)},
        ]
        return self._complete(messages)

    def _complete(self, messages: List[Dict[str, Any]]) -> str:
        response = self.llm.generate_response(messages, max_tokens=self.max_tokens)
        content = self.llm.extract_content(response)
        if not content:
            raise EmptyCompletion("the model returned an empty completion")
        logger.debug("Completion received ({} chars)", len(content))
        return content
