"""ai_service
=============

Gateway to the OpenAI completions endpoint.

A request is answered with exactly one blocking completion call. The prompt
is a single string assembled from:

- a **category preamble** selecting the assistant persona,
- an optional **file information** block,
- the **last 10 messages** of the conversation as ``role: content`` lines,
- the new **user turn**.

The sampling parameters depend on the client's *deep-think* flag: a lower
temperature with a larger token budget when it is set.

The gateway is encapsulated in :class:`AIService`, whose high-level
entrypoint is :meth:`AIService.generate_response`.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from openai import OpenAI

from knowledge_assistant.database.config.config import settings

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "general"

CATEGORY_CONTEXTS: Dict[str, str] = {
    "general": "You are a helpful AI assistant with general knowledge. Provide accurate and helpful information on a wide range of topics.",
    "academic": "You are an academic assistant. Provide educational content, explain concepts, help with homework, and offer study advice.",
    "finance": "You are a financial advisor. Provide information about personal finance, investments, budgeting, and financial planning. Always include a disclaimer that you are not a certified financial advisor.",
    "travel": "You are a travel expert. Provide travel recommendations, destination information, travel tips, and planning advice.",
    "sports": "You are a sports enthusiast and expert. Provide information about various sports, training tips, game rules, and sports news.",
}
"""Persona preamble per conversation category."""

HISTORY_WINDOW = 10
"""Number of most recent messages included in the prompt."""


class AIService:
    """Builds prompts and requests completions from OpenAI.

    Args:
        client: An ``openai.OpenAI`` client (or any object exposing
            ``completions.create``). Built from ``settings.API_KEY`` when omitted.
        model: Completion model name. Defaults to ``settings.OPEN_AI_MODEL``.
    """

    def __init__(self, client: Optional[Any] = None, model: Optional[str] = None):
        self.client = client if client is not None else OpenAI(api_key=settings.API_KEY)
        self.model = model or settings.OPEN_AI_MODEL

    @staticmethod
    def get_category_context(category: Optional[str]) -> str:
        """Return the preamble for ``category``, falling back to ``general``."""
        return CATEGORY_CONTEXTS.get(category or DEFAULT_CATEGORY, CATEGORY_CONTEXTS[DEFAULT_CATEGORY])

    @staticmethod
    def generation_params(deep_think_mode: bool) -> Tuple[float, int]:
        """Return ``(temperature, max_tokens)`` for the deep-think flag."""
        if deep_think_mode:
            return 0.3, 1000
        return 0.7, 500

    def build_prompt(
        self,
        message: str,
        category: Optional[str],
        file_context: Optional[str],
        conversation_history: Optional[Sequence[Any]],
    ) -> str:
        """Assemble the completion prompt.

        Args:
            message: The new user message.
            category: Conversation category; unknown values use ``general``.
            file_context: Output of :meth:`process_files`, may be empty.
            conversation_history: Prior messages in chronological order. Each
                item exposes ``role`` and ``content`` (ORM rows or schemas).

        Returns:
            str: The prompt sent to the completion endpoint.
        """
        parts = [self.get_category_context(category)]

        if file_context:
            parts.append("\n\nFile Information:\n")
            parts.append(file_context)

        if conversation_history:
            parts.append("\n\nConversation History:\n")
            for msg in list(conversation_history)[-HISTORY_WINDOW:]:
                parts.append(f"{msg.role}: {msg.content}\n")

        parts.append(f"\n\nUser: {message}")
        return "".join(parts)

    @staticmethod
    def process_files(files: Optional[List[Dict[str, Any]]]) -> str:
        """Describe attached files as ``File: <name> (<type>)`` lines.

        Only the metadata is used; file contents are never read.
        """
        lines = []
        for file in files or []:
            lines.append(f"File: {file.get('name')} ({file.get('type')})\n")
        return "".join(lines)

    def generate_response(
        self,
        message: str,
        category: Optional[str],
        file_context: Optional[str],
        deep_think_mode: bool,
        conversation_history: Optional[Sequence[Any]],
    ) -> str:
        """Generate the assistant reply for ``message``.

        Args:
            message: The new user message.
            category: Conversation category.
            file_context: Text describing attached files, may be empty.
            deep_think_mode: Selects the low-temperature, large-budget parameters.
            conversation_history: Prior messages in chronological order.

        Returns:
            str: The first completion choice, stripped of surrounding whitespace.

        Raises:
            openai.OpenAIError: Propagated unchanged; there is no retry.
        """
        prompt = self.build_prompt(message, category, file_context, conversation_history)
        temperature, max_tokens = self.generation_params(deep_think_mode)

        logger.info(
            "Requesting completion: model=%s category=%s temperature=%s max_tokens=%s prompt_len=%s",
            self.model,
            category,
            temperature,
            max_tokens,
            len(prompt),
        )
        completion = self.client.completions.create(
            model=self.model,
            prompt=prompt,
            temperature=temperature,
            max_tokens=max_tokens,
            top_p=1.0,
            frequency_penalty=0.0,
            presence_penalty=0.0,
        )
        return completion.choices[0].text.strip()
