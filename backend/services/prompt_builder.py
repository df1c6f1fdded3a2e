"""Grounding prompt assembly for document chat.

The document is cut to a fixed character budget from the start of the text.
There is no chunking or relevance ranking: the model sees the first
`context_char_budget` characters and nothing else.
"""

from config import get_settings
from llm.prompts import DOCUMENT_QA_PROMPT, REFUSAL_PHRASE
from services.errors import PreconditionError, ValidationError


class ContextPromptBuilder:
    """Builds the single instruction sent to the model for a chat question."""

    def __init__(self, char_budget: int | None = None) -> None:
        self.char_budget = char_budget or get_settings().context_char_budget

    def truncate(self, document_text: str) -> str:
        """Return the leading slice of the document that fits the budget."""
        return document_text[: self.char_budget]

    def build(self, document_text: str, question: str | None) -> str:
        """Combine the document excerpt and the question into one prompt.

        Raises:
            PreconditionError: No document has been uploaded.
            ValidationError: Question is missing or blank.
        """
        if not document_text or not document_text.strip():
            raise PreconditionError("Please upload a document first.")
        if not question or not question.strip():
            raise ValidationError("Question is required.")

        return DOCUMENT_QA_PROMPT.format(
            refusal=REFUSAL_PHRASE,
            document=self.truncate(document_text),
            question=question.strip(),
        )
