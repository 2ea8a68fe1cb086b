"""
Name: Domain Service Interfaces

Responsibilities:
  - Define the contract for the external completion service
  - Enable dependency inversion (the AI bridge doesn't depend on a provider)

Collaborators:
  - Implementations in infrastructure.services

Constraints:
  - Pure interfaces (Protocol), no implementation
  - Implementations report failures in the AIResponse, they never raise

Notes:
  - Enables testing with the fake service or a Mock(spec=CompletionService)
"""

from typing import List, Optional, Protocol

from .entities import AIResponse, ChatMessage


class CompletionService(Protocol):
    """
    R: Interface for a chat-completion text generator.

    Implementations must provide:
      - One synchronous attempt per call (no retries)
      - success=False with an error message on any failure
    """

    def complete(
        self,
        messages: List[ChatMessage],
        *,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> AIResponse:
        """
        R: Send messages and return the completion.

        Args:
            messages: System + user messages
            model: Model id (defaults to the configured chat model)
            temperature: Sampling temperature (defaults to configured value)
            max_tokens: Token ceiling (defaults to configured value)

        Returns:
            AIResponse with the completion text or an error
        """
        ...
