from abc import ABC, abstractmethod


class AbstractCompletionGateway(ABC):
    """Interface for adapters that turn a validated question into an answer."""

    @abstractmethod
    async def complete(self, question: str) -> str:
        """Ask the model ``question`` under the tutor instruction.

        Args:
            question: Question that already passed the content guard.

        Returns:
            str: Non-empty, trimmed answer text.

        Raises:
            MisconfiguredGatewayError: If no credential is configured.
            UpstreamError: If the provider answered with a non-success status.
            EmptyUpstreamAnswerError: If the provider returned no usable text.
        """
        ...
