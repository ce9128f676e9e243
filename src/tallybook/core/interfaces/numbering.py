"""Abstract interface for document number allocation."""

from abc import ABC, abstractmethod

from tallybook.core.entities.document import DocumentKind


class ISequenceAllocator(ABC):
    """
    Hands out document numbers.

    Numbers are allocated only when a document is issued and are never
    reused, even if the document is later voided.
    """

    @abstractmethod
    def next_number(self, kind: DocumentKind) -> str:
        """Allocate and return the next number for ``kind``."""
        pass

    @abstractmethod
    def peek_next_number(self, kind: DocumentKind) -> str:
        """Return the number ``next_number`` would allocate, without consuming it."""
        pass

    @abstractmethod
    def is_number_available(self, kind: DocumentKind, number: str) -> bool:
        """Check a manually entered number is well-formed and not yet issued."""
        pass

    @abstractmethod
    def claim_number(self, kind: DocumentKind, number: str) -> None:
        """
        Reserve a manually entered number.

        Raises:
            DocumentNumberConflictError: malformed or already issued
        """
        pass
