"""Document number allocation implementations."""

from tallybook.infrastructure.numbering.memory import InMemorySequenceAllocator

# Singleton instance
_sequence_allocator: InMemorySequenceAllocator | None = None


def get_sequence_allocator() -> InMemorySequenceAllocator:
    """Get singleton sequence allocator configured from settings."""
    global _sequence_allocator
    if _sequence_allocator is None:
        from tallybook.config import get_settings

        numbering = get_settings().numbering
        _sequence_allocator = InMemorySequenceAllocator(
            invoice_prefix=numbering.invoice_prefix,
            invoice_start=numbering.invoice_start,
            quote_prefix=numbering.quote_prefix,
            quote_start=numbering.quote_start,
        )
    return _sequence_allocator


def reset_sequence_allocator() -> None:
    """Drop the singleton (for testing)."""
    global _sequence_allocator
    _sequence_allocator = None


__all__ = [
    "InMemorySequenceAllocator",
    "get_sequence_allocator",
    "reset_sequence_allocator",
]
