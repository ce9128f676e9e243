"""Core interfaces (ports) for dependency injection."""

from tallybook.core.interfaces.numbering import ISequenceAllocator

__all__ = [
    "ISequenceAllocator",
]
