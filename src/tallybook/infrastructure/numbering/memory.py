"""In-memory document number allocator."""

import re
import threading
from dataclasses import dataclass

from tallybook.config import get_logger
from tallybook.core.entities.document import DocumentKind
from tallybook.core.exceptions import DocumentNumberConflictError
from tallybook.core.interfaces.numbering import ISequenceAllocator

logger = get_logger(__name__)

NUMBER_PATTERN = re.compile(r"^[A-Z]+\s\d+$")


@dataclass
class _Sequence:
    prefix: str
    next_value: int

    def format(self, value: int) -> str:
        return f"{self.prefix} {value}"


class InMemorySequenceAllocator(ISequenceAllocator):
    """
    Process-local sequences, one per document kind.

    e.g. invoices ``I 98978, I 98979``; quotes ``E 82385, E 82386``.
    """

    def __init__(
        self,
        invoice_prefix: str = "I",
        invoice_start: int = 98978,
        quote_prefix: str = "E",
        quote_start: int = 82385,
    ):
        self._lock = threading.Lock()
        self._sequences: dict[DocumentKind, _Sequence] = {
            DocumentKind.INVOICE: _Sequence(invoice_prefix, invoice_start),
            DocumentKind.QUOTE: _Sequence(quote_prefix, quote_start),
        }
        self._issued: dict[DocumentKind, set[str]] = {kind: set() for kind in DocumentKind}

    def next_number(self, kind: DocumentKind) -> str:
        with self._lock:
            seq = self._sequences[kind]
            number = seq.format(seq.next_value)
            # Skip values claimed manually
            while number in self._issued[kind]:
                seq.next_value += 1
                number = seq.format(seq.next_value)
            seq.next_value += 1
            self._issued[kind].add(number)

        logger.info("document_number_allocated", kind=kind.value, number=number)
        return number

    def peek_next_number(self, kind: DocumentKind) -> str:
        with self._lock:
            seq = self._sequences[kind]
            value = seq.next_value
            while seq.format(value) in self._issued[kind]:
                value += 1
            return seq.format(value)

    def is_number_available(self, kind: DocumentKind, number: str) -> bool:
        if not NUMBER_PATTERN.match(number):
            return False
        with self._lock:
            return number not in self._issued[kind]

    def claim_number(self, kind: DocumentKind, number: str) -> None:
        if not NUMBER_PATTERN.match(number):
            raise DocumentNumberConflictError(kind.value, number)
        with self._lock:
            if number in self._issued[kind]:
                raise DocumentNumberConflictError(kind.value, number)
            self._issued[kind].add(number)

        logger.info("document_number_claimed", kind=kind.value, number=number)

    def issued_numbers(self, kind: DocumentKind) -> frozenset[str]:
        with self._lock:
            return frozenset(self._issued[kind])
