from __future__ import annotations
from abc import ABC, abstractmethod
from saintlocator.core.types import DocumentList


class DocumentSource(ABC):
    """Hands complete raw documents of one collection to the assembler."""

    @abstractmethod
    def load(self, collection: str) -> DocumentList:
        raise NotImplementedError
