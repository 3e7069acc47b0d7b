# substrate_indexer/core/errors.py

from typing import Optional, Dict, Any


class IndexerError(Exception):
    pass


class DecodeError(IndexerError):
    """Raised when a raw chain structure does not have the expected shape"""

    def __init__(self, message: str, block_number: Optional[int] = None, entity: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.block_number = block_number
        self.entity = entity

    @property
    def context(self) -> Dict[str, Any]:
        context = {}
        if self.block_number is not None:
            context["block_number"] = self.block_number
        if self.entity:
            context["entity"] = self.entity
        return context

    def __str__(self) -> str:
        if self.block_number is None:
            return self.message
        suffix = f" ({self.entity})" if self.entity else ""
        return f"block {self.block_number}{suffix}: {self.message}"


class ExtensionDecodeError(DecodeError):
    pass
