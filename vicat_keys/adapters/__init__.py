"""Infrastructure adapters implementing the core ports."""

from .document_store import TinyDBDocumentStore, load_legacy_document

__all__ = ["TinyDBDocumentStore", "load_legacy_document"]
