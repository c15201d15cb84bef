"""Extraction collaborators: PDF documents to ordered pages of fragments."""

from secpick.ingestion.pdf_pages import extract_pages, load_pages_json

__all__ = ["extract_pages", "load_pages_json"]
