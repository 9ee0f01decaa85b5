"""Utilities package."""

from .logging_setup import setup_logging
from .text_processing import extract_tokens, jaccard_similarity, normalize_title

__all__ = ["extract_tokens", "jaccard_similarity", "normalize_title", "setup_logging"]
