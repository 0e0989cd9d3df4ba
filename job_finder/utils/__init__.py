"""Utility modules."""

from .parser import extract_json
from .presenter import iter_blocks, parse_search_text, render_text, split_links

__all__ = ["extract_json", "iter_blocks", "parse_search_text", "render_text", "split_links"]
