"""Internship posting extraction from fetched careers pages."""

from .heuristic import HeuristicExtractor
from .service import LINKED_DATA, ExtractionResult, PostingExtractor
from .structured import extract_linked_data, extract_vendor_board, linked_data_location
from .titles import PostingCollector, is_valid_posting_title

__all__ = [
    "PostingExtractor",
    "ExtractionResult",
    "HeuristicExtractor",
    "PostingCollector",
    "is_valid_posting_title",
    "extract_linked_data",
    "extract_vendor_board",
    "linked_data_location",
    "LINKED_DATA",
]
