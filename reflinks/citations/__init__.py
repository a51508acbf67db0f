"""
Citation Engine

Scans <ref> markers, classifies bare links, merges duplicates and rewrites
references with filled-in citations.
"""

from .classifier import ClassifiedReference, Shape, classify
from .duplicate_index import DuplicateIndex
from .generators import CiteTemplateGenerator, PlainCs1Generator, get_generator
from .identifier import synthesize_identifier
from .rewriter import CitationRewriter, merge_attributes, split_by_name
from .scanner import parse_attributes, scan_citations

__all__ = [
    "CitationRewriter",
    "CiteTemplateGenerator",
    "ClassifiedReference",
    "DuplicateIndex",
    "PlainCs1Generator",
    "Shape",
    "classify",
    "get_generator",
    "merge_attributes",
    "parse_attributes",
    "scan_citations",
    "split_by_name",
    "synthesize_identifier",
]
