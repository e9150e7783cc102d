"""Test fixtures for conversion tests.

This module provides:
- Sample HTML pages paired with their expected markdown
- Helpers that build DomTree documents directly (deep, cyclic, shared)
"""

from .sample_pages import (
    ARTICLE_BASE_URL,
    SAMPLE_PAGE_ARTICLE,
    SAMPLE_PAGE_ARTICLE_MARKDOWN,
    SAMPLE_PAGE_WITH_TABLE,
    SAMPLE_PAGE_WITH_TABLE_MARKDOWN,
    SAMPLE_PAGE_WITH_CODE,
    SAMPLE_PAGE_WITH_CODE_MARKDOWN,
    SAMPLE_PAGE_WITH_NOISE,
    SAMPLE_PAGE_WITH_NOISE_MARKDOWN,
)
from .trees import (
    build_nested_tree,
    build_cyclic_tree,
    build_shared_child_nodes,
)

__all__ = [
    'ARTICLE_BASE_URL',
    'SAMPLE_PAGE_ARTICLE',
    'SAMPLE_PAGE_ARTICLE_MARKDOWN',
    'SAMPLE_PAGE_WITH_TABLE',
    'SAMPLE_PAGE_WITH_TABLE_MARKDOWN',
    'SAMPLE_PAGE_WITH_CODE',
    'SAMPLE_PAGE_WITH_CODE_MARKDOWN',
    'SAMPLE_PAGE_WITH_NOISE',
    'SAMPLE_PAGE_WITH_NOISE_MARKDOWN',
    'build_nested_tree',
    'build_cyclic_tree',
    'build_shared_child_nodes',
]
