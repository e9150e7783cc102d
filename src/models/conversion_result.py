"""Conversion result data model."""

from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass
class ConversionResult:
    """Result of an HTML to markdown conversion.

    Contains the converted markdown content along with metadata about the
    conversion run.

    Attributes:
        markdown: Converted markdown content
        metadata: Additional metadata (base_url, node_count)
    """
    markdown: str
    metadata: Dict[str, Any] = field(default_factory=dict)
