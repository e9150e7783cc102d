"""Data models shared by the converter, request handler and CLI."""

from src.models.conversion_options import ConversionOptions, DEFAULT_MAX_DEPTH
from src.models.conversion_result import ConversionResult

__all__ = ['ConversionOptions', 'ConversionResult', 'DEFAULT_MAX_DEPTH']
