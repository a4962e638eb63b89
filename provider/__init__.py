"""
ENTSO-E provider side: request building, transport and document parsing.

Usage:
    from config import load_config
    from provider import EntsoeConnector

    connector = EntsoeConnector(load_config(domain='DE_LU', psr_type='B16'))
    result = connector.fetch_generation(start, end)
"""

from .document import DocumentNode, DocumentParseError, parse_document
from .request import EntsoeRequest, RequestWindow, build_request, split_window
from .entsoe_connector import EntsoeAPIError, EntsoeConnector, NoMatchingDataError

__all__ = [
    'DocumentNode',
    'DocumentParseError',
    'parse_document',
    'EntsoeRequest',
    'RequestWindow',
    'build_request',
    'split_window',
    'EntsoeAPIError',
    'EntsoeConnector',
    'NoMatchingDataError',
]
