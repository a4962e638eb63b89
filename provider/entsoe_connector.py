import logging
from typing import Optional

import pandas as pd
import requests

from config import FetchConfig
from reconstruction import ReconstructionResult, reconstruct
from .document import DocumentNode, DocumentParseError, parse_document
from .request import EntsoeRequest, build_request, split_window

# I configure module-level logger for production-grade logging
logger = logging.getLogger(__name__)


class EntsoeAPIError(Exception):
    """Custom exception for ENTSO-E API errors with context."""
    def __init__(self, message: str, endpoint: str, original_error: Optional[Exception] = None):
        self.endpoint = endpoint
        self.original_error = original_error
        super().__init__(f"[{endpoint}] {message}")


class NoMatchingDataError(EntsoeAPIError):
    """The provider answered with an acknowledgement: nothing published for the query."""


class EntsoeConnector:
    """
    Client for fetching generation documents from the ENTSO-E Transparency Platform.

    I implement:
    - Transport with explicit failures (status, timeout, connection)
    - Detection of the 'no data' acknowledgement document
    - Window splitting so ranges longer than a year become several requests
    - Hand-off of each parsed document to the reconstruction pipeline
    """
    def __init__(self, config: FetchConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

        # I validate API key format (basic sanity check)
        if len(config.api_key) < 20:
            logger.warning("API key appears unusually short - verify it's correct")

    def fetch(self, request: EntsoeRequest) -> bytes:
        """
        Send one request and return the raw body.

        Raises:
            EntsoeAPIError: On timeouts, connection failures or non-2xx status
        """
        endpoint = request.endpoint
        logger.debug(f"[{endpoint}] GET {request.url} {request.redacted_params()}")

        try:
            response = self.session.get(request.url, params=request.params, timeout=request.timeout)
        except requests.Timeout as e:
            logger.error(f"[{endpoint}] Request timed out after {request.timeout}s")
            raise EntsoeAPIError(f"Timed out after {request.timeout}s", endpoint, original_error=e)
        except requests.RequestException as e:
            logger.error(f"[{endpoint}] API call failed: {type(e).__name__}: {e}")
            raise EntsoeAPIError(str(e), endpoint, original_error=e)

        if not 200 <= response.status_code < 300:
            # ENTSO-E puts the reason in an acknowledgement body even on 400
            ack_reason = _acknowledgement_reason(response.content)
            reason = ack_reason or response.text[:500]
            logger.error(f"[{endpoint}] HTTP {response.status_code}: {reason}")
            if ack_reason:
                raise NoMatchingDataError(f"HTTP {response.status_code}: {reason}", endpoint)
            raise EntsoeAPIError(f"HTTP {response.status_code}: {reason}", endpoint)

        return response.content

    def fetch_document(self, request: EntsoeRequest) -> DocumentNode:
        """Fetch and parse; an acknowledgement document is treated as an error."""
        document = parse_document(self.fetch(request))
        if 'Acknowledgement' in document.tag:
            reason = _reason_text(document) or 'no reason given'
            raise NoMatchingDataError(f"Acknowledgement instead of data: {reason}", request.endpoint)
        return document

    def fetch_generation(self, start: pd.Timestamp, end: pd.Timestamp) -> ReconstructionResult:
        """
        Fetch and reconstruct [start, end), splitting into one-year windows.

        A window the provider has no data for contributes no rows; rows from
        the other windows are kept. Any other API error aborts the fetch.

        Returns:
            ReconstructionResult with all windows concatenated in time order
        """
        result = ReconstructionResult()
        for window in split_window(start, end):
            request = build_request(self.config, window)
            try:
                document = self.fetch_document(request)
            except NoMatchingDataError as e:
                logger.warning(f"{e} - no rows for {window.start} -> {window.end}")
                continue
            window_result = reconstruct(document, max_workers=self.config.max_workers)

            if window_result.errors:
                logger.warning(
                    f"[{request.endpoint}] {len(window_result.errors)} segments failed "
                    f"for {window.start} -> {window.end}"
                )
            logger.info(f"[{request.endpoint}] Successfully fetched {len(window_result)} rows")
            result = result.merge(window_result)

        return result

    def save_to_csv(self, result: ReconstructionResult, filepath: str):
        """Save reconstructed data to CSV."""
        result.to_frame().to_csv(filepath)
        logger.info(f"Data saved to {filepath}")


def _reason_text(document: DocumentNode) -> Optional[str]:
    for reason in document.get_children('Reason'):
        text = reason.find_text('text')
        if text:
            return text
    return None


def _acknowledgement_reason(raw: bytes) -> Optional[str]:
    try:
        document = parse_document(raw)
    except DocumentParseError:
        return None
    if 'Acknowledgement' not in document.tag:
        return None
    return _reason_text(document)
