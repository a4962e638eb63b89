"""
Request building for the ENTSO-E REST API.

I turn a FetchConfig and a time window into an opaque EntsoeRequest.
Codes are passed through as-is; the only translation is short area names
('DE_LU', 'FR') to their EIC codes when entsoe-py knows them.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, Optional

import pandas as pd
from entsoe.mappings import PSRTYPE_MAPPINGS, lookup_area

from config import FetchConfig

logger = logging.getLogger(__name__)

MAX_WINDOW = pd.DateOffset(years=1)
PERIOD_FORMAT = '%Y%m%d%H%M'


def _to_utc(ts) -> pd.Timestamp:
    ts = pd.Timestamp(ts)
    return ts.tz_localize('UTC') if ts.tz is None else ts.tz_convert('UTC')


@dataclass(frozen=True)
class RequestWindow:
    """Half-open [start, end) in UTC, at most one year long."""
    start: pd.Timestamp
    end: pd.Timestamp

    def __post_init__(self):
        start, end = _to_utc(self.start), _to_utc(self.end)
        if start >= end:
            raise ValueError(f"Window start {start} must be before end {end}")
        if end > start + MAX_WINDOW:
            raise ValueError(f"Window {start} -> {end} is longer than one year")
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, 'start', start)
        object.__setattr__(self, 'end', end)


@dataclass(frozen=True)
class EntsoeRequest:
    url: str
    params: Dict[str, str]
    timeout: int
    endpoint: str  # label used in logs and errors

    def redacted_params(self) -> Dict[str, str]:
        return {k: ('***' if k == 'securityToken' else v) for k, v in self.params.items()}


def split_window(start, end) -> Iterator[RequestWindow]:
    """I split [start, end) into consecutive windows of at most one year."""
    current, end = _to_utc(start), _to_utc(end)
    if current >= end:
        raise ValueError(f"Window start {current} must be before end {end}")
    while current < end:
        chunk_end = min(current + MAX_WINDOW, end)
        yield RequestWindow(current, chunk_end)
        current = chunk_end


def resolve_domain(domain: str) -> str:
    """Area name -> EIC code when entsoe-py knows it, otherwise unchanged."""
    try:
        return lookup_area(domain).code
    except ValueError:
        return domain


def describe_psr_type(psr_type: Optional[str]) -> str:
    if psr_type is None:
        return 'all production types'
    return PSRTYPE_MAPPINGS.get(psr_type, psr_type)


def build_request(config: FetchConfig, window: RequestWindow) -> EntsoeRequest:
    """
    Assemble the query for one window.

    Args:
        config: Explicit fetch configuration
        window: Validated request window

    Returns:
        EntsoeRequest ready for the connector
    """
    params = {
        'securityToken': config.api_key,
        'documentType': config.document_type,
        'processType': config.process_type,
        'in_Domain': resolve_domain(config.domain),
        'periodStart': window.start.strftime(PERIOD_FORMAT),
        'periodEnd': window.end.strftime(PERIOD_FORMAT),
    }
    if config.psr_type:
        params['psrType'] = config.psr_type

    endpoint = config.document_type if not config.psr_type else f"{config.document_type}_{config.psr_type}"
    request = EntsoeRequest(url=config.base_url, params=params,
                            timeout=config.timeout, endpoint=endpoint)
    logger.debug(
        f"[{endpoint}] Built request for {config.domain} ({describe_psr_type(config.psr_type)}) "
        f"{window.start} -> {window.end}"
    )
    return request
