"""
Configuration for ENTSO-E generation fetches.

The configuration is an explicit value passed to the request builder and the
connector. Nothing downstream reads the environment.
"""
import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv


# ============================================================================
# DEFAULTS
# ============================================================================
ENTSOE_BASE_URL = "https://web-api.tp.entsoe.eu/api"
DEFAULT_DOCUMENT_TYPE = "A75"   # Actual generation per production type
DEFAULT_PROCESS_TYPE = "A16"    # Realised
DEFAULT_TIMEOUT = 60            # seconds


@dataclass(frozen=True)
class FetchConfig:
    """Everything needed to build and send one ENTSO-E request."""
    api_key: str
    domain: str                           # Area code ('DE_LU') or EIC ('10Y1001A1001A82H')
    psr_type: Optional[str] = None        # e.g. 'B16' solar; None = all types
    document_type: str = DEFAULT_DOCUMENT_TYPE
    process_type: str = DEFAULT_PROCESS_TYPE
    base_url: str = ENTSOE_BASE_URL
    timeout: int = DEFAULT_TIMEOUT
    max_workers: Optional[int] = None     # per-segment thread pool; None = serial

    def with_overrides(self, **kwargs) -> 'FetchConfig':
        return replace(self, **{k: v for k, v in kwargs.items() if v is not None})


# ============================================================================
# FACTORY FUNCTION
# ============================================================================

def load_config(domain: str, api_key: Optional[str] = None, **overrides) -> FetchConfig:
    """
    Build a FetchConfig, falling back to .env / environment for the token.

    Args:
        domain: Area or EIC code to query
        api_key: Security token (overrides ENTSOE_API_KEY)
        **overrides: Any other FetchConfig field

    Returns:
        FetchConfig
    """
    load_dotenv()

    api_key = api_key or os.getenv('ENTSOE_API_KEY')
    if not api_key:
        raise ValueError("ENTSOE_API_KEY must be provided or set in environment variables.")

    config = FetchConfig(
        api_key=api_key,
        domain=domain,
        base_url=os.getenv('ENTSOE_BASE_URL', ENTSOE_BASE_URL),
        timeout=int(os.getenv('ENTSOE_TIMEOUT', DEFAULT_TIMEOUT)),
    )
    return config.with_overrides(**overrides)
