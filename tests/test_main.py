"""Tests for the command-line entry point."""
from unittest.mock import MagicMock

import pandas as pd

import main
from config import FetchConfig
from provider.entsoe_connector import EntsoeAPIError
from reconstruction import ExtractionError, ReconstructionResult, TimestampedSample


def make_result(errors=()):
    return ReconstructionResult(
        dataset=[TimestampedSample(pd.Timestamp("2015-01-01T00:00Z"), 1.0)],
        errors=list(errors),
    )


def patch_cli(monkeypatch, result=None, error=None):
    monkeypatch.setattr(main, "load_config",
                        lambda **kwargs: FetchConfig(api_key="k" * 36, domain=kwargs["domain"]))
    connector = MagicMock()
    if error is not None:
        connector.fetch_generation.side_effect = error
    else:
        connector.fetch_generation.return_value = result
    monkeypatch.setattr(main, "EntsoeConnector", lambda config: connector)
    return connector


def test_writes_csv(monkeypatch, tmp_path):
    connector = patch_cli(monkeypatch, result=make_result())
    out = tmp_path / "gen.csv"

    code = main.main(["--domain", "FR", "--start", "2015-01-01", "--end", "2015-01-02",
                      "--output", str(out)])

    assert code == 0
    connector.save_to_csv.assert_called_once()
    start, end = connector.fetch_generation.call_args[0]
    assert start == pd.Timestamp("2015-01-01", tz="UTC")
    assert end == pd.Timestamp("2015-01-02", tz="UTC")


def test_strict_mode_fails_on_segment_errors(monkeypatch, tmp_path):
    patch_cli(monkeypatch, result=make_result([ExtractionError("broken", 1)]))
    args = ["--domain", "FR", "--start", "2015-01-01", "--end", "2015-01-02",
            "--output", str(tmp_path / "gen.csv")]

    assert main.main(args) == 0
    assert main.main(args + ["--strict"]) == 2


def test_api_error_exits_non_zero(monkeypatch, tmp_path):
    patch_cli(monkeypatch, error=EntsoeAPIError("HTTP 401", "A75"))
    code = main.main(["--domain", "FR", "--start", "2015-01-01", "--end", "2015-01-02",
                      "--output", str(tmp_path / "gen.csv")])
    assert code == 1


def test_reversed_range_exits_non_zero(monkeypatch, tmp_path):
    connector = patch_cli(monkeypatch, error=ValueError("Window start must be before end"))
    out = tmp_path / "gen.csv"
    code = main.main(["--domain", "FR", "--start", "2024-02-01", "--end", "2024-01-01",
                      "--output", str(out)])
    assert code == 1
    assert not out.exists()
    connector.save_to_csv.assert_not_called()
