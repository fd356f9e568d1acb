"""Shared pytest fixtures for splitledger tests."""

from pathlib import Path
import pytest

from splitledger.domain.balance import compute_ledger_balance
from splitledger.domain.parser import load_ledger, parse_ledger


SIMPLE_LEDGER = """accounting_date 1.2.2024
account AA Alice
account BB Bob
account CC Carol
"""


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def household_ledger_path(fixtures_dir):
    """Path to a ledger of a three person flat."""
    return fixtures_dir / "household.ledger"


@pytest.fixture
def household_ledger(household_ledger_path):
    """Parsed household ledger."""
    return load_ledger(household_ledger_path)


@pytest.fixture
def household_balance(household_ledger):
    """Balance of the household ledger."""
    return compute_ledger_balance(household_ledger)


@pytest.fixture
def make_ledger():
    """Parse ledger lines appended to a header and three accounts AA, BB, CC."""

    def _make(*lines, options=None, header=SIMPLE_LEDGER):
        return parse_ledger(header + "\n".join(lines) + "\n", options)

    return _make


@pytest.fixture
def ledger_file(tmp_path, household_ledger_path):
    """Copy of the household ledger in a temporary directory."""
    path = tmp_path / "household.ledger"
    path.write_text(household_ledger_path.read_text(encoding="utf-8"), encoding="utf-8")
    return path


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
