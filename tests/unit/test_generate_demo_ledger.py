"""
Unit tests for the demo ledger generator script.
"""

import importlib.util
import json
from pathlib import Path

import pytest

from wallet_ledger_mcp.core.decoder import load_ledger_file

SCRIPT = Path(__file__).parents[2] / "scripts" / "generate_demo_ledger.py"


@pytest.fixture(scope="module")
def generator():
    spec = importlib.util.spec_from_file_location("generate_demo_ledger", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.mark.unit
def test_generated_ledger_decodes(generator, tmp_path):
    """Test that every generated record decodes into a transaction."""
    ledger = generator.generate_ledger(accounts=3, seed=1)
    path = tmp_path / "ledger.json"
    path.write_text(json.dumps(ledger), encoding="utf-8")

    decoded = load_ledger_file(path)

    assert len(decoded.transactions) == len(ledger["transactions"])
    assert set(decoded.accounts) == {"user-001", "user-002", "user-003"}
    assert {t.owner_id for t in decoded.transactions} <= {
        "merchant-001",
        "merchant-002",
        "merchant-003",
    }


@pytest.mark.unit
def test_generation_is_seeded(generator):
    assert generator.generate_ledger(seed=5) == generator.generate_ledger(seed=5)
