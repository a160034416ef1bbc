#!/usr/bin/env python3
"""
Generate a random demo ledger for local testing.

Writes a JSON ledger file with a handful of merchant accounts, each holding
8-15 transactions spread over the first week of January 2026. Roughly one in
five transactions fails.
"""

import argparse
import json
import random
from datetime import datetime, timezone
from pathlib import Path

DEST_PATH = Path(__file__).parent.parent / "tests/fixtures/generated_ledger.json"

MODES = ["UPI", "Card", "NetBanking", "IMPS", "NEFT"]
FAILURE_REASONS = [
    "Network Error",
    "Insufficient Balance",
    "Account Locked",
    "Invalid OTP",
    "Timeout",
]


def generate_ledger(accounts: int = 5, seed: int = 7) -> dict:
    """Build a ledger document with ``accounts`` owner accounts."""
    rng = random.Random(seed)
    transactions = []
    account_map = {}
    counter = 0

    for index in range(accounts):
        owner_id = f"merchant-{index + 1:03d}"
        phone = f"+9198765432{index + 20:02d}"
        account_map[f"user-{index + 1:03d}"] = [owner_id]

        for _ in range(rng.randint(8, 15)):
            counter += 1
            is_credit = rng.random() < 0.7
            failed = rng.random() < 0.2
            amount = rng.randint(5000, 105000)
            occurred = datetime(
                2026, 1, rng.randint(1, 7),
                rng.randint(0, 23), rng.randint(0, 59), rng.randint(0, 59),
                tzinfo=timezone.utc,
            )
            transactions.append(
                {
                    "id": f"TXN-{counter:06d}",
                    "userId": owner_id,
                    "phone": phone,
                    "type": "credit" if is_credit else "debit",
                    "status": "failed" if failed else "success",
                    "amount": amount,
                    "fee": amount // 100,
                    "mode": rng.choice(MODES),
                    "date": occurred.isoformat().replace("+00:00", "Z"),
                    "reference": f"REF-{counter:06d}",
                    "description": (
                        rng.choice(FAILURE_REASONS)
                        if failed
                        else ("Money Added" if is_credit else "Payout Processed")
                    ),
                }
            )

    transactions.sort(key=lambda t: t["date"], reverse=True)
    return {"accounts": account_map, "transactions": transactions}


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--accounts", type=int, default=5)
    parser.add_argument("--seed", type=int, default=7)
    parser.add_argument("--output", type=Path, default=DEST_PATH)
    args = parser.parse_args()

    ledger = generate_ledger(args.accounts, args.seed)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    with open(args.output, "w", encoding="utf-8") as f:
        json.dump(ledger, f, indent=2)

    print(f"Wrote {len(ledger['transactions'])} transactions to {args.output}")
    return 0


if __name__ == "__main__":
    import sys
    sys.exit(main())
