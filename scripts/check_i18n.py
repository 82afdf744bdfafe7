#!/usr/bin/env python3
"""Check that te.json has every message of en.json with the same placeholders."""

from __future__ import annotations

import json
import string
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
I18N_DIR = ROOT / "estate_admin" / "i18n"


def flatten(node, prefix=""):
    """{dotted key: message} for every leaf string"""
    messages = {}
    if isinstance(node, dict):
        for key, value in node.items():
            full = f"{prefix}.{key}" if prefix else key
            if isinstance(value, dict):
                messages.update(flatten(value, full))
            else:
                messages[full] = value
    return messages


def placeholders(message) -> set:
    if not isinstance(message, str):
        return set()
    return {field for _, field, _, _ in string.Formatter().parse(message) if field}


def load_json(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


def main():
    en_path = I18N_DIR / "en.json"
    te_path = I18N_DIR / "te.json"

    if not en_path.exists() or not te_path.exists():
        print("Missing i18n files.")
        return 2

    en = flatten(load_json(en_path))
    te = flatten(load_json(te_path))

    missing_in_te = sorted(set(en) - set(te))
    extra_in_te = sorted(set(te) - set(en))
    mismatched = sorted(
        key for key in set(en) & set(te) if placeholders(en[key]) != placeholders(te[key])
    )

    has_error = False
    if missing_in_te:
        has_error = True
        print("Missing keys in te.json:")
        for key in missing_in_te:
            print(f"  - {key}")
    if mismatched:
        has_error = True
        print("Placeholder mismatch between en.json and te.json:")
        for key in mismatched:
            print(f"  - {key}: {sorted(placeholders(en[key]))} vs {sorted(placeholders(te[key]))}")
    if extra_in_te:
        print("Orphan keys only in te.json:")
        for key in extra_in_te:
            print(f"  - {key}")

    if has_error:
        return 1
    print("i18n check passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
