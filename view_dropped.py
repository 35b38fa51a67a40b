#!/usr/bin/env python3
"""
Quick utility to view records dropped during cleaning.
Usage:
  python view_dropped.py [--log_dir DIR] [--reason REASON] [--limit N]

Reads logs/dropped.jsonl and, for unusable answers, shows the raw text the
classifier returned so garbage can be told apart from real rejections.
"""

import argparse
from collections import Counter
from pathlib import Path

from dataset_cleaner.config import LOG_DIR, DROPPED_LOG
from dataset_cleaner.utils.logging import read_jsonl


def view_dropped(log_dir: str, reason: str = None, limit: int = 20) -> bool:
    """Print a summary of dropped records and some examples."""
    log_path = Path(log_dir) / DROPPED_LOG
    if not log_path.exists():
        print(f"❌ {log_path} not found.")
        print("Run: python clean_dataset.py --stage clean --run_id <run_id>")
        return False

    logs = read_jsonl(str(log_path))
    if not logs:
        print("No dropped records.")
        return True

    rejected = [l for l in logs if l.get('kind') == 'rejected']
    malformed = [l for l in logs if l.get('kind') == 'malformed']

    print(f"\n{'='*60}")
    print(f"📊 CLEAN STAGE - Dropped Records")
    print(f"{'='*60}")
    print(f"Total dropped: {len(logs)}")
    print(f"❌ Rejected by classifier: {len(rejected)} ({len(rejected)/len(logs)*100:.1f}%)")
    print(f"⚠️  Unusable answers: {len(malformed)} ({len(malformed)/len(logs)*100:.1f}%)")

    reasons = Counter(l.get('reason') for l in logs)
    print(f"\n📋 Drop Reasons:")
    for r, count in reasons.most_common():
        marker = " ← viewing" if r == reason else ""
        print(f"  • {r}: {count} ({count/len(logs)*100:.1f}%){marker}")

    shown = [l for l in logs if l.get('reason') == reason] if reason else malformed
    print(f"\n{'='*60}")
    print(f"Showing {'reason: ' + reason if reason else 'unusable answers'}")
    print(f"{'='*60}\n")

    for i, r in enumerate(shown[:limit], 1):
        raw = r.get('raw', '')
        print(f"{i}. [{r.get('reason')}] record {r.get('record_id')}")
        if raw:
            print(f"   Raw: {raw[:200]}")
            if len(raw) > 200:
                print(f"   ... (truncated, {len(raw)} chars total)")
        print()

    if not shown:
        print("Nothing to show.")
    elif not reason:
        print(f"💡 Tip: Filter by reason with: python view_dropped.py --reason <reason>")
    return True


def main():
    ap = argparse.ArgumentParser("View records dropped by the cleaning stage.")
    ap.add_argument("--log_dir", default=LOG_DIR)
    ap.add_argument("--reason", default=None)
    ap.add_argument("--limit", type=int, default=20)
    args = ap.parse_args()
    view_dropped(args.log_dir, args.reason, args.limit)


if __name__ == "__main__":
    main()
