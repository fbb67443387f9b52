"""
Seed script for a demo dispatch state snapshot.

Usage:
  - Dry run (default): python scripts/seed_state.py
  - Write the snapshot: python scripts/seed_state.py --apply
  - Write elsewhere:   python scripts/seed_state.py --apply --state-file ./demo.json

Behavior:
  - Builds a fresh state from settings (default districts, yesterday's categories).
  - Submits the demo incidents below through DispatchService, so the audit
    log and today's categories are populated exactly as in a live session.
  - Saves via StateStore. The running console can then use "Load system state".
"""

import argparse
from typing import List, Tuple

from dispatch_hub.core.settings import settings
from dispatch_hub.main import build_service
from dispatch_hub.services.dispatch_service import DispatchService

# (category, district, priority)
DEMO_INCIDENTS: List[Tuple[str, str, int]] = [
    ("fire", "central", 1),
    ("medical", "central", 0),
    ("flood", "central", 1),
    ("security", "south", 0),
    ("medical", "south", 1),
    ("traffic accident", "east", 0),
    ("gas leak", "harbour", 1),
]


def seed(service: DispatchService, incidents: List[Tuple[str, str, int]], apply: bool = False) -> None:
    for category, district, priority in incidents:
        print(f"Preparing: {district}/{category} (priority {priority})")
        if apply:
            service.submit(category, district, priority)


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--apply", action="store_true", help="Write the snapshot instead of dry-run")
    parser.add_argument("--state-file", default=None, help=f"Snapshot path (default: {settings.STATE_FILE_PATH})")
    args = parser.parse_args()

    service = build_service(args.state_file)
    seed(service, DEMO_INCIDENTS, apply=args.apply)

    if not args.apply:
        print("Dry run complete. Re-run with --apply to write the snapshot.")
        return

    result = service.persist()
    print(result.message)


if __name__ == "__main__":
    main()
