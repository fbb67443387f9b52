"""
Ramstropolis Emergency Dispatch - operator console entry point.

A thin menu adapter: it collects and validates operator input, then calls
DispatchService. All queue, trend, audit and storage logic lives in the
services layer.

Usage:
  python -m dispatch_hub.main
  python -m dispatch_hub.main --state-file ./other_state.json
"""

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from dispatch_hub.core.settings import settings
from dispatch_hub.services.dispatch_service import DispatchService
from dispatch_hub.services.state_store import DispatchState, StateStore
from dispatch_hub.utils.normalizer import parse_priority

logger = logging.getLogger(__name__)

MENU = (
    "\n--- {name} ---"
    "\n1. Enter new incident"
    "\n2. View all incidents on queue"
    "\n3. Dispatch next incident"
    "\n4. View unique incident types today"
    "\n5. Search incidents"
    "\n6. Run trend analysis"
    "\n7. View system log"
    "\n8. Save system state"
    "\n9. Load system state"
    "\n0. Exit"
)


def _format_set(values) -> str:
    return "[" + ", ".join(sorted(values)) + "]"


class DispatchConsole:
    """Menu-driven loop over a DispatchService."""

    def __init__(self, service: DispatchService, stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout):
        self.service = service
        self.stdin = stdin
        self.stdout = stdout

    def _say(self, text: str = "") -> None:
        self.stdout.write(text + "\n")

    def _ask(self, prompt: str) -> Optional[str]:
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\n")

    def run(self) -> None:
        actions = {
            "1": self.add_incident,
            "2": self.view_incidents,
            "3": self.dispatch_incident,
            "4": self.view_unique_types,
            "5": self.search_incidents,
            "6": self.run_trend_analysis,
            "7": self.view_log,
            "8": self.save_state,
            "9": self.load_state,
        }
        while True:
            self._say(MENU.format(name=settings.APP_NAME))
            choice = self._ask("Select an option: ")
            if choice is None or choice.strip() == "0":
                self._say("Exiting system. Goodbye!")
                return
            action = actions.get(choice.strip())
            if action is None:
                self._say("Invalid option. Please try again.")
                continue
            action()

    def add_incident(self) -> None:
        self._say("\n--- Enter Incident Details ---")
        category = self._ask("Enter incident type (e.g., fire, medical, security): ")
        district = self._ask("Enter district (e.g. central, south, east): ")
        if category is None or district is None:
            return

        priority = None
        while priority is None:
            raw = self._ask("Enter priority (0 for normal, 1 for high): ")
            if raw is None:
                return
            try:
                priority = parse_priority(raw)
            except ValueError as e:
                self._say(str(e))

        incident = self.service.submit(category, district, priority)
        position = "start" if incident.is_high_priority else "end"
        self._say(f"{incident.priority.label} priority incident added to the {position} of the queue.")

    def view_incidents(self) -> None:
        self._say("\n--- Current Incidents in Queue ---")
        snapshot = self.service.snapshot()
        if not snapshot:
            self._say("No incidents in any queue.")
            return
        for district, incidents in snapshot:
            self._say(f"Incidents in {district} queue:")
            for incident in incidents:
                waited = int(incident.wait_time().total_seconds())
                self._say(f"{incident.describe()} (waiting {waited}s)")

    def dispatch_incident(self) -> None:
        self._say("\n--- Dispatching Next Incident ---")
        district = self._ask("Enter district to dispatch from (e.g. central, south, east): ")
        if district is None:
            return
        incident = self.service.dispatch_next(district)
        if incident is None:
            self._say(f"No incidents to dispatch in the {district.strip().lower()} district.")
        else:
            self._say(f"Dispatching incident: {incident.describe()}")

    def view_unique_types(self) -> None:
        self._say("\n--- Unique Incident Types Reported Today ---")
        categories = self.service.today_categories()
        if not categories:
            self._say("No incident types reported today.")
            return
        for category in categories:
            self._say(f"- {category}")

    def search_incidents(self) -> None:
        self._say("\n--- Search Incidents ---")
        term = self._ask("Enter search term (type or district): ")
        if term is None:
            return
        matches = self.service.search(term)
        if not matches:
            self._say(f"No incidents found matching the search term: {term.strip().lower()}")
            return
        for incident in matches:
            self._say(incident.describe())

    def run_trend_analysis(self) -> None:
        report = self.service.trends()
        self._say("\n--- Trend Analysis ---")
        self._say(f"Today's Types: {_format_set(report.today)}")
        self._say(f"Yesterday's Types: {_format_set(report.yesterday)}")
        self._say("------------------------------------")
        self._say(f"Union of today's and yesterday's incident types: {_format_set(report.union)}")
        self._say(f"Intersection of today's and yesterday's incident types: {_format_set(report.intersection)}")
        self._say(f"Incident types reported today but not yesterday: {_format_set(report.difference)}")

    def view_log(self) -> None:
        entries = self.service.log_entries()
        if not entries:
            self._say("No log entries found.")
            return
        self._say("\n--- System Log ---")
        for entry in entries:
            self._say(f"- {entry.describe()}")

    def save_state(self) -> None:
        self._say(self.service.persist().message)

    def load_state(self) -> None:
        self._say(self.service.restore().message)


def build_service(state_file: Optional[str] = None) -> DispatchService:
    """Create a service with fresh state seeded from settings."""
    state = DispatchState.initial(
        districts=settings.default_districts,
        yesterday=settings.yesterday_categories,
    )
    store = StateStore(state_file or settings.STATE_FILE_PATH)
    return DispatchService(state, store)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=settings.APP_NAME)
    parser.add_argument("--state-file", default=None, help="Path of the saved state snapshot")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    DispatchConsole(build_service(args.state_file)).run()

    logger.info(f"Shutting down {settings.APP_NAME}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
