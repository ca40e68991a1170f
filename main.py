"""Weekly Scorecard v1.0 — CLI entry point."""

import logging
import sys

from scorecard import derive, generate_report
from scorecard.config import ScorecardConfig
from scorecard.store import load_entries

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    path = sys.argv[1] if len(sys.argv) > 1 else ScorecardConfig().storage.data_file
    print(generate_report(derive(load_entries(path))))
