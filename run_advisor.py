#!/usr/bin/env python
"""
Run script for the ScholarMatch advisor.
Use: python run_advisor.py --request request.json [--snapshot snapshot.json]
Reads the request from stdin when --request is omitted.
"""
import argparse
import json
import logging
import sys

from scholarmatch.client import SnapshotRepository, SupabaseRepository
from scholarmatch.errors import AdvisorError
from scholarmatch.pipeline import AdvisorService


logger = logging.getLogger(__name__)


def main():
    """Handle one advisor request and print the JSON response."""
    parser = argparse.ArgumentParser(description="ScholarMatch NIL advisor")
    parser.add_argument("--request", help="JSON request file (default: stdin)")
    parser.add_argument("--snapshot", help="JSON snapshot file instead of Supabase")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.request:
        with open(args.request, encoding="utf-8") as f:
            payload = json.load(f)
    else:
        payload = json.load(sys.stdin)

    try:
        if args.snapshot:
            repository = SnapshotRepository.from_file(args.snapshot)
        else:
            repository = SupabaseRepository()
    except AdvisorError as e:
        logger.error(f"Could not open the data backend: {e}")
        return 1

    response = AdvisorService(repository).handle_payload(payload)
    print(json.dumps(response, indent=2))
    return 0 if response.get("success") else 1


if __name__ == "__main__":
    sys.exit(main())
