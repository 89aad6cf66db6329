"""CLI job to run a /hi5 command locally and print the Slack payload it would post."""

import argparse
import json
import logging
from typing import List, Optional

from hi5.core.command import ValidationError, parse_command
from hi5.core.config import ConfigError, get_settings
from hi5.etl.blocks import help_text, not_found_payload, results_payload
from hi5.etl.transform import to_businesses
from hi5.models import IncomingRequest, MessagePayload
from hi5.vendors import yelp

logger = logging.getLogger(__name__)


def run_command_job(*, text: str, user_name: str) -> Optional[MessagePayload]:
    """Parse ``text`` and search Yelp; returns None for ``help``."""
    query = parse_command(IncomingRequest(user_name=user_name, text=text))
    if query.help:
        return None

    settings = get_settings()
    api_key = settings.require_yelp_api_key()

    logger.info("Running Yelp search for category=%s location=%s", query.category, query.location)
    payload = yelp.business_search(query, api_key, timeout=settings.http_timeout)
    businesses = to_businesses(payload)
    logger.info("Fetched %d businesses", len(businesses))

    if not businesses:
        return not_found_payload(query)
    return results_payload(query, businesses)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a /hi5 command without Slack")
    parser.add_argument("text", help="Command text, e.g. 'category=pizza&location=los angeles,ca'")
    parser.add_argument("--user", dest="user_name", default="you", help="User name for the reply header")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        message = run_command_job(text=args.text, user_name=args.user_name)
    except ValidationError as exc:
        parser.exit(1, f"{exc}\n")
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        raise SystemExit(2) from exc
    except yelp.YelpError as exc:
        logger.error("Yelp search failed: %s", exc)
        raise SystemExit(1) from exc

    if message is None:
        print(help_text())
        return
    print(json.dumps(message.to_dict(), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
