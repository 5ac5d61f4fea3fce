"""
TripEval - Trip Evaluation Aggregation

CLI entry point for ingesting board items and querying evaluations.
"""

import argparse
import json
import logging
import sys

import config.settings as settings
from tripeval.engine.ingestion import WebhookIngestor, challenge_response, extract_item_id
from tripeval.errors import InvalidArgumentError, NotFoundError
from tripeval.service import EvaluationService
from tripeval.utils.export import ReportWriter
from tripeval.utils.storage import ItemStore

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def _load_json(path: str) -> dict:
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def _print(data: dict) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="TripEval - Trip Evaluation Aggregation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Aggregated evaluation of a trip
  python main.py evaluation 12345 --type Convidados

  # Rating distribution, also written as CSV
  python main.py distribution 12345 --type Guias --output-dir output

  # Best rated hotels around Paris
  python main.py suppliers Paris --type Hotéis

  # Store a board item fetched after a webhook
  python main.py ingest --item item.json --event event.json
        """
    )

    parser.add_argument(
        "--data-root",
        default=str(settings.DATA_ROOT),
        help=f"Data directory (default: {settings.DATA_ROOT})"
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    evaluation = subparsers.add_parser("evaluation", help="Trip evaluation by business id")
    evaluation.add_argument("business_id")
    evaluation.add_argument("--type", required=True, help="Guias, Convidados or Corporativo")

    distribution = subparsers.add_parser("distribution", help="Rating distribution by business id")
    distribution.add_argument("business_id")
    distribution.add_argument("--type", required=True, help="Guias, Convidados or Corporativo")
    distribution.add_argument("--output-dir", help="Also write the table as CSV here")

    suppliers = subparsers.add_parser("suppliers", help="Search suppliers by location or name")
    suppliers.add_argument("location")
    suppliers.add_argument("--type", required=True, help="Restaurantes, Hotéis, DMC or Passeios")
    suppliers.add_argument("--output-dir", help="Also write the ranking as CSV here")

    key_evaluation = subparsers.add_parser("key-evaluation", help="Guest evaluation by access key")
    key_evaluation.add_argument("key")

    key_distribution = subparsers.add_parser("key-distribution", help="Guest distribution by access key")
    key_distribution.add_argument("key")

    ingest = subparsers.add_parser("ingest", help="Store a fetched board item")
    ingest.add_argument("--item", required=True, help="Board item JSON as returned by the API")
    ingest.add_argument("--event", help="Webhook payload JSON (answers challenges)")

    delete = subparsers.add_parser("delete", help="Apply a delete webhook payload")
    delete.add_argument("--event", required=True, help="Webhook payload JSON")

    save_key = subparsers.add_parser("save-key", help="Store the access key of a key-board item")
    save_key.add_argument("--item", required=True, help="Key-board item JSON")
    save_key.add_argument("--event", required=True, help="Webhook payload JSON")

    return parser


def run(args: argparse.Namespace) -> dict:
    """Execute one subcommand and return its JSON result."""
    store = ItemStore(args.data_root)
    service = EvaluationService(store)
    ingestor = WebhookIngestor(store)

    if args.command == "evaluation":
        return service.get_evaluation(args.business_id, args.type).to_dict()

    if args.command == "distribution":
        distribution = service.get_distribution(args.business_id, args.type)
        if args.output_dir:
            ReportWriter(args.output_dir).write_distribution(distribution)
        return distribution.to_dict()

    if args.command == "suppliers":
        result = service.search_suppliers(args.location, args.type)
        if args.output_dir:
            ReportWriter(args.output_dir).write_suppliers(result)
        return result.to_dict()

    if args.command == "key-evaluation":
        return service.get_evaluation_by_key(args.key).to_dict()

    if args.command == "key-distribution":
        return service.get_distribution_by_key(args.key).to_dict()

    if args.command == "ingest":
        if args.event:
            challenge = challenge_response(_load_json(args.event))
            if challenge:
                return challenge
        item = ingestor.ingest(_load_json(args.item))
        return {"success": True, "itemId": item.item_id}

    if args.command == "delete":
        payload = _load_json(args.event)
        challenge = challenge_response(payload)
        if challenge:
            return challenge
        return {"success": True, "itemId": ingestor.delete(payload)}

    if args.command == "save-key":
        payload = _load_json(args.event)
        challenge = challenge_response(payload)
        if challenge:
            return challenge
        saved = ingestor.save_key(extract_item_id(payload), _load_json(args.item))
        return {"success": True, **saved}

    raise InvalidArgumentError(f"Unknown command: {args.command}")


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        _print(run(args))
    except NotFoundError as e:
        logger.warning(f"Not found: {e}")
        _print({"error": str(e)})
        sys.exit(1)
    except InvalidArgumentError as e:
        logger.error(f"Invalid argument: {e}")
        _print({"error": str(e)})
        sys.exit(2)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Command failed: {e}", exc_info=True)
        print(f"\n❌ Command failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)


if __name__ == "__main__":
    main()
