"""Command line entry point.

Usage:
    collection-sync serve                     # Run the webhook server
    collection-sync process                   # One batch run over the last hour
    collection-sync classify "Round Faceted Rose Quartz Beads 8mm"
"""
import argparse
import asyncio
import sys
from typing import Optional, Sequence

from collection_sync.config import get_settings
from collection_sync.services import ProductProcessor, ShopifyClient
from collection_sync.services.classification import TitleClassifier, build_rules
from collection_sync.taxonomy import TaxonomyProvider
from collection_sync.utils.errors import CollectionSyncError
from collection_sync.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


async def run_batch() -> int:
    """Run one batch and print a summary. Returns the process exit code."""
    settings = get_settings()
    provider = TaxonomyProvider(settings.collections_file)

    async with ShopifyClient(settings) as client:
        result = await ProductProcessor(client, provider, settings).process_recent()

    print(f"Window start:        {result.since.isoformat()}")
    print(f"Products processed:  {result.products_processed}")
    print(f"Collections added:   {result.collections_added}")
    print(f"Collections failed:  {result.collections_failed}")
    return 1 if result.collections_failed else 0


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "collection_sync.api.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_config=None,
    )
    return 0


def cmd_process(args: argparse.Namespace) -> int:
    return asyncio.run(run_batch())


def cmd_classify(args: argparse.Namespace) -> int:
    taxonomy = TaxonomyProvider(get_settings().collections_file).get()
    classifier = TitleClassifier(taxonomy)
    names = {rule.collection_id: rule.name for rule in build_rules(taxonomy)}

    matches = classifier.classify(args.title)
    if not matches:
        print("No matching collections")
        return 0

    for collection_id in matches:
        print(f"{collection_id}  {names.get(collection_id, '')}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="collection-sync",
        description="Assign Shopify products to collections by title",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--log-level", help="Override the LOG_LEVEL setting")
    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Run the webhook server")
    serve_parser.add_argument("--host", help="Bind address (default: HOST setting)")
    serve_parser.add_argument("--port", type=int, help="Port (default: PORT setting)")
    serve_parser.set_defaults(func=cmd_serve)

    process_parser = subparsers.add_parser(
        "process", help="Process products updated in the trailing window"
    )
    process_parser.set_defaults(func=cmd_process)

    classify_parser = subparsers.add_parser(
        "classify", help="Print the collections a title would be added to"
    )
    classify_parser.add_argument("title", help="Product title")
    classify_parser.set_defaults(func=cmd_classify)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.log_level)
    try:
        return args.func(args)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 1
    except CollectionSyncError as e:
        logger.error("Command failed", error_type=type(e).__name__, message=e.message, details=e.details)
        return 1


if __name__ == "__main__":
    sys.exit(main())
