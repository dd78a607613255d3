"""Entry point for gavel package."""

import argparse
import logging
import random
from pathlib import Path


def main() -> None:
    """Main entry point for the Gavel application."""
    parser = argparse.ArgumentParser(
        description="Gavel - Franchise Auction Simulator",
        prog="gavel",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Run an automated auction and print the results (no API server)",
    )
    parser.add_argument(
        "--team",
        type=str,
        default=None,
        help="Franchise held by the user; it passes on every lot (default: none)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for a reproducible auction",
    )
    parser.add_argument(
        "--sets",
        type=int,
        default=10,
        help="Generated sets per role (default: 10)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Also write the markdown summary to this file",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="API host (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="API port (default: 8000)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every sale as it happens",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.demo:
        from gavel.core.auction import AuctionEngine
        from gavel.core.catalog import build_catalog
        from gavel.core.config import get_config
        from gavel.core.league import DEFAULT_PERSONALITIES, default_team_descriptors
        from gavel.events import EventBus
        from gavel.generators import generate_catalog_records
        from gavel.logging import AuctionLog, MarkdownAuctionWriter

        print("Gavel - Franchise Auction Simulator (Demo Mode)")
        print("=" * 50)

        config = get_config()
        rng = random.Random(args.seed)
        team_id = args.team.upper() if args.team else None

        lots = build_catalog(generate_catalog_records(args.sets, rng=rng), config)

        event_bus = EventBus()
        auction_log = AuctionLog()
        auction_log.connect_to_event_bus(event_bus)

        engine = AuctionEngine(
            lots,
            default_team_descriptors(),
            config=config,
            rng=rng,
            personalities=DEFAULT_PERSONALITIES,
            event_bus=event_bus,
        )

        try:
            state = engine.initialize(team_id)
        except ValueError as e:
            parser.error(str(e))

        print(f"Lots: {len(lots)}")
        print(f"User team: {team_id or 'none (all AI)'}")
        print()

        state = engine.run_to_completion(state)

        writer = MarkdownAuctionWriter()
        print(writer.generate_summary_string(state, auction_log))

        if args.output:
            writer.write_auction_summary(state, auction_log, args.output)
            print(f"Summary written to {args.output}")
    else:
        from gavel.api.main import run_api

        run_api(host=args.host, port=args.port)


if __name__ == "__main__":
    main()
