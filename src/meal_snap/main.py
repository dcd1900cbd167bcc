"""Command line entrypoint for analyzing a meal photo."""

import argparse
import asyncio
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from meal_snap.app_logging import configure_logging
from meal_snap.config import Settings
from meal_snap.containers import AppContainer, build_container
from meal_snap.domain.errors import MealSnapError


def main(argv: Sequence[str] | None = None) -> int:
    """Analyze an image file and print the nutrition record as JSON."""
    parser = argparse.ArgumentParser(
        prog="meal-snap", description="Meal Snap nutrition estimator"
    )
    parser.add_argument("image", type=Path, help="path to a meal photo")
    parser.add_argument(
        "--mock", action="store_true", help="use mock data instead of the vision API"
    )
    args = parser.parse_args(argv)

    configure_logging()
    settings = Settings()
    if args.mock:
        settings = settings.model_copy(update={"use_mock_data": True})
    container = build_container(settings)
    try:
        image = args.image.read_bytes()
    except OSError as exc:
        print(f"error: cannot read {args.image}: {exc}", file=sys.stderr)
        return 1
    try:
        record = asyncio.run(_analyze(container, image))
    except MealSnapError as exc:
        print(json.dumps(exc.to_dict()), file=sys.stderr)
        return 1
    print(json.dumps(record, indent=2))
    return 0


async def _analyze(container: AppContainer, image: bytes) -> dict[str, object]:
    try:
        record = await container.analysis_service.request_analysis(image)
    finally:
        await container.close_resources()
    return record.to_dict()


if __name__ == "__main__":
    sys.exit(main())
