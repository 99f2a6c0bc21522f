"""CLI script for categorizing list items.

Useful for checking the keyword tables and the remote classifier by hand.
Categorizes one item and prints the result to the console.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from itemcat.categorizer import Categorizer, ListType
from itemcat.config import get_settings
from itemcat.exceptions import ValidationError

# Setup logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s"
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Main CLI function."""
    parser = argparse.ArgumentParser(
        description="Categorize a grocery or shopping list item",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/categorize_cli.py milk
  python scripts/categorize_cli.py "running shoes" --list-type shopping
  python scripts/categorize_cli.py bananas --offline
        """
    )

    parser.add_argument(
        "item_name",
        type=str,
        help="Item to categorize"
    )

    parser.add_argument(
        "--list-type",
        type=str,
        choices=[list_type.value for list_type in ListType],
        default=ListType.GROCERY.value,
        help="List the item belongs to (default: grocery)"
    )

    parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip the remote classifier and use keyword matching only"
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    if args.offline:
        categorizer = Categorizer()
    else:
        categorizer = Categorizer.from_settings(get_settings())

    try:
        result = categorizer.categorize(args.item_name, args.list_type)
    except ValidationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)

    print(f"\n{args.item_name!r} ({args.list_type} list):")
    print(f"  Category:   {result.category}")
    print(f"  Confidence: {result.confidence}")
    print(f"  Source:     {result.source}")
    if result.classifier_error:
        print(f"  Classifier error: {result.classifier_error}")
    print()


if __name__ == "__main__":
    main()
