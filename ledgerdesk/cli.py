"""
LedgerDesk admin CLI.

Usage:
  python -m ledgerdesk.cli seed
  python -m ledgerdesk.cli stats
"""

import argparse
import logging
import sys
from decimal import Decimal

from .utils.safe_kuzu_manager import reset_safe_kuzu_manager
from .services import book_service, fee_service, reset_all_services, DuplicateRecordError

logger = logging.getLogger(__name__)

DEMO_BOOKS = [
    ("The Pragmatic Programmer", "Andrew Hunt"),
    ("Refactoring", "Martin Fowler"),
    ("Domain-Driven Design", "Eric Evans"),
]

DEMO_FEES = [
    ("INV-1001", Decimal("12.50")),
    ("INV-1002", Decimal("7.95")),
    ("INV-1003", Decimal("20.00")),
]


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def seed(args):
    """Insert demo books and delivery fees; existing invoices are skipped."""
    books_added = 0
    if not book_service.list_books():
        for title, author in DEMO_BOOKS:
            book_service.add_book(title, author)
            books_added += 1

    fees_added = 0
    for invoice_number, amount in DEMO_FEES:
        try:
            fee_service.create_fee(invoice_number, amount)
            fees_added += 1
        except DuplicateRecordError:
            print(f"Skipping invoice {invoice_number}: already recorded")

    print(f"✅ Seeded {books_added} book(s) and {fees_added} delivery fee(s)")
    return True


def stats(args):
    """Print record counts and the fee total."""
    print(f"Books:         {book_service.count_books()}")
    print(f"Delivery fees: {fee_service.count_fees()}")
    print(f"Fee total:     {fee_service.total_fees()}")
    return True


def build_parser():
    parser = argparse.ArgumentParser(description="LedgerDesk admin CLI")
    parser.add_argument('--db-path', help='Kuzu database path (default: KUZU_DB_PATH from config)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    subparsers.add_parser('seed', help='Insert demo books and delivery fees')
    subparsers.add_parser('stats', help='Show record counts')
    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose)

    db_path = args.db_path
    if not db_path:
        from config import Config
        db_path = Config.KUZU_DB_PATH
    reset_safe_kuzu_manager(db_path)
    reset_all_services()

    commands = {'seed': seed, 'stats': stats}
    return 0 if commands[args.command](args) else 1


if __name__ == '__main__':
    sys.exit(main())
