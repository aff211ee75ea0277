import argparse

from portal.database import SessionLocal, init_db
from portal.logging_setup import setup_console_logging
from portal.services.catalog_service import list_tests
from portal.services.seed_service import seed_mock_tests_if_empty

setup_console_logging()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage the mock test catalog")
    commands = parser.add_subparsers(dest="command", required=True)

    seed = commands.add_parser("seed", help="Insert sample tests if the catalog is empty")
    seed.add_argument(
        "--year",
        type=str,
        default="2024",
        help="Academic year stored on the sample tests",
    )

    listing = commands.add_parser("list", help="Print active tests")
    listing.add_argument("--subject", type=str, default=None, help="Filter by subject")
    listing.add_argument("--semester", type=str, default=None, help="Filter by semester")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    init_db()
    db = SessionLocal()
    try:
        if args.command == "seed":
            inserted = seed_mock_tests_if_empty(db, year=args.year)
            print(f"Inserted {inserted} tests")
        else:
            for test in list_tests(db, subject=args.subject, semester=args.semester):
                print(
                    f"{test.id:>4}  {test.subject:<16} sem {test.semester or '-':<3} "
                    f"{test.total_questions:>2}q {test.duration_minutes:>3}m  {test.title}"
                )
    finally:
        db.close()


if __name__ == "__main__":
    main()
