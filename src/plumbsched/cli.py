"""Command-line interface for plumbsched staff schedules."""

import argparse
import logging
import random
import sys
from datetime import date, datetime
from typing import Optional

from plumbsched.config import CAPE_TOWN, JOHANNESBURG
from plumbsched.domain.models import Job, StaffMember, StaffSchedulePrefs
from plumbsched.domain.policies import RandomJitterResolver
from plumbsched.errors import InputError
from plumbsched.loaders import load_jobs, load_json, load_staff
from plumbsched.output.csv_exporter import write_week_csv
from plumbsched.output.pdf_generator import PDFGenerator
from plumbsched.output.text_generator import TextReportGenerator
from plumbsched.scheduling.day_builder import DayScheduleBuilder
from plumbsched.scheduling.shift_management import shift_roster
from plumbsched.scheduling.weekly import WeekScheduleAggregator, shift_week, week_days
from plumbsched.validation.validator import ScheduleValidator

logger = logging.getLogger(__name__)

SAMPLE_CATEGORIES = [
    "Geyser Replacement",
    "Geyser Assessment",
    "Leak Detection",
    "Drain Blockage",
    "Camera Inspection",
    "Toilet/Shower",
    "Maintenance",
]

SAMPLE_STREETS = [
    "Main Rd", "Oxford Rd", "Jan Smuts Ave", "Rivonia Rd", "Beach Rd",
    "Long St", "Louis Botha Ave", "Kloof St", "William Nicol Dr", "Voortrekker Rd",
]


def create_sample_staff(count: int = 4) -> list[StaffMember]:
    """Create sample staff members split between both depots."""
    names = [
        "Thabo", "Lerato", "Pieter", "Naledi", "Sipho", "Anele",
        "Johan", "Zanele", "Kagiso", "Megan", "Bongani", "Chantel",
    ]
    staff = []
    for i in range(count):
        name = names[i % len(names)]
        if i >= len(names):
            name = f"{name}{i // len(names) + 1}"
        staff.append(
            StaffMember(
                id=f"S{i + 1:03d}",
                name=name,
                role="staff",
                city=JOHANNESBURG if i % 2 == 0 else CAPE_TOWN,
                # Every third member has an explicit late-shift override
                schedule=StaffSchedulePrefs(
                    working_late_shift=True if i % 3 == 2 else None,
                ),
            )
        )
    return staff


def create_sample_jobs(
    staff: list[StaffMember],
    start: date,
    jobs_per_day: int = 3,
    seed: int = 7,
) -> list[Job]:
    """Create sample jobs for each staff member on the weekdays of a week."""
    rng = random.Random(seed)
    jobs = []
    for member in staff:
        for day in week_days(start)[:5]:
            for n in range(rng.randint(0, jobs_per_day)):
                hour = 7 + n * 3 + rng.randint(0, 1)
                category = rng.choice(SAMPLE_CATEGORIES)
                street = rng.choice(SAMPLE_STREETS)
                jobs.append(
                    Job(
                        id=f"J{len(jobs) + 1:04d}",
                        assigned_to=member.id,
                        due_date=datetime(day.year, day.month, day.day, hour, rng.choice([0, 30])),
                        category=category,
                        risk_address=f"{rng.randint(1, 250)} {street}",
                        title=f"{category} - {member.city}",
                    )
                )
    return jobs


def _parse_week(value: Optional[str]) -> date:
    if not value:
        return date.today()
    return date.fromisoformat(value)


def _make_aggregator(random_jitter: bool, seed: Optional[int]) -> WeekScheduleAggregator:
    if random_jitter:
        resolver = RandomJitterResolver(rng=random.Random(seed))
        return WeekScheduleAggregator(DayScheduleBuilder(coordinate_resolver=resolver))
    return WeekScheduleAggregator()


def print_week(
    staff: list[StaffMember],
    jobs: list[Job],
    reference: date,
    csv_dir: Optional[str] = None,
    pdf_path: Optional[str] = None,
    preview: int = 0,
    random_jitter: bool = False,
    seed: Optional[int] = None,
) -> int:
    """Generate, validate and print a week of schedules."""
    aggregator = _make_aggregator(random_jitter, seed)
    week = aggregator.build(staff, jobs, reference)

    print(TextReportGenerator(preview=preview).generate_to_string(week, staff))

    result = ScheduleValidator(aggregator.builder.config).validate_week(week, staff)
    if result.is_valid:
        print("\nValidation: PASSED")
    else:
        print(f"\nValidation: FAILED ({len(result.errors)} errors)")
        for error in result.errors[:5]:
            print(f"    - {error}")
        if len(result.errors) > 5:
            print(f"    ... and {len(result.errors) - 5} more errors")

    if csv_dir:
        for member in aggregator.schedulable_staff(staff):
            path = write_week_csv(member, week, csv_dir)
            print(f"  CSV: {path}")

    if pdf_path:
        print(f"\nGenerating PDF: {pdf_path}")
        PDFGenerator().generate(week, staff, pdf_path)
        print("  PDF created successfully!")

    return 0


def print_roster(staff: list[StaffMember], city: Optional[str] = None) -> int:
    """Print the late-shift management roster grouped by city."""
    cities = [city] if city else [JOHANNESBURG, CAPE_TOWN]
    for c in cities:
        rows = shift_roster(staff, c)
        print(f"\n{c} Staff ({len(rows)})")
        print("-" * 60)
        for row in rows:
            print(f"  {row.name:<20} {row.shift_start}-{row.shift_end}  {row.shift_label}")
    print(
        "\nStaff alternate between normal (05:00-17:00) and late shifts "
        "(05:00-19:00)."
    )
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="plumbsched - Staff Schedule Manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s week --staff staff.json --jobs jobs.json          Current week
  %(prog)s week --staff staff.json --jobs jobs.json --week 2024-06-03
  %(prog)s week ... --offset -1                               Previous week
  %(prog)s week ... --csv-dir out/ --pdf week.pdf             Export files

  %(prog)s roster --staff staff.json                          Shift roster
  %(prog)s demo --count 6                                     Sample data
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    week_parser = subparsers.add_parser("week", help="Generate a week of staff schedules")
    week_parser.add_argument("--staff", required=True, help="JSON file of user documents")
    week_parser.add_argument("--jobs", required=True, help="JSON file of job documents")
    week_parser.add_argument(
        "--week", "-w",
        type=str,
        help="Any date in the target week, YYYY-MM-DD (default: today)",
    )
    week_parser.add_argument(
        "--offset",
        type=int,
        default=0,
        help="Move the target week by N weeks (default: 0)",
    )
    week_parser.add_argument("--csv-dir", type=str, help="Write one CSV per staff member here")
    week_parser.add_argument("--pdf", type=str, help="Output PDF file path")
    week_parser.add_argument(
        "--preview",
        type=int,
        default=0,
        help="Entries shown per day (default: all)",
    )
    week_parser.add_argument(
        "--random-jitter",
        action="store_true",
        help="Use random job coordinates instead of address hashing",
    )
    week_parser.add_argument("--seed", type=int, help="Seed for --random-jitter")

    roster_parser = subparsers.add_parser("roster", help="Show the late-shift roster")
    roster_parser.add_argument("--staff", required=True, help="JSON file of user documents")
    roster_parser.add_argument(
        "--city",
        type=str,
        choices=[JOHANNESBURG, CAPE_TOWN],
        help="Only show one depot",
    )

    demo_parser = subparsers.add_parser("demo", help="Run with generated sample data")
    demo_parser.add_argument(
        "--count", "-c",
        type=int,
        default=4,
        help="Number of staff members to generate (default: 4)",
    )
    demo_parser.add_argument("--pdf", type=str, help="Output PDF file path")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "week":
            reference = shift_week(_parse_week(args.week), args.offset)
            staff = load_staff(load_json(args.staff))
            jobs = load_jobs(load_json(args.jobs))
            return print_week(
                staff,
                jobs,
                reference,
                csv_dir=args.csv_dir,
                pdf_path=args.pdf,
                preview=args.preview,
                random_jitter=args.random_jitter,
                seed=args.seed,
            )
        elif args.command == "roster":
            staff = load_staff(load_json(args.staff))
            return print_roster(staff, args.city)
        elif args.command == "demo":
            start = date.today()
            staff = create_sample_staff(args.count)
            jobs = create_sample_jobs(staff, start)
            print(f"Generating schedules for {len(staff)} staff, {len(jobs)} jobs...")
            return print_week(staff, jobs, start, pdf_path=args.pdf, preview=3)
        else:
            parser.print_help()
            return 1
    except InputError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
