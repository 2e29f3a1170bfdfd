#!/usr/bin/env python3
"""
Development Database Reset and Seed Utility

Resets the local database and seeds one user with several days of focus history,
templates and today's schedule, so the dashboard and insights views have
something to show.

Usage:
    python dev_reset.py                     # Reset and seed the default dev user
    python dev_reset.py --skip-reset        # Only seed (don't reset the DB)
    python dev_reset.py --user-id USER_ID   # Seed data for a specific identity-provider user
    python dev_reset.py --days 10           # Length of the seeded streak

Safety: This script will ONLY run in development mode. It checks:
    - DATABASE_URL must be SQLite or point at 'localhost' / '127.0.0.1'
    - Will prompt for confirmation before resetting
"""

import argparse
import os
import sys
from datetime import timedelta
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv
from sqlalchemy.orm import Session

from pomotrack import config
from pomotrack.database import SessionLocal, engine
from pomotrack.models.models import Base
from pomotrack.repositories.insights_repository import InsightsRepository
from pomotrack.repositories.schedule_repository import ScheduleRepository
from pomotrack.repositories.template_repository import TemplateRepository
from pomotrack.repositories.timer_repository import TimerRepository
from pomotrack.schemas.insights import AnalyzeRequest
from pomotrack.schemas.schedule import ScheduleCreate
from pomotrack.schemas.templates import TemplateCreate
from pomotrack.schemas.timer import TimerStart
from pomotrack.services.auth_service import create_access_token
from pomotrack.services.insights_service import InsightsService
from pomotrack.services.schedule_service import ScheduleService
from pomotrack.services.sentiment_service import get_sentiment_classifier
from pomotrack.services.template_service import TemplateService
from pomotrack.services.timer_service import TimerService
from pomotrack.utils.clock import Clock, FixedClock, system_clock

DEFAULT_USER_ID = "dev-user"

REFLECTIONS = [
    "Great session, finished the outline and felt focused the whole time.",
    "Kept getting distracted by email, frustrating and slow.",
    "Steady progress on the report.",
    "Loved this run, the ideas finally clicked.",
    "Tired and unmotivated, barely got anything done.",
]

# Colors for terminal output
class Colors:
    HEADER = '\033[95m'
    OKCYAN = '\033[96m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'

def print_header(text):
    print(f"\n{Colors.HEADER}{Colors.BOLD}{text}{Colors.ENDC}")

def print_success(text):
    print(f"{Colors.OKGREEN}✓ {text}{Colors.ENDC}")

def print_warning(text):
    print(f"{Colors.WARNING}⚠ {text}{Colors.ENDC}")

def print_error(text):
    print(f"{Colors.FAIL}✗ {text}{Colors.ENDC}")

def print_info(text):
    print(f"{Colors.OKCYAN}ℹ {text}{Colors.ENDC}")

def is_local_database(db_url: str) -> bool:
    db_url = db_url.lower()
    return db_url.startswith("sqlite") or any(host in db_url for host in ['localhost', '127.0.0.1'])

def check_development_environment() -> bool:
    """Verify we're running in a development environment"""
    load_dotenv()
    db_url = os.getenv("DATABASE_URL", config.DATABASE_URL)

    if not is_local_database(db_url):
        print_error("SAFETY CHECK FAILED!")
        print_error(f"DATABASE_URL does not appear to be local: {db_url}")
        print_error("This script should only be run in development environments.")
        return False

    print_success(f"Development environment confirmed: {db_url}")
    return True

def confirm_reset() -> bool:
    """Ask user to confirm database reset"""
    print_warning("This will DELETE ALL DATA in your local database")
    response = input(f"{Colors.BOLD}Are you sure you want to continue? (yes/no): {Colors.ENDC}").strip().lower()
    return response in ['yes', 'y']

def reset_database() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

def _run_pomodoro_group(timer_service: TimerService, clock: FixedClock, user_id: str,
                        group_id: str, template_id: int, focus: int, short_break: int, cycles: int):
    """Play a full focus/break run through the timer service, completing every phase on schedule"""
    focus_ids = []
    for cycle in range(cycles):
        session = timer_service.start_timer(user_id, TimerStart(
            template_id=template_id,
            duration_minutes=focus,
            phase="focus",
            current_cycle=cycle,
            target_cycles=cycles,
            session_group_id=group_id,
        ))
        clock.advance(minutes=focus)
        timer_service.complete_timer(user_id, session.id)
        focus_ids.append(session.id)

        if cycle < cycles - 1:
            rest = timer_service.start_timer(user_id, TimerStart(
                template_id=template_id,
                duration_minutes=short_break,
                phase="short_break",
                current_cycle=cycle,
                target_cycles=cycles,
                session_group_id=group_id,
            ))
            clock.advance(minutes=short_break)
            timer_service.complete_timer(user_id, rest.id)
    return focus_ids

def seed_demo_data(db: Session, user_id: str, clock: Clock = system_clock, days: int = 5) -> dict:
    """
    Seed templates, a streak of completed runs ending today, reflections and today's schedule.

    Args:
        db: Database session
        user_id: Identity-provider user id that owns the data
        clock: Source of "now"; the streak ends on its current day
        days: Number of consecutive days with a completed run

    Returns:
        Counts of what was created
    """
    now = clock.now()
    template_service = TemplateService(TemplateRepository(db), clock)
    schedule_service = ScheduleService(ScheduleRepository(db), clock)

    deep_work = template_service.create_template(user_id, TemplateCreate(
        name="Deep Work", focus_duration=50, break_duration=10,
        description="Long blocks for writing and design",
    ))
    classic = template_service.create_template(user_id, TemplateCreate(
        name="Classic Pomodoro", focus_duration=25, break_duration=5,
    ))

    # Runs are replayed on their own clock so timestamps land on past days
    replay_clock = FixedClock(now)
    timer_service = TimerService(TimerRepository(db), replay_clock)
    insights_service = InsightsService(InsightsRepository(db), replay_clock, get_sentiment_classifier())

    runs = 0
    analyzed = 0
    for offset in range(days - 1, -1, -1):
        day_start = (now - timedelta(days=offset)).replace(hour=7, minute=0, second=0, microsecond=0)
        if day_start >= now:
            day_start = now - timedelta(hours=2)
        replay_clock.instant = day_start

        template = classic if offset % 2 else deep_work
        focus_ids = _run_pomodoro_group(
            timer_service, replay_clock, user_id,
            group_id=f"seed-{offset}",
            template_id=template.id,
            focus=template.focus_duration,
            short_break=template.break_duration,
            cycles=2,
        )
        runs += 1

        notes = REFLECTIONS[offset % len(REFLECTIONS)]
        insights_service.analyze_session(user_id, AnalyzeRequest(id=focus_ids[-1], notes=notes))
        analyzed += 1

    schedule = [
        ScheduleCreate(template_id=deep_work.id, start_datetime=now.replace(hour=14, minute=0, second=0)),
        ScheduleCreate(title="Review notes", start_datetime=now.replace(hour=16, minute=30, second=0), duration_min=20),
        ScheduleCreate(template_id=classic.id, start_datetime=now.replace(hour=9, minute=0, second=0) + timedelta(days=1)),
    ]
    for entry in schedule:
        schedule_service.create_entry(user_id, entry)

    return {"templates": 2, "runs": runs, "analyzed": analyzed, "scheduled": len(schedule)}

def print_dev_token(user_id: str):
    """Print a bearer token for the seeded user when a signing secret is configured"""
    if not config.AUTH_JWT_SECRET:
        print_warning("AUTH_JWT_SECRET not set, skipping dev token")
        return

    token = create_access_token(data={"sub": user_id}, expires_delta=timedelta(days=7))
    print_header("Dev Bearer Token")
    print(f"""
{Colors.BOLD}User:{Colors.ENDC} {user_id}
{Colors.BOLD}Token (valid 7 days):{Colors.ENDC}
  {token}

{Colors.BOLD}API Usage Example:{Colors.ENDC}
  GET http://localhost:8000/api/dashboard/overview
  Header: Authorization: Bearer <token>
""")

def main():
    parser = argparse.ArgumentParser(
        description="Reset the development database and seed demo focus history",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python dev_reset.py                     # Full reset and seed
  python dev_reset.py --skip-reset        # Only seed (no DB reset)
  python dev_reset.py --user-id abc-123   # Seed for a specific user
        """
    )

    parser.add_argument('--skip-reset', action='store_true',
                      help='Skip database reset, only seed data')
    parser.add_argument('--user-id', default=DEFAULT_USER_ID,
                      help=f'User id (token subject) to seed data for (default: {DEFAULT_USER_ID})')
    parser.add_argument('--days', type=int, default=5,
                      help='Number of consecutive days of completed runs (default: 5)')
    parser.add_argument('--no-confirm', action='store_true',
                      help='Skip confirmation prompt (use with caution)')

    args = parser.parse_args()

    if not check_development_environment():
        sys.exit(1)

    print_header("Development Database Reset Utility")

    if not args.skip_reset:
        if not args.no_confirm and not confirm_reset():
            print_info("Reset cancelled by user")
            sys.exit(0)

        print_header("Resetting Database")
        reset_database()
        print_success("Database reset successfully!")
    else:
        print_info("Skipping database reset")
        Base.metadata.create_all(bind=engine)

    print_header("Seeding Demo Data")
    db = SessionLocal()
    try:
        counts = seed_demo_data(db, args.user_id, days=max(1, args.days))
    except Exception as e:
        print_error(f"Error during seeding: {e}")
        db.rollback()
        sys.exit(1)
    finally:
        db.close()

    print_success(
        f"Created {counts['templates']} templates, {counts['runs']} completed runs, "
        f"{counts['analyzed']} reflections and {counts['scheduled']} scheduled sessions"
    )

    print_dev_token(args.user_id)

    print_success("\n✨ Development environment ready for testing!")

if __name__ == "__main__":
    main()
