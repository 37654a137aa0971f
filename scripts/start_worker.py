#!/usr/bin/env python3
# =============================================================================
# scripts/start_worker.py - Celery Worker Entry Point
# =============================================================================
# Starts a Celery worker with the embedded beat scheduler, so the daily
# maintenance job runs at 00:00 UTC.
#
# Usage:
#   python scripts/start_worker.py
#
#   # Or use Celery CLI directly
#   celery -A workers.celery_app worker --beat --loglevel=info
#
# Prerequisites:
#   - Redis must be running (REDIS_URL)
#   - Environment variables must be set (.env file)
#   - The project is installed (pip install -e .)
# =============================================================================

from workers.celery_app import celery_app


def main():
    """Start the Celery worker with beat."""
    print("=" * 60)
    print("AI Ships Celery Worker")
    print("=" * 60)
    print()
    print("Starting worker with beat scheduler...")
    print("Press Ctrl+C to stop")
    print()

    celery_app.worker_main([
        "worker",
        "--beat",
        "--loglevel=info",
        "--concurrency=1",
    ])


if __name__ == "__main__":
    main()
