#!/usr/bin/env python3
# =============================================================================
# scripts/start_worker.py - Celery Worker Entry Point
# =============================================================================
# Starts a Celery worker to send invitation emails in the background.
#
# Usage:
#   # Start worker (development)
#   python scripts/start_worker.py
#
#   # Or use Celery CLI directly
#   celery -A workers.celery_app worker -Q email --loglevel=info
#
#   # Start with concurrency limit
#   celery -A workers.celery_app worker -Q email --loglevel=info --concurrency=4
#
# Prerequisites:
#   - Redis must be running (brew services start redis)
#   - Environment variables must be set (.env file)
# =============================================================================

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from workers.celery_app import celery_app
from workers.config import EMAIL_QUEUE


def main():
    """Start the Celery worker."""
    print("=" * 60)
    print("TeamManager Celery Worker (email)")
    print("=" * 60)
    print()
    print("Starting worker...")
    print("Press Ctrl+C to stop")
    print()

    # Start worker with info logging
    celery_app.worker_main([
        "worker",
        "--loglevel=info",
        f"--queues={EMAIL_QUEUE}",
        "--concurrency=2",  # 2 worker processes
    ])


if __name__ == "__main__":
    main()
