#!/usr/bin/env python3
"""
MRONJ Screening - API Server Launcher
Simple click-to-run script for the screening API.
"""

import sys
import os
import subprocess
from pathlib import Path

# ANSI color codes
RED = '\033[0;31m'
GREEN = '\033[0;32m'
YELLOW = '\033[1;33m'
BLUE = '\033[0;34m'
NC = '\033[0m'  # No Color


def print_header():
    """Print startup header."""
    print(f"{BLUE}╔══════════════════════════════════════════════════════════╗{NC}")
    print(f"{BLUE}║          MRONJ SCREENING API                             ║{NC}")
    print(f"{BLUE}╚══════════════════════════════════════════════════════════╝{NC}")
    print()


def check_requirements():
    """Check the environment before starting the server."""
    project_root = Path(__file__).parent

    env_file = project_root / ".env"
    if not env_file.exists():
        print(f"{YELLOW}⚠ .env file not found, using default settings{NC}")

    try:
        from mronj_screening.config import settings
    except ValueError as e:
        print(f"{RED}✗ Invalid configuration: {e}{NC}")
        sys.exit(1)

    print(f"{GREEN}✓ Environment setup complete (language: {settings.OUTPUT_LANGUAGE}){NC}")
    print()
    return settings


def start_server(settings):
    """Start the FastAPI server."""
    project_root = Path(__file__).parent

    print(f"{BLUE}Starting FastAPI server...{NC}")
    print()
    print(f"  {BLUE}API:{NC}           http://localhost:{settings.API_PORT}/api/assess")
    print(f"  {BLUE}API Docs:{NC}      http://localhost:{settings.API_PORT}/docs")
    print()
    print(f"{YELLOW}Press Ctrl+C to stop the server{NC}")
    print()

    os.chdir(project_root)

    try:
        subprocess.run([
            sys.executable, "-m", "uvicorn",
            "mronj_screening.interfaces.api.app:app",
            "--host", settings.API_HOST,
            "--port", str(settings.API_PORT)
        ], check=True)
    except KeyboardInterrupt:
        print(f"\n{YELLOW}Shutting down...{NC}")
        sys.exit(0)
    except subprocess.CalledProcessError as e:
        print(f"{RED}✗ Server failed to start: {e}{NC}")
        sys.exit(1)


def main():
    """Main entry point."""
    print_header()
    settings = check_requirements()
    start_server(settings)


if __name__ == "__main__":
    main()
