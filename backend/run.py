#!/usr/bin/env python3
"""
Gozleme Finder Backend - Run Script
This script starts the FastAPI proxy server
"""

import sys
import subprocess
from pathlib import Path

def print_colored(message, color="blue"):
    """Print colored output"""
    colors = {
        "red": "\033[91m",
        "green": "\033[92m",
        "yellow": "\033[93m",
        "blue": "\033[94m",
        "reset": "\033[0m"
    }
    print(f"{colors.get(color, '')}{message}{colors['reset']}")

def check_file_exists(filepath, error_message):
    """Check if a file exists"""
    if not Path(filepath).exists():
        print_colored(f"Error: {error_message}", "red")
        sys.exit(1)

def server_port(settings=None):
    """Port from the app settings, so PORT in .env is honoured"""
    from gozleme_finder.core.config import get_settings
    return str((settings or get_settings()).PORT)

def main():
    print_colored("Starting Gozleme Finder proxy...", "blue")

    # Check if we're in the backend directory
    check_file_exists("gozleme_finder/main.py", "gozleme_finder/main.py not found. Please run this script from the backend directory.")

    # Keys are optional at startup; endpoints report what is missing
    if not Path(".env").exists() and not Path("../.env").exists():
        print_colored("Warning: .env file not found.", "yellow")
        print("Create a .env file with the following variables:")
        print("  GOOGLE_PLACES_KEY=your_places_key")
        print("  GOOGLE_MAPS_KEY=your_maps_key  # optional, defaults to GOOGLE_PLACES_KEY")
        print("  ANTHROPIC_KEY=your_anthropic_key")
        print("  LOGGER=20")
        print()

    # Check if dependencies are installed
    print_colored("Checking dependencies...", "blue")
    try:
        import fastapi
        import uvicorn
    except ImportError:
        print_colored("Dependencies not installed.", "red")
        print("Install them from the project root with: pip install -e .")
        sys.exit(1)

    port = server_port()

    # Start the server
    print_colored("All checks passed!", "green")
    print_colored("Starting Uvicorn server...", "blue")
    print(f"Proxy will be available at: http://localhost:{port}")
    print(f"API Health check: http://localhost:{port}/health")
    print()
    print("Press Ctrl+C to stop the server")
    print()

    # Run uvicorn with auto-reload for development
    try:
        subprocess.run([
            sys.executable, "-m", "uvicorn",
            "gozleme_finder.main:app",
            "--reload",
            "--host", "0.0.0.0",
            "--port", port
        ], check=True)
    except KeyboardInterrupt:
        print_colored("\nProxy server stopped.", "yellow")
    except subprocess.CalledProcessError as e:
        print_colored(f"\nError starting server: {e}", "red")
        sys.exit(1)

if __name__ == "__main__":
    main()
