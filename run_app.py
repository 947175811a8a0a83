#!/usr/bin/env python3
"""
Spend2Earn Backend Runner
=========================

Run the rewards API in different modes.

Usage:
    python run_app.py                    # Development mode with auto-reload (default)
    python run_app.py --mode prod        # Production mode
    python run_app.py --port 3002        # Custom port
    python run_app.py --host 127.0.0.1   # Custom host
"""

import argparse
import os
import sys

from app.core.config import get_settings

def print_banner():
    """Print application banner"""
    banner = """
╔═══════════════════════════════════════════════════════╗
║                 💸 Spend2Earn Backend                 ║
║         Rewards wallet, perks and test simulation     ║
╚═══════════════════════════════════════════════════════╝
    """
    print(banner)

def check_environment():
    """Report optional configuration"""
    print("\n🔍 Checking environment...")

    if os.path.exists(".env"):
        print("✅ .env file found")
    else:
        print("⚠️  .env file not found, using defaults")

    if get_settings().GEMINI_API_KEY:
        print("✅ GEMINI_API_KEY configured")
    else:
        print("⚠️  GEMINI_API_KEY not set, roast generation will fail")

def run_main_app(host: str, port: int, reload: bool = True, log_level: str = "info"):
    """Run the FastAPI application"""
    print(f"\n🚀 Starting Spend2Earn API on {host}:{port}")
    print(f"🔗 Access at: http://localhost:{port}")
    print(f"📖 API Docs: http://localhost:{port}/api/docs")
    print(f"🔌 WebSocket: ws://localhost:{port}/ws")
    print("\n" + "=" * 50)

    import uvicorn
    try:
        uvicorn.run(
            "app.main:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level
        )
    except KeyboardInterrupt:
        print("\n👋 Server stopped by user")

def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Spend2Earn Backend Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_app.py                      # Development mode on port 3001
  python run_app.py --mode prod          # No auto-reload
  python run_app.py --port 3002          # Custom port
        """
    )

    parser.add_argument(
        "--mode",
        choices=["dev", "prod"],
        default="dev",
        help="Server mode (default: dev)"
    )
    parser.add_argument(
        "--host",
        default=settings.HOST,
        help=f"Host to bind to (default: {settings.HOST})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.PORT,
        help=f"Port to bind to (default: {settings.PORT})"
    )
    parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable auto-reload"
    )

    args = parser.parse_args()

    print_banner()
    check_environment()

    reload = not args.no_reload and args.mode != "prod"
    run_main_app(args.host, args.port, reload, settings.LOG_LEVEL.lower())

    return 0

if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
        sys.exit(0)
