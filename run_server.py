#!/usr/bin/env python3
"""
Launch script for the Keratograph Point Cloud backend.

Usage:
    python run_server.py [--port PORT] [--host HOST] [--line-policy {skip,fail}] [--no-correction]

Examples:
    python run_server.py                       # Defaults: skip policy, chirality correction on
    python run_server.py --port 5000           # Run on port 5000
    python run_server.py --line-policy fail    # Reject exports with stray lines
"""

import argparse
import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))


def main():
    parser = argparse.ArgumentParser(description="Keratograph Point Cloud Backend Server")
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=8000,
        help="Port to run server on (default: 8000)"
    )
    parser.add_argument(
        "--host", "-H",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1, use 0.0.0.0 for all interfaces)"
    )
    parser.add_argument(
        "--line-policy",
        choices=["skip", "fail"],
        default=None,
        help="Default policy for lines that are not segment records (default: skip)"
    )
    parser.add_argument(
        "--no-correction",
        action="store_true",
        help="Do not negate depth by default"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Run in debug mode"
    )

    args = parser.parse_args()

    # Defaults are read from the environment when the app is imported
    if args.line_policy is not None:
        os.environ["KERATOGRAPH_LINE_POLICY"] = args.line_policy
    if args.no_correction:
        os.environ["KERATOGRAPH_CORRECT_CHIRALITY"] = "0"

    print(f"Keratograph Point Cloud Backend")
    print(f"=" * 40)
    print(f"Server: http://{args.host}:{args.port}")
    print(f"=" * 40)

    print("\nAPI Endpoints:")
    print("  GET  /              - Health check")
    print("  GET  /health        - Detailed health")
    print("  POST /points        - Convert CORNEA export lines to a point cloud")
    print("\nStarting server...")

    import uvicorn

    uvicorn.run(
        "keratograph.main:app",
        host=args.host,
        port=args.port,
        reload=args.debug,
        log_level="debug" if args.debug else "info",
    )


if __name__ == "__main__":
    main()
