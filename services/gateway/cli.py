#!/usr/bin/env python3
"""
GLPI Bridge CLI
Command-line tool for opening GLPI sessions and dumping formatted users/tickets
"""

import argparse
import asyncio
import json
import os
import sys

from . import config
from .client import GLPIClient
from .errors import NotFoundError, UpstreamError, ValidationError
from .pipeline import collect_tickets, collect_users, session_credentials


def build_client(args: argparse.Namespace) -> GLPIClient:
    return GLPIClient(
        args.glpi_url,
        user_token=config.USER_TOKEN,
        verify_tls=not args.insecure,
        timeout=args.timeout,
        max_pages=config.GLPI_MAX_PAGES,
    )


async def open_session(args: argparse.Namespace) -> str:
    """Open a GLPI session and print its token"""
    print(f"Opening session on {args.glpi_url}...", file=sys.stderr)
    client = build_client(args)
    try:
        token = await client.init_session(args.user_auth, args.app_token)
        print("✅ Session opened", file=sys.stderr)
        print(token)
        return token
    finally:
        await client.close()


def _dump(records: list, output_file: str = None):
    payload = [record.model_dump(mode="json") for record in records]
    if output_file:
        with open(output_file, "w") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False, default=str)
        print(f"   Saved to {output_file}", file=sys.stderr)
    else:
        print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


async def fetch_users(args: argparse.Namespace) -> list:
    """Fetch and format all users"""
    credentials = session_credentials(args.session_token, args.app_token)
    client = build_client(args)
    try:
        users = await collect_users(client, credentials)
        print(f"✅ Fetched {len(users)} users", file=sys.stderr)
        _dump(users, args.output)
        return users
    finally:
        await client.close()


async def fetch_tickets(args: argparse.Namespace) -> list:
    """Fetch and format all tickets"""
    credentials = session_credentials(args.session_token, args.app_token)
    client = build_client(args)
    try:
        tickets = await collect_tickets(client, credentials, concurrency=args.concurrency)
        print(f"✅ Fetched {len(tickets)} tickets", file=sys.stderr)
        _dump(tickets, args.output)
        return tickets
    finally:
        await client.close()


def main(argv=None):
    parser = argparse.ArgumentParser(description="GLPI Bridge CLI")
    parser.add_argument("--glpi-url", default=config.GLPI_URL, help="GLPI REST API URL")
    parser.add_argument("--app-token", default=os.getenv("GLPI_APP_TOKEN"), help="GLPI App-Token")
    parser.add_argument("--timeout", type=float, default=config.GLPI_TIMEOUT, help="Request timeout (s)")
    parser.add_argument(
        "--insecure",
        action="store_true",
        default=not config.GLPI_VERIFY_TLS,
        help="Disable TLS certificate verification (INSECURE)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Session command
    session_parser = subparsers.add_parser("session", help="Open a GLPI session")
    session_parser.add_argument(
        "--user-auth",
        default=os.getenv("GLPI_AUTHORIZATION"),
        help='Authorization header, e.g. "user_token xxx" or "Basic xxx"',
    )

    # Users / tickets commands
    for name, help_text in (("users", "Dump formatted users"), ("tickets", "Dump formatted tickets")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--session-token", default=os.getenv("GLPI_SESSION_TOKEN"), help="GLPI Session-Token")
        sub.add_argument("--output", "-o", help="Output JSON file (default: stdout)")
        if name == "tickets":
            sub.add_argument(
                "--concurrency",
                type=int,
                default=config.GLPI_AUTHOR_CONCURRENCY,
                help="Author lookups in flight",
            )

    args = parser.parse_args(argv)

    try:
        if args.command == "session":
            if not args.user_auth or not args.app_token:
                raise ValidationError("Authorization e App-Token são necessários")
            asyncio.run(open_session(args))
        elif args.command == "users":
            asyncio.run(fetch_users(args))
        elif args.command == "tickets":
            asyncio.run(fetch_tickets(args))
    except ValidationError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(2)
    except NotFoundError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)
    except UpstreamError as e:
        print(f"❌ {e.message}: {e.payload}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
