"""
Command-line interface for the Y!mobile usage monitor.

Provides argument parsing, credential resolution and the text dashboard.
"""

import argparse
import getpass
import json
import sys

from ymobile_monitor.client import PortalClient
from ymobile_monitor.config import (
    CONNECT_TIMEOUT,
    DEFAULT_CREDENTIALS_FILE,
    DEFAULT_PASSWORD,
    DEFAULT_USER,
    OBSERVED_AT_FORMAT,
)
from ymobile_monitor.credentials import FileCredentialStore, stored_credentials
from ymobile_monitor.logging_setup import _setup_logging, log
from ymobile_monitor.models import UsageSnapshot
from ymobile_monitor.monitor import UsageMonitor


def parse_args(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="Show the remaining mobile data of a Y!mobile line, "
                    "as reported by the My Y!mobile customer portal.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Credentials can also be provided via the YMOBILE_ID and\n"
            "YMOBILE_PASSWORD env vars, or remembered with --remember.\n"
            "If the password is still missing you will be prompted for it."
        ),
    )
    parser.add_argument(
        "--user", default=DEFAULT_USER,
        help="Phone number used to log in (overrides YMOBILE_ID env var)",
    )
    parser.add_argument(
        "--password", default=DEFAULT_PASSWORD,
        help="Portal password (overrides YMOBILE_PASSWORD env var)",
    )
    parser.add_argument(
        "--remember", action="store_true", default=False,
        help="Save the credentials for automatic login on later runs",
    )
    parser.add_argument(
        "--forget", action="store_true", default=False,
        help="Delete remembered credentials and exit",
    )
    parser.add_argument(
        "--credentials-file", default=str(DEFAULT_CREDENTIALS_FILE),
        help=f"Where remembered credentials live (default: {DEFAULT_CREDENTIALS_FILE})",
    )
    parser.add_argument(
        "--timeout", type=float, default=CONNECT_TIMEOUT,
        help=f"Connect and read timeout in seconds (default: {CONNECT_TIMEOUT:g})",
    )
    parser.add_argument(
        "--no-verify-ssl", dest="verify_ssl", action="store_false", default=True,
        help="Disable TLS certificate verification",
    )
    parser.add_argument(
        "--json", action="store_true", default=False,
        help="Print the usage figures as JSON",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    return parser.parse_args(argv)


def render_dashboard(snapshot: UsageSnapshot) -> str:
    """Format *snapshot* the way the dashboard screen lays it out."""
    lines = [
        "Remaining data",
        f"  {snapshot.remaining_gb} GB / {snapshot.total_gb} GB"
        f"  ({snapshot.used_percentage:.1f}% used)",
        "",
        "Breakdown",
        f"  Carry-over       {snapshot.carry_over_gb} GB",
        f"  Base allowance   {snapshot.base_allowance_gb} GB",
        f"  Purchased extra  {snapshot.purchased_extra_gb} GB",
        f"  Used             {snapshot.used_gb} GB",
        "",
        f"Last updated: {snapshot.observed_at.strftime(OBSERVED_AT_FORMAT)}",
    ]
    return "\n".join(lines)


def main(argv=None) -> None:
    """
    Main entry point for the monitor CLI.
    """
    args = parse_args(argv)

    _setup_logging(debug=args.debug)

    if not args.verify_ssl:
        import urllib3
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        log.warning("TLS certificate verification is DISABLED (--no-verify-ssl)")

    store = FileCredentialStore(args.credentials_file)

    if args.forget:
        store.clear()
        log.info("Remembered credentials removed")
        return

    client = PortalClient(
        timeout=(args.timeout, args.timeout),
        verify_ssl=args.verify_ssl,
    )
    monitor = UsageMonitor(client, store)

    with client:
        if not args.user and stored_credentials(store) is not None:
            monitor.start()
        else:
            user = args.user or input("Phone number: ").strip()
            password = args.password or getpass.getpass("Portal password: ")
            monitor.login(user, password, remember=args.remember)

    state = monitor.state
    if state.error or state.data is None:
        log.error(state.error or "No usage data was retrieved")
        sys.exit(1)

    if args.json:
        print(json.dumps(state.data.as_dict(), ensure_ascii=False, indent=2))
    else:
        print(render_dashboard(state.data))


if __name__ == "__main__":
    main()
