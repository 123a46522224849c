"""
Command-line interface for AIQ Link
"""

import argparse
import sys
import logging

from config import Config

from aiqlink import __version__
from aiqlink.integration import AIQAuthClient, AIQError, HttpExecutor, build_action_uri

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(
        description="AIQ Link - Integration supervisor authentication helper"
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Token command
    token_parser = subparsers.add_parser('token', help='Fetch an access token')
    token_parser.add_argument(
        '--base-url',
        type=str,
        default=Config.AIQ_BASE_URL,
        help='Token discovery URL (default: AIQ_BASE_URL)'
    )
    token_parser.add_argument(
        '--username',
        type=str,
        default=Config.AIQ_USERNAME,
        help='User to authenticate (default: AIQ_USERNAME)'
    )
    token_parser.add_argument(
        '--password',
        type=str,
        default=Config.AIQ_PASSWORD,
        help='Password of the user (default: AIQ_PASSWORD)'
    )
    token_parser.add_argument(
        '--org',
        type=str,
        default=Config.AIQ_ORG_NAME,
        help='Organization name (default: AIQ_ORG_NAME)'
    )

    # URI command
    uri_parser = subparsers.add_parser('uri', help='Print the URI of an action')
    uri_parser.add_argument(
        'action',
        type=str,
        help='Action name'
    )
    uri_parser.add_argument(
        '--base-url',
        type=str,
        default=Config.AIQ_BASE_URL,
        help='Integration supervisor URL (default: AIQ_BASE_URL)'
    )
    uri_parser.add_argument(
        '--org',
        type=str,
        default=Config.AIQ_ORG_NAME,
        help='Organization name (default: AIQ_ORG_NAME)'
    )
    uri_parser.add_argument(
        '--param',
        action='append',
        type=parse_param,
        default=[],
        metavar='NAME=VALUE',
        help='Query parameter, may be repeated'
    )

    # Smoke test command
    subparsers.add_parser('smoketest', help='Run the authentication smoke test')

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(getattr(logging, Config.LOG_LEVEL, logging.INFO))

    try:
        if args.command == 'token':
            fetch_token(args)
        elif args.command == 'uri':
            print_uri(args)
        elif args.command == 'smoketest':
            run_smoketest(args.verbose)
        else:
            parser.print_help()
            sys.exit(1)
    except AIQError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def parse_param(value: str):
    """Split a NAME=VALUE argument into a query parameter pair"""
    name, sep, param_value = value.partition('=')
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got: {value}")
    return name, param_value


def fetch_token(args):
    """Fetch an access token and print it"""
    with HttpExecutor(
        timeout=Config.AIQ_TIMEOUT,
        max_response_bytes=Config.AIQ_MAX_RESPONSE_BYTES,
    ) as executor:
        client = AIQAuthClient(executor)
        token = client.fetch_access_token(args.base_url, args.username, args.password, args.org)
    print(token)


def print_uri(args):
    """Build the action URI and print it"""
    print(build_action_uri(args.base_url, args.org, args.action, *args.param))


def run_smoketest(verbose: bool):
    """Run the smoke test and exit with its status"""
    from aiqlink.integration.smoketest import run_smoke_test

    results = run_smoke_test(verbose=verbose)
    sys.exit(0 if results["success"] else 1)


if __name__ == '__main__':
    main()
