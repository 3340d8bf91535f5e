"""Command-line interface for listing, describing and putting to Kinesis streams."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple
import structlog

from kinesis_client.client import KinesisClient
from kinesis_client.config import settings
from kinesis_client.context import AWSContext
from kinesis_client.exceptions import ConfigurationError
from kinesis_client.logging_config import configure_logging

logger = structlog.get_logger(__name__)

DESCRIPTION = (
    "List Kinesis streams, describe a Kinesis stream or put data onto a Kinesis "
    "stream from either a file or as text on the command line. Specify a "
    "session_token if using temporary AWS credentials."
)

USAGE = (
    "kt -L -k aws_key -i aws_key_id -r region -e endpoint [-t session_token]\n"
    "       kt -D -k aws_key -i aws_key_id -r region -e endpoint [-t session_token]\n"
    "         -s stream_name\n"
    "       kt -P -k aws_key -i aws_key_id -r region -e endpoint [-t session_token]\n"
    "         -s stream_name -p partition_key [-p ...] [-f filename ...] [-x text ...]"
)


class _Parser(argparse.ArgumentParser):
    """Usage errors exit with status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _text(value: str) -> Tuple[str, str]:
    return ("text", value)


def _file(value: str) -> Tuple[str, str]:
    return ("file", value)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(prog="kt", usage=USAGE, description=DESCRIPTION)

    actions = parser.add_mutually_exclusive_group(required=True)
    actions.add_argument("-L", dest="action", action="store_const", const="list", help="List streams")
    actions.add_argument("-D", dest="action", action="store_const", const="describe", help="Describe a stream")
    actions.add_argument("-P", dest="action", action="store_const", const="put", help="Put record(s)")

    parser.add_argument("-k", dest="key", help="AWS secret access key")
    parser.add_argument("-i", dest="key_id", help="AWS access key ID")
    parser.add_argument("-t", dest="session_token", help="Session token for temporary credentials")
    parser.add_argument("-r", dest="region", help="AWS region")
    parser.add_argument("-e", dest="endpoint", help="Kinesis endpoint host")
    parser.add_argument("-s", dest="stream_name", help="Stream name")
    parser.add_argument(
        "-p", dest="partition_keys", action="append", default=[],
        help="Partition key (repeat for batches; the last key is reused)",
    )
    parser.add_argument(
        "-f", dest="payloads", action="append", type=_file,
        help="Read record data from file (repeatable)",
    )
    parser.add_argument(
        "-x", dest="payloads", action="append", type=_text,
        help="Record data as text (repeatable)",
    )
    parser.add_argument("--insecure", action="store_true", help="Disable TLS certificate verification")
    parser.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL or INFO)")
    parser.add_argument("--log-format", choices=["console", "json"], default=None, help="Log output format")
    return parser


def _load_payloads(sources: Sequence[Tuple[str, str]]) -> List[bytes]:
    """Resolve -x/-f sources to bytes, in command-line order."""
    payloads = []
    for kind, value in sources:
        if kind == "file":
            payloads.append(Path(value).read_bytes())
        else:
            payloads.append(value.encode("utf-8"))
    return payloads


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line interface for the Kinesis client."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level, args.log_format)
    logger.debug("cli_invoked", action=args.action)

    try:
        context = AWSContext(
            secret_key=args.key or settings.aws_secret_access_key,
            access_key_id=args.key_id or settings.aws_access_key_id,
            session_token=args.session_token or settings.aws_session_token,
            region=args.region or settings.aws_region,
            endpoint=args.endpoint or settings.get_kinesis_endpoint(args.region),
        )
    except ConfigurationError as e:
        parser.error(str(e))

    if args.action in ("describe", "put") and not args.stream_name:
        parser.error("-s stream_name is required")

    if args.action == "put":
        if not args.partition_keys:
            parser.error("-p partition_key is required")
        if not args.payloads:
            parser.error("-f filename or -x text is required")

        try:
            payloads = _load_payloads(args.payloads)
        except OSError as e:
            print(f"Cannot open file {e.filename}", file=sys.stderr)
            return 1

    with KinesisClient(context=context, verify_ssl=False if args.insecure else None) as client:
        if args.action == "list":
            response = client.list_streams()
        elif args.action == "describe":
            response = client.describe_stream(args.stream_name)
        else:
            response = client.put(args.stream_name, args.partition_keys, payloads)

    if response.is_transport_error:
        print(response.error_message, file=sys.stderr)
    elif response.ok:
        print(response.body, file=sys.stderr)
    else:
        print(f"{response.headers}\n{response.body}", file=sys.stderr)

    return 0 if response.ok else 1


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
