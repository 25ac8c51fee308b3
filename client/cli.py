"""
Analytics Session CLI
=====================
Connect to the analytics server and either check the connection, run a
program file in batch mode, or work interactively.

Usage:
    python -m client connect --host sasapp01 --user alice
    python -m client submit-file report.sas --local
    python -m client repl --host sasapp01 --port 8591
"""

import argparse
import sys

from iom.factory import ObjectCreationError, UnknownProtocol
from session import config
from session.batch import submit_file
from session.errors import SessionError
from session.manager import connect, current_server, disconnect, is_connected
from session.repl import repl


def positive_int(value):
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser():
    parser = argparse.ArgumentParser(
        prog="iomsession", description="Client for the analytics server"
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--host", default=config.DEFAULT_HOST)
    common.add_argument("--port", type=int, default=None)
    common.add_argument("--user", default=None)
    common.add_argument("--password", default=None)
    common.add_argument("--local", action="store_true",
                        help="connect to a server on this machine, no credentials")
    common.add_argument("--protocol", default=None,
                        help=f"protocol selector (default: {config.DEFAULT_PROTOCOL})")
    common.add_argument("--class-id", default=None)
    common.add_argument("--flush-size", type=positive_int, default=config.FLUSH_SIZE)

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("connect", parents=[common],
                        help="open a session and close it again")
    submit_cmd = commands.add_parser("submit-file", parents=[common],
                                     help="run a program, write .log/.lst beside it")
    submit_cmd.add_argument("file")
    repl_cmd = commands.add_parser("repl", parents=[common],
                                   help="submit lines interactively")
    repl_cmd.add_argument("--exit-keyword", default=config.EXIT_KEYWORD)
    return parser


def _connect(args):
    connect(
        args.host,
        args.port,
        username=args.user,
        password=args.password,
        local=args.local,
        protocol=args.protocol,
        class_id=args.class_id,
    )


def run_connect(args):
    _connect(args)
    print(f"Session OK: {current_server()}")


def run_submit_file(args):
    _connect(args)
    log_path, lst_path = submit_file(args.file, flush_size=args.flush_size)
    print(f"Log written to {log_path}")
    print(f"Listing written to {lst_path}")


def run_repl(args):
    _connect(args)
    print(f"Type '{args.exit_keyword}' to leave.")
    repl(exit_keyword=args.exit_keyword, flush_size=args.flush_size)


_COMMANDS = {
    "connect": run_connect,
    "submit-file": run_submit_file,
    "repl": run_repl,
}


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        _COMMANDS[args.command](args)
    except (SessionError, ObjectCreationError, UnknownProtocol, FileNotFoundError,
            ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if is_connected():
            disconnect()
    return 0


if __name__ == "__main__":
    sys.exit(main())
