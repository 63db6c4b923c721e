"""
Command line entry point.

    bf program.bf                run a file
    bf -e '+++[>++<-]>.'         run a string
    bf --example hello           run a bundled program
    bf                           interactive session

Exit status: 0 finished, 1 unmatched ']', 2 fault.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import load_settings, setup_logging
from .debugger import Tracer
from .engine import run
from .errors import Fault
from .programs import PROGRAMS, get_program
from .session import Session, ask_for_offset, interactive
from .state import Outcome
from .streams import TextSource, stdin_text_source, stdout_sink

EXIT_FINISHED = 0
EXIT_SOURCE_ERROR = 1
EXIT_FAULT = 2


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="bf", description="Byte-tape interpreter with an interactive session")
    ap.add_argument("program", nargs="?", help="Program file to run (omit for an interactive session)")
    ap.add_argument("-e", "--execute", metavar="CODE", help="Run CODE instead of a file")
    ap.add_argument("--example", choices=sorted(PROGRAMS), help="Run a bundled program")
    ap.add_argument("--input", metavar="TEXT", help="Use TEXT as input instead of stdin")
    ap.add_argument("--offset", type=int, default=0, help="Starting cell offset")
    ap.add_argument("--tape-size", type=int, default=None, help="Cells on the tape (default: BF_TAPE_SIZE or 30000)")
    ap.add_argument("--max-steps", type=int, default=None, help="Stop after N steps, 0 for no limit (default: BF_STEP_LIMIT)")
    ap.add_argument("--trace", action="store_true", help="Print every step")
    ap.add_argument("--log-level", default=None, help="Logging level (default: BF_LOG_LEVEL or WARNING)")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def _source_code(args) -> Optional[str]:
    if args.execute is not None:
        return args.execute
    if args.example is not None:
        return get_program(args.example)
    if args.program is not None:
        return Path(args.program).read_text()
    return None


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    setup_logging(args.log_level or settings.log_level)

    tape_size = args.tape_size if args.tape_size is not None else settings.tape_size
    max_steps = (args.max_steps or None) if args.max_steps is not None else settings.max_steps
    tracer = Tracer() if args.trace else None
    # None leaves the engine to read stdin lazily
    source = TextSource(args.input) if args.input is not None else None

    try:
        code = _source_code(args)
    except OSError as e:
        print(f"❌ Cannot read program: {e}", file=sys.stderr)
        return EXIT_FAULT

    if code is None:
        # Lines come through input(), so ',' has to read the same text layer
        if source is None:
            source = stdin_text_source()
        print("🧠 Interactive session. ':tape', ':reset', ':quit'. Loops must close on the line they open.")
        session = Session(tape_size=tape_size, offset=args.offset, input=source,
                          output=stdout_sink(), on_out_of_range=ask_for_offset(),
                          on_step=tracer, max_steps=max_steps)
        outcome = interactive(session, prompt=settings.prompt)
        if outcome is None and not session.active:
            return EXIT_FAULT
        return EXIT_SOURCE_ERROR if outcome is Outcome.SOURCE_ERROR else EXIT_FINISHED

    try:
        result = run(code, initial_offset=args.offset, input=source, output=stdout_sink(),
                     on_step=tracer, max_steps=max_steps, tape_size=tape_size)
    except Fault as fault:
        print(f"\n❌ {fault}", file=sys.stderr)
        return EXIT_FAULT

    if result.outcome is Outcome.SOURCE_ERROR:
        print("\n❌ Unmatched ']'", file=sys.stderr)
        return EXIT_SOURCE_ERROR
    return EXIT_FINISHED


if __name__ == "__main__":
    sys.exit(main())
