#!/usr/bin/env python3
"""
alirun — ALI interactive runner

Usage:
    python alirun.py [program.txt] [--profile default|strict|unbounded]
                     [--budget N] [--trace] [-v] [-q] [--log-file F]
                     [--batch "s,s,a"]

Commands at the prompt:
    s   execute a single instruction and print the machine state
    a   run until HLT and print the machine state
    q   quit

Every N instructions (the instruction budget) execution pauses and asks
"Continue execution? (y/n)". Anything other than y stops the program.

Examples:
    python alirun.py examples/sum.txt
    python alirun.py sum.txt --budget 50
    python alirun.py sum.txt --batch a          # non-interactive
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Iterable, Optional

from ali import ALIEmulator, __version__
from ali.config import DEFAULT_PROFILE, PROFILES
from ali.errors import ALIError, AddressOverflow
from ali.snapshot import render

logger = logging.getLogger("alirun")

PROMPT = "Enter command (s for single line, a for all instructions, q to quit):"


def setup_logging(verbose: int = 0, quiet: bool = False,
                  log_file: Optional[str] = None):
    """Console logging at INFO (-v: DEBUG, -q: ERROR), optional file log."""
    if quiet:
        level = logging.ERROR
    elif verbose == 0:
        level = logging.INFO
    else:
        level = logging.DEBUG

    handlers = []
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    handlers.append(console)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        handlers.append(file_handler)

    logging.basicConfig(level=logging.DEBUG if log_file else level,
                        handlers=handlers, force=True)


def batch_reader(commands: Iterable[str]) -> Callable[[str], str]:
    """input()-compatible reader fed from a command list; 'q' once empty."""
    queue = list(commands)

    def read(prompt: str = "") -> str:
        if prompt:
            print(prompt)
        return queue.pop(0) if queue else "q"
    return read


def make_decider(read: Callable[[str], str]):
    """Decision provider that asks the user at each budget pause."""
    def decide(count: int) -> bool:
        try:
            answer = read("Continue execution? (y/n): ").strip().lower()
        except EOFError:
            answer = ""
        if answer not in ('y', 'n'):
            print("Invalid response.")
        return answer == 'y'
    return decide


def command_loop(emu: ALIEmulator, read: Callable[[str], str]) -> int:
    """The s/a/q loop. Returns the process exit status."""
    while True:
        try:
            command = read(PROMPT + "\n").strip().lower()
        except EOFError:
            command = 'q'

        try:
            if command == 's':
                was_halted = emu.halted
                emu.step()
                if was_halted:
                    logger.info("Machine halted; 'a' finishes the program, 'q' quits")
                else:
                    print(render(emu.snapshot()))
                if emu.done:
                    print("Program Complete... Exiting")
                    return 0
            elif command == 'a':
                emu.run()
                print(render(emu.snapshot()))
                if emu.done:
                    print("Program Complete... Exiting")
                    return 0
            elif command == 'q':
                print("Exiting")
                return 0
            else:
                print("Invalid command")
        except ALIError as e:
            print(f"Runtime error: {e}", file=sys.stderr)
            print(render(emu.snapshot()))
            return 1


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="alirun",
        description="ALI — Assembly Language Interpreter",
        epilog="Profiles: " + ", ".join(
            f"{k} ({v['description']})" for k, v in PROFILES.items()),
    )
    parser.add_argument("program", nargs="?",
                        help="Program file, one instruction per line (prompted if omitted)")
    parser.add_argument("--profile", default=DEFAULT_PROFILE,
                        choices=list(PROFILES.keys()),
                        help=f"Execution profile (default: {DEFAULT_PROFILE})")
    parser.add_argument("--budget", type=int, default=None,
                        help="Instructions between pauses, 0 = never pause "
                             "(overrides the profile)")
    parser.add_argument("--trace", action="store_true",
                        help="Print an execution trace on exit")
    parser.add_argument("--batch", default=None,
                        help="Comma-separated commands/answers instead of stdin, e.g. 's,s,a'")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Log every executed instruction")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Only log errors")
    parser.add_argument("--log-file", help="Also write the log to this file")
    parser.add_argument("--version", action="version",
                        version=f"alirun {__version__}")

    args = parser.parse_args(argv)
    setup_logging(args.verbose, args.quiet, args.log_file)

    if args.batch is not None:
        read = batch_reader(c.strip() for c in args.batch.split(",") if c.strip())
    else:
        read = input

    profile = PROFILES[args.profile]
    budget = args.budget if args.budget is not None else profile["instruction_budget"]
    if budget < 0:
        parser.error("--budget must be >= 0")

    program = args.program
    if not program:
        try:
            program = read("Enter the file name:\n").strip()
        except EOFError:
            print("Error: no program file given", file=sys.stderr)
            return 1

    emu = ALIEmulator(instruction_budget=budget, decide=make_decider(read),
                      trace=args.trace)
    try:
        emu.load_program(program)
    except FileNotFoundError:
        print(f"Error: File not found: {program}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading {program}: {e}", file=sys.stderr)
        return 1
    except AddressOverflow as e:
        print(f"Load error: {e}", file=sys.stderr)
        return 1

    logger.debug("Budget: %d, end of program: %d", budget, emu.end_address)

    try:
        status = command_loop(emu, read)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Internal interpreter error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 2

    if args.trace:
        for line in emu.trace_output:
            print(line)
    return status


if __name__ == "__main__":
    sys.exit(main())
