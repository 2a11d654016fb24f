"""CLI entry point for the bft interpreter.

Usage:
    python -m bft [-v|-vv|-vvv] [-c CELLS] [-e] <program_file>
    python -m bft [-v...] --list <program_file>
    python -m bft [-v...] --emit-json <program_file>
    python -m bft [-v...] [-c CELLS] [-e] --json <program_json_file>

Options:
  -c, --cells   Number of tape cells to allocate, must be greater than 0
  -e, --extensible
                Let the tape grow when the head moves past its end
  -v            Increase debug verbosity (can be repeated)
  --list        Print the parsed instructions instead of running them
  --emit-json   Parse the given program and emit a program JSON file
  --json        Execute a previously emitted program JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. The program reads its input from stdin
and writes its output to stdout, byte by byte.
"""

import argparse
import json
import sys
from pathlib import Path
from . import __version__
from .ast import Program
from .errors import BftError
from .interpreter import DEFAULT_CELLS, VirtualMachine
from .parser import load_program
from .program_json import program_to_obj, program_from_obj


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid cell count: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"cell count must be greater than 0, got {number}")
    return number


def fail(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def run(program: Program, args: argparse.Namespace) -> None:
    vm = VirtualMachine(program, cells=args.cells, extensible=args.extensible, debug_level=args.v)
    try:
        vm.interpret(sys.stdin.buffer, sys.stdout.buffer)
    except BftError as e:
        fail(str(e))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='bft', description="bft tape language interpreter")
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('-c', '--cells', type=positive_int, default=DEFAULT_CELLS,
                        help='how many cells to allocate for the tape, must be greater than 0')
    parser.add_argument('-e', '--extensible', action='store_true', help='whether the tape is extensible')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--list', action='store_true', help='print the parsed instructions and exit')
    group.add_argument('--emit-json', metavar='PROGRAM_FILE', help='emit program JSON for the given file')
    group.add_argument('--json', metavar='PROGRAM_JSON_FILE', help='execute a program from a JSON file')
    parser.add_argument('program', nargs='?', help='bft program file to execute')
    args = parser.parse_args(argv)
    if args.program and (args.json or args.emit_json):
        parser.error('a program file cannot be combined with --json or --emit-json')

    # Emit JSON mode
    if args.emit_json:
        program_file = Path(args.emit_json)
        if not program_file.exists():
            fail(f"file {program_file} not found")
        try:
            program = load_program(program_file)
            program.validate()
        except (BftError, OSError, UnicodeDecodeError) as e:
            fail(str(e))
        out_path = program_file.with_name(program_file.name + '.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(program_to_obj(program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from program JSON
    if args.json:
        json_path = Path(args.json)
        if not json_path.exists():
            fail(f"file {json_path} not found")
        try:
            with open(json_path, 'r', encoding='utf-8') as f:
                program = program_from_obj(json.load(f))
            program.validate()
        except (BftError, OSError, ValueError) as e:
            fail(str(e))
        run(program, args)
        return

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --json')
    program_file = Path(args.program)
    if not program_file.exists():
        fail(f"file {program_file} not found")
    try:
        program = load_program(program_file)
        program.validate()
    except (BftError, OSError, UnicodeDecodeError) as e:
        fail(str(e))
    if args.list:
        for line in program.listing():
            print(line)
        return
    run(program, args)


if __name__ == '__main__':
    main()
