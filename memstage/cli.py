#!/usr/bin/env python3
"""
memstage command-line tool
"""

import os
import sys
import argparse
import logging
import tempfile
from typing import List, Optional

import tabulate
from rich.console import Console
from rich.table import Table

from .core.config import load_config
from .core.context import MemStage
from .core.logging_setup import setup_logging
from .exceptions import MemStageError
from .filesystem.models import FileEntry, FileMode, LoadStatus

logger = logging.getLogger('memstage.cli')

console = Console()

HEX_ROW_WIDTH = 16


def parse_env_assignments(assignments: Optional[List[str]]) -> dict:
    """Turn NAME=VALUE strings into a dict"""
    env = {}
    for assignment in assignments or []:
        if '=' not in assignment:
            raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got: {assignment}")
        name, value = assignment.split('=', 1)
        env[name] = value
    return env


def format_hex_dump(data: bytes, width: int = HEX_ROW_WIDTH) -> str:
    """Format bytes as offset / hex / ascii rows"""
    rows = []
    for offset in range(0, len(data), width):
        chunk = data[offset:offset + width]
        hex_part = ' '.join(f"{b:02x}" for b in chunk)
        text_part = ''.join(chr(b) if 32 <= b < 127 else '.' for b in chunk)
        rows.append([f"{offset:08x}", hex_part, text_part])
    return tabulate.tabulate(rows, headers=["OFFSET", "HEX", "ASCII"], tablefmt="plain",
                             disable_numparse=True)


def render_file_table(entries: List[FileEntry], title: str = "Buffered files") -> Table:
    table = Table(title=title)
    table.add_column("Path")
    table.add_column("Size", justify="right")
    for entry in entries:
        table.add_row(entry.path, f"{entry.size} bytes")
    return table


def _save_dir(args, stage: MemStage) -> Optional[str]:
    return args.save_dir if args.save_dir is not None else stage.config.save_dir


def cmd_copy(args, stage: MemStage) -> int:
    src = stage.select_file(args.source, FileMode.READ)
    if src.load_status is not LoadStatus.LOADED:
        console.print(f"[red]Cannot read {src.path}: {src.load_error or 'no such file'}[/red]")
        return 1

    dst = stage.select_file(args.destination, FileMode.WRITE)
    dst.write(src.read())

    result = dst.save(_save_dir(args, stage))
    if not result:
        console.print(f"[red]Failed to save {result.path}: {result.error}[/red]")
        return 1
    console.print(f"Copied {src.path} to {result.path} ({result.bytes_written} bytes)")
    return 0


def cmd_append(args, stage: MemStage) -> int:
    f = stage.select_file(args.path, FileMode.APPEND)
    f.write(args.data.encode('utf-8'))

    result = f.save(_save_dir(args, stage))
    if not result:
        console.print(f"[red]Failed to save {result.path}: {result.error}[/red]")
        return 1
    console.print(f"{result.path}: {result.bytes_written} bytes")
    return 0


def cmd_dump(args, stage: MemStage) -> int:
    f = stage.select_file(args.path, FileMode.READ)
    if f.load_status is not LoadStatus.LOADED:
        console.print(f"[red]Cannot read {f.path}: {f.load_error or 'no such file'}[/red]")
        return 1

    data = f.read(args.limit if args.limit is not None else -1)
    print(format_hex_dump(data))
    return 0


def cmd_resolve(args, stage: MemStage) -> int:
    print(stage.resolve(args.path))
    return 0


def cmd_mkdir(args, stage: MemStage) -> int:
    if stage.create_directory(args.path):
        console.print(f"Directory created: {stage.resolve(args.path)}")
    else:
        console.print(f"Directory already exists: {stage.resolve(args.path)}")
    return 0


def cmd_ls(args, stage: MemStage) -> int:
    for entry in stage.list_directory(args.path):
        print(entry)
    return 0


def cmd_rmdir(args, stage: MemStage) -> int:
    if stage.remove_directory(args.path):
        console.print(f"Removed directory: {stage.resolve(args.path)}")
    else:
        console.print(f"Nothing to remove at {stage.resolve(args.path)}")
    return 0


def cmd_demo(args, stage: MemStage) -> int:
    """Walk through selecting, writing, appending, copying and removing files"""
    workdir = args.workdir or tempfile.mkdtemp(prefix='memstage_demo_')
    os.makedirs(workdir, exist_ok=True)
    stage.set_env('WORK', workdir)
    console.print(f"[bold]Working directory:[/bold] {workdir}")

    example = '${WORK}/example.bin'
    data_file = '${WORK}/data.bin'

    stage.select_file(example, FileMode.WRITE)
    stage.select_file(data_file, FileMode.APPEND)

    f = stage.get_file(example)
    f.write(b'\x01\x02\x03\x04\x05')
    f.save()

    f = stage.select_file(example, FileMode.APPEND)
    f.write(b'\x06\x07\x08\x09\x0a')
    f.save()

    f = stage.select_file(example, FileMode.READ)
    content = f.read(20)
    console.print(' '.join(f"{b:x}" for b in content))
    console.print(render_file_table(stage.list_files()))

    size = stage.select_file(example, FileMode.READ).size
    copy = stage.select_file(data_file, FileMode.WRITE)
    copy.write(content[:size])

    stage.remove_file(example)
    console.print(render_file_table(stage.list_files(), title="After removing example.bin"))

    dir_path = '${WORK}/example_dir'
    if stage.create_directory(dir_path):
        console.print(f"Directory created successfully: {stage.resolve(dir_path)}")

    in_dir = f"{dir_path}/new_file.bin"
    f = stage.select_file(in_dir, FileMode.WRITE)
    f.write(b'\x0b\x0c\x0d\x0e\x0f')
    f.save(stage.resolve(dir_path))
    console.print(f"Contents of {stage.resolve(dir_path)}:")
    for entry in stage.list_directory(dir_path):
        console.print(f"  {entry}")

    stage.remove_file(in_dir)
    console.print(f"Removed file: {stage.resolve(in_dir)}")
    console.print(f"Contents of {stage.resolve(dir_path)}: {len(stage.list_directory(dir_path))} entries")
    stage.remove_directory(dir_path)
    console.print(f"Removed directory: {stage.resolve(dir_path)}")

    stage.set_env('MY_PATH', '/virtual/files')
    virtual = '${MY_PATH}/example.txt'
    console.print(f"Selecting file: {virtual} -> {stage.resolve(virtual)}")
    f = stage.select_file(virtual, FileMode.WRITE)
    f.write(b'Hello, world!')
    result = f.save(workdir)
    console.print(f"File saved to {result.path} ({f.size} bytes)")

    stage.remove_file(virtual)
    f = stage.load_file(result.path, virtual)
    console.print(f"File: {f.path} ({f.size} bytes) loaded from {result.path}")

    stats = stage.stats()
    print(tabulate.tabulate(sorted(stats.items()), tablefmt="plain"))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='memstage', description="In-memory file staging")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("-e", "--env", action="append", metavar="NAME=VALUE",
                        help="Set a path variable override (repeatable)")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    copy_parser = subparsers.add_parser("copy", help="Copy a file through the buffer")
    copy_parser.add_argument("source", help="Source path")
    copy_parser.add_argument("destination", help="Destination path")
    copy_parser.add_argument("--save-dir", help="Directory to save into")
    copy_parser.set_defaults(func=cmd_copy)

    append_parser = subparsers.add_parser("append", help="Append text to a file")
    append_parser.add_argument("path", help="File path")
    append_parser.add_argument("data", help="Text to append")
    append_parser.add_argument("--save-dir", help="Directory to save into")
    append_parser.set_defaults(func=cmd_append)

    dump_parser = subparsers.add_parser("dump", help="Hex dump a file")
    dump_parser.add_argument("path", help="File path")
    dump_parser.add_argument("--limit", type=int, help="Maximum bytes to show")
    dump_parser.set_defaults(func=cmd_dump)

    resolve_parser = subparsers.add_parser("resolve", help="Expand ${VAR} tokens in a path")
    resolve_parser.add_argument("path", help="Path to expand")
    resolve_parser.set_defaults(func=cmd_resolve)

    mkdir_parser = subparsers.add_parser("mkdir", help="Create a directory")
    mkdir_parser.add_argument("path", help="Directory path")
    mkdir_parser.set_defaults(func=cmd_mkdir)

    ls_parser = subparsers.add_parser("ls", help="List a directory")
    ls_parser.add_argument("path", help="Directory path")
    ls_parser.set_defaults(func=cmd_ls)

    rmdir_parser = subparsers.add_parser("rmdir", help="Remove a directory recursively")
    rmdir_parser.add_argument("path", help="Directory path")
    rmdir_parser.set_defaults(func=cmd_rmdir)

    demo_parser = subparsers.add_parser("demo", help="Run a walkthrough")
    demo_parser.add_argument("--workdir", help="Directory for demo files")
    demo_parser.set_defaults(func=cmd_demo)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
        setup_logging('DEBUG' if args.verbose else config.log_level, config.log_file)
        config.env.update(parse_env_assignments(args.env))

        with MemStage(config) as stage:
            return args.func(args, stage)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))
    except MemStageError as e:
        logger.error(f"{args.command} failed: {e}")
        console.print(f"[red]Error: {e}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
