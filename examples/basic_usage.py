#!/usr/bin/env python3
"""
NestFS Example Script

This script demonstrates the basic usage of the NestFS library: listing,
reading and walking paths that reach into (nested) archives.

Author: Tim Hosking
GitHub: https://github.com/Munger
"""

import argparse
import io
import os
import tempfile
import zipfile

from nestfs import NestFS
from nestfs.core.errors import NestFSError


def list_contents(fs, path):
    """List the contents of a path, including archive entries."""
    print(f"\nListing contents of: {path}")
    print("-" * 50)

    try:
        for entry in fs.read_dir(path):
            if entry.is_dir():
                print(f"{entry.name}/")
            else:
                print(f"{entry.name} ({entry.size} bytes)")
    except NestFSError as e:
        print(f"Error ({type(e).__name__} at {e.segment}): {e}")


def read_file(fs, path):
    """Read and display the contents of a file."""
    print(f"\nReading file: {path}")
    print("-" * 50)

    try:
        content = fs.files.read(path, binary=True)
    except IsADirectoryError:
        print(f"{path} is a directory")
        return
    except NestFSError as e:
        print(f"Error ({type(e).__name__} at {e.segment}): {e}")
        return

    # Display the file content (limit to 500 bytes if too large)
    text = content[:500].decode("utf-8", errors="replace")
    print(text + ("... (truncated)" if len(content) > 500 else ""))


def show_tree(fs, path):
    """Walk a path, descending into archives."""
    print(f"\nTree of: {path}")
    print("-" * 50)

    def report(error):
        print(f"  ! {error.segment}: {error}")

    for root, dirs, files in fs.dirs.walk(path, onerror=report):
        depth = 0 if root == "." else root.count("/") + 1
        print(f"{'  ' * depth}{root}/")
        for name in files:
            print(f"{'  ' * (depth + 1)}{name}")


def build_demo_tree(base):
    """Create a directory holding a zip that holds another zip."""
    inner = io.BytesIO()
    with zipfile.ZipFile(inner, "w") as zf:
        zf.writestr("deep/hello.txt", "Hello from two archives down")
    with zipfile.ZipFile(os.path.join(base, "outer.zip"), "w") as zf:
        zf.writestr("inner.zip", inner.getvalue())
        zf.writestr("readme.txt", "outer readme")
    os.makedirs(os.path.join(base, "docs"))
    with open(os.path.join(base, "docs", "notes.txt"), "w") as f:
        f.write("plain notes")


def main():
    """Main function demonstrating NestFS features."""
    parser = argparse.ArgumentParser(description="NestFS Example Script")
    parser.add_argument("--root", default=".", help="Directory paths are resolved against")
    parser.add_argument("--debug", type=int, default=0, help="Debug level (0-4)")
    sub = parser.add_subparsers(dest="command")
    sub.add_parser("ls", help="List a directory or archive").add_argument("path", nargs="?", default=".")
    sub.add_parser("cat", help="Print a file").add_argument("path")
    sub.add_parser("tree", help="Walk a tree, including archives").add_argument("path", nargs="?", default=".")
    sub.add_parser("demo", help="Run a demonstration on a temporary tree")

    args = parser.parse_args()

    if args.command == "demo":
        with tempfile.TemporaryDirectory() as base:
            build_demo_tree(base)
            fs = NestFS(base)
            fs.config.debug_level = args.debug
            list_contents(fs, ".")
            list_contents(fs, "outer.zip")
            read_file(fs, "outer.zip/inner.zip/deep/hello.txt")
            show_tree(fs, ".")
            print("\nDemonstration complete!")
        return

    fs = NestFS(args.root)
    fs.config.debug_level = args.debug
    if args.command == "ls":
        list_contents(fs, args.path)
    elif args.command == "cat":
        read_file(fs, args.path)
    elif args.command == "tree":
        show_tree(fs, args.path)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
