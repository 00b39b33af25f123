#!/usr/bin/env python3
"""
examples/merge_base_demo.py

Demonstrates the gitdepth merge base engine on a local repository: resolves
two ref names, makes their merge base available and prints the depth a shallow
clone would need.
"""

import argparse
import os
import sys

from gitdepth.git.backend import GitBackend
from gitdepth.nodes.merge_base_node import ensure_merge_base, get_depth
from gitdepth.nodes.ref_resolver import resolve_ref
from gitdepth.types.base import BaseAndHead


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Demonstrate gitdepth's merge base resolution")
    parser.add_argument(
        "--repo-path",
        type=str,
        default=os.getcwd(),
        help="Path to Git repository (default: current directory)",
    )
    parser.add_argument("--remote", type=str, default="origin", help="Remote to deepen from")
    parser.add_argument("base", type=str, help="Base branch, tag or commit")
    parser.add_argument("head", type=str, help="Head branch, tag or commit")
    return parser.parse_args()


def main():
    """Run the merge base demo."""
    args = parse_args()

    print(f"Running gitdepth on repository: {args.repo_path}")

    try:
        backend = GitBackend(args.repo_path, remote=args.remote)

        base_ref = resolve_ref(backend, args.base)
        head_ref = resolve_ref(backend, args.head)
        if base_ref is None or head_ref is None:
            print(f"Could not resolve {args.base} or {args.head}", file=sys.stderr)
            return 1

        base_and_head = BaseAndHead(base=base_ref.sha, head=head_ref.sha)
        merge_base = ensure_merge_base(backend, base_and_head.base, base_and_head.head)
        depth = get_depth(backend, merge_base, base_and_head)

        print(f"\nBase:       {base_ref.name} ({base_ref.sha})")
        print(f"Head:       {head_ref.name} ({head_ref.sha})")
        print(f"Merge base: {merge_base}")
        print(f"Depth:      {depth}")

    except Exception as e:
        print(f"Error resolving merge base: {str(e)}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
