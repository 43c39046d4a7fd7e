#!/usr/bin/env python3
"""
Example: Basic sharedrt Usage - Finding Installed Runtimes

This demonstrates the query surface:
- Listing discovered install groups
- Resolving a requested major.minor and bitness
- Mapping a file back to the runtime version that owns it

Usage:
    python examples/basic_usage.py [major.minor] [32|64]
"""

import logging
import sys
from pathlib import Path

from sharedrt import FrameworkPathProvider, load_config


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    requested = sys.argv[1] if len(sys.argv) > 1 else "3.1"
    bitness = int(sys.argv[2]) if len(sys.argv) > 2 else 64

    config = load_config(Path(".").resolve())
    provider = FrameworkPathProvider(config)

    print("=" * 70)
    print(f"Installed {provider.layout.display_name} runtimes")
    print("=" * 70)

    if not provider.has_any_installs:
        print("   No runtimes found")
        return

    for group in provider:
        print(f"   {group}")
        for path in group.paths:
            print(f"      {path}")

    print("\n" + "-" * 70)
    print(f"Best match for {requested} ({bitness}-bit)")
    print("-" * 70)

    paths = provider.resolve_version(requested, bitness)
    if paths is None:
        print("   No match")
        return

    for path in paths:
        print(f"   {path}")

    probe = Path(paths[0]) / "System.Runtime.dll"
    print(f"\n{probe} belongs to {provider.version_of(probe)}")


if __name__ == "__main__":
    main()
