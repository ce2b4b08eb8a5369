#!/usr/bin/env python3
"""
Basic turnup usage example.

Runs the whole update flow offline against a MockPlatformAdapter.
Run with: python examples/basic_usage.py
"""

import asyncio
import logging

from turnup import PackageParseError, TurnupError, UpdateOptions, configure_logging, update
from turnup.packages import format_package, parse_package
from turnup.packages.filter import classify_dependency
from turnup.testing import MockPlatformAdapter, create_mock_repository

print("=== turnup Basic Usage Example ===\n")

# 1. Parse package specifiers
print("1. Parsing package specifiers...")
for spec in ["lodash@4.17.21", "@babel/core@^7.24.0"]:
    parsed = parse_package(spec)
    print(f"   {spec!r} -> name={parsed.name!r} version={parsed.version!r}")

try:
    parse_package("lodash")
except PackageParseError as e:
    print(f"   Caught {type(e).__name__}: {e.message}")

print("\n   OK: Parsing working\n")

# 2. Classify a manifest
print("2. Classifying dependencies...")
manifest = {
    "version": "1.0.0",
    "name": "widgets",
    "devDependencies": {"jest": "^29.0.0"},
    "dependencies": {"lodash": "4.17.20", "express": "^4.18.0"},
}
relationship = classify_dependency(manifest, "lodash", "4.17.21")
print(f"   lodash: {relationship}")
print(f"   jest at target: {classify_dependency(manifest, 'jest', '^29.0.0')}")

print("\n   OK: Classification working\n")

# 3. Format a manifest
print("3. Formatting package.json...")
print(format_package(manifest))

# 4. Run an update against the mock adapter
print("4. Updating repositories...")
configure_logging(level=logging.INFO)

adapter = MockPlatformAdapter()
adapter.add_repository(create_mock_repository("octo/widgets"), manifest=manifest)
adapter.add_repository(
    create_mock_repository("octo/gadgets"),
    manifest={"name": "gadgets", "dependencies": {"lodash": "4.17.21"}},
)

try:
    results = asyncio.run(
        update(
            "lodash@4.17.21",
            adapter,
            UpdateOptions(owner="octo", skip_selection=True, no_lockfile=True),
        )
    )
except TurnupError as e:
    print(f"   Update failed: {e}")
    raise SystemExit(1)

for result in results:
    print(f"   {result.repository.full_name}: {result.branch_name} -> {result.pull_request.url}")

print(f"   Branches: {adapter.branches}")
print(f"   Commit message: {adapter.commits[0]['message']}")

print("\n   OK: Update working\n")
