#!/usr/bin/env python3
import argparse

from schemahint.orchestrator import run_once


def main():
    parser = argparse.ArgumentParser(description="Compress tool parameter schemas into compact prompt hints")
    parser.add_argument("--config", required=True, help="Path to YAML config")
    parser.add_argument("--tools", dest="tools_file", help="Tools file (JSON or YAML), overrides tools_file in config")
    parser.add_argument("--estimator", dest="token_estimator", choices=["words", "chars"], help="Token estimation heuristic")
    args = parser.parse_args()

    batch = run_once(
        args.config,
        tools_file=args.tools_file,
        token_estimator=args.token_estimator,
    )
    for tool in batch.compressed_tools:
        print(f"{tool.name}: {tool.compressed_schema}")
    print(f"tokens {batch.original_tokens} -> {batch.compressed_tokens} ({batch.total_reduction}% reduction)")


if __name__ == "__main__":
    main()
