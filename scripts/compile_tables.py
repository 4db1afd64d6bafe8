#!/usr/bin/env python3
"""
Compile program error enum sources into the registry's table artifacts.
Each `<domain>-error.rs` file in the source directory becomes one `.table` file.
"""

import argparse
import os
import sys

# Add the parent directory to the path so we can import the program_errors package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from program_errors.logging_config import configure_logging
from program_errors.registry.compiler import compile_directory
from program_errors.utils.config import get_settings


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description='Compile Rust error enums into error tables')
    parser.add_argument('sources', help='Directory holding <domain>-error.rs files')
    parser.add_argument('--output', default=settings.registry.TABLES_DIR,
                        help='Directory to write .table files to (default: bundled tables)')
    parser.add_argument('--strict', action='store_true', default=settings.registry.STRICT_PARSING,
                        help='Fail on message attributes not followed by a variant')

    args = parser.parse_args()
    configure_logging(settings.logging.LOG_LEVEL, json_logs=False)

    report = compile_directory(args.sources, args.output, strict=args.strict)

    for file_name, path in report.compiled.items():
        print(f"{file_name} -> {path}")
    for file_name, error in report.failures.items():
        print(f"FAILED {file_name}: {error}", file=sys.stderr)

    sys.exit(0 if report.ok else 1)


if __name__ == "__main__":
    main()
