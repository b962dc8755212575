#!/usr/bin/env python
"""CLI for extracting lattice tables from a folder of documents."""
import argparse
import logging
import sys

from lattice_tables.batch import run_batch
from lattice_tables.config import Config


def main(argv=None):
    parser = argparse.ArgumentParser(description="Extract lattice tables to CSV and overlay PNG")
    parser.add_argument("src", type=str, help="Folder whose subfolders hold .pdf / pdf2json .json inputs")
    parser.add_argument("out", type=str, help="Output folder (mirrors the input subfolders)")
    parser.add_argument("--config", type=str, help="Path to config file")
    parser.add_argument("--header-source", type=str, help="Override header policy")
    parser.add_argument("--layers", type=str, help="Comma-separated overlay layers")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s"
    )

    config = Config.load(args.config)

    # Override config from CLI flags
    if args.header_source:
        config.header_source = args.header_source
    if args.layers:
        config.overlay_layers = tuple(layer.strip() for layer in args.layers.split(",") if layer.strip())

    errors = config.validate()
    if errors:
        for e in errors:
            logging.error(e)
        return 1

    stats = run_batch(args.src, args.out, config)

    for category, label in [
        ("extracted", "Extracted"),
        ("empty", "Empty (no table)"),
        ("failed", "Failed"),
    ]:
        items = [r for r in stats["results"] if r.status == category]
        if not items:
            continue
        print(f"\n{label} ({len(items)}):")
        for r in items:
            detail = f"  {r.source}"
            if r.n_records:
                detail += f"  [{r.n_pages} pages, {r.n_records} rows]"
            if r.reason:
                detail += f"  — {r.reason}"
            print(detail)

    print(f"\nSummary:")
    print(f"  Extracted: {stats['extracted']}")
    print(f"  Empty:     {stats['empty']}")
    print(f"  Failed:    {stats['failed']}")
    return 1 if stats["failed"] else 0


if __name__ == "__main__":
    sys.exit(main())
