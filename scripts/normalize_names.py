"""
Batch normalizer for OCR product names.

Reads one product name per line (from a file or stdin), prints the normalized
name, confidence and keywords, and optionally the best match from a JSON
catalog (a list of objects with id, normalized_name, brand, size, unit,
keywords).

Usage:
    python scripts/normalize_names.py names.txt --catalog catalog.json
    cat names.txt | python scripts/normalize_names.py
"""

import argparse
import json
import os
import sys

# Add src to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from dotenv import load_dotenv
from product_normalizer import ProductNormalizer
from product_normalizer.utils.logging_config import logger


def load_catalog(path):
    with open(path, 'r', encoding='utf-8') as f:
        catalog = json.load(f)
    if not isinstance(catalog, list):
        raise ValueError(f"Catalog {path} must hold a JSON list of products")
    return catalog


def main(argv=None):
    parser = argparse.ArgumentParser(description="Normalize Bulgarian OCR product names.")
    parser.add_argument('input', nargs='?', help="File with one product name per line (default: stdin)")
    parser.add_argument('--catalog', help="JSON catalog to match every name against")
    args = parser.parse_args(argv)

    load_dotenv()
    normalizer = ProductNormalizer()
    catalog = load_catalog(args.catalog) if args.catalog else None

    if args.input:
        with open(args.input, 'r', encoding='utf-8') as f:
            lines = f.read().splitlines()
    else:
        lines = sys.stdin.read().splitlines()

    processed = failed = 0
    for line_no, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            result = normalizer.normalize(line)
            print(f"{line.strip()} -> {result.normalized_name} "
                  f"[confidence {result.confidence:.2f}] {', '.join(result.keywords)}")

            if catalog is not None:
                match = normalizer.match_product(result.components, catalog)
                if match:
                    print(f"   matched {match.candidate.id} '{match.candidate.normalized_name}' "
                          f"(score {match.score:.3f})")
                else:
                    print("   no catalog match")
            processed += 1
        except Exception as e:
            logger.error(f"Line {line_no} ({line!r}) failed: {e}")
            failed += 1
            continue

    logger.info(f"Processed {processed} names, {failed} failed")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
