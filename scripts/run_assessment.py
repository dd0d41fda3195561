#!/usr/bin/env python3
"""
Face Quality Assessment Script

Runs the configured quality measures on a bundle of upstream artifacts
(.npz with landmarks, pose, masks, ...) and prints the assessment.

Usage:
    python scripts/run_assessment.py --artifacts portrait_001.npz
    python scripts/run_assessment.py --artifacts portrait_001.npz \\
        --config my_config.yaml --output results/portrait_001.json
"""

import argparse
import logging
import math
from pathlib import Path

from src.quality.config_loader import DEFAULT_CONFIG_PATH, load_config
from src.quality.executor import MeasureExecutor
from src.utils.io import load_session, save_assessment


def main():
    """Main entry point."""
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
    )

    parser = argparse.ArgumentParser(
        description="Assess face image quality from upstream artifacts",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--artifacts", type=str, required=True, help="Path to .npz artifact bundle"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=str(DEFAULT_CONFIG_PATH),
        help="Path to configuration file",
    )
    parser.add_argument(
        "--measures",
        type=str,
        nargs="+",
        default=None,
        help="Override the requested measures from the configuration",
    )
    parser.add_argument(
        "--output", type=str, default=None, help="Optional JSON output path"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = load_config(Path(args.config))
        if args.measures:
            executor = MeasureExecutor.from_identifiers(args.measures, config)
        else:
            executor = MeasureExecutor.from_config(config)

        session = load_session(Path(args.artifacts))
        assessment = executor.execute_all(session)

        print("\nQuality Assessment:")
        for measure, result in assessment.results.items():
            scalar = "n/a" if math.isnan(result.scalar) else f"{result.scalar:5.0f}"
            print(
                f"  {measure.value:<30} raw={result.raw_score:10.4f}  "
                f"quality={scalar}  [{result.code.value}]"
            )

        if args.output:
            save_assessment(assessment, Path(args.output))

    except Exception as e:
        logging.error(f"Failed to assess {args.artifacts}: {e}")
        raise


if __name__ == "__main__":
    main()
