#!/usr/bin/env python3
"""
Solve a chain-collapse problem from the command line.

Reads a chain (element count, potentials, category letters) from a file or
stdin, computes the maximum collapse energy and prints it followed by the
post-order sequence of chosen representatives.

Examples:
  - printf '3\\n2 1 3\\nPNA\\n' | python solve_chain.py
  - python solve_chain.py --input chain.txt --backend numba --json
  - python solve_chain.py -vv --config my_run.yaml --input chain.txt
"""

# --- Standard Library Imports ---
from __future__ import annotations
import argparse
import json
import sys
import logging
import time
from pathlib import Path
from typing import List, Optional, Tuple

# --- Local Application Imports ---
from affinity_chain.config import load_run_config
from affinity_chain.folding import CollapseFoldingConfig, build_tables, max_energy, traceback_postorder
from affinity_chain.structures import Chain
from affinity_chain.utils.chain_io import ChainInputError, format_result, parse_chain_text
from affinity_chain.utils.logging_utils import DEFAULT_LOG_DIR, cleanup_old_logs, setup_logger

logger = logging.getLogger(__name__)


# --------------------------
# Logging Configuration
# --------------------------
def setup_cli_logging(verbose_level: int, log_file: Optional[str] = None) -> None:
    """
    Configures the package loggers for a CLI run.

    Parameters
    ----------
    verbose_level : int
        The verbosity level: 0 for WARNING, 1 for INFO, 2 (or more) for DEBUG.
    log_file : Optional[str]
        The path to a specific log file. If not provided, a default timestamped
        log file is created in `var/log/` when verbosity is > 0.
    """
    level_map = {
        0: logging.WARNING,
        1: logging.INFO,
        2: logging.DEBUG,
    }
    log_level = level_map.get(min(verbose_level, 2), logging.INFO)

    should_log_to_file = (verbose_level > 0) or (log_file is not None)

    # One shared file for the whole package rather than one per module.
    setup_logger(
        "affinity_chain",
        level=log_level,
        log_file=log_file,
        enable_file_logging=should_log_to_file,
    )

    if should_log_to_file and log_file is None:
        logger.info(f"Logs will be saved to: {DEFAULT_LOG_DIR.resolve()}")


# --------------------------
# Pipeline
# --------------------------
def solve_collapse(chain: Chain, backend: str = "python", verbose: bool = False) -> Tuple[int, List[int]]:
    """
    Runs the collapse DP and the traceback on a chain.

    Parameters
    ----------
    chain : Chain
        The sentinel-padded chain.
    backend : str
        "python" or "numba".
    verbose : bool
        Show a progress bar while filling the tables.

    Returns
    -------
    Tuple[int, List[int]]
        The maximum total energy and the post-order representative sequence.
    """
    start_time = time.perf_counter()

    state = build_tables(chain, CollapseFoldingConfig(verbose=verbose, backend=backend))
    trace = traceback_postorder(state)
    energy = max_energy(state)

    elapsed = time.perf_counter() - start_time
    logger.info(f"Solve completed in {elapsed:.2f}s")
    logger.info(f"Max energy: {energy}")

    return energy, trace.order


def read_input_text(input_path: Optional[str]) -> str:
    """Reads the raw chain text from `input_path`, or from stdin when it is None or '-'."""
    if input_path is None or input_path == "-":
        return sys.stdin.read()
    return Path(input_path).read_text(encoding="utf-8")


# --------------------------
# Command-Line Interface
# --------------------------
def main(argv=None) -> int:
    """
    Parses command-line arguments and runs one solve.
    """
    parser = argparse.ArgumentParser(description="Maximum chain-collapse energy and its collapse order.")
    parser.add_argument("--input", default=None,
                        help="Chain input file (default: stdin).")
    parser.add_argument("--config", default=None,
                        help="YAML run configuration layered over the packaged defaults.")
    parser.add_argument("--backend", choices=["python", "numba"], default=None,
                        help="DP backend (default: from config, 'python').")
    parser.add_argument("--json", action="store_true",
                        help="Emit JSON instead of the two-line text result.")

    # Logging arguments
    parser.add_argument("-v", "--verbose", action="count", default=None,
                        help="Increase verbosity (-v=INFO, -vv=DEBUG)")
    parser.add_argument("--log-file", default=None,
                        help="Path to log file (default: var/log/affinity_chain_TIMESTAMP.log if verbose)")
    parser.add_argument("--quiet", action="store_true",
                        help="Only log warnings and errors")
    parser.add_argument("--prune-logs", type=int, default=None, metavar="DAYS",
                        help="Delete log files in var/log older than DAYS days before running.")

    cli_args = parser.parse_args(argv)

    # --- Setup ---
    try:
        config = load_run_config(cli_args.config).with_overrides(
            backend=cli_args.backend,
            verbose=cli_args.verbose,
            log_file=cli_args.log_file,
            output_format="json" if cli_args.json else None,
        )
    except (OSError, ValueError) as e:
        print(f"Error: failed to load configuration: {e}", file=sys.stderr)
        return 2

    if cli_args.quiet:
        config = config.with_overrides(verbose=0)

    setup_cli_logging(config.verbose, config.log_file)

    if cli_args.prune_logs is not None:
        removed = cleanup_old_logs(days_to_keep=cli_args.prune_logs)
        logger.info(f"Pruned {removed} old log file(s)")

    logger.info("=" * 60)
    logger.info("Chain Collapse CLI")
    logger.info("=" * 60)

    # --- Input ---
    try:
        chain = parse_chain_text(read_input_text(cli_args.input))
    except (OSError, ChainInputError) as e:
        logger.error(f"Input validation failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if chain is None:
        logger.info("No input; nothing to solve.")
        return 0

    # --- Solve ---
    try:
        energy, order = solve_collapse(chain, backend=config.backend, verbose=config.verbose > 0)
    except Exception as e:
        logger.error(f"Solve failed: {e}", exc_info=True)
        print(f"Solve failed: {e}", file=sys.stderr)
        return 1

    # --- Output ---
    if config.output_format == "json":
        print(json.dumps({
            "n": chain.n,
            "max_energy": energy,
            "order": order,
            "backend": config.backend,
        }, indent=2))
    else:
        sys.stdout.write(format_result(energy, order))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
