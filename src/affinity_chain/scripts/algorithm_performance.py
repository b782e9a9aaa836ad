#!/usr/bin/env python3
"""
Performance evaluation script for the chain-collapse DP.

This script benchmarks the runtime and memory usage of the $O(N^{3})$
interval DP (table fill plus traceback) across a range of chain lengths,
estimates the empirical time complexity exponent and plots the results.
"""

import argparse
import time
import tracemalloc
import random
import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path
from typing import Optional

from affinity_chain.structures import Category, Chain, make_chain
from affinity_chain.scripts.solve_chain import solve_collapse

# Theoretical exponent of the interval DP.
THEORETICAL_EXPONENT = 3.0


def generate_random_chain(length: int, seed: Optional[int] = None, max_potential: int = 100) -> Chain:
    """
    Generate a random chain of a given length.

    Parameters
    ----------
    length : int
        The number of real elements ($N$).
    seed : int, optional
        Seed for a private random generator, for reproducibility.
    max_potential : int, optional
        Potentials are drawn uniformly from ``0..max_potential``.

    Returns
    -------
    Chain
        A sentinel-padded chain with random potentials and categories.
    """
    rng = random.Random(seed)
    potentials = [rng.randint(0, max_potential) for _ in range(length)]
    categories = rng.choices(list(Category), k=length)
    return make_chain(potentials, categories)


def benchmark_runtime(chain_lengths: list[int], num_trials: int = 3, backend: str = "python") -> dict:
    """
    Benchmark the mean solve time across different chain lengths ($N$).

    Parameters
    ----------
    chain_lengths : list of int
        List of chain lengths ($N$) to test.
    num_trials : int, optional
        Number of runs per length for averaging. The default is 3.
    backend : str, optional
        DP backend passed to the solver.

    Returns
    -------
    dict
        'lengths', 'mean_times', 'std_times' and 'energies' (the max energy
        of the last trial per length).
    """
    results = {
        'lengths': chain_lengths,
        'mean_times': [],
        'std_times': [],
        'energies': []
    }

    for n in chain_lengths:
        print(f"\nBenchmarking N={n} ({backend})...")
        trial_times = []
        energy = 0

        for trial in range(num_trials):
            # A fresh chain per trial
            chain = generate_random_chain(n, seed=42 + trial)

            start = time.perf_counter()
            energy, _ = solve_collapse(chain, backend=backend)
            elapsed = time.perf_counter() - start

            trial_times.append(elapsed)
            print(f"  Trial {trial + 1}/{num_trials}: {elapsed:.4f}s")

        results['mean_times'].append(float(np.mean(trial_times)))
        results['std_times'].append(float(np.std(trial_times)))
        results['energies'].append(energy)

        print(f"  Mean: {results['mean_times'][-1]:.4f}s ± {results['std_times'][-1]:.4f}s")
        print(f"  Energy: {energy}")

    return results


def benchmark_memory(chain_lengths: list[int], backend: str = "python") -> dict:
    """
    Benchmark peak memory usage across different chain lengths ($N$).

    Uses `tracemalloc`, so only Python-level allocations are counted.

    Returns
    -------
    dict
        'lengths' and 'peak_memory_mb'.
    """
    results = {
        'lengths': chain_lengths,
        'peak_memory_mb': []
    }

    for n in chain_lengths:
        print(f"\nMeasuring memory for N={n}...")
        chain = generate_random_chain(n, seed=42)

        tracemalloc.start()
        solve_collapse(chain, backend=backend)
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

        peak_mb = peak / 1024 ** 2
        results['peak_memory_mb'].append(peak_mb)
        print(f"  Peak memory: {peak_mb:.2f} MB")

    return results


def analyze_complexity(lengths: list[int], times: list[float]) -> tuple[float, np.ndarray]:
    """
    Fit runtimes to $T \\propto N^{k}$ and return the exponent $k$.

    This is a linear regression on log-log data:
    $\\log(T) = k \\cdot \\log(N) + c$

    Returns
    -------
    tuple of (float, numpy.ndarray)
        The estimated exponent $k$ and the fitted times.
    """
    log_n = np.log(lengths)
    log_time = np.log(times)

    coeffs = np.polyfit(log_n, log_time, 1)
    k = float(coeffs[0])
    c = float(coeffs[1])

    fitted_times = np.exp(c) * np.array(lengths, dtype=float) ** k

    print(f"\n{'=' * 60}")
    print("COMPLEXITY ANALYSIS")
    print(f"{'=' * 60}")
    print(f"Empirical complexity: O(N^{k:.2f})")
    print(f"Theoretical:          O(N^{THEORETICAL_EXPONENT:.0f})")
    print(f"{'=' * 60}\n")

    return k, fitted_times


def plot_results(runtime_results: dict, memory_results: dict, fitted_times: np.ndarray, complexity_k: float,
                 output_dir: Path = Path('performance_results'), show: bool = True) -> Path:
    """
    Create and save runtime and memory plots.

    Returns
    -------
    Path
        The path of the saved PNG file.
    """
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    # Runtime plot
    ax1 = axes[0]
    lengths = runtime_results['lengths']

    ax1.errorbar(lengths, runtime_results['mean_times'], yerr=runtime_results['std_times'],
                 fmt='o-', capsize=5, label='Measured', linewidth=2, markersize=8)
    ax1.plot(lengths, fitted_times, '--',
             label=f'Fitted $O(N^{{{complexity_k:.2f}}})$', linewidth=2, alpha=0.7)

    ax1.set_xlabel('Chain Length ($N$)', fontsize=12)
    ax1.set_ylabel('Runtime (seconds)', fontsize=12)
    ax1.set_title('Runtime Performance (Log-Log)', fontsize=14, fontweight='bold')
    ax1.legend(fontsize=10)
    ax1.grid(True, alpha=0.3)
    ax1.set_yscale('log')
    ax1.set_xscale('log')

    # Memory plot
    ax2 = axes[1]
    ax2.plot(memory_results['lengths'], memory_results['peak_memory_mb'], 's-',
             linewidth=2, markersize=8, color='orange')
    ax2.set_xlabel('Chain Length ($N$)', fontsize=12)
    ax2.set_ylabel('Peak Memory (MB)', fontsize=12)
    ax2.set_title('Memory Usage (Log-Log)', fontsize=14, fontweight='bold')
    ax2.grid(True, alpha=0.3)
    ax2.set_yscale('log')
    ax2.set_xscale('log')

    fig.tight_layout()

    output_dir.mkdir(parents=True, exist_ok=True)
    out_path = output_dir / 'performance_analysis.png'
    fig.savefig(out_path, dpi=150, bbox_inches='tight')
    print(f"\nPlot saved to: {out_path}")

    if show:
        plt.show()
    plt.close(fig)

    return out_path


def generate_markdown_table(runtime_results: dict, memory_results: dict) -> str:
    """
    Render the results as a Markdown table.
    """
    lines = [
        "| Chain Length ($N$) | Runtime (s) | Peak Memory (MB) | Max Energy |",
        "|--------------------|-------------|------------------|------------|",
    ]
    for i, n in enumerate(runtime_results['lengths']):
        time_mean = runtime_results['mean_times'][i]
        time_std = runtime_results['std_times'][i]
        memory = memory_results['peak_memory_mb'][i]
        energy = runtime_results['energies'][i]
        lines.append(f"| {n:18d} | {time_mean:.4f} ± {time_std:.4f} | {memory:16.2f} | {energy:10d} |")
    return "\n".join(lines)


def main(argv=None) -> int:
    """
    Main performance evaluation workflow.
    """
    parser = argparse.ArgumentParser(description="Benchmark the chain-collapse DP.")
    parser.add_argument("--lengths", type=int, nargs="+", default=[50, 100, 150, 200, 250],
                        help="Chain lengths to benchmark.")
    parser.add_argument("--trials", type=int, default=3, help="Runs per length.")
    parser.add_argument("--backend", choices=["python", "numba"], default="python")
    parser.add_argument("--output-dir", default="performance_results")
    parser.add_argument("--no-show", action="store_true", help="Save the plot without opening a window.")
    args = parser.parse_args(argv)

    print("=" * 60)
    print("CHAIN COLLAPSE DP - PERFORMANCE EVALUATION")
    print("=" * 60)
    print(f"\nChain lengths to test: {args.lengths}")
    print(f"Trials per length: {args.trials}")

    runtime_results = benchmark_runtime(args.lengths, args.trials, backend=args.backend)
    memory_results = benchmark_memory(args.lengths, backend=args.backend)

    complexity_k, fitted_times = analyze_complexity(runtime_results['lengths'], runtime_results['mean_times'])

    plot_results(runtime_results, memory_results, fitted_times, complexity_k,
                 output_dir=Path(args.output_dir), show=not args.no_show)

    print("\n" + generate_markdown_table(runtime_results, memory_results) + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
