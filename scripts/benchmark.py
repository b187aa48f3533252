#!/usr/bin/env python3
"""
StateBox Container Benchmarks

Measures the cost of the common container operations as the container grows,
so the linear-scan trade-off of IdList can be compared against the hashed
ObservableDictionary, and shows how listener count affects dispatch.

Usage:
    python scripts/benchmark.py                 # Run every benchmark
    python scripts/benchmark.py --config        # Show the configuration
    python scripts/benchmark.py --sizes 10 100  # Override container sizes
    python scripts/benchmark.py --quiet         # Only print the result tables

Requires the ``bench`` extra (rich).
"""

import argparse
import gc
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List

from rich import box
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from statebox import IdList, ObservableDictionary, ObservableList, PairData, UpdateKind


@dataclass
class BenchmarkConfig:
    """Benchmark parameters; every field can be overridden from the command line."""

    sizes: List[int] = field(default_factory=lambda: [10, 100, 1000])
    listener_counts: List[int] = field(default_factory=lambda: [0, 1, 10, 100])
    repeats: int = 5


def _time_per_operation(operation: Callable[[], int], repeats: int) -> float:
    """Best-of-``repeats`` time in microseconds per operation."""
    best = float("inf")
    for _ in range(repeats):
        gc.collect()
        start = time.perf_counter()
        performed = operation()
        elapsed = time.perf_counter() - start
        best = min(best, elapsed / max(performed, 1))
    return best * 1e6


def _lookup_id_list(size: int) -> Callable[[], int]:
    rows = IdList(lambda row: row.key, [PairData(i, i) for i in range(size)])

    def run() -> int:
        for key in range(size):
            rows.get(key)
        return size

    return run


def _lookup_dictionary(size: int) -> Callable[[], int]:
    rows = ObservableDictionary({i: i for i in range(size)})

    def run() -> int:
        for key in range(size):
            rows.get(key)
        return size

    return run


def _upsert_id_list(size: int) -> Callable[[], int]:
    rows = IdList(lambda row: row.key, [PairData(i, i) for i in range(size)])

    def run() -> int:
        for key in range(size):
            rows.set(PairData(key, -key))
        return size

    return run


def _append_list(size: int) -> Callable[[], int]:
    def run() -> int:
        items = ObservableList()
        for value in range(size):
            items.add(value)
        return size

    return run


def _dispatch_with_listeners(listeners: int) -> Callable[[], int]:
    rows = ObservableDictionary({"hp": 0})
    for _ in range(listeners):
        rows.observe_any(UpdateKind.UPDATED, lambda key, value: None)

    def run() -> int:
        for value in range(1000):
            rows.set("hp", value)
        return 1000

    return run


class StateBoxBenchmark:
    """Runs the benchmarks and renders them with rich."""

    def __init__(self, config: BenchmarkConfig, quiet: bool = False):
        self.config = config
        self.quiet = quiet
        self.console = Console()

    def run(self) -> None:
        self.console.print(
            Panel(
                Align.center("StateBox Container Benchmarks"),
                title="statebox",
                border_style="blue",
            )
        )
        self.console.print(self._scaling_table())
        self.console.print(self._dispatch_table())

    def _measure(self, label: str, operation: Callable[[], int]) -> float:
        if not self.quiet:
            self.console.print(f"[yellow]Running {label}...[/yellow]")
        return _time_per_operation(operation, self.config.repeats)

    def _scaling_table(self) -> Table:
        benchmarks: Dict[str, Callable[[int], Callable[[], int]]] = {
            "IdList.get": _lookup_id_list,
            "ObservableDictionary.get": _lookup_dictionary,
            "IdList.set (existing key)": _upsert_id_list,
            "ObservableList.add": _append_list,
        }

        table = Table(
            title="Per-operation cost by container size",
            box=box.DOUBLE,
            header_style="bold cyan",
        )
        table.add_column("Operation", style="white", no_wrap=True)
        for size in self.config.sizes:
            table.add_column(f"n={size:,}", style="green", justify="right")

        for name, factory in benchmarks.items():
            cells = [
                f"{self._measure(f'{name} n={size}', factory(size)):.2f}μs"
                for size in self.config.sizes
            ]
            table.add_row(name, *cells)
        return table

    def _dispatch_table(self) -> Table:
        table = Table(
            title="Dispatch cost by broadcast listener count",
            box=box.DOUBLE,
            header_style="bold cyan",
        )
        table.add_column("Listeners", style="white", justify="right")
        table.add_column("Per mutation", style="green", justify="right")

        for listeners in self.config.listener_counts:
            cost = self._measure(
                f"dispatch with {listeners} listeners",
                _dispatch_with_listeners(listeners),
            )
            table.add_row(f"{listeners:,}", f"{cost:.2f}μs")
        return table


def print_config(config: BenchmarkConfig) -> None:
    console = Console()
    table = Table(title="Benchmark configuration", box=box.SIMPLE)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")
    table.add_row("Container sizes", ", ".join(str(s) for s in config.sizes))
    table.add_row("Listener counts", ", ".join(str(c) for c in config.listener_counts))
    table.add_row("Repeats", str(config.repeats))
    console.print(table)


def main():
    """Main entry point for the benchmark script."""
    parser = argparse.ArgumentParser(description="StateBox container benchmarks")
    parser.add_argument("--config", action="store_true", help="Show the configuration and exit")
    parser.add_argument("--quiet", action="store_true", help="Only print the result tables")
    parser.add_argument("--sizes", type=int, nargs="+", help="Container sizes to measure")
    parser.add_argument("--listeners", type=int, nargs="+", help="Listener counts to measure")
    parser.add_argument("--repeats", type=int, help="Runs per measurement (best is kept)")
    args = parser.parse_args()

    config = BenchmarkConfig()
    if args.sizes:
        config.sizes = args.sizes
    if args.listeners:
        config.listener_counts = args.listeners
    if args.repeats:
        config.repeats = args.repeats

    if args.config:
        print_config(config)
        return

    if not args.quiet:
        print_config(config)

    StateBoxBenchmark(config, quiet=args.quiet).run()


if __name__ == "__main__":
    main()
