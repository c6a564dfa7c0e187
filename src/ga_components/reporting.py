"""
Reporting and I/O Module

Handles result persistence for genetic algorithm runs. The engine itself is
indifferent to reporting; callers hand the run outcome to a RunReporter.

Features:
- Plain-text run report (title, best solution, elapsed time, extra mutations)
- Per-generation fitness history CSV
- JSON run summary with configuration and operator statistics
"""

import csv
import json
import os
from datetime import datetime
from typing import Any, Dict, List

from ga_exceptions import ReportingError
from ga_logging import get_logger
from ga_types import GenerationStats, Solution


HISTORY_FIELDS = ['generation', 'best_fitness', 'mean_fitness', 'std_fitness',
                  'worst_fitness', 'best_cost', 'elapsed_seconds']


class RunReporter:
    """
    Writes run results under an output directory.

    Several runs can share one report file; each appends its own block.
    """

    def __init__(self, output_dir: str = "ga_results", experiment_name: str = None,
                 report_name: str = None):
        """
        Initialize run reporter.

        Args:
            output_dir: Directory for output files
            experiment_name: Prefix for output files (auto-generated if None)
            report_name: Shared text report to append to (defaults to experiment_name)
        """
        self.output_dir = output_dir
        self.experiment_name = experiment_name or f"ga_run_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}"
        self.report_name = report_name or self.experiment_name
        self.logger = get_logger("Reporter")

        try:
            os.makedirs(self.output_dir, exist_ok=True)
        except OSError as e:
            raise ReportingError(f"Cannot create output directory: {e}",
                                 output_path=self.output_dir) from e

    @property
    def report_path(self) -> str:
        return os.path.join(self.output_dir, f"{self.report_name}.txt")

    @property
    def history_path(self) -> str:
        return os.path.join(self.output_dir, f"{self.experiment_name}_history.csv")

    @property
    def summary_path(self) -> str:
        return os.path.join(self.output_dir, f"{self.experiment_name}_summary.json")

    def write_header(self, instance_name: str):
        """Start a report file with an execution banner."""
        self._write_report(f" ======== Execution {instance_name} ======= \n\n", mode='w')

    def start_report(self, instance_name: str) -> bool:
        """Write the banner unless the report file already exists; True if written."""
        if os.path.exists(self.report_path):
            return False
        self.write_header(instance_name)
        return True

    def append_run(self, title: str, solution: Solution, elapsed_seconds: float,
                   extra_mutations: int = 0):
        """
        Append one run's block to the text report.

        Args:
            title: Name of the configuration that was run
            solution: Best solution found
            elapsed_seconds: Wall-clock duration of the run
            extra_mutations: Forced extra mutation passes performed
        """
        block = (f"{title}\n"
                 f"Best solution: {solution}\n"
                 f"Time: {elapsed_seconds}seg \n"
                 f"Extra mutations: {extra_mutations}\n\n")
        self._write_report(block, mode='a')
        self.logger.info(f"Run '{title}' appended to report", path=self.report_path)

    def _write_report(self, text: str, mode: str):
        try:
            with open(self.report_path, mode) as report_file:
                report_file.write(text)
        except OSError as e:
            raise ReportingError(f"Error writing report: {e}",
                                 output_path=self.report_path) from e

    def save_fitness_history(self, history: List[GenerationStats]) -> str:
        """
        Save per-generation fitness statistics to CSV.

        Returns:
            Path of the written CSV file
        """
        try:
            with open(self.history_path, mode='w', newline='') as csv_file:
                writer = csv.writer(csv_file)
                writer.writerow(HISTORY_FIELDS)
                for stats in history:
                    writer.writerow([getattr(stats, name) for name in HISTORY_FIELDS])
        except OSError as e:
            raise ReportingError(f"Error writing fitness history: {e}",
                                 output_path=self.history_path) from e

        self.logger.debug("Fitness history saved", path=self.history_path,
                          generations=len(history))
        return self.history_path

    def save_run_summary(self, solution: Solution, config: Dict[str, Any],
                         statistics: Dict[str, Any], elapsed_seconds: float) -> str:
        """
        Save a JSON summary of the run.

        Returns:
            Path of the written JSON file
        """
        summary_data = {
            'experiment_name': self.experiment_name,
            'end_time': datetime.now().isoformat(),
            'elapsed_seconds': elapsed_seconds,
            'config': config,
            'statistics': statistics,
            'best_solution': {
                'cost': solution.cost,
                'elements': list(solution.elements)
            }
        }

        try:
            with open(self.summary_path, 'w') as f:
                json.dump(summary_data, f, indent=2, default=str)
        except OSError as e:
            raise ReportingError(f"Error writing run summary: {e}",
                                 output_path=self.summary_path) from e

        return self.summary_path
