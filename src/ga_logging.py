"""
Run Logging for the Genetic Algorithm

Wraps the standard logging module with a GA-flavoured logger: colored
console output, an optional timestamped log file, "key=value" context on
every message and helpers for the events a run reports (new best
solution, repair failures, time limit, run summary).
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


class GAFormatter(logging.Formatter):
    """Level-colored formatter; colors only apply when stdout is a terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[36m',
        logging.INFO: '\033[32m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[35m',
    }
    RESET = '\033[0m'

    CONSOLE_FORMAT = '%(levelname)-8s | %(name)s | %(message)s'
    FILE_FORMAT = '[%(asctime)s] %(levelname)-8s | %(name)s | %(message)s'

    def __init__(self, use_colors: bool = True, include_timestamp: bool = True):
        self.use_colors = use_colors and hasattr(sys.stdout, 'isatty') and sys.stdout.isatty()
        if include_timestamp:
            super().__init__(self.FILE_FORMAT, '%H:%M:%S')
        else:
            super().__init__(self.CONSOLE_FORMAT)

    def format(self, record):
        if not self.use_colors:
            return super().format(record)

        # The record is shared with the file handler
        colored = logging.makeLogRecord(record.__dict__)
        color = self.LEVEL_COLORS.get(record.levelno, '')
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


class GALogger:
    """
    Logger used by every GA component.

    Messages take optional keyword context, rendered as
    "message | key=value | key=value".
    """

    def __init__(self, name: str = "GA", level: str = "INFO",
                 log_to_file: bool = False, output_dir: str = "logs",
                 console_colors: bool = True):
        """
        Args:
            name: Logger name
            level: Console log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_to_file: Also write every record, DEBUG included, to a log file
            output_dir: Directory for the log file
            console_colors: Color level names on a terminal
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.DEBUG if log_to_file else self._level(level))
        self.logger.propagate = False
        self.logger.handlers.clear()
        self.log_file: Optional[str] = None

        console = logging.StreamHandler(sys.stdout)
        console.setLevel(self._level(level))
        console.setFormatter(GAFormatter(use_colors=console_colors, include_timestamp=False))
        self.logger.addHandler(console)

        if log_to_file:
            self.log_file = self._add_file_handler(output_dir)

    @staticmethod
    def _level(name: str) -> int:
        return getattr(logging, name.upper(), logging.INFO)

    def _add_file_handler(self, output_dir: str) -> str:
        log_dir = Path(output_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"ga_run_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

        handler = logging.FileHandler(log_file)
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(GAFormatter(use_colors=False, include_timestamp=True))
        self.logger.addHandler(handler)
        return str(log_file)

    def _log(self, level: int, message: str, exception: Exception = None, **context):
        if not self.logger.isEnabledFor(level):
            return
        parts = [message] + [f"{key}={value}" for key, value in context.items()]
        if exception is not None:
            parts.append(f"Exception: {type(exception).__name__}: {exception}")
        self.logger.log(level, " | ".join(parts))

    def debug(self, message: str, **context):
        self._log(logging.DEBUG, message, **context)

    def info(self, message: str, **context):
        self._log(logging.INFO, message, **context)

    def warning(self, message: str, exception: Exception = None, **context):
        self._log(logging.WARNING, message, exception, **context)

    def error(self, message: str, exception: Exception = None, **context):
        self._log(logging.ERROR, message, exception, **context)

    def critical(self, message: str, exception: Exception = None, **context):
        self._log(logging.CRITICAL, message, exception, **context)

    # Run events

    def log_config_summary(self, config):
        self.info("GA configuration",
                  population=config.population_size,
                  generations=config.generations,
                  mutation_rate=config.mutation_rate,
                  selection=config.selection_strategy.value,
                  crossover=config.crossover_strategy.value,
                  replacement=config.replacement_strategy.value,
                  repair=config.repair_policy.value,
                  seed=config.seed)

    def log_generation_start(self, generation: int, population_size: int):
        self.debug(f"Starting generation {generation}", population_size=population_size)

    def log_generation_complete(self, generation: int, best_fitness: float,
                                time_taken: float, peak_memory: float):
        self.debug(f"Generation {generation} complete",
                   best_fitness=f"{best_fitness:.4f}",
                   time_taken=f"{time_taken:.4f}s",
                   peak_memory=f"{peak_memory:.3f}GB")

    def log_new_best(self, generation: int, solution, verbose: bool = True):
        """Report an adopted best solution; at DEBUG level when the run is quiet."""
        self._log(logging.INFO if verbose else logging.DEBUG,
                  f"(Gen. {generation}) BestSol = {solution}")

    def log_repair_failure(self, generation: int, passes: int, fitness: float):
        self.warning(f"Chromosome still infeasible in generation {generation}",
                     passes=passes, fitness=fitness)

    def log_time_limit(self, generation: int, elapsed: float, limit: float):
        self.info(f"Time limit reached after generation {generation}",
                  elapsed=f"{elapsed:.2f}s", limit=f"{limit:.0f}s")

    def log_run_complete(self, generations: int, best_cost: float, elapsed: float):
        self.info("GA run complete", generations=generations,
                  best_cost=best_cost, elapsed=f"{elapsed:.2f}s")


_global_logger: Optional[GALogger] = None


def get_logger(name: str = "GA") -> GALogger:
    """Return the process-wide logger, creating it on first use."""
    global _global_logger
    if _global_logger is None:
        _global_logger = GALogger(name)
    return _global_logger


def setup_logging(level: str = "INFO", log_to_file: bool = False,
                  output_dir: str = "logs", console_colors: bool = True) -> GALogger:
    """
    Replace the process-wide logger.

    Args:
        level: Console log level
        log_to_file: Whether to also write a log file
        output_dir: Directory for log files
        console_colors: Whether to color console output

    Returns:
        The new GALogger
    """
    global _global_logger
    _global_logger = GALogger(level=level, log_to_file=log_to_file,
                              output_dir=output_dir, console_colors=console_colors)
    return _global_logger
