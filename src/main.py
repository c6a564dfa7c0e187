"""
Genetic Algorithm for Binary Combinatorial Optimization

This module provides a command-line interface for running the genetic
algorithm against any problem evaluator importable from Python.

Features:
- Evaluator given as "package.module:ClassName" plus JSON constructor arguments
- Tournament or SUS selection, two-point or uniform crossover,
  elitist or steady-state replacement, optional infeasibility repair
- Selectable infeasibility penalty policy
- Text report, fitness history CSV and JSON summary
- Shared report file across runs with --report_name

Usage:
    python main.py --evaluator my_problem:MyEvaluator --evaluator-args args.json \
        --generations 1000 --population_size 100 --mutation_rate 0.01
"""

import argparse
import importlib
import inspect
import json
import os
from typing import Any, Dict

from genetic_algorithm import GeneticAlgorithm
from ga_config import GAConfig
from ga_constants import GAConstants, PenaltyPolicies
from ga_exceptions import ConfigurationError
from ga_logging import setup_logging
from ga_types import CrossoverStrategy, RepairPolicy, ReplacementStrategy, SelectionStrategy
from ga_components.evaluation import BinaryProblemEvaluator
from ga_components.reporting import RunReporter


def load_evaluator_args(file_path: str) -> Dict[str, Any]:
    """
    Load evaluator constructor arguments from a JSON file.

    Args:
        file_path: Path to a JSON object of keyword arguments

    Returns:
        Dictionary of keyword arguments

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the file is not a JSON object
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Evaluator argument file '{file_path}' not found.")

    with open(file_path, 'r') as file:
        try:
            arguments = json.load(file)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in evaluator argument file '{file_path}': {e}") from e

    if not isinstance(arguments, dict):
        raise ConfigurationError(f"Evaluator argument file '{file_path}' must contain a JSON object")
    return arguments


def load_evaluator(spec: str, arguments: Dict[str, Any], infeasible_fitness: float):
    """
    Import and construct an evaluator from "module:ClassName".

    BinaryProblemEvaluator subclasses receive the configured penalty unless
    the arguments already set one. A subclass whose constructor takes no
    infeasible_fitness gets it assigned after construction.
    """
    module_name, _, class_name = spec.partition(':')
    if not module_name or not class_name:
        raise ConfigurationError(f"Evaluator must be given as 'module:ClassName', got '{spec}'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import evaluator module '{module_name}': {e}") from e

    evaluator_class = getattr(module, class_name, None)
    if evaluator_class is None or not inspect.isclass(evaluator_class):
        raise ConfigurationError(f"Module '{module_name}' has no class '{class_name}'")

    if not issubclass(evaluator_class, BinaryProblemEvaluator):
        return evaluator_class(**arguments)

    if 'infeasible_fitness' in arguments or _accepts_keyword(evaluator_class, 'infeasible_fitness'):
        return evaluator_class(**{'infeasible_fitness': infeasible_fitness, **arguments})

    evaluator = evaluator_class(**arguments)
    evaluator.infeasible_fitness = infeasible_fitness
    return evaluator


def _accepts_keyword(callable_obj, name: str) -> bool:
    try:
        parameters = inspect.signature(callable_obj).parameters.values()
    except (TypeError, ValueError):
        return False
    return any(p.name == name and p.kind in (p.POSITIONAL_OR_KEYWORD, p.KEYWORD_ONLY)
               or p.kind == p.VAR_KEYWORD for p in parameters)


def instance_name(args) -> str:
    """Name shown in a shared report banner: the argument file, else the evaluator class."""
    if args.evaluator_args:
        return os.path.splitext(os.path.basename(args.evaluator_args))[0]
    return args.evaluator.partition(':')[2]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Run a genetic algorithm over a binary-encoded problem.')

    # Problem
    parser.add_argument('--evaluator', '-e', type=str, required=True,
                        help="Evaluator class as 'module:ClassName'")
    parser.add_argument('--evaluator-args', '-a', type=str, default=None,
                        help="JSON file with evaluator constructor keyword arguments")

    # GA parameters
    parser.add_argument('--generations', '-g', type=int, default=1000, help="Number of generations (default: 1000)")
    parser.add_argument('--population_size', '-ps', type=int, default=100, help="Population size (default: 100)")
    parser.add_argument('--mutation_rate', '-mr', type=float, default=0.01, help="Mutation rate (default: 0.01)")

    # Strategies
    parser.add_argument('--selection', choices=[s.value for s in SelectionStrategy],
                        default=SelectionStrategy.TOURNAMENT.value, help="Parent selection strategy")
    parser.add_argument('--crossover', choices=[s.value for s in CrossoverStrategy],
                        default=CrossoverStrategy.TWO_POINT.value, help="Crossover strategy")
    parser.add_argument('--replacement', choices=[s.value for s in ReplacementStrategy],
                        default=ReplacementStrategy.ELITIST.value, help="Population replacement strategy")
    parser.add_argument('--repair', choices=[p.value for p in RepairPolicy],
                        default=RepairPolicy.NONE.value, help="Infeasibility repair policy")
    parser.add_argument('--max_repair_passes', type=int, default=GAConstants.DEFAULT_MAX_REPAIR_PASSES,
                        help="Maximum forced extra mutation passes per chromosome")
    parser.add_argument('--strict_repair', action='store_true',
                        help="Abort the run when a chromosome cannot be repaired")
    parser.add_argument('--penalty', choices=sorted(PenaltyPolicies.VALUES),
                        default=PenaltyPolicies.LARGE_NEGATIVE,
                        help="Fitness policy for infeasible chromosomes (default: large-negative)")

    # Run limits
    parser.add_argument('--seed', type=int, default=GAConstants.DEFAULT_SEED, help="Random seed (default: 0)")
    parser.add_argument('--max_time', type=float, default=GAConstants.DEFAULT_MAX_TIME_SECONDS,
                        help="Wall-clock budget in seconds (default: 1800)")

    # Output
    parser.add_argument('--output_dir', '-o', type=str, default="ga_results", help="Folder for reports (default: 'ga_results')")
    parser.add_argument('--title', type=str, default="GA", help="Title of this run in the text report")
    parser.add_argument('--report_name', type=str, default=None,
                        help="Append to this shared report ('<name>.txt'), starting it with an execution banner")
    parser.add_argument('--no_report', action='store_true', help="Do not write report files")
    parser.add_argument('--log_level', default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument('--log_to_file', action='store_true', help="Also write a timestamped log file")
    parser.add_argument('--quiet', action='store_true', help="Log new best solutions at DEBUG level only")
    parser.add_argument('--progress', action='store_true', help="Show a progress bar over generations")

    return parser


def main(argv=None) -> None:
    """
    Main entry point.

    Parses command-line arguments, builds the evaluator and configuration,
    runs the genetic algorithm and writes the requested reports.
    """
    args = build_parser().parse_args(argv)

    config = GAConfig.from_args(args)

    logger = setup_logging(
        level=args.log_level,
        log_to_file=args.log_to_file,
        output_dir=config.output_dir,
        console_colors=True
    )
    logger.log_config_summary(config)

    evaluator_args = load_evaluator_args(args.evaluator_args) if args.evaluator_args else {}
    evaluator = load_evaluator(args.evaluator, evaluator_args, config.infeasible_fitness)

    ga = GeneticAlgorithm(evaluator, config, logger=logger)

    try:
        best_solution = ga.run()
    except Exception as e:
        logger.critical("GA execution failed", exception=e)
        raise

    logger.info(f"title = {args.title}")
    logger.info(f"maxVal = {best_solution}")
    logger.info(f"Time = {ga.elapsed_seconds:.3f} seg")
    logger.info(f"Extra muts = {ga.get_extra_mutations_counter()}")

    if not args.no_report:
        reporter = RunReporter(output_dir=config.output_dir, report_name=args.report_name)
        if args.report_name:
            reporter.start_report(instance_name(args))
        reporter.append_run(args.title, best_solution, ga.elapsed_seconds,
                            ga.get_extra_mutations_counter())
        reporter.save_fitness_history(ga.history)
        reporter.save_run_summary(best_solution, config.to_dict(),
                                  ga.get_statistics(), ga.elapsed_seconds)


if __name__ == "__main__":
    main()
