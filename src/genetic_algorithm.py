import numbers
import time
from typing import Any, Dict, List, Optional

import psutil
from tqdm import tqdm

from ga_config import GAConfig
from ga_context import GAContext
from ga_exceptions import ConfigurationError
from ga_logging import GALogger, get_logger
from ga_types import Chromosome, GenerationStats, RepairOutcome, Solution
from ga_components.evaluation import EvaluationEngine, ProblemEvaluator
from ga_components.genetic_operations import GeneticOperations
from ga_components.population_management import PopulationManager
from ga_components.replacement import ReplacementMethods
from ga_components.selection import SelectionMethods


class GeneticAlgorithm:
    """
    Generational GA driver maximizing the fitness of a binary chromosome.

    Each generation runs selection, crossover, mutation (with optional
    repair) and replacement, then adopts the population's best chromosome
    when its fitness strictly exceeds the best solution's cost.
    """

    def __init__(self, evaluator: ProblemEvaluator, config: GAConfig,
                 context: Optional[GAContext] = None, logger: Optional[GALogger] = None) -> None:

        if context is not None and context.config != config:
            raise ConfigurationError("Run context was built from a different configuration")

        self.config = config
        self.logger = logger or get_logger("GeneticAlgorithm")
        self.context = context or GAContext.from_config(config, logger=self.logger)

        self._check_penalty(evaluator)

        # Initialize modular components using config values
        self.evaluation_engine = EvaluationEngine(evaluator)
        self.population_manager = PopulationManager(self.evaluation_engine, self.context)
        self.selection_methods = SelectionMethods(self.evaluation_engine, self.context)
        self.genetic_operations = GeneticOperations(self.evaluation_engine, self.context)
        self.replacement_methods = ReplacementMethods(self.population_manager, self.context)

        self.population: List[Chromosome] = []
        self.population_best: Optional[Chromosome] = None
        self.best_chromosome: Optional[Chromosome] = None
        self.best_solution: Optional[Solution] = None

        self.history: List[GenerationStats] = []
        self.generations_completed = 0
        self.stopped_by_time_limit = False
        self.elapsed_seconds = 0.0
        self.peak_memory_gb = 0.0

    def _check_penalty(self, evaluator):
        declared = getattr(evaluator, 'infeasible_fitness', None)
        if isinstance(declared, numbers.Real) and declared != self.config.infeasible_fitness:
            raise ConfigurationError(
                f"Evaluator penalizes infeasible chromosomes with {declared}, "
                f"but the configuration expects {self.config.infeasible_fitness}")

    def run(self) -> Solution:
        """
        Runs the genetic algorithm.

        Returns:
            The best solution found within the generation and time limits
        """
        config = self.config
        start_time = time.time()

        self.population = self.population_manager.validate_population(
            self.population_manager.initialize_population(), stage="initialization")

        _, best = self.population_manager.get_best_chromosome(self.population)
        self.population_best = list(best)
        self.best_chromosome = list(best)
        self.best_solution = self.evaluation_engine.decode(best)
        self.logger.log_new_best(0, self.best_solution, verbose=self.context.verbose)
        self._record_generation(0, start_time)

        generations = tqdm(range(1, config.generations + 1), desc="Generations",
                           disable=not config.show_progress, leave=False)

        for generation in generations:
            generation_start = time.time()
            self.logger.log_generation_start(generation, config.population_size)

            parents = self.selection_methods.select_parents(self.population)
            offspring = self.genetic_operations.crossover(parents)
            mutants, outcomes = self.genetic_operations.mutate_population(offspring)
            self._report_repair_failures(generation, mutants, outcomes)

            self.population = self.population_manager.validate_population(
                self.replacement_methods.select_population(
                    self.population, mutants, self.population_best),
                stage=f"generation {generation}")

            _, best = self.population_manager.get_best_chromosome(self.population)
            self.population_best = list(best)

            if self.evaluation_engine.fitness(best) > self.best_solution.cost:
                self.best_solution = self.evaluation_engine.decode(best)
                self.best_chromosome = list(best)
                self.logger.log_new_best(generation, self.best_solution,
                                         verbose=self.context.verbose)

            self.generations_completed = generation
            stats = self._record_generation(generation, start_time)
            self.logger.log_generation_complete(generation, stats.best_fitness,
                                                time.time() - generation_start,
                                                self.peak_memory_gb)

            elapsed = time.time() - start_time
            if elapsed >= config.max_time_seconds:
                self.stopped_by_time_limit = True
                self.logger.log_time_limit(generation, elapsed, config.max_time_seconds)
                break

        self.elapsed_seconds = time.time() - start_time
        self.logger.log_run_complete(self.generations_completed, self.best_solution.cost,
                                     self.elapsed_seconds)
        return self.best_solution

    def _report_repair_failures(self, generation: int, mutants, outcomes):
        for chromosome, outcome in zip(mutants, outcomes):
            if outcome == RepairOutcome.UNREPAIRED:
                self.logger.log_repair_failure(generation, self.config.max_repair_passes,
                                               self.evaluation_engine.fitness(chromosome))

    def _record_generation(self, generation: int, start_time: float) -> GenerationStats:
        fitness_stats = self.population_manager.get_fitness_statistics(self.population)
        self.peak_memory_gb = max(self.peak_memory_gb, self._memory_usage_gb())

        stats = GenerationStats(
            generation=generation,
            best_cost=self.best_solution.cost,
            elapsed_seconds=time.time() - start_time,
            **fitness_stats
        )
        self.history.append(stats)

        if generation % 5 == 0:
            self.logger.debug("Population diversity",
                              generation=generation,
                              diversity=f"{self.population_manager.get_population_diversity(self.population):.3f}")
        return stats

    @staticmethod
    def _memory_usage_gb() -> float:
        try:
            return psutil.Process().memory_info().rss / 1024**3
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            return 0.0

    def get_extra_mutations_counter(self) -> int:
        """Number of forced extra mutation passes performed so far."""
        return self.genetic_operations.extra_mutations

    def get_statistics(self) -> Dict[str, Any]:
        """Run statistics and per-component counters."""
        operations = self.genetic_operations.get_statistics()
        return {
            'generations_completed': self.generations_completed,
            'stopped_by_time_limit': self.stopped_by_time_limit,
            'elapsed_seconds': self.elapsed_seconds,
            'peak_memory_gb': self.peak_memory_gb,
            'extra_mutations': operations['extra_mutations'],
            'genes_removed': operations['genes_removed'],
            'unrepaired': operations['unrepaired'],
            'components': {
                'evaluation_engine': self.evaluation_engine.get_statistics(),
                'population_manager': self.population_manager.get_statistics(),
                'selection_methods': self.selection_methods.get_statistics(),
                'genetic_operations': operations,
                'replacement_methods': self.replacement_methods.get_statistics()
            }
        }
