"""
Population Management Module

Handles population initialization, best/worst lookups, validation and
population-level statistics for genetic algorithms.

Features:
- Random population initialization (duplicates allowed)
- First-occurrence best and worst chromosome lookup
- Population shape validation
- Fitness statistics for reporting
"""

from typing import Dict, Tuple

import numpy as np

from ga_context import GAContext
from ga_exceptions import PopulationError
from ga_types import Chromosome, Population
from ga_components.evaluation import EvaluationEngine


class PopulationManager:
    """
    Manages population-level operations for genetic algorithms.

    Lookups return (index, chromosome) so callers can replace a chromosome
    in its slot without relying on list equality.
    """

    def __init__(self, evaluation_engine: EvaluationEngine, context: GAContext):
        """
        Initialize population manager.

        Args:
            evaluation_engine: Fitness façade over the problem evaluator
            context: Run context (random stream and configuration)
        """
        self.evaluation_engine = evaluation_engine
        self.context = context
        self.population_size = context.config.population_size
        self.chromosome_size = evaluation_engine.chromosome_size

        self.stats = {
            'individuals_created': 0,
            'populations_initialized': 0
        }

    def initialize_population(self) -> Population:
        """
        Build a population of exactly population_size random chromosomes.

        Returns:
            List of chromosomes, one evaluator draw sequence each
        """
        evaluator = self.evaluation_engine.evaluator
        population = []

        while len(population) < self.population_size:
            chromosome = list(evaluator.generate_random_chromosome(self.context.rng))
            if len(chromosome) != self.chromosome_size:
                raise PopulationError(
                    f"Evaluator generated a chromosome of length {len(chromosome)}, "
                    f"expected {self.chromosome_size}")
            population.append(chromosome)
            self.stats['individuals_created'] += 1

        self.stats['populations_initialized'] += 1
        return population

    def get_best_chromosome(self, population: Population) -> Tuple[int, Chromosome]:
        """Return the first chromosome with the highest fitness and its index."""
        if not population:
            raise PopulationError("Cannot take the best chromosome of an empty population")

        best_index = 0
        best_fitness = float('-inf')
        for index, chromosome in enumerate(population):
            fitness = self.evaluation_engine.fitness(chromosome)
            if fitness > best_fitness:
                best_fitness = fitness
                best_index = index

        return best_index, population[best_index]

    def get_worst_chromosome(self, population: Population) -> Tuple[int, Chromosome]:
        """Return the first chromosome with the lowest fitness and its index."""
        if not population:
            raise PopulationError("Cannot take the worst chromosome of an empty population")

        worst_index = 0
        worst_fitness = float('inf')
        for index, chromosome in enumerate(population):
            fitness = self.evaluation_engine.fitness(chromosome)
            if fitness < worst_fitness:
                worst_fitness = fitness
                worst_index = index

        return worst_index, population[worst_index]

    def validate_population(self, population: Population, stage: str = "") -> Population:
        """
        Check population size and chromosome lengths.

        Args:
            population: Population to check
            stage: Name of the step that produced it, for error context

        Returns:
            The population, unchanged

        Raises:
            PopulationError: If the size or any chromosome length is off
        """
        if len(population) != self.population_size:
            raise PopulationError(
                f"Population after {stage or 'operation'} has {len(population)} "
                f"chromosomes, expected {self.population_size}",
                expected_size=self.population_size,
                actual_size=len(population))

        for index, chromosome in enumerate(population):
            if len(chromosome) != self.chromosome_size:
                raise PopulationError(
                    f"Chromosome {index} after {stage or 'operation'} has length "
                    f"{len(chromosome)}, expected {self.chromosome_size}",
                    expected_size=self.chromosome_size,
                    actual_size=len(chromosome))

        return population

    def get_fitness_statistics(self, population: Population) -> Dict[str, float]:
        """Best, mean, standard deviation and worst fitness of a population."""
        fitness = np.array(self.evaluation_engine.fitness_values(population), dtype=float)
        return {
            'best_fitness': float(fitness.max()),
            'mean_fitness': float(fitness.mean()),
            'std_fitness': float(fitness.std()),
            'worst_fitness': float(fitness.min())
        }

    def get_population_diversity(self, population: Population) -> float:
        """Mean per-locus gene variance; 0.0 means every chromosome is identical."""
        if not population:
            return 0.0
        genes = np.array(population, dtype=float)
        return float(genes.var(axis=0).mean())

    def get_statistics(self) -> Dict[str, int]:
        return self.stats.copy()
