"""
Replacement Methods Module

Builds the next generation's population from the offspring, and for the
steady-state variant from the current population as well.

Features:
- Elitist generational replacement (previous best takes the worst slot)
- Steady-state replacement of the worst and a random chromosome by the
  two best offspring (0, 1 or 2 replacements)
"""

from typing import Dict

from ga_context import GAContext
from ga_exceptions import PopulationError
from ga_types import Chromosome, Population, ReplacementStrategy
from ga_components.population_management import PopulationManager


class ReplacementMethods:
    """
    Population replacement strategies.

    Replacements happen in the replaced chromosome's slot, so the size of
    the returned population always equals the size of its input.
    """

    def __init__(self, population_manager: PopulationManager, context: GAContext):
        """
        Initialize replacement methods.

        Args:
            population_manager: Provides best/worst lookups
            context: Run context (random stream and configuration)
        """
        self.population_manager = population_manager
        self.evaluation_engine = population_manager.evaluation_engine
        self.context = context

        self.stats = {
            'elites_reinserted': 0,
            'steady_state_replacements': 0
        }

    def select_population(self, population: Population, offspring: Population,
                          best_chromosome: Chromosome) -> Population:
        """Dispatch to the configured replacement strategy."""
        if self.context.config.replacement_strategy == ReplacementStrategy.STEADY_STATE:
            return self.steady_state_replacement(population, offspring, best_chromosome)
        return self.elitist_replacement(offspring, best_chromosome)

    def elitist_replacement(self, offspring: Population,
                            best_chromosome: Chromosome) -> Population:
        """
        Replace the worst offspring by the previous generation's best.

        The swap only happens when the worst offspring is strictly worse
        than that best.

        Args:
            offspring: Mutated offspring
            best_chromosome: Best chromosome of the previous generation

        Returns:
            The next population
        """
        fitness = self.evaluation_engine.fitness
        worst_index, worst = self.population_manager.get_worst_chromosome(offspring)

        if fitness(worst) < fitness(best_chromosome):
            offspring[worst_index] = list(best_chromosome)
            self.stats['elites_reinserted'] += 1

        return offspring

    def steady_state_replacement(self, population: Population, offspring: Population,
                                 best_chromosome: Chromosome) -> Population:
        """
        Replace the current worst and one random chromosome by the two best offspring.

        Each replacement only happens when the replaced chromosome is strictly
        worse than the best-known chromosome. When the random pick is the
        worst's slot and that slot was already replaced, the second
        replacement is skipped.

        Args:
            population: Current population
            offspring: Mutated offspring
            best_chromosome: Best-known chromosome before this step

        Returns:
            The next population (a new list; the inputs are not modified)
        """
        if len(offspring) < 2:
            raise PopulationError("Steady-state replacement needs at least two offspring",
                                  expected_size=2, actual_size=len(offspring))

        fitness = self.evaluation_engine.fitness
        manager = self.population_manager

        random_index = self.context.rng.randrange(len(population))
        random_pick = population[random_index]
        worst_index, worst = manager.get_worst_chromosome(population)

        remaining = list(offspring)
        new_best1_index, new_best1 = manager.get_best_chromosome(remaining)
        del remaining[new_best1_index]
        _, new_best2 = manager.get_best_chromosome(remaining)

        best_fitness = fitness(best_chromosome)
        next_population = list(population)
        replaced = set()

        if fitness(worst) < best_fitness:
            next_population[worst_index] = new_best1
            replaced.add(worst_index)

        if fitness(random_pick) < best_fitness and random_index not in replaced:
            next_population[random_index] = new_best2
            replaced.add(random_index)

        self.stats['steady_state_replacements'] += len(replaced)
        return next_population

    def get_statistics(self) -> Dict[str, int]:
        return self.stats.copy()
