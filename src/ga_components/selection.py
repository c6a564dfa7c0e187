"""
Selection Methods Module

Implements parent selection strategies for genetic algorithms.

Features:
- Binary tournament selection (tie goes to the second-drawn candidate)
- Stochastic universal sampling with two evenly spaced pointers
- Selection statistics tracking
"""

from typing import List

from ga_constants import GAConstants
from ga_context import GAContext
from ga_exceptions import SelectionError
from ga_types import Population, SelectionStrategy
from ga_components.evaluation import EvaluationEngine


class SelectionMethods:
    """
    Collection of parent selection methods.

    Every method returns a population-sized list of parents drawn from the
    current population; chromosomes are shared, not copied.
    """

    def __init__(self, evaluation_engine: EvaluationEngine, context: GAContext):
        """
        Initialize selection methods.

        Args:
            evaluation_engine: Fitness façade over the problem evaluator
            context: Run context (random stream and configuration)
        """
        self.evaluation_engine = evaluation_engine
        self.context = context
        self.population_size = context.config.population_size

        # Statistics tracking
        self.selection_stats = {
            'tournaments_held': 0,
            'sus_rounds': 0
        }

    def select_parents(self, population: Population) -> Population:
        """Dispatch to the configured selection strategy."""
        if self.context.config.selection_strategy == SelectionStrategy.SUS:
            return self.stochastic_universal_sampling(population)
        return self.tournament_selection(population)

    def tournament_selection(self, population: Population) -> Population:
        """
        Binary tournament selection.

        Draws two indices uniformly with replacement per parent; the first
        candidate wins only with strictly higher fitness.

        Args:
            population: The current population

        Returns:
            The selected parents for crossover
        """
        if not population:
            raise SelectionError("Cannot select parents from an empty population",
                                 population_size=0, selection_type="tournament")

        rng = self.context.rng
        fitness = self.evaluation_engine.fitness
        parents = []
        size = len(population)

        while len(parents) < self.population_size:
            candidate1 = population[rng.randrange(size)]
            candidate2 = population[rng.randrange(size)]
            if fitness(candidate1) > fitness(candidate2):
                parents.append(candidate1)
            else:
                parents.append(candidate2)
            self.selection_stats['tournaments_held'] += 1

        return parents

    def stochastic_universal_sampling(self, population: Population) -> Population:
        """
        Stochastic universal sampling with two pointers half a wheel apart.

        Each round draws one pointer p1 in [0, 1) and derives p2 = p1 + 0.5
        (wrapped). A single scan over the cumulative distribution appends
        every chromosome whose [start, end) interval holds a pointer.

        Args:
            population: The current population

        Returns:
            The selected parents for crossover
        """
        proportions = self._selection_proportions(population)
        rng = self.context.rng
        parents = []

        while len(parents) < self.population_size:
            pointer1 = rng.random()
            pointer2 = pointer1 + GAConstants.SUS_POINTER_OFFSET
            if pointer2 >= 1.0:
                pointer2 -= 1.0
            self.selection_stats['sus_rounds'] += 1

            end = 0.0
            last = len(population) - 1
            for index, proportion in enumerate(proportions):
                start = end
                end = 1.0 if index == last else end + proportion

                if start <= pointer1 < end:
                    parents.append(population[index])
                    if len(parents) == self.population_size:
                        break
                if start <= pointer2 < end:
                    parents.append(population[index])
                    if len(parents) == self.population_size:
                        break

        return parents

    def _selection_proportions(self, population: Population) -> List[float]:
        """
        Normalized selection proportions in population order.

        Negative fitness values (infeasibility penalties) are shifted so the
        minimum becomes zero before normalizing.

        Raises:
            SelectionError: If the population is empty or the shifted total is not positive
        """
        if not population:
            raise SelectionError("Cannot select parents from an empty population",
                                 population_size=0, selection_type="sus")

        values = self.evaluation_engine.fitness_values(population)
        lowest = min(values)
        if lowest < 0:
            self.context.logger.debug("Shifting negative fitness for SUS", offset=-lowest)
            values = [value - lowest for value in values]

        total = sum(values)
        if not total > 0:
            raise SelectionError(
                f"SUS needs a positive fitness total, got {total}",
                population_size=len(population), selection_type="sus")

        return [value / total for value in values]

    def get_statistics(self) -> dict:
        """Get selection statistics."""
        return self.selection_stats.copy()
