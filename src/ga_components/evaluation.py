"""
Evaluation Module

Defines the capability set a problem must provide to be optimized by the
engine, a helper base for binary subset-selection problems, and the
evaluation engine that caches fitness lookups for the GA components.

Features:
- ProblemEvaluator protocol (domain size, decode, fitness, feasibility,
  forbidden-value lookup, random chromosome, gene mutation)
- BinaryProblemEvaluator with bit-string decoding and bit-flip mutation
- Fitness caching keyed on the genotype
- Fitness validation and evaluation statistics
"""

import random
from typing import Dict, List, Optional, Protocol, runtime_checkable

from ga_constants import GAConstants
from ga_exceptions import EvaluationError, validate_fitness
from ga_types import Chromosome, Solution


@runtime_checkable
class ProblemEvaluator(Protocol):
    """Capabilities the engine consumes from a concrete problem."""

    def domain_size(self) -> int:
        ...

    def decode(self, chromosome: Chromosome) -> Solution:
        ...

    def fitness(self, chromosome: Chromosome) -> float:
        ...

    def is_feasible(self, solution: Solution) -> bool:
        ...

    def find_forbidden_value(self, solution: Solution) -> Optional[int]:
        ...

    def generate_random_chromosome(self, rng: random.Random) -> Chromosome:
        ...

    def mutate_gene(self, chromosome: Chromosome, locus: int) -> None:
        ...


class BinaryProblemEvaluator:
    """
    Helper base for problems encoded as a 0/1 selection over a domain.

    Subclasses implement evaluate_cost() and, when the problem has
    constraints, is_feasible() and find_forbidden_value().
    """

    def __init__(self, size: int,
                 infeasible_fitness: float = GAConstants.DEFAULT_INFEASIBLE_FITNESS):
        """
        Args:
            size: Number of domain elements (chromosome length)
            infeasible_fitness: Fitness reported for infeasible chromosomes
        """
        if size < 1:
            raise EvaluationError(f"Domain size must be positive, got {size}",
                                  evaluator_name=type(self).__name__)
        self.size = size
        self.infeasible_fitness = infeasible_fitness

    def evaluate_cost(self, elements: List[int]) -> float:
        """True objective value of the selected elements."""
        raise NotImplementedError

    def domain_size(self) -> int:
        return self.size

    def create_empty_solution(self) -> Solution:
        return Solution(elements=[], cost=0.0)

    def decode(self, chromosome: Chromosome) -> Solution:
        solution = self.create_empty_solution()
        for locus, gene in enumerate(chromosome):
            if gene == 1:
                solution.add(locus)
        solution.cost = self.evaluate_cost(solution.elements)
        return solution

    def fitness(self, chromosome: Chromosome) -> float:
        solution = self.decode(chromosome)
        if not self.is_feasible(solution):
            return self.infeasible_fitness
        return solution.cost

    def is_feasible(self, solution: Solution) -> bool:
        return True

    def find_forbidden_value(self, solution: Solution) -> Optional[int]:
        return None

    def generate_random_chromosome(self, rng: random.Random) -> Chromosome:
        return [rng.randrange(2) for _ in range(self.size)]

    def mutate_gene(self, chromosome: Chromosome, locus: int) -> None:
        chromosome[locus] = 1 - chromosome[locus]


class EvaluationEngine:
    """
    Fitness façade used by selection, mutation and replacement.

    Fitness is a pure function of the genotype, so results are cached on
    tuple(chromosome). The cache is flushed when it reaches max_entries.
    """

    def __init__(self, evaluator: ProblemEvaluator,
                 max_entries: int = GAConstants.DEFAULT_CACHE_MAX_ENTRIES):
        """
        Initialize evaluation engine.

        Args:
            evaluator: Problem evaluator implementing ProblemEvaluator
            max_entries: Fitness cache capacity
        """
        if not isinstance(evaluator, ProblemEvaluator):
            raise EvaluationError(
                f"{type(evaluator).__name__} does not implement the evaluator protocol",
                evaluator_name=type(evaluator).__name__)

        self.evaluator = evaluator
        self.max_entries = max_entries
        self._fitness_cache: Dict[tuple, float] = {}

        self.stats = {
            'fitness_evaluations': 0,
            'cache_hits': 0,
            'decode_operations': 0
        }

    @property
    def chromosome_size(self) -> int:
        return self.evaluator.domain_size()

    def fitness(self, chromosome: Chromosome) -> float:
        """Return the (cached) validated fitness of a chromosome."""
        key = tuple(chromosome)
        cached = self._fitness_cache.get(key)
        if cached is not None:
            self.stats['cache_hits'] += 1
            return cached

        value = validate_fitness(self.evaluator.fitness(chromosome), chromosome)
        self.stats['fitness_evaluations'] += 1

        if len(self._fitness_cache) >= self.max_entries:
            self._fitness_cache.clear()
        self._fitness_cache[key] = value
        return value

    def fitness_values(self, population: List[Chromosome]) -> List[float]:
        return [self.fitness(chromosome) for chromosome in population]

    def decode(self, chromosome: Chromosome) -> Solution:
        self.stats['decode_operations'] += 1
        return self.evaluator.decode(chromosome)

    def get_statistics(self) -> Dict[str, int]:
        stats = self.stats.copy()
        stats['cache_size'] = len(self._fitness_cache)
        return stats
