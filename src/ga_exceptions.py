"""
Custom Exception Classes for Genetic Algorithm

Provides specific, meaningful exceptions for different GA failure modes
to replace generic Exception handling and silent fallback values.
"""

import math
import numbers


class GAException(Exception):
    """Base exception for all genetic algorithm related errors."""
    pass


class ConfigurationError(GAException):
    """Raised when GA configuration is invalid or inconsistent."""
    pass


class EvaluationError(GAException):
    """Raised when the problem evaluator misbehaves."""

    def __init__(self, message: str, evaluator_name: str = None):
        super().__init__(message)
        self.evaluator_name = evaluator_name


class InvalidFitnessError(EvaluationError):
    """Raised when fitness evaluation returns invalid results."""

    def __init__(self, fitness_value, chromosome=None):
        message = f"Invalid fitness value: {fitness_value!r}"
        super().__init__(message)
        self.fitness_value = fitness_value
        self.chromosome = chromosome


class PopulationError(GAException):
    """Raised when population operations fail."""

    def __init__(self, message: str, expected_size: int = None, actual_size: int = None):
        super().__init__(message)
        self.expected_size = expected_size
        self.actual_size = actual_size


class SelectionError(GAException):
    """Raised when selection operations fail."""

    def __init__(self, message: str, population_size: int = None,
                 selection_type: str = None):
        super().__init__(message)
        self.population_size = population_size
        self.selection_type = selection_type


class CrossoverError(GAException):
    """Raised when crossover operations fail."""

    def __init__(self, message: str, parent1_index: int = None,
                 parent2_index: int = None):
        super().__init__(message)
        self.parent1_index = parent1_index
        self.parent2_index = parent2_index


class MutationError(GAException):
    """Raised when mutation operations fail."""

    def __init__(self, message: str, mutation_rate: float = None):
        super().__init__(message)
        self.mutation_rate = mutation_rate


class RepairError(MutationError):
    """Raised when a chromosome cannot be brought back to feasibility."""

    def __init__(self, message: str, passes: int = None, locus: int = None):
        super().__init__(message)
        self.passes = passes
        self.locus = locus


class ReportingError(GAException):
    """Raised when result reporting/saving fails."""

    def __init__(self, message: str, output_path: str = None):
        super().__init__(message)
        self.output_path = output_path


def validate_fitness(fitness, chromosome=None) -> float:
    """
    Validate a fitness value and raise if it cannot be compared.

    Args:
        fitness: Fitness value to validate
        chromosome: Chromosome the value belongs to, for error context

    Returns:
        The fitness as a float

    Raises:
        InvalidFitnessError: If fitness is None, non-numeric or NaN
    """
    if fitness is None:
        raise InvalidFitnessError(fitness, chromosome)

    if isinstance(fitness, bool) or not isinstance(fitness, numbers.Real):
        raise InvalidFitnessError(fitness, chromosome)

    fitness = float(fitness)
    if math.isnan(fitness):
        raise InvalidFitnessError(fitness, chromosome)

    return fitness
