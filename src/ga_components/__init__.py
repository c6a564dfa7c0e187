"""
GA Components Module

Modular components for the Genetic Algorithm implementation.
Each component handles a specific aspect of the GA process:

- EvaluationEngine: Cached fitness over a ProblemEvaluator
- PopulationManager: Population initialization, best/worst lookup, statistics
- SelectionMethods: Parent selection (tournament, stochastic universal sampling)
- GeneticOperations: Crossover (two-point, uniform), mutation and repair
- ReplacementMethods: Next-generation replacement (elitist, steady-state)
- RunReporter: Text reports, fitness history and run summaries

Usage:
    from ga_components import EvaluationEngine, PopulationManager
    from ga_components.evaluation import BinaryProblemEvaluator
"""

from .evaluation import EvaluationEngine, ProblemEvaluator, BinaryProblemEvaluator
from .population_management import PopulationManager
from .selection import SelectionMethods
from .genetic_operations import GeneticOperations
from .replacement import ReplacementMethods
from .reporting import RunReporter

__all__ = [
    'EvaluationEngine',
    'ProblemEvaluator',
    'BinaryProblemEvaluator',
    'PopulationManager',
    'SelectionMethods',
    'GeneticOperations',
    'ReplacementMethods',
    'RunReporter'
]

# Version information
__version__ = '1.0.0'
__description__ = 'Modular Genetic Algorithm for Binary Combinatorial Optimization'
