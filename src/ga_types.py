"""
Core GA Types

Genotype containers, the decoded phenotype, and the strategy switches
shared by the engine components.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union

Gene = Union[int, float]

# A chromosome is a plain list of numeric genes; a population is a list of
# chromosomes whose positions (2k, 2k+1) are mated during crossover.
Chromosome = List[Gene]
Population = List[Chromosome]


class SelectionStrategy(str, Enum):
    TOURNAMENT = "tournament"
    SUS = "sus"


class CrossoverStrategy(str, Enum):
    TWO_POINT = "two-point"
    UNIFORM = "uniform"


class ReplacementStrategy(str, Enum):
    ELITIST = "elitist"
    STEADY_STATE = "steady-state"


class RepairPolicy(str, Enum):
    NONE = "none"
    FORCED_MUTATION = "forced-mutation"
    REMOVE_FORBIDDEN = "remove-forbidden"


class RepairOutcome(str, Enum):
    NOT_NEEDED = "not-needed"
    REPAIRED = "repaired"
    UNREPAIRED = "unrepaired"


@dataclass
class Solution:
    """
    Decoded phenotype: the selected domain indices and their true cost.

    Solutions are produced on demand, never per chromosome per generation.
    """
    elements: List[int] = field(default_factory=list)
    cost: float = float('-inf')

    def add(self, element: int):
        self.elements.append(element)

    @property
    def size(self) -> int:
        return len(self.elements)

    def __str__(self) -> str:
        return f"Solution: cost=[{self.cost}], size=[{self.size}], elements={self.elements}"


@dataclass
class GenerationStats:
    """Per-generation fitness summary recorded by the driver."""
    generation: int
    best_fitness: float
    mean_fitness: float
    std_fitness: float
    worst_fitness: float
    best_cost: float
    elapsed_seconds: float
