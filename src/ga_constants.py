"""
Configuration Constants for Genetic Algorithm

Centralizes all magic numbers and hard-coded values for better maintainability.
All constants are organized by category with clear documentation.
"""


class GAConstants:
    """Configuration constants for genetic algorithm components."""

    # Infeasibility penalty policies
    LARGE_NEGATIVE_PENALTY = -5000.0     # Infeasible chromosomes sink far below any feasible one
    ZERO_PENALTY = 0.0                   # Infeasible chromosomes score like an empty solution
    DEFAULT_INFEASIBLE_FITNESS = LARGE_NEGATIVE_PENALTY

    # Run limits
    DEFAULT_MAX_TIME_SECONDS = 1800.0    # 30 minutes wall-clock budget
    DEFAULT_SEED = 0                     # Seed of the shared random stream

    # Repair
    DEFAULT_MAX_REPAIR_PASSES = 1000     # Cap on forced extra mutation passes per chromosome

    # Population
    MIN_POPULATION_SIZE = 2              # One mating pair

    # SUS pointer spacing (two evenly spaced pointers)
    SUS_POINTER_OFFSET = 0.5

    # Fitness cache
    DEFAULT_CACHE_MAX_ENTRIES = 10000    # Entries kept before the fitness cache is flushed


class PenaltyPolicies:
    """Named infeasibility penalty policies selectable from the CLI."""

    LARGE_NEGATIVE = "large-negative"
    ZERO = "zero"

    VALUES = {
        LARGE_NEGATIVE: GAConstants.LARGE_NEGATIVE_PENALTY,
        ZERO: GAConstants.ZERO_PENALTY,
    }


def penalty_for_policy(policy: str) -> float:
    """
    Resolve a penalty policy name to its fitness value.

    Args:
        policy: One of PenaltyPolicies.VALUES keys

    Returns:
        Fitness assigned to infeasible chromosomes
    """
    try:
        return PenaltyPolicies.VALUES[policy]
    except KeyError:
        raise ValueError(f"Unknown penalty policy '{policy}', "
                         f"expected one of {sorted(PenaltyPolicies.VALUES)}") from None


def seconds_to_minutes(seconds: float) -> float:
    """Convert seconds to minutes."""
    return seconds / 60.0
