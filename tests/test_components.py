"""
Component Tests

Configuration validation, constants, fitness validation, the evaluation
engine and population management.
"""

import os
import sys
import unittest
from types import SimpleNamespace

import numpy as np

# Add project root and src to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src'))

from ga_config import GAConfig
from ga_constants import GAConstants, PenaltyPolicies, penalty_for_policy
from ga_context import GAContext
from ga_exceptions import (
    ConfigurationError, EvaluationError, InvalidFitnessError, PopulationError,
    validate_fitness
)
from ga_logging import setup_logging
from ga_types import (
    CrossoverStrategy, RepairPolicy, ReplacementStrategy, SelectionStrategy, Solution
)
from ga_components.evaluation import EvaluationEngine
from ga_components.population_management import PopulationManager
from tests.test_fixtures import (
    TestFixtures, ScriptedRandom, SumOfIndicesEvaluator, CardinalityLimitedEvaluator,
    FixedFitnessEvaluator
)


class TestGAConfig(unittest.TestCase):
    """Test configuration validation and conversion."""

    def setUp(self):
        setup_logging(level="ERROR", log_to_file=False)

    def test_defaults(self):
        config = GAConfig(population_size=10, generations=5, mutation_rate=0.01)

        self.assertEqual(config.selection_strategy, SelectionStrategy.TOURNAMENT)
        self.assertEqual(config.crossover_strategy, CrossoverStrategy.TWO_POINT)
        self.assertEqual(config.replacement_strategy, ReplacementStrategy.ELITIST)
        self.assertEqual(config.repair_policy, RepairPolicy.NONE)
        self.assertEqual(config.infeasible_fitness, -5000.0)
        self.assertEqual(config.max_time_seconds, 1800.0)
        self.assertEqual(config.seed, 0)

    def test_strategy_names_are_coerced(self):
        config = TestFixtures.get_test_config(selection_strategy="sus",
                                              crossover_strategy="uniform",
                                              replacement_strategy="steady-state",
                                              repair_policy="remove-forbidden")

        self.assertEqual(config.selection_strategy, SelectionStrategy.SUS)
        self.assertEqual(config.crossover_strategy, CrossoverStrategy.UNIFORM)
        self.assertEqual(config.replacement_strategy, ReplacementStrategy.STEADY_STATE)
        self.assertEqual(config.repair_policy, RepairPolicy.REMOVE_FORBIDDEN)

    def test_unknown_strategy(self):
        with self.assertRaises(ConfigurationError):
            TestFixtures.get_test_config(selection_strategy="roulette")

    def test_odd_population_rejected(self):
        with self.assertRaises(ConfigurationError):
            TestFixtures.get_test_config(population_size=5)

    def test_invalid_values_rejected(self):
        invalid = [
            dict(population_size=0),
            dict(generations=-1),
            dict(mutation_rate=1.5),
            dict(mutation_rate=-0.1),
            dict(max_time_seconds=0),
            dict(max_repair_passes=0),
            dict(output_dir="  "),
        ]
        for overrides in invalid:
            with self.subTest(overrides=overrides):
                with self.assertRaises(ConfigurationError):
                    TestFixtures.get_test_config(**overrides)

    def test_dict_round_trip_keeps_strategies(self):
        config = TestFixtures.get_test_config(selection_strategy="sus", seed=42)

        config_dict = config.to_dict()
        self.assertEqual(config_dict['selection_strategy'], "sus")

        restored = GAConfig.from_dict(config_dict)
        self.assertEqual(restored, config)

    def test_update_returns_new_config(self):
        config = TestFixtures.get_test_config()
        updated = config.update(generations=7)

        self.assertEqual(updated.generations, 7)
        self.assertEqual(config.generations, 1)

    def test_from_args(self):
        args = SimpleNamespace(population_size=6, generations=3, mutation_rate=0.2,
                               selection="sus", crossover="uniform",
                               replacement="steady-state", repair="forced-mutation",
                               seed=9, penalty="zero", max_time=10.0,
                               output_dir="out", quiet=True, progress=False)

        config = GAConfig.from_args(args)

        self.assertEqual(config.infeasible_fitness, 0.0)
        self.assertEqual(config.repair_policy, RepairPolicy.FORCED_MUTATION)
        self.assertFalse(config.verbose)
        self.assertEqual(config.max_repair_passes, GAConstants.DEFAULT_MAX_REPAIR_PASSES)

    def test_summary_mentions_strategies(self):
        summary = TestFixtures.get_test_config(crossover_strategy="uniform").summary()
        self.assertIn("crossover=uniform", summary)


class TestConstantsAndValidation(unittest.TestCase):
    """Test penalty policies and fitness validation."""

    def test_penalty_policies(self):
        self.assertEqual(penalty_for_policy(PenaltyPolicies.LARGE_NEGATIVE), -5000.0)
        self.assertEqual(penalty_for_policy(PenaltyPolicies.ZERO), 0.0)
        with self.assertRaises(ValueError):
            penalty_for_policy("huge")

    def test_validate_fitness(self):
        self.assertEqual(validate_fitness(3), 3.0)
        self.assertEqual(validate_fitness(np.float64(2.5)), 2.5)
        self.assertEqual(validate_fitness(float('-inf')), float('-inf'))

        for bad in (None, float('nan'), "1.0", True):
            with self.subTest(value=bad):
                with self.assertRaises(InvalidFitnessError):
                    validate_fitness(bad)

    def test_solution_string(self):
        solution = Solution(elements=[0, 2, 3], cost=5.0)
        self.assertEqual(str(solution), "Solution: cost=[5.0], size=[3], elements=[0, 2, 3]")

    def test_context_streams_are_reproducible(self):
        config = TestFixtures.get_test_config(seed=123)
        first = GAContext.from_config(config)
        second = GAContext.from_config(config)

        self.assertEqual([first.rng.random() for _ in range(5)],
                         [second.rng.random() for _ in range(5)])


class TestEvaluationEngine(unittest.TestCase):
    """Test fitness caching, decoding and validation."""

    def setUp(self):
        setup_logging(level="ERROR", log_to_file=False)

    def test_binary_decode(self):
        engine = EvaluationEngine(SumOfIndicesEvaluator(4))

        solution = engine.decode([1, 0, 1, 1])

        self.assertEqual(solution.elements, [0, 2, 3])
        self.assertEqual(solution.cost, 5.0)

    def test_infeasible_chromosome_gets_penalty(self):
        engine = EvaluationEngine(CardinalityLimitedEvaluator(4, max_items=1))

        self.assertEqual(engine.fitness([1, 1, 0, 0]), -5000.0)
        self.assertEqual(engine.fitness([0, 1, 0, 0]), 1.0)
        # Decoding still reports the true cost
        self.assertEqual(engine.decode([1, 1, 0, 0]).cost, 2.0)

    def test_fitness_is_cached_on_genotype(self):
        engine = EvaluationEngine(SumOfIndicesEvaluator(4))

        engine.fitness([0, 1, 1, 0])
        engine.fitness([0, 1, 1, 0])
        chromosome = [0, 1, 1, 0]
        chromosome[0] = 1
        engine.fitness(chromosome)

        stats = engine.get_statistics()
        self.assertEqual(stats['fitness_evaluations'], 2)
        self.assertEqual(stats['cache_hits'], 1)
        self.assertEqual(stats['cache_size'], 2)

    def test_cache_flushed_at_capacity(self):
        engine = EvaluationEngine(SumOfIndicesEvaluator(4), max_entries=2)

        for chromosome in ([0, 0, 0, 1], [0, 0, 1, 0], [0, 1, 0, 0]):
            engine.fitness(chromosome)

        self.assertEqual(engine.get_statistics()['cache_size'], 1)

    def test_invalid_fitness_raises(self):
        engine = EvaluationEngine(FixedFitnessEvaluator(4, {}, default=float('nan')))
        with self.assertRaises(InvalidFitnessError):
            engine.fitness([0, 0, 0, 0])

    def test_rejects_non_evaluator(self):
        with self.assertRaises(EvaluationError):
            EvaluationEngine(object())

    def test_rejects_empty_domain(self):
        with self.assertRaises(EvaluationError):
            SumOfIndicesEvaluator(0)


class TestPopulationManager(unittest.TestCase):
    """Test initialization, lookups and validation."""

    def setUp(self):
        setup_logging(level="ERROR", log_to_file=False)

    def _manager(self, rng=None, population_size=4):
        config = TestFixtures.get_test_config(population_size=population_size)
        context = TestFixtures.create_context(config, rng=rng)
        return PopulationManager(EvaluationEngine(SumOfIndicesEvaluator(4)), context)

    def test_initialize_population(self):
        manager = self._manager(population_size=6)

        population = manager.initialize_population()

        TestFixtures.assert_valid_population(population, 6, 4)

    def test_initialization_draws_one_bit_per_locus(self):
        rng = ScriptedRandom(ints=[1, 0, 0, 1, 0, 1, 1, 0])
        manager = self._manager(rng=rng, population_size=2)

        population = manager.initialize_population()

        self.assertEqual(population, [[1, 0, 0, 1], [0, 1, 1, 0]])
        self.assertTrue(rng.exhausted())

    def test_best_and_worst_are_first_occurrences(self):
        manager = self._manager()
        # Fitness 1, 3, 3, 1
        population = [[0, 1, 0, 0], [0, 0, 0, 1], [1, 1, 1, 0], [1, 1, 0, 0]]

        self.assertEqual(manager.get_best_chromosome(population), (1, [0, 0, 0, 1]))
        self.assertEqual(manager.get_worst_chromosome(population), (0, [0, 1, 0, 0]))

    def test_lookups_on_empty_population(self):
        manager = self._manager()
        with self.assertRaises(PopulationError):
            manager.get_best_chromosome([])
        with self.assertRaises(PopulationError):
            manager.get_worst_chromosome([])

    def test_validate_population(self):
        manager = self._manager(population_size=2)

        with self.assertRaises(PopulationError):
            manager.validate_population([[0, 0, 0, 0]])
        with self.assertRaises(PopulationError):
            manager.validate_population([[0, 0, 0, 0], [0, 0, 0]])

    def test_fitness_statistics_and_diversity(self):
        manager = self._manager()
        population = [[0, 0, 0, 1], [0, 0, 0, 1], [0, 1, 0, 0], [0, 1, 0, 0]]

        stats = manager.get_fitness_statistics(population)

        self.assertEqual(stats['best_fitness'], 3.0)
        self.assertEqual(stats['worst_fitness'], 1.0)
        self.assertAlmostEqual(stats['mean_fitness'], 2.0)
        self.assertAlmostEqual(stats['std_fitness'], 1.0)
        self.assertAlmostEqual(manager.get_population_diversity(population), 0.125)
        self.assertEqual(manager.get_population_diversity([[1, 0, 1, 0]] * 3), 0.0)


if __name__ == '__main__':
    unittest.main()
