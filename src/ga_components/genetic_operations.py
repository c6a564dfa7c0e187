"""
Genetic Operations Module

Core genetic algorithm operations including crossover, mutation and
infeasibility repair. These are the fundamental building blocks that
drive evolutionary search.

Features:
- Two-point crossover (one crosspoint pair per mating)
- Uniform crossover (one coin flip per locus per mating)
- Per-locus mutation at a fixed rate through the evaluator's gene operator
- Bounded forced-mutation repair and forbidden-gene removal repair
"""

from typing import Dict, List, Sequence, Tuple

from ga_context import GAContext
from ga_exceptions import ConfigurationError, CrossoverError, RepairError
from ga_types import (
    Chromosome, CrossoverStrategy, Population, RepairOutcome, RepairPolicy
)
from ga_components.evaluation import EvaluationEngine


class GeneticOperations:
    """
    Core genetic operations for evolutionary algorithms.

    Parents are mated by position (2k, 2k+1). Offspring are always fresh
    lists; mutation and repair edit offspring in place.
    """

    def __init__(self, evaluation_engine: EvaluationEngine, context: GAContext):
        """
        Initialize genetic operations.

        Args:
            evaluation_engine: Fitness façade over the problem evaluator
            context: Run context (random stream and configuration)
        """
        self.evaluation_engine = evaluation_engine
        self.evaluator = evaluation_engine.evaluator
        self.context = context
        self.mutation_rate = context.config.mutation_rate
        self.chromosome_size = evaluation_engine.chromosome_size

        # Statistics tracking
        self.crossover_count = 0
        self.mutation_count = 0
        self.extra_mutations = 0
        self.genes_removed = 0
        self.unrepaired = 0

    # ------------------------------------------------------------------
    # Crossover
    # ------------------------------------------------------------------

    def crossover(self, parents: Population) -> Population:
        """Dispatch to the configured crossover strategy."""
        if self.context.config.crossover_strategy == CrossoverStrategy.UNIFORM:
            return self.uniform_crossover(parents)
        return self.two_point_crossover(parents)

    def two_point_crossover(self, parents: Population) -> Population:
        """
        2-point crossover over adjacent parent pairs.

                               P1            P2
           Parent 1: X1 ... Xi | Xi+1 ... Xj | Xj+1 ... Xn
           Parent 2: Y1 ... Yi | Yi+1 ... Yj | Yj+1 ... Yn

        Offspring 1: X1 ... Xi | Yi+1 ... Yj | Xj+1 ... Xn
        Offspring 2: Y1 ... Yi | Xi+1 ... Xj | Yj+1 ... Yn

        Args:
            parents: The selected parents

        Returns:
            The resulting offspring, same size as parents
        """
        self._check_pairable(parents)
        rng = self.context.rng
        size = self.chromosome_size
        offspring = []

        for i in range(0, len(parents), 2):
            crosspoint1 = rng.randrange(size + 1)
            crosspoint2 = crosspoint1 + rng.randrange(size + 1 - crosspoint1)
            offspring.extend(self.two_point_pair(parents[i], parents[i + 1],
                                                 crosspoint1, crosspoint2))

        return offspring

    def uniform_crossover(self, parents: Population) -> Population:
        """
        Uniform crossover over adjacent parent pairs.

           Crossover Mask:   0  0  1  0  1  0      1
           Parent 1:         X1 X2 X3 X4 X5 X6 ... Xn
           Parent 2:         Y1 Y2 Y3 Y4 Y5 Y6 ... Yn

           Offspring 1:      X1 X2 Y3 X4 Y5 X6 ... Yn
           Offspring 2:      Y1 Y2 X3 Y4 X5 Y6 ... Xn

        Args:
            parents: The selected parents

        Returns:
            The resulting offspring, same size as parents
        """
        self._check_pairable(parents)
        rng = self.context.rng
        offspring = []

        for i in range(0, len(parents), 2):
            mask = [rng.randrange(2) for _ in range(self.chromosome_size)]
            offspring.extend(self.uniform_pair(parents[i], parents[i + 1], mask))

        return offspring

    def two_point_pair(self, parent1: Chromosome, parent2: Chromosome,
                       crosspoint1: int, crosspoint2: int) -> Tuple[Chromosome, Chromosome]:
        """Exchange loci in [crosspoint1, crosspoint2) between two parents."""
        self._check_lengths(parent1, parent2)
        if not 0 <= crosspoint1 <= crosspoint2 <= len(parent1):
            raise CrossoverError(f"Invalid crosspoints ({crosspoint1}, {crosspoint2}) "
                                 f"for chromosome length {len(parent1)}")

        offspring1 = []
        offspring2 = []
        for locus in range(len(parent1)):
            if crosspoint1 <= locus < crosspoint2:
                offspring1.append(parent2[locus])
                offspring2.append(parent1[locus])
            else:
                offspring1.append(parent1[locus])
                offspring2.append(parent2[locus])

        self.crossover_count += 1
        return offspring1, offspring2

    def uniform_pair(self, parent1: Chromosome, parent2: Chromosome,
                     mask: Sequence[int]) -> Tuple[Chromosome, Chromosome]:
        """Exchange every locus whose mask bit is 1."""
        self._check_lengths(parent1, parent2)
        if len(mask) != len(parent1):
            raise CrossoverError(f"Mask length {len(mask)} does not match "
                                 f"chromosome length {len(parent1)}")

        offspring1 = []
        offspring2 = []
        for locus, swap in enumerate(mask):
            if swap == 1:
                offspring1.append(parent2[locus])
                offspring2.append(parent1[locus])
            else:
                offspring1.append(parent1[locus])
                offspring2.append(parent2[locus])

        self.crossover_count += 1
        return offspring1, offspring2

    @staticmethod
    def _check_pairable(parents: Population):
        if not parents:
            raise ConfigurationError("Crossover needs a non-empty parent population")
        if len(parents) % 2 != 0:
            raise ConfigurationError(
                f"Crossover pairs parents by position and needs an even population, "
                f"got {len(parents)}")

    def _check_lengths(self, parent1: Chromosome, parent2: Chromosome):
        if len(parent1) != len(parent2):
            raise CrossoverError(f"Parents differ in length ({len(parent1)} vs {len(parent2)})")

    # ------------------------------------------------------------------
    # Mutation and repair
    # ------------------------------------------------------------------

    def mutate_population(self, offspring: Population) -> Tuple[Population, List[RepairOutcome]]:
        """
        Mutate every offspring in place, then apply the configured repair.

        Each chromosome is mutated and repaired before the next one, so the
        random draws of a chromosome's repair precede the next chromosome's
        mutation draws.

        Args:
            offspring: Offspring produced by crossover

        Returns:
            The mutated offspring and one repair outcome per chromosome
        """
        policy = self.context.config.repair_policy
        outcomes = []

        for chromosome in offspring:
            self.mutate(chromosome)
            if policy == RepairPolicy.FORCED_MUTATION:
                outcomes.append(self.forced_mutation_repair(chromosome))
            elif policy == RepairPolicy.REMOVE_FORBIDDEN:
                outcomes.append(self.remove_forbidden_repair(chromosome))
            else:
                outcomes.append(RepairOutcome.NOT_NEEDED)

        return offspring, outcomes

    def mutate(self, chromosome: Chromosome) -> int:
        """
        One mutation pass: each locus mutates with probability mutation_rate.

        Returns:
            Number of mutated loci
        """
        rng = self.context.rng
        mutated = 0
        for locus in range(len(chromosome)):
            if rng.random() < self.mutation_rate:
                self.evaluator.mutate_gene(chromosome, locus)
                mutated += 1
        self.mutation_count += mutated
        return mutated

    def forced_mutation_repair(self, chromosome: Chromosome) -> RepairOutcome:
        """
        Re-run full mutation passes while fitness stays at or below the penalty.

        Bounded by config.max_repair_passes.

        Raises:
            RepairError: If the cap is hit and config.strict_repair is set
        """
        config = self.context.config
        threshold = config.infeasible_fitness
        fitness = self.evaluation_engine.fitness

        if fitness(chromosome) > threshold:
            return RepairOutcome.NOT_NEEDED

        passes = 0
        while fitness(chromosome) <= threshold:
            if passes >= config.max_repair_passes:
                self.unrepaired += 1
                if config.strict_repair:
                    raise RepairError(
                        f"Could not repair chromosome after {passes} extra mutation passes",
                        passes=passes)
                return RepairOutcome.UNREPAIRED
            self.mutate(chromosome)
            passes += 1
            self.extra_mutations += 1

        return RepairOutcome.REPAIRED

    def remove_forbidden_repair(self, chromosome: Chromosome) -> RepairOutcome:
        """
        Zero forbidden loci one at a time until the decoded solution has none.

        Raises:
            RepairError: If the evaluator keeps reporting a locus that is already zero
        """
        removed = 0
        limit = len(chromosome) + 1

        while True:
            locus = self.evaluator.find_forbidden_value(self.evaluation_engine.decode(chromosome))
            if locus is None:
                break
            if removed >= limit or chromosome[locus] == 0:
                raise RepairError(
                    f"Evaluator reported forbidden locus {locus} that cannot be removed",
                    passes=removed, locus=locus)
            chromosome[locus] = 0
            removed += 1

        self.genes_removed += removed
        return RepairOutcome.REPAIRED if removed else RepairOutcome.NOT_NEEDED

    def get_statistics(self) -> Dict[str, int]:
        """Get statistics about genetic operations performed."""
        return {
            'crossover_count': self.crossover_count,
            'mutation_count': self.mutation_count,
            'extra_mutations': self.extra_mutations,
            'genes_removed': self.genes_removed,
            'unrepaired': self.unrepaired
        }
