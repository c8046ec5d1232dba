import random

from gplab.core.cost import UNREACHABLE
from gplab.core.graph import Graph
from gplab.evolution.chromosome import Chromosome
from gplab.evolution.population import Population
from gplab.evolution.selection import rank_selection, roulette_selection, select_parent, tournament_selection


def _complete_graph(n: int = 5) -> Graph:
    edges = [(i, j, 1) for i in range(n) for j in range(i + 1, n)]
    g = Graph.from_edges(n, edges)
    g.set_connection(0, n - 1, 10)
    g.set_connection(n - 1, 0, 10)
    return g


def _sorted_chromosomes(g: Graph) -> list[Chromosome]:
    paths = [(0, 1, 4), (0, 1, 2, 4), (0, 1, 2, 3, 4), (0, 4)]
    return sorted((Chromosome(p, g) for p in paths), key=lambda c: c.fitness)


def test_selection_on_empty_population_returns_none():
    rng = random.Random(0)
    assert tournament_selection([], 3, rng) is None
    assert roulette_selection([], rng) is None
    assert rank_selection([], rng) is None


def test_tournament_larger_than_population_returns_best():
    g = _complete_graph()
    chromosomes = _sorted_chromosomes(g)
    rng = random.Random(0)
    for _ in range(20):
        assert tournament_selection(chromosomes, 10, rng) == chromosomes[0]


def test_roulette_falls_back_to_uniform_with_unreachable_members():
    g = _complete_graph()
    chromosomes = _sorted_chromosomes(g) + [Chromosome((0, 2, 2, 4), g)]
    assert chromosomes[-1].fitness is UNREACHABLE
    rng = random.Random(4)
    picks = {roulette_selection(chromosomes, rng).genes for _ in range(200)}
    assert (0, 2, 2, 4) in picks


def test_rank_selection_favours_the_best():
    g = _complete_graph()
    chromosomes = _sorted_chromosomes(g)
    rng = random.Random(9)
    counts = {c.genes: 0 for c in chromosomes}
    for _ in range(2000):
        counts[rank_selection(chromosomes, rng).genes] += 1
    assert counts[chromosomes[0].genes] > counts[chromosomes[-1].genes]


def test_unknown_selection_method_uses_tournament():
    g = _complete_graph()
    chromosomes = _sorted_chromosomes(g)
    a = select_parent(chromosomes, "nope", random.Random(1), tournament_size=2)
    b = tournament_selection(chromosomes, 2, random.Random(1))
    assert a == b


def test_initialize_random_fills_and_sorts():
    g = _complete_graph()
    pop = Population(20, g, rng=random.Random(0))
    pop.initialize_random()
    assert len(pop) == 20
    fits = [c.fitness for c in pop.chromosomes]
    assert fits == sorted(fits)
    assert all(c.genes[0] == 0 and c.genes[-1] == 4 for c in pop.chromosomes)
    assert pop.get_best_chromosome() is pop.chromosomes[0]
    assert pop.get_worst_chromosome() is pop.chromosomes[-1]


def test_random_walk_fallback_on_disconnected_graph():
    g = Graph.from_edges(4, [(0, 1, 1)])
    pop = Population(3, g, rng=random.Random(0))
    pop.initialize_random()
    assert all(c.genes == (0, 3) for c in pop.chromosomes)
    assert all(c.fitness is UNREACHABLE for c in pop.chromosomes)
    stats = pop.get_fitness_statistics()
    assert stats.avg is UNREACHABLE and stats.std is UNREACHABLE


def test_remove_duplicates_and_maintain_size():
    g = _complete_graph()
    pop = Population(4, g, rng=random.Random(1))
    pop.replace([Chromosome((0, 1, 4), g), Chromosome((0, 1, 4), g), Chromosome((0, 4), g)])
    pop.remove_duplicates()
    assert [c.genes for c in pop.chromosomes] == [(0, 1, 4), (0, 4)]
    pop.maintain_size()
    assert len(pop) == 4
    pop.size = 2
    pop.maintain_size()
    assert len(pop) == 2


def test_diversity_bounds():
    g = _complete_graph()
    pop = Population(3, g)
    pop.replace([Chromosome((0, 1, 4), g)] * 3)
    assert pop.get_diversity() == 0.0
    pop.replace([Chromosome((0, 1, 4), g), Chromosome((0, 2, 4), g)])
    assert pop.get_diversity() == 1.0
    pop.replace([Chromosome((0, 4), g), Chromosome((0, 4), g)])
    assert pop.get_diversity() == 0.0  # empty interiors are skipped
    pop.replace([Chromosome((0, 4), g)])
    assert pop.get_diversity() == 0.0


def test_update_generation_records_history():
    g = _complete_graph()
    pop = Population(2, g)
    pop.replace(_sorted_chromosomes(g)[:2])
    record = pop.update_generation()
    assert pop.generation == 1
    assert pop.fitness_history == [record]
    assert record.best == pop.chromosomes[0].fitness
    assert record.worst == pop.chromosomes[-1].fitness
    assert "generation 1" in str(pop)
