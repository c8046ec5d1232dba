import pytest

from gplab.core.cost import UNREACHABLE
from gplab.core.graph import Graph
from gplab.evolution.genetic_algorithm import GAState, GeneticAlgorithm, StopReason
from gplab.utils.observability import determinism_signature
from gplab.utils.rng_manager import RNGManager
from gplab.utils.validation import ValidationError


def _five_node_graph() -> Graph:
    # complete graph with unit weights, except an expensive direct edge
    edges = [(i, j, 1) for i in range(5) for j in range(i + 1, 5)]
    g = Graph.from_edges(5, edges)
    g.set_connection(0, 4, 10)
    g.set_connection(4, 0, 10)
    return g


def _sparse_graph() -> Graph:
    return Graph.from_edges(
        8,
        [(0, 1, 4), (0, 2, 1), (2, 3, 1), (3, 1, 1), (1, 5, 1), (3, 4, 6), (4, 7, 1), (5, 6, 1), (6, 7, 1)],
    )


@pytest.mark.parametrize("seed", [42, *range(10)])
def test_ga_converges_to_dijkstra_cost_on_five_node_graph(seed):
    g = _five_node_graph()
    ga = GeneticAlgorithm(g, {'population_size': 50}, rng_manager=RNGManager(seed=seed))
    best, history = ga.run(100)
    _, optimal_cost = g.get_shortest_path_dijkstra()
    assert best is not None and best.is_valid
    assert best.cost == optimal_cost
    assert ga.stop_reason is StopReason.OPTIMAL_FOUND
    assert ga.state is GAState.CONVERGED
    assert len(history) == ga.generations >= 1


def test_best_fitness_never_worsens_with_elitism():
    g = _sparse_graph()
    ga = GeneticAlgorithm(g, {'population_size': 30, 'elite_size': 2}, rng_manager=RNGManager(seed=3))
    ga.run(60)
    history = ga.best_fitness_history
    assert all(b <= a for a, b in zip(history, history[1:]))


def test_stagnation_stops_at_window():
    g = _sparse_graph()
    ga = GeneticAlgorithm(g, rng_manager=RNGManager(seed=8))
    ga.run(100)
    assert ga.generations <= 20
    assert ga.stop_reason in (StopReason.OPTIMAL_FOUND, StopReason.STAGNATION, StopReason.LOW_DIVERSITY)


def test_same_seed_reproduces_run():
    g = _sparse_graph()
    sigs = []
    for _ in range(2):
        ga = GeneticAlgorithm(g, {'population_size': 20}, rng_manager=RNGManager(seed=11))
        best, history = ga.run(30)
        sigs.append(determinism_signature({'best': list(best.genes), 'history': history}))
    assert sigs[0] == sigs[1]


def test_observer_receives_steps_in_order():
    g = _five_node_graph()
    events = []
    ga = GeneticAlgorithm(
        g,
        {'population_size': 10, 'elite_size': 2},
        rng_manager=RNGManager(seed=1),
        observer=events.append,
    )
    ga.run(1)
    names = [e.step_name for e in events]
    assert names[0] == 'initialization'
    assert names[1] == 'generation_start'
    assert names[2] == 'elite_selection'
    assert names[-2:] == ['population_update', 'generation_end']
    assert 'parent_selection' in names and 'mutation' in names
    assert isinstance(events[0].population, tuple)
    assert len(events[2].extra['elite_chromosomes']) == 2
    with pytest.raises(TypeError):
        events[2].extra['x'] = 1  # read-only snapshot


def test_step_mode_persists_population_between_calls():
    g = _sparse_graph()
    ga = GeneticAlgorithm(g, {'population_size': 20, 'max_generations': 3}, rng_manager=RNGManager(seed=5))
    assert ga.state is GAState.IDLE
    first = ga.step()
    assert first.generation == 1
    population = ga.population
    results = [first]
    while not results[-1].stopped:
        results.append(ga.step())
        assert ga.population is population
    assert [r.generation for r in results] == list(range(1, len(results) + 1))
    assert len(results) <= 3
    final = ga.step()
    assert final.stopped and final.generation == results[-1].generation


def test_cancel_stops_after_current_generation():
    g = _sparse_graph()

    def observer(event):
        if event.step_name == 'generation_end':
            ga.stop()

    ga = GeneticAlgorithm(g, {'population_size': 20}, rng_manager=RNGManager(seed=2), observer=observer)
    ga.run(50)
    assert ga.generations == 1
    assert ga.stop_reason in (StopReason.CANCELLED, StopReason.OPTIMAL_FOUND)
    if ga.stop_reason is StopReason.CANCELLED:
        assert ga.state is GAState.STOPPED


def test_unreachable_receiver_runs_to_a_stop_without_errors():
    g = Graph.from_edges(5, [(0, 1, 1), (1, 2, 1)])
    ga = GeneticAlgorithm(g, {'population_size': 10}, rng_manager=RNGManager(seed=0))
    best, _ = ga.run(10)
    assert best.fitness is UNREACHABLE
    assert ga.optimal_fitness is UNREACHABLE
    assert ga.get_statistics()['final_best_fitness'] is UNREACHABLE


def test_parameters_are_validated_and_updatable():
    g = _five_node_graph()
    with pytest.raises(ValidationError):
        GeneticAlgorithm(g, {'mutation_rate': 1.5})
    with pytest.raises(ValidationError):
        GeneticAlgorithm(g, {'selection_method': 'lottery'})
    ga = GeneticAlgorithm(g)
    ga.set_parameters(crossover_method='two_point', elite_size=1)
    stats = ga.get_statistics()
    assert stats['parameters']['crossover_method'] == 'two_point'
    assert stats['parameters']['elite_size'] == 1
    with pytest.raises(ValidationError):
        ga.set_parameters(bogus=1)


def test_reset_returns_to_idle():
    g = _five_node_graph()
    ga = GeneticAlgorithm(g, {'population_size': 10}, rng_manager=RNGManager(seed=4))
    ga.run(5)
    ga.reset()
    assert ga.state is GAState.IDLE
    assert ga.population is None
    assert ga.generations == 0 and ga.best_fitness_history == []
