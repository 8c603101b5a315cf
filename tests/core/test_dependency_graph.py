import pytest
from stackwipe.core.dependency_graph import StackDependencyGraph


def test_add_dependency_deduplicates():
    graph = StackDependencyGraph(['A', 'B'])
    graph.add_dependency('B', 'A')
    graph.add_dependency('B', 'A')

    assert graph.dependencies == {'B': {'A'}}
    assert graph.nodes == {'A', 'B'}


def test_add_dependency_adds_unknown_nodes():
    graph = StackDependencyGraph()
    graph.add_dependency('B', 'A')
    assert graph.nodes == {'A', 'B'}


def test_detect_circular_dependency_three_cycle():
    graph = StackDependencyGraph(['A', 'B', 'C'])
    graph.add_dependency('A', 'B')
    graph.add_dependency('B', 'C')
    graph.add_dependency('C', 'A')

    cycle = graph.detect_circular_dependency()

    assert len(cycle) == 4
    assert cycle[0] == cycle[-1]
    assert set(cycle) == {'A', 'B', 'C'}


def test_detect_circular_dependency_self_loop():
    graph = StackDependencyGraph(['A'])
    graph.add_dependency('A', 'A')
    assert graph.detect_circular_dependency() == ['A', 'A']


def test_detect_circular_dependency_in_second_component():
    graph = StackDependencyGraph(['A', 'B', 'X', 'Y'])
    graph.add_dependency('B', 'A')
    graph.add_dependency('X', 'Y')
    graph.add_dependency('Y', 'X')

    assert graph.detect_circular_dependency() == ['X', 'Y', 'X']


def test_detect_circular_dependency_none_for_dag():
    graph = StackDependencyGraph(['A', 'B', 'C', 'D'])
    graph.add_dependency('B', 'A')
    graph.add_dependency('C', 'A')
    graph.add_dependency('D', 'B')
    graph.add_dependency('D', 'C')
    assert graph.detect_circular_dependency() is None


def test_deletion_groups_diamond():
    graph = StackDependencyGraph(['A', 'B', 'C', 'D'])
    graph.add_dependency('B', 'A')
    graph.add_dependency('C', 'A')
    graph.add_dependency('D', 'B')
    graph.add_dependency('D', 'C')

    assert graph.get_deletion_groups() == [['D'], ['B', 'C'], ['A']]


def test_deletion_groups_independent_stacks():
    graph = StackDependencyGraph(['stack-c', 'stack-a', 'stack-b'])
    assert graph.get_deletion_groups() == [['stack-a', 'stack-b', 'stack-c']]


def test_deletion_groups_chain():
    graph = StackDependencyGraph(['app', 'network', 'db'])
    graph.add_dependency('app', 'db')
    graph.add_dependency('db', 'network')
    assert graph.get_deletion_groups() == [['app'], ['db'], ['network']]


def test_deletion_groups_with_cycle_raises():
    graph = StackDependencyGraph(['A', 'B'])
    graph.add_dependency('A', 'B')
    graph.add_dependency('B', 'A')
    with pytest.raises(RuntimeError):
        graph.get_deletion_groups()
