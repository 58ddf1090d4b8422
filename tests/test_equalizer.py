import numpy as np
import pytest

from sweepir.equalizer import Equalizer
from sweepir.filters import FilterConfig, FilterNode, FilterType
from sweepir.nodes import Engine, Node, NodeGraph

C1 = FilterConfig(FilterType.PEAK, 1000.0, 1.0, 6.0, 48000)
C2 = FilterConfig(FilterType.LOW_PASS, 8000.0, 0.707, 0.0, 48000)
C3 = FilterConfig(FilterType.HIGH_SHELF, 4000.0, 0.707, -3.0, 48000)


def _signal(frames=128):
    return np.random.default_rng(7).standard_normal((frames, 2)).astype(np.float32)


def test_empty_equalizer_passes_through():
    eq = Equalizer(NodeGraph(2))
    x = _signal()
    np.testing.assert_allclose(eq.process(x), x)
    assert eq.input_node.output is eq.output_node


def test_add_filter_links_chain():
    eq = Equalizer(NodeGraph(2))
    eq.add_filter(C1)
    eq.add_filter(C2)
    first, second = eq.nodes
    assert eq.input_node.output is first
    assert first.output is second
    assert second.output is eq.output_node
    assert eq.filters == (C1, C2)


def test_process_matches_filters_in_series():
    graph = NodeGraph(2)
    eq = Equalizer(graph)
    eq.set_filters([C1, C2])
    x = _signal()
    expected = FilterNode(graph, C2).process(FilterNode(graph, C1).process(x))
    np.testing.assert_allclose(eq.process(x), expected, atol=1e-5)


def test_set_filters_resets_extra_filters():
    eq = Equalizer(NodeGraph(2))
    eq.set_filters([C1, C2])
    eq.set_filters([C3])
    assert len(eq.nodes) == 2
    assert eq.nodes[0].config == C3
    assert eq.nodes[1].config == FilterConfig()


def test_attach_and_render_through_engine():
    engine = Engine()
    eq = Equalizer(engine)
    eq.set_filters([C1])
    eq.attach(engine)
    assert eq.output_node.output is engine.endpoint

    source = Node()
    source.attach(eq)
    assert source.output is eq.input_node

    x = _signal()
    expected = FilterNode(engine, C1).process(x)
    np.testing.assert_allclose(source.render(x), expected, atol=1e-5)


def test_invalid_filter_raises():
    eq = Equalizer(NodeGraph(2))
    with pytest.raises(ValueError):
        eq.add_filter(FilterConfig(FilterType.PEAK, 1000.0, 0.0, 3.0))