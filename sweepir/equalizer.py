"""A chain of biquad filters between an input and an output node."""

from __future__ import annotations

from typing import Any, Iterable

import numpy as np

from sweepir.filters import FilterConfig, FilterNode
from sweepir.nodes import Node, NodeGraph


class Equalizer:
    """Filters in series; nodes attach to its input, its output attaches onward."""

    def __init__(self, node_graph: NodeGraph) -> None:
        self._graph = node_graph
        self._input = FilterNode(node_graph)
        self._output = FilterNode(node_graph)
        self._filters: list[FilterNode] = []
        self._input.attach(self._output)

    @property
    def input_node(self) -> FilterNode:
        return self._input

    @property
    def output_node(self) -> FilterNode:
        return self._output

    @property
    def nodes(self) -> tuple[FilterNode, ...]:
        return tuple(self._filters)

    @property
    def filters(self) -> tuple[FilterConfig, ...]:
        return tuple(node.config for node in self._filters)

    def attach(self, other: Any) -> None:
        """Send the equalizer's output to ``other``."""
        self._output.attach(other)

    def add_filter(self, config: FilterConfig) -> None:
        """Append a filter at the end of the chain."""
        node = FilterNode(self._graph, config)
        previous = self._filters[-1] if self._filters else self._input
        self._filters.append(node)
        previous.attach(node)
        node.attach(self._output)

    def set_filters(self, configs: Iterable[FilterConfig]) -> None:
        """Configure the chain; filters beyond ``configs`` are set to pass through."""
        configs = list(configs)
        for index, config in enumerate(configs):
            if index < len(self._filters):
                self._filters[index].assign(config)
            else:
                self.add_filter(config)
        for node in self._filters[len(configs):]:
            node.assign(FilterConfig())

    def process(self, samples: Any) -> np.ndarray:
        """Run ``samples`` from the input through to the output node only."""
        node: Node | None = self._input
        out = samples
        while node is not self._output:
            if node is None:
                raise RuntimeError("equalizer chain is broken")
            out = node.process(out)
            node = node.output
        return self._output.process(out)