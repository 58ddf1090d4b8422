"""A small push-based audio node graph."""

from __future__ import annotations

from typing import Any, Optional

import numpy as np


def _input_of(other: Any) -> "Node":
    target = getattr(other, "input_node", None)
    if not isinstance(target, Node):
        raise TypeError(f"cannot attach to {other!r}")
    return target


class Node:
    """A processing stage whose output feeds at most one other node.

    The base node passes samples through unchanged.
    """

    def __init__(self) -> None:
        self._output: Optional[Node] = None

    @property
    def input_node(self) -> "Node":
        """The node that receives samples sent to this one."""
        return self

    @property
    def output(self) -> Optional["Node"]:
        return self._output

    def attach(self, other: Any) -> None:
        """Send this node's output to ``other``: a node, a graph or an equalizer."""
        target = _input_of(other)
        node: Optional[Node] = target
        while node is not None:
            if node is self:
                raise ValueError("attaching would create a cycle")
            node = node._output
        self._output = target

    def detach(self) -> None:
        self._output = None

    def process(self, samples: Any) -> np.ndarray:
        """Process one block of samples and return the result."""
        return np.array(samples, dtype=np.float32)

    def render(self, samples: Any) -> np.ndarray:
        """Process ``samples`` here and in every node downstream."""
        node: Optional[Node] = self
        out = samples
        while node is not None:
            out = node.process(out)
            node = node._output
        return np.asarray(out, dtype=np.float32)


class NodeGraph:
    """A graph of nodes ending in a single endpoint."""

    def __init__(self, channels: int = 2) -> None:
        if channels < 1:
            raise ValueError("a graph needs at least one channel")
        self.channels = channels
        self.endpoint = Node()

    @property
    def input_node(self) -> Node:
        """Nodes attached to the graph feed its endpoint."""
        return self.endpoint

    def read(self, samples: Any) -> np.ndarray:
        """Pass ``samples`` through the endpoint and return what comes out."""
        return self.endpoint.render(samples)


class Engine(NodeGraph):
    """The playback graph with its output sample rate."""

    def __init__(self, channels: int = 2, sample_rate: int = 48000) -> None:
        super().__init__(channels)
        if sample_rate <= 0:
            raise ValueError("sample rate must be positive")
        self.sample_rate = sample_rate