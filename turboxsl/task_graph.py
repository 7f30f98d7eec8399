"""Records which template tasks started which, and saves the result as GraphML."""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Optional, Union

from .nodes import NodeType, XmlNode
from .output import OutputMode, OutputSettings, write_file

logger = logging.getLogger(__name__)

FORK_ATTRIBUTE = "fork"
SERIAL_COLOR = "red"
PARALLEL_COLOR = "green"
DEFAULT_COLOR = "yellow"


@dataclass(eq=False)
class _Vertex:
    key: int
    color: Optional[str] = None
    id: int = 0


@dataclass(eq=False)
class _Edge:
    label: str
    source: _Vertex
    target: _Vertex


def edge_name(instruction: Optional[XmlNode]) -> str:
    """Label an edge with the instruction name and its ``fork`` attribute."""
    if instruction is None:
        return ""
    label = instruction.name or ""
    fork = instruction.get_attribute(FORK_ATTRIBUTE)
    if fork is not None:
        label += f" [{fork}]"
    return label


def _vertex_key(task: Any) -> int:
    return id(task)


class TaskGraph:
    """A directed graph of tasks; each thread has its own current task."""

    def __init__(self, filename: Union[str, os.PathLike]) -> None:
        self.filename = filename
        self._local = threading.local()
        self._lock = threading.RLock()
        self._edges: list[_Edge] = []

    @property
    def edges(self) -> tuple[_Edge, ...]:
        with self._lock:
            return tuple(self._edges)

    def set_current(self, task: Any) -> None:
        """Make ``task`` the source of edges added from this thread."""
        self._local.vertex = _Vertex(_vertex_key(task))

    def _add(self, instruction: Optional[XmlNode], task: Any, color: str) -> bool:
        source = getattr(self._local, "vertex", None)
        if source is None:
            logger.error("task not found")
            return False
        target = _Vertex(_vertex_key(task), color)
        edge = _Edge(edge_name(instruction), source, target)
        with self._lock:
            self._edges.append(edge)
        return True

    def add_parallel(self, instruction: Optional[XmlNode], task: Any) -> bool:
        """Record that the current task started ``task`` in parallel."""
        return self._add(instruction, task, PARALLEL_COLOR)

    def add_serial(self, instruction: Optional[XmlNode], task: Any) -> bool:
        """Record that the current task ran ``task`` in line."""
        return self._add(instruction, task, SERIAL_COLOR)

    def vertices(self) -> list[_Vertex]:
        """Return the distinct vertices in edge order, numbering them from 1.

        Edges are made to refer to the first vertex seen for each task.
        """
        seen: dict[int, _Vertex] = {}
        result: list[_Vertex] = []

        def canonical(vertex: _Vertex) -> _Vertex:
            known = seen.get(vertex.key)
            if known is not None:
                return known
            vertex.id = len(result) + 1
            seen[vertex.key] = vertex
            result.append(vertex)
            return vertex

        with self._lock:
            for edge in self._edges:
                edge.source = canonical(edge.source)
                edge.target = canonical(edge.target)
        return result

    def to_graphml(self) -> XmlNode:
        """Build the GraphML document tree of the graph."""
        root = XmlNode(NodeType.ELEMENT, "graphml")
        root.add_attribute("edgedefault", "directed")
        root.add_child(_key_element("d0", "node", "color"))
        root.add_child(_key_element("d1", "edge", "name"))

        for vertex in self.vertices():
            node = XmlNode(NodeType.ELEMENT, "node")
            node.add_attribute("id", f"n{vertex.id}")
            node.add_child(_data_element("d0", vertex.color or DEFAULT_COLOR))
            root.add_child(node)

        for number, edge in enumerate(self.edges, 1):
            element = XmlNode(NodeType.ELEMENT, "edge")
            element.add_attribute("id", f"e{number}")
            element.add_attribute("source", f"n{edge.source.id}")
            element.add_attribute("target", f"n{edge.target.id}")
            element.add_child(_data_element("d1", edge.label))
            root.add_child(element)
        return root

    def save(self) -> None:
        """Write the graph as GraphML to the graph's file."""
        write_file(self.to_graphml(), self.filename, OutputSettings(mode=OutputMode.XML))


def _key_element(key_id: str, target: str, name: str) -> XmlNode:
    element = XmlNode(NodeType.ELEMENT, "key")
    element.add_attribute("id", key_id)
    element.add_attribute("for", target)
    element.add_attribute("attr.name", name)
    element.add_attribute("attr.type", "string")
    return element


def _data_element(key_id: str, text: str) -> XmlNode:
    element = XmlNode(NodeType.ELEMENT, "data")
    element.add_attribute("key", key_id)
    element.add_text(text)
    return element