"""Diversity measurement engine.

DO NOT add explicit __all__ lists here - use auto_export instead.

Modules:
- errors: Status codes and exceptions
- precision: FP32 / FP64 storage
- config: EngineConfig
- registry: generational handle registry
- vector_space: word2vec loading and writing
- graph: Graph, Node, DistanceMatrix
- resolver: distance metrics and DistanceResolver
- measures/: the measure library
- engine: Engine (raises)
- api: status-code functions over a process-wide Engine
"""

from diversutils.common.auto_export import auto_export

__all__ = auto_export(__file__, __name__, globals())
