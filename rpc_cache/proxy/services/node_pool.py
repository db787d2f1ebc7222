"""
Upstream node pool.

Memoryless uniform selection over a fixed list of interchangeable RPC nodes.
"""

import logging
import random
from typing import Optional, Sequence

from ..core.exceptions import ConfigurationError

logger = logging.getLogger("proxy.node_pool")


class NodePool:
    def __init__(self, nodes: Sequence[str], rng: Optional[random.Random] = None):
        """
        Args:
            nodes: Upstream base URLs
            rng: Random source (default: a fresh random.Random)

        Raises:
            ConfigurationError: nodes is empty
        """
        self.nodes = tuple(node.rstrip("/") for node in nodes)
        if not self.nodes:
            raise ConfigurationError("Node pool requires at least one upstream node")
        self._rng = rng or random.Random()
        logger.debug(f"NodePool initialized with {len(self.nodes)} nodes")

    def pick(self) -> str:
        return self._rng.choice(self.nodes)
