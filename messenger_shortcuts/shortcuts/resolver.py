from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence

from ..models import LogicalKey
from .document import Document, DocumentNode
from .strategies import MESSENGER_STRATEGIES, Strategy, StrategySet


class ElementResolver:
    """Run lookup strategies for a logical key and remember the last winner.

    One instance per document session. Singular keys try the memoised
    strategy first and fall back to the full ordered list when it stops
    producing a visible node. List keys are never memoised so membership
    always reflects the current document.
    """

    def __init__(self, document: Document, strategies: StrategySet = MESSENGER_STRATEGIES) -> None:
        self.document = document
        self.strategies = strategies
        self._last_successful: dict[LogicalKey, Strategy] = {}
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None

    def _get_lock(self) -> asyncio.Lock:
        # Recreated when the resolver is driven from a new event loop
        # (each asyncio.run call in the CLI and tests).
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    def cached_strategy(self, key: LogicalKey) -> Optional[Strategy]:
        return self._last_successful.get(key)

    async def _is_visible(self, node: DocumentNode) -> bool:
        try:
            return await node.is_visible()
        except Exception as exc:  # noqa: BLE001
            logging.debug("resolver_visibility_failed error=%r", exc)
            return False

    async def _try_one(self, key: LogicalKey, strategy: Strategy) -> Optional[DocumentNode]:
        try:
            node = await strategy.query(self.document)
        except Exception as exc:  # noqa: BLE001
            logging.debug("strategy_failed key=%s strategy=%s error=%r", key.value, strategy.name, exc)
            return None
        if node is not None and await self._is_visible(node):
            return node
        return None

    async def resolve_one(self, key: LogicalKey, strategies: Sequence[Strategy] | None = None) -> Optional[DocumentNode]:
        if strategies is None:
            strategies = self.strategies.get(key, ())

        async with self._get_lock():
            cached = self._last_successful.get(key)
            if cached is not None:
                node = await self._try_one(key, cached)
                if node is not None:
                    return node
                logging.debug("resolver_cache_miss key=%s strategy=%s", key.value, cached.name)

            for strategy in strategies:
                node = await self._try_one(key, strategy)
                if node is not None:
                    self._last_successful[key] = strategy
                    logging.debug("resolver_hit key=%s strategy=%s", key.value, strategy.name)
                    return node

        logging.warning("resolver_not_found key=%s", key.value)
        return None

    async def resolve_many(self, key: LogicalKey, strategies: Sequence[Strategy] | None = None) -> list[DocumentNode]:
        if strategies is None:
            strategies = self.strategies.get(key, ())

        for strategy in strategies:
            try:
                nodes = list(await strategy.query(self.document) or [])
            except Exception as exc:  # noqa: BLE001
                logging.debug("strategy_failed key=%s strategy=%s error=%r", key.value, strategy.name, exc)
                continue
            if nodes:
                logging.debug("resolver_hit key=%s strategy=%s count=%s", key.value, strategy.name, len(nodes))
                return nodes

        logging.warning("resolver_not_found key=%s", key.value)
        return []
