"""Universe lookup backed by the task database."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Callable

from sqlmodel import Session

from .errors import UniverseNotFoundError
from .execution import UniverseRegistry
from .models import Universe, UniverseNode
from .repositories import get_universe, list_universe_nodes


@dataclass
class UniverseHandle:
    universe: Universe
    nodes: list[UniverseNode] = field(default_factory=list)

    @property
    def universe_uuid(self) -> str:
        return self.universe.universe_uuid

    @property
    def name(self) -> str:
        return self.universe.name

    def master_nodes(self) -> list[UniverseNode]:
        return [node for node in self.nodes if node.is_master]

    def master_leader_node(self) -> UniverseNode | None:
        for node in self.nodes:
            if node.is_master and node.is_master_leader:
                return node
        return None

    def master_addresses(self, rpc_port: int) -> str:
        return ",".join(f"{node.private_ip}:{rpc_port}" for node in self.master_nodes())


class DatabaseUniverseRegistry(UniverseRegistry):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def lookup(self, universe_uuid: uuid.UUID | str) -> UniverseHandle:
        key = str(universe_uuid)
        session = self._session_factory()
        try:
            universe = get_universe(session, key)
            if universe is None:
                raise UniverseNotFoundError(key)
            nodes = list_universe_nodes(session, key)
            session.expunge_all()
            return UniverseHandle(universe=universe, nodes=nodes)
        finally:
            session.close()
