"""Repository helpers for clustertasks entities."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Session, select

from .models import TaskInfo, Universe, UniverseNode
from .time_utils import now_utc


def get_universe(session: Session, universe_uuid: str) -> Optional[Universe]:
    statement = select(Universe).where(Universe.universe_uuid == universe_uuid)
    return session.exec(statement).first()


def add_universe(
    session: Session,
    *,
    universe_uuid: str,
    name: str,
    software_version: str | None = None,
) -> Universe:
    row = Universe(
        universe_uuid=universe_uuid,
        name=name,
        software_version=software_version,
    )
    session.add(row)
    return row


def list_universe_nodes(session: Session, universe_uuid: str) -> list[UniverseNode]:
    statement = (
        select(UniverseNode)
        .where(UniverseNode.universe_uuid == universe_uuid)
        .order_by(UniverseNode.node_name.asc())
    )
    return list(session.exec(statement).all())


def add_universe_node(
    session: Session,
    *,
    universe_uuid: str,
    node_name: str,
    private_ip: str,
    is_master: bool = False,
    is_tserver: bool = True,
    state: str = "Live",
) -> UniverseNode:
    row = UniverseNode(
        universe_uuid=universe_uuid,
        node_name=node_name,
        private_ip=private_ip,
        is_master=is_master,
        is_tserver=is_tserver,
        state=state,
    )
    session.add(row)
    return row


def set_master_leader(session: Session, universe_uuid: str, node_name: str | None) -> None:
    """Flag ``node_name`` as master leader and clear the flag everywhere else.

    Passing ``None`` leaves the universe without an elected leader.
    """
    found = node_name is None
    for node in list_universe_nodes(session, universe_uuid):
        is_leader = node.node_name == node_name
        if is_leader and not node.is_master:
            raise ValueError(f"node {node_name} is not a master in universe {universe_uuid}")
        found = found or is_leader
        if node.is_master_leader != is_leader:
            node.is_master_leader = is_leader
            node.updated_at = now_utc()
            session.add(node)
    if not found:
        raise ValueError(f"node {node_name} not found in universe {universe_uuid}")


def get_task_info(session: Session, task_uuid: str) -> Optional[TaskInfo]:
    statement = select(TaskInfo).where(TaskInfo.task_uuid == task_uuid)
    return session.exec(statement).first()


def list_task_infos(session: Session, universe_uuid: str | None = None, limit: int = 100) -> list[TaskInfo]:
    statement = select(TaskInfo)
    if universe_uuid is not None:
        statement = statement.where(TaskInfo.universe_uuid == universe_uuid)
    statement = statement.order_by(TaskInfo.created_at.desc()).limit(limit)
    return list(session.exec(statement).all())
