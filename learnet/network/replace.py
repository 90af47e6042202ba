from __future__ import annotations

import copy
from typing import Any, Dict, List, Mapping, Tuple

from learnet import config
from learnet.models.base import Model
from learnet.network.abstract import AbstractNode
from learnet.network.machine import Machine
from learnet.network.node import Node
from learnet.network.source import Source
from learnet.utils.errors import MissingModelError, MissingSourceError, NetworkError
from learnet.utils.logger import logs


def _index_of(items: List[Any], target: Any) -> int:
    for i, item in enumerate(items):
        if item is target:
            return i
    return -1


def _normalize_pairs(pairs: tuple) -> List[Tuple[Any, Any]]:
    if len(pairs) == 1 and isinstance(pairs[0], Mapping):
        return list(pairs[0].items())
    out = []
    for pair in pairs:
        if not (isinstance(pair, tuple) and len(pair) == 2):
            raise TypeError(f"Expected (old, new) pairs, got {pair!r}")
        out.append(pair)
    return out


def replace(W: AbstractNode, *pairs: Any) -> Node:
    """
    replace(W, (a1, b1), (a2, b2), ...)
    replace(W, {a1: b1, ...})

    Deep copy of the learning network terminating at ``W``, with the
    sources and models ``a1, a2, ...`` replaced by ``b1, b2, ...``.

    - sources not substituted are duplicated (payload deep-copied)
    - models not substituted are deep-copied
    - a machine shared by several nodes stays shared in the copy
    """
    if not isinstance(W, Node):
        raise NetworkError("All nodes in network are source nodes.")

    tape = W.tape()
    sources_: List[Source] = [n for n in tape if isinstance(n, Source)]
    source_uids = {s.uid for s in sources_}
    models_: List[Model] = W.models()

    # ----------------------------------------------
    # validate substitutions
    # ----------------------------------------------
    new_source_given_uid: Dict[int, AbstractNode] = {}
    new_model_at: Dict[int, Model] = {}

    for old, new in _normalize_pairs(pairs):
        if isinstance(old, Source):
            if old.uid not in source_uids:
                raise MissingSourceError(f"{old!r} is not a source of the network terminating at {W!r}")
            if not isinstance(new, AbstractNode):
                raise TypeError(f"Replacement for {old!r} must be a node, got {type(new).__name__}")
            new_source_given_uid[old.uid] = new
        elif isinstance(old, Model):
            i = _index_of(models_, old)
            if i < 0:
                raise MissingModelError(
                    f"{type(old).__name__} is not a model of the network terminating at {W!r}. "
                    "Use node.models() to inspect models."
                )
            if not isinstance(new, Model):
                raise TypeError(f"Replacement for a model must be a Model, got {type(new).__name__}")
            new_model_at[i] = new
        else:
            raise TypeError(f"Can only replace sources and models, got {type(old).__name__}")

    # ----------------------------------------------
    # complete source / model maps
    # ----------------------------------------------
    duplicated = [s for s in sources_ if s.uid not in new_source_given_uid]
    if duplicated and config.settings.network.warn_on_source_copy:
        logs.warning(
            f"[replace] No replacement specified for one or more source nodes "
            f"{duplicated}. Data there will be duplicated."
        )
    for s in duplicated:
        new_source_given_uid[s.uid] = Source(copy.deepcopy(s.data))

    for i, model in enumerate(models_):
        if i not in new_model_at:
            new_model_at[i] = copy.deepcopy(model)

    # ----------------------------------------------
    # rebuild the network in tape order
    # ----------------------------------------------
    new_node_given_uid: Dict[int, AbstractNode] = dict(new_source_given_uid)
    new_mach_given_uid: Dict[int, Machine] = {}

    nodes_ = [n for n in tape if not isinstance(n, Source)]
    for N in nodes_:
        args = [new_node_given_uid[arg.uid] for arg in N.args]

        if N.machine is None:
            new_node_given_uid[N.uid] = Node(N.operation, None, *args)
            continue

        mach = new_mach_given_uid.get(N.machine.uid)
        if mach is None:
            train_args = [new_node_given_uid[arg.uid] for arg in N.machine.args]
            model = new_model_at[_index_of(models_, N.machine.model)]
            mach = Machine(model, *train_args)
            mach.frozen = N.machine.frozen
            new_mach_given_uid[N.machine.uid] = mach

        new_node_given_uid[N.uid] = Node(N.operation, mach, *args)

    return new_node_given_uid[W.uid]
