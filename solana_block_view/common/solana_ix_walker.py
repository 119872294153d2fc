from __future__ import annotations

import logging

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Iterator, Tuple, Sequence, TYPE_CHECKING

from .solana_address_space import SolAddressSpace
from .solana_ix_shape import SolIxShape
from .solana_ix_view import SolIxView
from .utils.utils import cached_method, cached_property

if TYPE_CHECKING:
    from .solana_block import SolTxInfo, SolCompiledIxInfo, SolInnerIxInfo


LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolIxPosition:
    top_idx: int
    inner_idx: Optional[int] = None

    @property
    def is_root(self) -> bool:
        return self.inner_idx is None

    @cached_method
    def __str__(self) -> str:
        if self.inner_idx is None:
            return str(self.top_idx)
        return f'{self.top_idx}:{self.inner_idx}'


class SolIxWalker:
    """Traversal of the instruction tree of one transaction.

    The full walk is two-level depth-first: each top-level instruction is
    followed by all its inner instructions in stored order, before the next
    top-level instruction. Stack height never changes the order.
    """

    class _State(Enum):
        AtTop = 0
        AtInner = 1
        Exhausted = 2

    def __init__(self, tx: SolTxInfo):
        self._tx = tx
        self._ix_list: Sequence[SolCompiledIxInfo] = tx.msg.ix_list
        self._inner_ix_dict = self._build_inner_ix_dict()

    def _build_inner_ix_dict(self) -> Dict[int, Sequence[SolInnerIxInfo]]:
        inner_ix_dict: Dict[int, Sequence[SolInnerIxInfo]] = dict()
        meta = self._tx.meta
        if meta is None:
            return inner_ix_dict

        ix_cnt = len(self._ix_list)
        for inner_ix in meta.inner_ix_list:
            if inner_ix.idx >= ix_cnt:
                LOG.warning(
                    f'{self._tx}: inner instructions of the missing instruction {inner_ix.idx}, '
                    f'the transaction has only {ix_cnt} instructions'
                )
            elif inner_ix.idx in inner_ix_dict:
                LOG.warning(f'{self._tx}: duplicate inner instructions of the instruction {inner_ix.idx}')
            inner_ix_dict[inner_ix.idx] = inner_ix.ix_list
        return inner_ix_dict

    def __str__(self) -> str:
        return f'SolIxWalker({self._tx})'

    @property
    def tx(self) -> SolTxInfo:
        return self._tx

    @cached_property
    def address_space(self) -> SolAddressSpace:
        return SolAddressSpace.from_tx(self._tx)

    @property
    def ix_cnt(self) -> int:
        return len(self._ix_list)

    def ix_tree_len(self) -> int:
        return len(self._ix_list) + sum(
            len(self._inner_ix_dict.get(idx, tuple()))
            for idx in range(len(self._ix_list))
        )

    def compiled_ix(self, top_idx: int) -> SolIxShape:
        return SolIxShape.from_compiled_ix(self._ix_list[top_idx])

    def inner_ix_list(self, top_idx: int) -> Tuple[SolIxShape, ...]:
        return tuple(
            SolIxShape.from_inner_ix(ix)
            for ix in self._inner_ix_dict.get(top_idx, tuple())
        )

    def iter_ix(self) -> Iterator[Tuple[SolIxShape, SolIxPosition]]:
        state = self._State.AtTop
        top_idx = 0
        inner_idx = 0

        while state != self._State.Exhausted:
            if state == self._State.AtTop:
                if top_idx >= len(self._ix_list):
                    state = self._State.Exhausted
                    continue

                yield SolIxShape.from_compiled_ix(self._ix_list[top_idx]), SolIxPosition(top_idx)
                state = self._State.AtInner
                inner_idx = 0

            elif state == self._State.AtInner:
                inner_ix_list = self._inner_ix_dict.get(top_idx, tuple())
                if inner_idx < len(inner_ix_list):
                    yield SolIxShape.from_inner_ix(inner_ix_list[inner_idx]), SolIxPosition(top_idx, inner_idx)
                    inner_idx += 1
                else:
                    state = self._State.AtTop
                    top_idx += 1

    def iter_compiled_ix(self) -> Iterator[Tuple[SolIxShape, SolIxPosition]]:
        for top_idx, ix in enumerate(self._ix_list):
            yield SolIxShape.from_compiled_ix(ix), SolIxPosition(top_idx)

    def view(self, shape: SolIxShape, position: SolIxPosition) -> SolIxView:
        return SolIxView(self, shape, position)

    def compiled_view(self, top_idx: int) -> SolIxView:
        return SolIxView(self, self.compiled_ix(top_idx), SolIxPosition(top_idx))

    def iter_inner_view(self, top_idx: int) -> Iterator[SolIxView]:
        for inner_idx, shape in enumerate(self.inner_ix_list(top_idx)):
            yield SolIxView(self, shape, SolIxPosition(top_idx, inner_idx))

    def iter_view(self) -> Iterator[SolIxView]:
        for shape, position in self.iter_ix():
            yield SolIxView(self, shape, position)

    def iter_compiled_view(self) -> Iterator[SolIxView]:
        for shape, position in self.iter_compiled_ix():
            yield SolIxView(self, shape, position)
