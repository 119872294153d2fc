from __future__ import annotations

from typing import Iterable, Iterator, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .solana_block import SolBlockInfo, SolTxInfo


class SolTxGate:
    @staticmethod
    def is_successful(tx: SolTxInfo) -> bool:
        """A transaction without meta is never successful"""
        return (tx.meta is not None) and (tx.meta.err is None)

    @staticmethod
    def iter_successful_tx(block: SolBlockInfo) -> Iterator[SolTxInfo]:
        return filter(SolTxGate.is_successful, block.tx_list)

    @staticmethod
    def iter_successful_tx_owned(tx_iter: Iterable[SolTxInfo]) -> Iterator[SolTxInfo]:
        for tx in tx_iter:
            if SolTxGate.is_successful(tx):
                yield tx

    @staticmethod
    def with_inner_ix_meta(tx: SolTxInfo) -> Optional[SolTxInfo]:
        if not SolTxGate.is_successful(tx):
            return None
        elif len(tx.meta.inner_ix_list) == 0:
            return None
        return tx
