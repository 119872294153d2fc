from __future__ import annotations

import logging

from dataclasses import dataclass
from typing import Optional, Tuple, List, Dict, Any, Iterator, Callable

import base58

from .address import SolAddress
from .config import Config
from .errors import SolBlockViewError, SolMissingStructError
from .solana_address_space import SolAddressSpace
from .solana_ix_view import SolIxView
from .solana_ix_walker import SolIxWalker
from .solana_tx_gate import SolTxGate
from .utils.json_logger import logging_context
from .utils.utils import str_fmt_object, cached_method, get_from_dict


LOG = logging.getLogger(__name__)


def _b58decode_list(value_list: Optional[List[str]]) -> Tuple[bytes, ...]:
    if not value_list:
        return tuple()
    return tuple(base58.b58decode(value) for value in value_list)


@dataclass(frozen=True)
class SolCompiledIxInfo:
    program_id_idx: int
    acct_idx_list: Tuple[int, ...] = tuple()
    data: bytes = b''

    @staticmethod
    def from_dict(src: Dict[str, Any]) -> SolCompiledIxInfo:
        return SolCompiledIxInfo(**_SolIxDictDecoder.decode(src))

    @cached_method
    def __str__(self) -> str:
        return str_fmt_object(self)


@dataclass(frozen=True)
class SolInnerIxInfo:
    program_id_idx: int
    acct_idx_list: Tuple[int, ...] = tuple()
    data: bytes = b''
    stack_height: Optional[int] = None

    @staticmethod
    def from_dict(src: Dict[str, Any]) -> SolInnerIxInfo:
        return SolInnerIxInfo(stack_height=src.get('stackHeight', None), **_SolIxDictDecoder.decode(src))

    @cached_method
    def __str__(self) -> str:
        return str_fmt_object(self)


class _SolIxDictDecoder:
    @staticmethod
    def decode(src: Dict[str, Any]) -> Dict[str, Any]:
        program_id_idx = src.get('programIdIndex', None)
        if program_id_idx is None:
            raise SolMissingStructError('programIdIndex', 'instruction')

        data = src.get('data', None)
        return dict(
            program_id_idx=program_id_idx,
            acct_idx_list=tuple(src.get('accounts', None) or tuple()),
            data=base58.b58decode(data) if data else b'',
        )


@dataclass(frozen=True)
class SolInnerIxListInfo:
    idx: int
    ix_list: Tuple[SolInnerIxInfo, ...] = tuple()

    @staticmethod
    def from_dict(src: Dict[str, Any]) -> SolInnerIxListInfo:
        idx = src.get('index', None)
        if idx is None:
            raise SolMissingStructError('index', 'inner instructions')

        return SolInnerIxListInfo(
            idx=idx,
            ix_list=tuple(SolInnerIxInfo.from_dict(ix) for ix in src.get('instructions', None) or tuple())
        )


@dataclass(frozen=True)
class SolTxErrorInfo:
    raw: Any

    def __str__(self) -> str:
        return str(self.raw)


@dataclass(frozen=True)
class SolTxMetaInfo:
    err: Optional[SolTxErrorInfo] = None
    loaded_writable_key_list: Tuple[bytes, ...] = tuple()
    loaded_readonly_key_list: Tuple[bytes, ...] = tuple()
    inner_ix_list: Tuple[SolInnerIxListInfo, ...] = tuple()

    @staticmethod
    def from_dict(src: Dict[str, Any]) -> SolTxMetaInfo:
        err = src.get('err', None)
        return SolTxMetaInfo(
            err=SolTxErrorInfo(err) if err is not None else None,
            loaded_writable_key_list=_b58decode_list(get_from_dict(src, ('loadedAddresses', 'writable'), None)),
            loaded_readonly_key_list=_b58decode_list(get_from_dict(src, ('loadedAddresses', 'readonly'), None)),
            inner_ix_list=tuple(
                SolInnerIxListInfo.from_dict(inner_ix)
                for inner_ix in src.get('innerInstructions', None) or tuple()
            )
        )

    @cached_method
    def __str__(self) -> str:
        return str_fmt_object(self)


@dataclass(frozen=True)
class SolTxMsgInfo:
    acct_key_list: Tuple[bytes, ...] = tuple()
    ix_list: Tuple[SolCompiledIxInfo, ...] = tuple()
    recent_block_hash: bytes = b''

    @staticmethod
    def from_dict(src: Dict[str, Any]) -> SolTxMsgInfo:
        recent_block_hash = src.get('recentBlockhash', None)
        return SolTxMsgInfo(
            acct_key_list=_b58decode_list(src.get('accountKeys', None)),
            ix_list=tuple(SolCompiledIxInfo.from_dict(ix) for ix in src.get('instructions', None) or tuple()),
            recent_block_hash=base58.b58decode(recent_block_hash) if recent_block_hash else b''
        )

    @cached_method
    def __str__(self) -> str:
        return str_fmt_object(self)


@dataclass(frozen=True)
class SolTxBodyInfo:
    sig_list: Tuple[bytes, ...] = tuple()
    msg: Optional[SolTxMsgInfo] = None

    @staticmethod
    def from_dict(src: Dict[str, Any]) -> SolTxBodyInfo:
        msg = src.get('message', None)
        return SolTxBodyInfo(
            sig_list=_b58decode_list(src.get('signatures', None)),
            msg=SolTxMsgInfo.from_dict(msg) if msg is not None else None
        )


@dataclass(frozen=True)
class SolTxInfo:
    tx: Optional[SolTxBodyInfo] = None
    meta: Optional[SolTxMetaInfo] = None

    @staticmethod
    def from_tx_receipt(tx_receipt: Dict[str, Any]) -> SolTxInfo:
        tx = tx_receipt.get('transaction', None)
        meta = tx_receipt.get('meta', None)
        return SolTxInfo(
            tx=SolTxBodyInfo.from_dict(tx) if tx is not None else None,
            meta=SolTxMetaInfo.from_dict(meta) if meta is not None else None
        )

    @cached_method
    def __str__(self) -> str:
        if (self.tx is None) or (len(self.tx.sig_list) == 0):
            return 'SolTxInfo(?)'
        return f'SolTxInfo({self.sol_sig})'

    @property
    def tx_body(self) -> SolTxBodyInfo:
        if self.tx is None:
            raise SolMissingStructError('transaction', 'confirmed transaction')
        return self.tx

    @property
    def msg(self) -> SolTxMsgInfo:
        msg = self.tx_body.msg
        if msg is None:
            raise SolMissingStructError('message', str(self))
        return msg

    @property
    def tx_hash(self) -> bytes:
        """Transaction hash is the first signature"""
        sig_list = self.tx_body.sig_list
        if len(sig_list) == 0:
            raise SolMissingStructError('signature', 'transaction')
        return sig_list[0]

    @property
    def sol_sig(self) -> str:
        return base58.b58encode(self.tx_hash).decode('utf-8')

    @property
    def is_success(self) -> bool:
        return SolTxGate.is_successful(self)

    @property
    def address_space(self) -> SolAddressSpace:
        return SolAddressSpace.from_tx(self)

    def resolve_address(self, idx: int) -> SolAddress:
        return self.address_space.resolve(idx)

    @property
    def acct_key_list(self) -> List[SolAddress]:
        return self.address_space.all()

    @property
    def acct_key_str_list(self) -> List[str]:
        return self.address_space.all_str()

    def ix_walker(self) -> SolIxWalker:
        return SolIxWalker(self)

    def iter_compiled_ix(self) -> Iterator[SolIxView]:
        return SolIxWalker(self).iter_compiled_view()

    def iter_ix(self) -> Iterator[SolIxView]:
        return SolIxWalker(self).iter_view()


@dataclass(frozen=True)
class SolBlockInfo:
    block_slot: int
    block_hash: Optional[str] = None
    block_time: Optional[int] = None
    block_height: Optional[int] = None
    parent_block_slot: Optional[int] = None
    parent_block_hash: Optional[str] = None
    tx_list: Tuple[SolTxInfo, ...] = tuple()

    @staticmethod
    def from_block_receipt(block_slot: int, block_receipt: Dict[str, Any]) -> SolBlockInfo:
        return SolBlockInfo(
            block_slot=block_slot,
            block_hash=block_receipt.get('blockhash', None),
            block_time=block_receipt.get('blockTime', None),
            block_height=block_receipt.get('blockHeight', None),
            parent_block_slot=block_receipt.get('parentSlot', None),
            parent_block_hash=block_receipt.get('previousBlockhash', None),
            tx_list=tuple(
                SolTxInfo.from_tx_receipt(tx_receipt)
                for tx_receipt in block_receipt.get('transactions', None) or tuple()
            )
        )

    @cached_method
    def __str__(self) -> str:
        return str_fmt_object(self)

    def is_empty(self) -> bool:
        return len(self.tx_list) == 0

    def iter_successful_tx(self) -> Iterator[SolTxInfo]:
        return SolTxGate.iter_successful_tx(self)

    def iter_compiled_ix(self, skip_bad_tx: Optional[bool] = None) -> Iterator[SolIxView]:
        return self._iter_tx_view(SolTxInfo.iter_compiled_ix, skip_bad_tx)

    def iter_ix(self, skip_bad_tx: Optional[bool] = None) -> Iterator[SolIxView]:
        return self._iter_tx_view(SolTxInfo.iter_ix, skip_bad_tx)

    def _iter_tx_view(self, iter_view: Callable[[SolTxInfo], Iterator[SolIxView]],
                      skip_bad_tx: Optional[bool]) -> Iterator[SolIxView]:
        if skip_bad_tx is None:
            skip_bad_tx = Config().skip_bad_tx

        for tx in self.iter_successful_tx():
            with logging_context(block_slot=self.block_slot, sol_sig=str(tx)):
                try:
                    view_list = list(iter_view(tx))
                    for view in view_list:
                        _ = view.program_id, view.acct_list
                except SolBlockViewError as exc:
                    if not skip_bad_tx:
                        raise
                    LOG.warning(f'{self.block_slot}: skip the malformed transaction {tx}', exc_info=exc)
                    continue

            yield from view_list
