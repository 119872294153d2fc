from __future__ import annotations

from typing import List, Sequence, TYPE_CHECKING

from .address import SolAddress
from .errors import SolAcctIdxOutOfRangeError

if TYPE_CHECKING:
    from .solana_block import SolTxInfo


class SolAddressSpace:
    """Unified index -> address table of one transaction.

    The space is the concatenation of three pools in a fixed order:
    message account keys, then the writable and the readonly addresses
    loaded from lookup tables.
    """

    def __init__(self, acct_key_list: Sequence[bytes],
                 writable_key_list: Sequence[bytes] = tuple(),
                 readonly_key_list: Sequence[bytes] = tuple()):
        self._acct_key_list = acct_key_list
        self._writable_key_list = writable_key_list
        self._readonly_key_list = readonly_key_list

    @staticmethod
    def from_tx(tx: SolTxInfo) -> SolAddressSpace:
        msg = tx.msg
        meta = tx.meta
        if meta is None:
            return SolAddressSpace(msg.acct_key_list)

        return SolAddressSpace(
            msg.acct_key_list,
            meta.loaded_writable_key_list,
            meta.loaded_readonly_key_list
        )

    def __len__(self) -> int:
        return len(self._acct_key_list) + len(self._writable_key_list) + len(self._readonly_key_list)

    def __str__(self) -> str:
        return (
            f'SolAddressSpace(acct_keys={self.acct_key_cnt}, '
            f'writable={self.writable_cnt}, '
            f'readonly={self.readonly_cnt})'
        )

    @property
    def acct_key_cnt(self) -> int:
        return len(self._acct_key_list)

    @property
    def writable_cnt(self) -> int:
        return len(self._writable_key_list)

    @property
    def readonly_cnt(self) -> int:
        return len(self._readonly_key_list)

    def resolve(self, idx: int) -> SolAddress:
        if idx >= 0:
            offset = idx
            for key_list in (self._acct_key_list, self._writable_key_list, self._readonly_key_list):
                if offset < len(key_list):
                    return SolAddress(key_list[offset])
                offset -= len(key_list)

        raise SolAcctIdxOutOfRangeError(idx, self.acct_key_cnt, self.writable_cnt, self.readonly_cnt)

    def resolve_list(self, idx_list: Sequence[int]) -> List[SolAddress]:
        return [self.resolve(idx) for idx in idx_list]

    def all(self) -> List[SolAddress]:
        acct_list = [SolAddress(key) for key in self._acct_key_list]
        acct_list.extend(SolAddress(key) for key in self._writable_key_list)
        acct_list.extend(SolAddress(key) for key in self._readonly_key_list)
        return acct_list

    def all_str(self) -> List[str]:
        return [str(acct) for acct in self.all()]
