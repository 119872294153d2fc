from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Union, TYPE_CHECKING

from .utils.utils import str_enum

if TYPE_CHECKING:
    from .solana_block import SolCompiledIxInfo, SolInnerIxInfo


@dataclass(frozen=True)
class SolIxShape:
    """One read interface over both physical instruction records.

    Top-level (compiled) instructions have no stack height field at all,
    inner instructions may carry it depending on the node version.
    """

    class Kind(Enum):
        Compiled = 0
        Inner = 1

    kind: Kind
    ix: Union[SolCompiledIxInfo, SolInnerIxInfo]

    @staticmethod
    def from_compiled_ix(ix: SolCompiledIxInfo) -> SolIxShape:
        return SolIxShape(SolIxShape.Kind.Compiled, ix)

    @staticmethod
    def from_inner_ix(ix: SolInnerIxInfo) -> SolIxShape:
        return SolIxShape(SolIxShape.Kind.Inner, ix)

    def __str__(self) -> str:
        return f'{str_enum(self.kind)}(program_id_idx={self.program_id_idx}, accts={list(self.acct_idx_list)})'

    @property
    def is_compiled(self) -> bool:
        return self.kind == SolIxShape.Kind.Compiled

    @property
    def program_id_idx(self) -> int:
        return self.ix.program_id_idx

    @property
    def acct_idx_list(self) -> Sequence[int]:
        return self.ix.acct_idx_list

    @property
    def data(self) -> bytes:
        return self.ix.data

    @property
    def stack_height(self) -> Optional[int]:
        if self.kind == SolIxShape.Kind.Compiled:
            return None
        elif self.kind == SolIxShape.Kind.Inner:
            return self.ix.stack_height

        assert False, f'Unknown instruction kind {self.kind}'
