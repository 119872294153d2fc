from __future__ import annotations

from typing import Optional, List, Iterator, Tuple, Union, TYPE_CHECKING

from .address import SolAddress
from .errors import SolMissingStructError
from .solana_address_space import SolAddressSpace
from .solana_ix_shape import SolIxShape
from .utils.utils import cached_method, cached_property

if TYPE_CHECKING:
    from .solana_block import SolTxInfo, SolTxBodyInfo, SolTxMsgInfo, SolTxMetaInfo
    from .solana_ix_walker import SolIxWalker, SolIxPosition


class SolIxView:
    """Resolved view of one instruction of a transaction.

    Addresses are resolved through the address space of the owning
    transaction on access, the account list is memoized per view.
    """

    def __init__(self, walker: SolIxWalker, shape: SolIxShape, position: SolIxPosition):
        self._walker = walker
        self._shape = shape
        self._position = position

    @cached_method
    def __str__(self) -> str:
        return ':'.join([str(s) for s in self.ident])

    def __repr__(self) -> str:
        return f'SolIxView({self}, {self._shape})'

    @cached_property
    def ident(self) -> Union[Tuple[str, int], Tuple[str, int, int]]:
        if self._position.inner_idx is None:
            return self.sol_sig, self._position.top_idx
        return self.sol_sig, self._position.top_idx, self._position.inner_idx

    @property
    def sol_sig(self) -> str:
        return self.tx.sol_sig

    @property
    def shape(self) -> SolIxShape:
        return self._shape

    @property
    def position(self) -> SolIxPosition:
        return self._position

    @property
    def address_space(self) -> SolAddressSpace:
        return self._walker.address_space

    @property
    def program_id(self) -> SolAddress:
        return self.address_space.resolve(self._shape.program_id_idx)

    @cached_property
    def acct_list(self) -> List[SolAddress]:
        return self.address_space.resolve_list(self._shape.acct_idx_list)

    @property
    def data(self) -> bytes:
        return self._shape.data

    @property
    def stack_height(self) -> int:
        """Stack height or zero, the field appeared in Solana v1.14.6"""
        stack_height = self._shape.stack_height
        return stack_height if stack_height is not None else 0

    @property
    def maybe_stack_height(self) -> Optional[int]:
        """Stack height or None if the node did not record it"""
        return self._shape.stack_height

    @property
    def is_root(self) -> bool:
        return self._position.is_root

    @property
    def top_idx(self) -> int:
        return self._position.top_idx

    @property
    def inner_idx(self) -> Optional[int]:
        return self._position.inner_idx

    def is_program(self, program_id: Union[SolAddress, bytes]) -> bool:
        return self.program_id == program_id

    def iter_inner_ix(self) -> Iterator[SolIxView]:
        if not self.is_root:
            return iter(tuple())
        return self._walker.iter_inner_view(self._position.top_idx)

    def inner_ix_list(self) -> List[SolIxView]:
        return list(self.iter_inner_ix())

    def inner_ix(self, at: int) -> Optional[SolIxView]:
        if (not self.is_root) or (at < 0):
            return None

        for inner_idx, view in enumerate(self.iter_inner_ix()):
            if inner_idx == at:
                return view
        return None

    @property
    def compiled_ix(self) -> SolIxView:
        if self.is_root:
            return self
        return self._walker.compiled_view(self._position.top_idx)

    @property
    def tx(self) -> SolTxInfo:
        return self._walker.tx

    @property
    def tx_body(self) -> SolTxBodyInfo:
        return self.tx.tx_body

    @property
    def msg(self) -> SolTxMsgInfo:
        return self.tx.msg

    @property
    def meta(self) -> SolTxMetaInfo:
        meta = self.tx.meta
        if meta is None:
            raise SolMissingStructError('meta', str(self.tx))
        return meta
