from .common.address import SolAddress, SolPubKey
from .common.config import Config
from .common.errors import SolBlockViewError, SolAcctIdxOutOfRangeError, SolMissingStructError
from .common.solana_address_space import SolAddressSpace
from .common.solana_block import (
    SolBlockInfo, SolTxInfo, SolTxBodyInfo, SolTxMsgInfo, SolTxMetaInfo, SolTxErrorInfo,
    SolCompiledIxInfo, SolInnerIxInfo, SolInnerIxListInfo
)
from .common.solana_ix_shape import SolIxShape
from .common.solana_ix_view import SolIxView
from .common.solana_ix_walker import SolIxWalker, SolIxPosition
from .common.solana_tx_gate import SolTxGate
from .common.utils.json_logger import configure_logging, logging_context
