from __future__ import annotations

import base58
import solders.pubkey


SolPubKey = solders.pubkey.Pubkey


class SolAddress:
    """Wrapper over the raw bytes of one account key.

    The wrapper never copies: it keeps a reference to the bytes owned by the
    block record it was resolved from. Equality is byte-wise and works against
    other addresses and any bytes-like value.
    """

    __slots__ = ('_raw',)

    def __init__(self, raw: bytes):
        self._raw = raw

    @property
    def raw(self) -> bytes:
        return self._raw

    def __bytes__(self) -> bytes:
        return bytes(self._raw)

    def __len__(self) -> int:
        return len(self._raw)

    def __str__(self) -> str:
        return base58.b58encode(self._raw).decode('utf-8')

    def __repr__(self) -> str:
        return f'SolAddress({self})'

    def __hash__(self) -> int:
        return hash(bytes(self._raw))

    def __eq__(self, other) -> bool:
        if isinstance(other, SolAddress):
            return self._raw == other._raw
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self._raw == other
        return NotImplemented

    def hex(self) -> str:
        return self._raw.hex()

    def to_pubkey(self) -> SolPubKey:
        return SolPubKey.from_bytes(bytes(self._raw))

    @staticmethod
    def from_string(value: str) -> SolAddress:
        return SolAddress(base58.b58decode(value))
