from __future__ import annotations

from typing import Optional


class SolBlockViewError(RuntimeError):
    pass


class SolAcctIdxOutOfRangeError(SolBlockViewError):
    def __init__(self, idx: int, acct_key_cnt: int, writable_cnt: int, readonly_cnt: int):
        super().__init__(idx, acct_key_cnt, writable_cnt, readonly_cnt)
        self._idx = idx
        self._acct_key_cnt = acct_key_cnt
        self._writable_cnt = writable_cnt
        self._readonly_cnt = readonly_cnt

    def __str__(self) -> str:
        return (
            f'Account index {self._idx} is out of range: '
            f'account keys {self._acct_key_cnt}, '
            f'loaded writable {self._writable_cnt}, '
            f'loaded readonly {self._readonly_cnt}'
        )

    @property
    def idx(self) -> int:
        return self._idx

    @property
    def acct_key_cnt(self) -> int:
        return self._acct_key_cnt

    @property
    def writable_cnt(self) -> int:
        return self._writable_cnt

    @property
    def readonly_cnt(self) -> int:
        return self._readonly_cnt

    @property
    def total_cnt(self) -> int:
        return self._acct_key_cnt + self._writable_cnt + self._readonly_cnt


class SolMissingStructError(SolBlockViewError):
    def __init__(self, struct_name: str, owner: Optional[str] = None):
        super().__init__(struct_name, owner)
        self._struct_name = struct_name
        self._owner = owner

    def __str__(self) -> str:
        if self._owner:
            return f'{self._owner} has no {self._struct_name}'
        return f'Missing {self._struct_name}'

    @property
    def struct_name(self) -> str:
        return self._struct_name

    @property
    def owner(self) -> Optional[str]:
        return self._owner
