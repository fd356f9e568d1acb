"""Account registry."""

from typing import Iterator, Optional

from splitledger.domain.entities import Account
from splitledger.domain.errors import (
    ConflictError,
    NotFoundError,
    account_not_found,
    duplicate_account,
    registry_frozen,
)


class AccountRegistry:
    """Append-only, insertion-ordered collection of accounts.

    An account's position in the registry is its index. Indices never change,
    so transactions and balance entries refer to accounts by index only.
    """

    def __init__(self):
        self._accounts: list[Account] = []
        self._indices: dict[str, int] = {}
        self._frozen = False

    def add_account(self, acronym: str, name: str) -> int:
        """Append a new account.

        Args:
            acronym: Two letter acronym
            name: Display name

        Returns:
            Index of the new account

        Raises:
            ConflictError: If the acronym is already registered or the
                registry is frozen
        """
        if self._frozen:
            raise ConflictError(registry_frozen(acronym))
        if acronym in self._indices:
            raise ConflictError(duplicate_account(acronym))

        index = len(self._accounts)
        self._accounts.append(Account(acronym=acronym, name=name))
        self._indices[acronym] = index
        return index

    def freeze(self) -> None:
        """Reject any further add_account call."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def find_index(self, acronym: str) -> Optional[int]:
        """Return the index for an acronym, or None if it is not registered."""
        return self._indices.get(acronym)

    def resolve(self, acronym: str) -> int:
        """Return the index for an acronym.

        Raises:
            NotFoundError: If the acronym is not registered
        """
        index = self.find_index(acronym)
        if index is None:
            raise NotFoundError(account_not_found(acronym))
        return index

    def get_account(self, index: int) -> Account:
        return self._accounts[index]

    def list_accounts(self) -> list[Account]:
        return list(self._accounts)

    def __getitem__(self, index: int) -> Account:
        return self._accounts[index]

    def __iter__(self) -> Iterator[Account]:
        return iter(self._accounts)

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, acronym: object) -> bool:
        return acronym in self._indices
