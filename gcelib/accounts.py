"""Named account credentials and the lookup used by request validation."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol


@dataclass(frozen=True)
class Account:
    """A named cloud account.

    Attributes:
        name: Account name referenced by deploy requests
        project: Cloud project the account operates in
        regions: Regions the account may deploy to
        environment: Free-form environment label (e.g. 'prod')
    """

    name: str
    project: Optional[str] = None
    regions: List[str] = field(default_factory=list)
    environment: Optional[str] = None


class AccountLookup(Protocol):
    def find_by_name(self, name: str) -> Optional[Account]:
        ...


class MapBackedAccountRepository:
    """In-memory account store keyed by account name."""

    def __init__(self, accounts: Optional[List[Account]] = None):
        self._accounts: Dict[str, Account] = {}
        for account in accounts or []:
            self.save(account.name, account)

    def save(self, name: str, account: Account) -> Account:
        self._accounts[name] = account
        return account

    def find_by_name(self, name: str) -> Optional[Account]:
        return self._accounts.get(name)
