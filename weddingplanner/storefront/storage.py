"""Browser-style key/value storage (localStorage and sessionStorage)"""

from typing import Optional

TOKEN_KEY = "token"
USER_ROLE_KEY = "userRole"
PAYMENT_TX_REF_KEY = "payment_tx_ref"
PAYMENT_ID_KEY = "payment_id"


class KeyValueStore:
    """String-valued store with the Web Storage method names"""

    def __init__(self, initial: Optional[dict] = None):
        self._data: dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set_item(key, value)

    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value) -> None:
        self._data[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._data


class BrowserStorage:
    def __init__(self, local: Optional[KeyValueStore] = None, session: Optional[KeyValueStore] = None):
        self.local = local or KeyValueStore()
        self.session = session or KeyValueStore()

    def get_any(self, key: str) -> Optional[str]:
        """Read a key from local storage first, then session storage"""
        return self.local.get_item(key) or self.session.get_item(key)
