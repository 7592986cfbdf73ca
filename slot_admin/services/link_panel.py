from slot_admin.services.store_identifier import StoreIdentifier


class LinkPanel:
    def __init__(self, *, client_base_url: str, store_identifier: StoreIdentifier) -> None:
        self.client_base_url = client_base_url.rstrip("/")
        self.store_identifier = store_identifier

    @property
    def client_link(self) -> str:
        # Derived on every read so a changed identifier never leaves a stale link.
        store_id = self.store_identifier.store_id
        if not store_id:
            return ""
        return build_client_link(self.client_base_url, store_id)


def build_client_link(client_base_url: str, store_id: str) -> str:
    return f"{client_base_url.rstrip('/')}/{store_id}"
