"""Bundle store interface."""

from typing import Protocol

from cadence.core.models import Bundle


class BundleStore(Protocol):
    """Interface for creating and scanning bundles."""

    def create_bundle(self, data: dict) -> Bundle:
        """
        Persist a new bundle.

        Raises DuplicateOccurrence if a bundle with the same
        (templateId, anchorDate) already exists.
        """
        ...

    def list_bundles(self) -> list[Bundle]:
        """Fetch all bundles. No indexed lookup is assumed."""
        ...

    def get_bundle(self, bundle_id: str) -> Bundle | None:
        ...

    def update_bundle(self, bundle_id: str, updates: dict) -> Bundle | None:
        """Partial update. Returns None if the bundle does not exist."""
        ...
