"""Read-only query access to a FHIR Bundle."""

from typing import Any


class FHIRBundle:
    """Wraps a FHIR Bundle dict and answers queries by resource type."""

    def __init__(self, bundle: dict[str, Any] | None):
        self.bundle = bundle or {}
        self._resources = self._extract_entries(self.bundle)

    @staticmethod
    def _extract_entries(bundle: dict) -> list[dict]:
        """Extract resource entries from a FHIR Bundle."""
        if bundle.get("resourceType") != "Bundle":
            return []
        return [
            entry["resource"]
            for entry in bundle.get("entry") or []
            if entry.get("resource")
        ]

    def find_resource(self, resource_type: str) -> dict | None:
        """Find the first resource of the given type.

        Returns:
            Resource dict or None.
        """
        return next(
            (r for r in self._resources if r.get("resourceType") == resource_type),
            None,
        )

    def find_resources_by_type(self, resource_type: str) -> list[dict]:
        """Find all resources of the given type, in bundle order."""
        return [r for r in self._resources if r.get("resourceType") == resource_type]

    def __len__(self) -> int:
        return len(self._resources)
