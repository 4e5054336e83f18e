"""Exceptions raised while assembling QRDA documents."""


class QRDAError(Exception):
    """Base error for QRDA document generation."""

    pass


class MissingRequiredResource(QRDAError):
    """The clinical bundle lacks a record the document cannot exist without."""

    def __init__(self, resource_type: str, message: str | None = None):
        self.resource_type = resource_type
        super().__init__(message or f"{resource_type} not found in bundle")
