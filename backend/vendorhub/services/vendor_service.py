# Overview: Service-layer operations for vendors and brands; encapsulates business logic and store work.

"""
Vendor Service

Vendors own brands, issues and invoices. Deleting a vendor removes all of
them; the store applies the cascade.

Identifiers and date_added are always assigned server-side.
"""

from ..schemas import BrandInput, VendorInput
from ..stores.base import RecordStore
from ..validation import NotFoundError
from vendorhub.time_utils import today


class VendorNotFoundError(NotFoundError):
    """Raised when a vendor is not found."""
    pass


class BrandNotFoundError(NotFoundError):
    """Raised when a brand is not found."""
    pass


def create_vendor(store: RecordStore, data: VendorInput) -> dict:
    """
    Create a new vendor.

    Args:
        store: Active record store
        data: Validated vendor fields

    Returns:
        Created vendor record
    """
    fields = data.to_fields()
    fields["date_added"] = today()
    return store.add_vendor(fields)


def delete_vendor(store: RecordStore, vendor_id: int) -> None:
    """
    Delete a vendor with its brands, issues and invoices.

    Raises:
        VendorNotFoundError: If vendor not found
    """
    if not store.delete_vendor(vendor_id):
        raise VendorNotFoundError(f"Vendor {vendor_id} not found")


def create_brand(store: RecordStore, data: BrandInput) -> dict:
    """
    Create a brand under an existing vendor.

    Raises:
        NotFoundError: If the vendor does not exist
    """
    fields = data.to_fields()
    fields["date_added"] = today()
    return store.add_brand(fields)


def delete_brand(store: RecordStore, brand_id: int) -> None:
    if not store.delete_brand(brand_id):
        raise BrandNotFoundError(f"Brand {brand_id} not found")
