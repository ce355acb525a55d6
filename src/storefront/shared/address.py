"""Postal address value object, shared by user address books and orders."""

from protean.fields import String

from storefront.domain import storefront


@storefront.value_object
class Address:
    """A delivery address.

    Once recorded on an Order, the address is immutable: it represents where
    the order was shipped regardless of later changes to the user's address book.
    """

    street: String(required=True, max_length=200)
    city: String(required=True, max_length=100)
    postal_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100)

    @classmethod
    def build(cls, street, city, postal_code, country):
        """Create an address from raw input, trimming surrounding whitespace."""
        return cls(
            street=(street or "").strip(),
            city=(city or "").strip(),
            postal_code=(postal_code or "").strip(),
            country=(country or "").strip(),
        )

    def __str__(self):
        return f"{self.street}, {self.city} {self.postal_code}, {self.country}"
