"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A shopper signed up."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    first_name: String(required=True)
    last_name: String(required=True)
    registered_at: DateTime(required=True)


@storefront.event(part_of="User")
class AccountValidated:
    """A shopper's account was validated and may now pay for orders."""

    __version__ = 1

    user_id: Identifier(required=True)
    validated_at: DateTime(required=True)
