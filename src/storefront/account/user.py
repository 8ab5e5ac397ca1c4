"""User aggregate: the shopper who owns a cart and pays for orders."""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from storefront.domain import storefront


@storefront.aggregate
class User:
    """A registered shopper.

    `is_validated` gates payment: an order can only be paid by an owner whose
    account has been validated.
    """

    first_name: String(required=True, max_length=100)
    last_name: String(required=True, max_length=100)
    email: String(required=True, max_length=254, unique=True)
    is_validated: Boolean(default=False)
    created_at: DateTime()

    @classmethod
    def register(cls, first_name, last_name, email):
        from storefront.account.events import UserRegistered

        now = datetime.now(UTC)
        user = cls(
            first_name=first_name,
            last_name=last_name,
            email=email.strip().lower(),
            is_validated=False,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=user.email,
                first_name=first_name,
                last_name=last_name,
                registered_at=now,
            )
        )
        return user

    def validate_account(self):
        from storefront.account.events import AccountValidated

        if self.is_validated:
            raise ValidationError({"user": ["User already validated"]})

        self.is_validated = True
        self.raise_(AccountValidated(user_id=self.id, validated_at=datetime.now(UTC)))
