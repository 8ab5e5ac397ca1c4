"""User registration and account validation: commands and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.account.user import User
from storefront.domain import storefront
from storefront.shared.errors import load_or_not_found, translate_unique_violation

logger = structlog.get_logger(__name__)

_DUPLICATE_EMAIL = "User with that email already exist"


@storefront.command(part_of="User")
class RegisterUser:
    """Sign up a new shopper."""

    first_name: String(required=True, max_length=100)
    last_name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)


@storefront.command(part_of="User")
class ValidateAccount:
    """Mark a shopper's account as validated."""

    user_id: Identifier(required=True)


@storefront.command_handler(part_of=User)
class UserAccountHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        email = command.email.strip().lower()

        if repo._dao.query.filter(email=email).all().items:
            raise ValidationError({"user": [_DUPLICATE_EMAIL]})

        user = User.register(
            first_name=command.first_name,
            last_name=command.last_name,
            email=email,
        )
        with translate_unique_violation("user", email=_DUPLICATE_EMAIL):
            repo.add(user)

        logger.info("User registered", user_id=str(user.id))
        return str(user.id)

    @handle(ValidateAccount)
    def validate_account(self, command):
        user = load_or_not_found(User, command.user_id, f"User with id {command.user_id} not found")
        user.validate_account()
        current_domain.repository_for(User).add(user)

        logger.info("Account validated", user_id=str(user.id))
        return user.to_dict()
