"""Error taxonomy for the storefront.

NotFound and BadRequest are Protean's own `ObjectNotFoundError` and
`ValidationError`. Forbidden and InternalServer have no Protean counterpart
and are defined here.
"""

from contextlib import contextmanager

from protean.exceptions import ObjectNotFoundError, ProteanException, ValidationError
from protean.utils.globals import current_domain


class ForbiddenError(ProteanException):
    """The caller is not allowed to perform the operation (403)."""


class InternalServerError(ProteanException):
    """The operation hit a state the system treats as a server fault (500)."""


def load_or_not_found(aggregate_cls, identifier, message: str):
    """Fetch an aggregate or raise `ObjectNotFoundError` with `message`."""
    record = current_domain.repository_for(aggregate_cls).get_or_none(identifier)
    if record is None:
        raise ObjectNotFoundError(message)
    return record


def load_or_bad_request(aggregate_cls, identifier, key: str, message: str):
    """Fetch an aggregate or raise `ValidationError({key: [message]})`."""
    record = current_domain.repository_for(aggregate_cls).get_or_none(identifier)
    if record is None:
        raise ValidationError({key: [message]})
    return record


@contextmanager
def translate_unique_violation(key: str, **messages_by_field: str):
    """Re-raise unique-constraint failures on the named fields as domain errors.

    Protean reports a violated unique field as ``ValidationError({field: [...]})``.
    When the failing field is one of ``messages_by_field``, the error is
    replaced by ``ValidationError({key: [message]})``. Any other error passes
    through untouched.
    """
    try:
        yield
    except ValidationError as exc:
        if isinstance(exc.messages, dict):
            for field_name, message in messages_by_field.items():
                if field_name in exc.messages:
                    raise ValidationError({key: [message]}) from exc
        raise
