"""Tests for unique-violation translation."""

import pytest
from protean.exceptions import ValidationError
from storefront.shared.errors import translate_unique_violation


class TestTranslateUniqueViolation:
    def test_named_field_is_translated(self):
        with pytest.raises(ValidationError) as exc:
            with translate_unique_violation("cart", user_id="An user can create only one cart"):
                raise ValidationError({"user_id": ["Cart with user_id 'u1' is already present."]})
        assert exc.value.messages == {"cart": ["An user can create only one cart"]}

    def test_other_fields_pass_through(self):
        original = {"quantity": ["Value must be at least 1"]}
        with pytest.raises(ValidationError) as exc:
            with translate_unique_violation("cart", user_id="An user can create only one cart"):
                raise ValidationError(original)
        assert exc.value.messages == original

    def test_no_error_is_a_no_op(self):
        with translate_unique_violation("cart", user_id="unused"):
            pass
