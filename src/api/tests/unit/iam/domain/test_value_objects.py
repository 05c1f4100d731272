"""Unit tests for IAM value objects."""

import pytest

from iam.domain.value_objects import PermissionId, RoleId, RoleName, UserId


class TestEntityIds:
    """Tests for ULID based identifiers."""

    @pytest.mark.parametrize("id_class", [UserId, RoleId, PermissionId])
    def test_generate_produces_valid_ulid(self, id_class):
        """Generated ids parse back into the same type."""
        generated = id_class.generate()

        assert isinstance(generated, id_class)
        assert id_class.from_string(generated.value) == generated
        assert len(generated.value) == 26

    def test_from_string_rejects_invalid_value(self):
        """Non-ULID strings are rejected with the type name."""
        with pytest.raises(ValueError, match="Invalid RoleId"):
            RoleId.from_string("not-a-ulid")

    def test_ids_of_different_types_are_not_equal(self):
        """A RoleId never equals a UserId with the same value."""
        value = RoleId.generate().value

        assert RoleId(value) != UserId(value)

    def test_str_is_the_value(self):
        """str() renders the raw ULID."""
        role_id = RoleId.generate()

        assert str(role_id) == role_id.value


class TestRoleName:
    """Tests for role name validation."""

    def test_strips_whitespace(self):
        """Surrounding whitespace is not part of the name."""
        assert RoleName("  Auditor ").value == "Auditor"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_rejects_blank_names(self, name):
        """A role needs a visible name."""
        with pytest.raises(ValueError, match="must not be empty"):
            RoleName(name)

    def test_rejects_names_over_limit(self):
        """Names are limited to MAX_LENGTH characters."""
        RoleName("x" * RoleName.MAX_LENGTH)

        with pytest.raises(ValueError, match="at most 100"):
            RoleName("x" * (RoleName.MAX_LENGTH + 1))

    def test_equal_after_normalization(self):
        """Names differing only in padding are equal."""
        assert RoleName("Auditor") == RoleName(" Auditor ")
