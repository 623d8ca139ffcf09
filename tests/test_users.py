"""Tests for the user directory."""

import pytest

from fintrack.domain.errors import (
    ConflictError,
    EmailTakenError,
    InvalidCredentialsError,
    ValidationError,
)
from fintrack.domain.passwords import hash_password, verify_password


class TestRegister:
    """Tests for UserDirectory.register."""

    def test_register_user(self, user_directory):
        """Test registering a user assigns an id and keeps the fields."""
        user = user_directory.register(name="Ada", email="ada@example.com", password="pw12345")

        assert user.id == 1
        assert user.name == "Ada"
        assert user.email == "ada@example.com"
        assert user_directory.get_user(1) == user

    def test_register_assigns_increasing_ids(self, user_directory):
        """Test ids are allocated one after another."""
        first = user_directory.register(name="Ada", email="ada@example.com", password="pw")
        second = user_directory.register(name="Bob", email="bob@example.com", password="pw")

        assert second.id == first.id + 1

    def test_password_is_not_stored_in_plaintext(self, user_directory):
        """Test the stored form is a hash, not the password."""
        user = user_directory.register(name="Ada", email="ada@example.com", password="pw12345")

        assert user.password_hash != "pw12345"
        assert "pw12345" not in user.password_hash
        assert verify_password("pw12345", user.password_hash)

    def test_duplicate_email_fails(self, user_directory):
        """Test registering the same email twice fails and adds nobody."""
        user_directory.register(name="Ada", email="ada@example.com", password="pw")

        with pytest.raises(EmailTakenError, match="already exists"):
            user_directory.register(name="Imposter", email="ada@example.com", password="other")

        assert len(user_directory.list_users()) == 1

    def test_duplicate_email_is_a_conflict(self, user_directory):
        """Test EmailTakenError is reported as a conflict."""
        user_directory.register(name="Ada", email="ada@example.com", password="pw")

        with pytest.raises(ConflictError):
            user_directory.register(name="Ada", email="ada@example.com", password="pw")

    def test_email_match_is_case_sensitive(self, user_directory):
        """Test emails differing only by case are distinct users."""
        user_directory.register(name="Ada", email="ada@example.com", password="pw")
        user = user_directory.register(name="Ada", email="Ada@example.com", password="pw")

        assert user.id == 2

    @pytest.mark.parametrize("email", ["", "not-an-email", "a@b", "ada@example."])
    def test_invalid_email_rejected(self, user_directory, email):
        """Test malformed emails are rejected."""
        with pytest.raises(ValidationError):
            user_directory.register(name="Ada", email=email, password="pw")
        assert user_directory.list_users() == []

    def test_blank_name_rejected(self, user_directory):
        """Test a blank name is rejected."""
        with pytest.raises(ValidationError):
            user_directory.register(name="   ", email="ada@example.com", password="pw")

    def test_failed_register_does_not_persist(self, user_directory, temp_db):
        """Test a rejected registration writes nothing."""
        user_directory.register(name="Ada", email="ada@example.com", password="pw")
        before = temp_db.read_slot("fintrack_users")

        with pytest.raises(EmailTakenError):
            user_directory.register(name="Ada", email="ada@example.com", password="pw")

        assert temp_db.read_slot("fintrack_users") == before

    def test_register_rolled_back_when_save_fails(self, user_directory, store):
        """Test a user whose save fails is not kept in memory."""

        class FailingGateway:
            def save(self, store):
                raise RuntimeError("disk full")

        store.gateway = FailingGateway()

        with pytest.raises(RuntimeError):
            user_directory.register(name="Ada", email="ada@example.com", password="pw")
        assert user_directory.list_users() == []


class TestAuthenticate:
    """Tests for UserDirectory.authenticate."""

    def test_authenticate_success(self, user_directory, sample_user):
        """Test correct credentials return the user."""
        user = user_directory.authenticate("test@example.com", "secret123")
        assert user == sample_user

    def test_wrong_password_and_unknown_email_look_the_same(self, user_directory, sample_user):
        """Test both failure modes raise the same error and message."""
        with pytest.raises(InvalidCredentialsError) as wrong_password:
            user_directory.authenticate("test@example.com", "wrong")
        with pytest.raises(InvalidCredentialsError) as unknown_email:
            user_directory.authenticate("nobody@example.com", "secret123")

        assert str(wrong_password.value) == str(unknown_email.value)
        assert str(wrong_password.value) == "Invalid email or password"

    def test_authenticate_requires_exact_pair(self, user_directory, sample_user, other_user):
        """Test one user's password does not unlock another user."""
        with pytest.raises(InvalidCredentialsError):
            user_directory.authenticate("test@example.com", "hunter22")
        assert user_directory.authenticate("other@example.com", "hunter22") == other_user


class TestPasswords:
    """Tests for password hashing helpers."""

    def test_same_password_hashes_differently(self):
        """Test each hash is independently salted."""
        first = hash_password("pw")
        second = hash_password("pw")

        assert first != second
        assert verify_password("pw", first)
        assert verify_password("pw", second)

    def test_malformed_hash_does_not_verify(self):
        """Test a corrupt stored hash is a mismatch, not an error."""
        assert not verify_password("pw", "hashed_pw")
