"""Unit tests for artshop.services.auth_service: registration and login rules."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError

from artshop.core.errors import (
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidSecurityQuestionError,
    ValidationFailedError,
)
from artshop.core.security import decode_access_token, verify_answer, verify_password
from artshop.models import User
from artshop.services.auth_service import AuthService
from artshop.services.user_store import UserStore
from tests.sqlite_db import insert_user, make_sessionmaker

QUESTION = "What city were you born in?"


class AuthServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.engine, Session = make_sessionmaker()
        self.session = Session()
        self.service = AuthService(UserStore(self.session))

    def tearDown(self) -> None:
        self.session.close()
        self.engine.dispose()

    def _register(self, **overrides: object):
        kwargs = {
            "username": "alice",
            "email": "alice@example.com",
            "password": "secret1",
            "security_question": QUESTION,
            "security_answer": "Kathmandu",
        }
        kwargs.update(overrides)
        return self.service.register(**kwargs)


class TestRegister(AuthServiceTestCase):
    """register validates input, enforces uniqueness and stores only hashes."""

    def test_creates_user_role_and_token(self) -> None:
        result = self._register(full_name="Alice A", phone="555-0100")
        self.assertEqual(result.user.role, "user")
        self.assertEqual(result.user.full_name, "Alice A")
        claims = decode_access_token(result.token)
        self.assertEqual(claims.user_id, result.user.id)
        self.assertEqual(claims.email, "alice@example.com")
        self.assertEqual(claims.role, "user")

    def test_stores_hashes_not_plaintext(self) -> None:
        user = self._register().user
        self.assertNotEqual(user.password_hash, "secret1")
        self.assertTrue(verify_password("secret1", user.password_hash))
        self.assertEqual(user.security_question, QUESTION)
        self.assertTrue(verify_answer("kathmandu", user.security_answer))

    def test_email_is_lowercased(self) -> None:
        user = self._register(email="  Alice@Example.COM ").user
        self.assertEqual(user.email, "alice@example.com")

    def test_duplicate_email_any_case_rejected(self) -> None:
        self._register()
        with self.assertRaises(DuplicateEmailError):
            self._register(username="alice2", email="ALICE@example.com")

    def test_duplicate_username_rejected(self) -> None:
        self._register()
        with self.assertRaises(DuplicateUsernameError):
            self._register(email="other@example.com")

    def test_question_outside_fixed_list_rejected(self) -> None:
        with self.assertRaises(InvalidSecurityQuestionError):
            self._register(security_question="What is your favourite colour?")

    def test_missing_required_fields_rejected(self) -> None:
        for field in ("username", "email", "password", "security_question", "security_answer"):
            with self.subTest(field=field):
                with self.assertRaises(ValidationFailedError):
                    self._register(**{field: "   "})

    def test_validation_runs_before_any_store_access(self) -> None:
        store = MagicMock()
        with self.assertRaises(ValidationFailedError):
            AuthService(store).register("", "a@example.com", "pw", QUESTION, "x")
        store.get_by_email.assert_not_called()
        store.add.assert_not_called()

    def test_password_over_72_bytes_rejected(self) -> None:
        with self.assertRaises(ValidationFailedError):
            self._register(password="a" * 72 + "Y")

    def test_answer_over_72_bytes_rejected(self) -> None:
        with self.assertRaises(ValidationFailedError):
            self._register(security_answer="x" * 73)

    def test_optional_blank_fields_stored_as_null(self) -> None:
        user = self._register(full_name="  ", phone="").user
        self.assertIsNone(user.full_name)
        self.assertIsNone(user.phone)


class TestLogin(AuthServiceTestCase):
    """login returns the same error for unknown email and wrong password."""

    def test_register_then_login(self) -> None:
        self._register()
        result = self.service.login("alice@example.com", "secret1")
        self.assertEqual(result.user.username, "alice")
        self.assertEqual(decode_access_token(result.token).role, "user")

    def test_login_email_case_insensitive(self) -> None:
        self._register()
        result = self.service.login("Alice@Example.com", "secret1")
        self.assertEqual(result.user.email, "alice@example.com")

    def test_wrong_password_and_unknown_email_same_error(self) -> None:
        self._register()
        with self.assertRaises(InvalidCredentialsError) as wrong_pw:
            self.service.login("alice@example.com", "nope")
        with self.assertRaises(InvalidCredentialsError) as unknown:
            self.service.login("nobody@example.com", "secret1")
        self.assertEqual(wrong_pw.exception.message, unknown.exception.message)

    def test_token_embeds_stored_role(self) -> None:
        insert_user(self.session, username="root", email="root@example.com", password="rootpw1", role="admin")
        result = self.service.login("root@example.com", "rootpw1")
        self.assertEqual(decode_access_token(result.token).role, "admin")

    def test_missing_fields_rejected(self) -> None:
        with self.assertRaises(ValidationFailedError):
            self.service.login("", "secret1")
        with self.assertRaises(ValidationFailedError):
            self.service.login("alice@example.com", "")

    def test_whitespace_password_rejected_like_register(self) -> None:
        self._register()
        with self.assertRaises(ValidationFailedError):
            self.service.login("alice@example.com", "   ")

    def test_password_longer_than_stored_prefix_fails(self) -> None:
        self._register(password="a" * 72)
        self.service.login("alice@example.com", "a" * 72)
        with self.assertRaises(InvalidCredentialsError):
            self.service.login("alice@example.com", "a" * 72 + "X")


class RacingUserStore(UserStore):
    """Store whose uniqueness pre-checks miss a row committed by a concurrent sign-up."""

    def __init__(self, session) -> None:
        super().__init__(session)
        self.email_lookups = 0

    def get_by_email(self, email: str) -> User | None:
        self.email_lookups += 1
        if self.email_lookups == 1:
            return None
        return super().get_by_email(email)

    def get_by_username(self, username: str) -> User | None:
        return None


class TestRegisterRace(AuthServiceTestCase):
    """A unique-constraint violation at commit maps back to the colliding key."""

    def setUp(self) -> None:
        super().setUp()
        insert_user(self.session, username="bob", email="bob@example.com")
        self.racing = AuthService(RacingUserStore(self.session))

    def test_email_race_is_duplicate_email(self) -> None:
        with self.assertRaises(DuplicateEmailError):
            self.racing.register("bob2", "BOB@example.com", "secret1", QUESTION, "x")
        self._assert_session_usable()

    def test_username_race_is_duplicate_username(self) -> None:
        with self.assertRaises(DuplicateUsernameError):
            self.racing.register("bob", "other@example.com", "secret1", QUESTION, "x")
        self._assert_session_usable()

    def _assert_session_usable(self) -> None:
        self.assertEqual(self.session.query(User).count(), 1)
        result = self.service.register("carol", "carol@example.com", "secret1", QUESTION, "x")
        self.assertEqual(result.user.username, "carol")
        self.assertEqual(self.session.query(User).count(), 2)


class TestRecoveryPairConstraint(AuthServiceTestCase):
    """security_question and security_answer are both set or both NULL."""

    def _insert(self, question: str | None, answer: str | None) -> None:
        self.session.add(
            User(
                username="dave",
                email="dave@example.com",
                password_hash="$2b$10$placeholderplaceholderplaceholderplaceholderpla",
                security_question=question,
                security_answer=answer,
            )
        )
        self.session.commit()

    def test_question_without_answer_rejected(self) -> None:
        with self.assertRaises(IntegrityError):
            self._insert(QUESTION, None)
        self.session.rollback()
        self.assertEqual(self.session.query(User).count(), 0)

    def test_answer_without_question_rejected(self) -> None:
        with self.assertRaises(IntegrityError):
            self._insert(None, "$2b$10$digest")
        self.session.rollback()

    def test_neither_set_allowed(self) -> None:
        self._insert(None, None)
        self.assertEqual(self.session.query(User).count(), 1)


if __name__ == "__main__":
    unittest.main()
