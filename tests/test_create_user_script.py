"""Tests for the create_user command: verified accounts with the requested role."""

import unittest
from contextlib import redirect_stderr, redirect_stdout
from io import StringIO
from unittest.mock import patch

from app.models import User
from app.schemas.auth import ADMIN_ROLE, DEFAULT_ROLE
from app.scripts import create_user as script
from tests.support import PASSWORD, make_session_factory


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        self.session_factory = make_session_factory()
        patcher = patch.object(script, "SessionLocal", self.session_factory)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = StringIO(), StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = script.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def _user(self, email: str) -> User | None:
        db = self.session_factory()
        try:
            user = db.query(User).filter(User.email == email).first()
            if user is not None:
                db.expunge(user)
            return user
        finally:
            db.close()

    def test_creates_verified_admin(self) -> None:
        code, out, _ = self._run("Site Admin", "Admin@Example.com", PASSWORD, "--admin")
        self.assertEqual(code, 0)
        self.assertIn("admin@example.com", out)
        user = self._user("admin@example.com")
        self.assertIsNotNone(user.email_verified_at)
        self.assertEqual(user.role_names, [ADMIN_ROLE])

    def test_default_role(self) -> None:
        self._run("Reg", "reg@example.com", PASSWORD)
        self.assertEqual(self._user("reg@example.com").role_names, [DEFAULT_ROLE])

    def test_duplicate_email_reports_field(self) -> None:
        self._run("One", "dup@example.com", PASSWORD)
        code, _, err = self._run("Two", "dup@example.com", PASSWORD)
        self.assertEqual(code, 1)
        self.assertIn("email:", err)

    def test_short_password_rejected(self) -> None:
        code, _, err = self._run("Short", "short@example.com", "abc")
        self.assertEqual(code, 1)
        self.assertIn("Password", err)
        self.assertIsNone(self._user("short@example.com"))


if __name__ == "__main__":
    unittest.main()
