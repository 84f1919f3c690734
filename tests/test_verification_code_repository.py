from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from app.dto.verification_code_dto import VerificationCodeCreate
from app.exceptions.base_exception import StorageException
from app.models.verification_code import VerificationCode
from tests.fakes import count_code_rows

NOW = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)


def code_for(email, code, expires_at=None):
    return VerificationCodeCreate(email=email, code=code, expires_at=expires_at or NOW + timedelta(minutes=10))


class TestVerificationCodeRepository:

    @pytest.mark.asyncio
    async def test_issue_and_find_valid(self, code_repository):
        await code_repository.issue(code_for("a@x.com", "123456"))

        row = await code_repository.find_valid("a@x.com", "123456", now=NOW)

        assert row is not None
        assert row.email == "a@x.com"
        assert row.code == "123456"

    @pytest.mark.asyncio
    async def test_email_is_case_insensitive(self, code_repository):
        await code_repository.issue(code_for("Mixed@X.com", "123456"))

        assert await code_repository.find_valid("mixed@x.com", "123456", now=NOW) is not None
        assert await code_repository.find_valid("MIXED@X.COM", "123456", now=NOW) is not None

    @pytest.mark.asyncio
    async def test_wrong_code_not_found(self, code_repository):
        await code_repository.issue(code_for("a@x.com", "123456"))

        assert await code_repository.find_valid("a@x.com", "654321", now=NOW) is None
        assert await code_repository.find_valid("b@x.com", "123456", now=NOW) is None

    @pytest.mark.asyncio
    async def test_expired_code_rejected(self, code_repository):
        await code_repository.issue(code_for("a@x.com", "123456"))

        later = NOW + timedelta(minutes=10, seconds=1)
        assert await code_repository.find_valid("a@x.com", "123456", now=later) is None

    @pytest.mark.asyncio
    async def test_code_valid_at_exact_expiry(self, code_repository):
        await code_repository.issue(code_for("a@x.com", "123456"))

        assert await code_repository.find_valid("a@x.com", "123456", now=NOW + timedelta(minutes=10)) is not None

    @pytest.mark.asyncio
    async def test_clear_active_then_issue_keeps_one_row(self, code_repository):
        for code in ("111111", "222222", "333333"):
            await code_repository.clear_active("a@x.com")
            await code_repository.issue(code_for("a@x.com", code))

        assert await count_code_rows(code_repository.db, "a@x.com") == 1
        assert await code_repository.find_valid("a@x.com", "333333", now=NOW) is not None
        assert await code_repository.find_valid("a@x.com", "111111", now=NOW) is None

    @pytest.mark.asyncio
    async def test_clear_active_without_rows_is_noop(self, code_repository):
        await code_repository.clear_active("nobody@x.com")
        assert await count_code_rows(code_repository.db, "nobody@x.com") == 0

    @pytest.mark.asyncio
    async def test_clear_active_leaves_other_emails(self, code_repository):
        await code_repository.issue(code_for("a@x.com", "111111"))
        await code_repository.issue(code_for("b@x.com", "222222"))

        await code_repository.clear_active("a@x.com")

        assert await count_code_rows(code_repository.db, "a@x.com") == 0
        assert await count_code_rows(code_repository.db, "b@x.com") == 1

    @pytest.mark.asyncio
    async def test_consume_is_idempotent(self, code_repository):
        await code_repository.issue(code_for("a@x.com", "123456"))

        await code_repository.consume("a@x.com", "123456")
        await code_repository.consume("a@x.com", "123456")

        assert await code_repository.find_valid("a@x.com", "123456", now=NOW) is None

    @pytest.mark.asyncio
    async def test_duplicate_matches_are_a_storage_error(self, code_repository):
        # Bypass clear_active to break the single-active-code invariant
        await code_repository.issue(code_for("a@x.com", "123456"))
        await code_repository.issue(code_for("a@x.com", "123456"))

        with pytest.raises(StorageException):
            await code_repository.find_valid("a@x.com", "123456", now=NOW)

    @pytest.mark.asyncio
    async def test_purge_expired(self, code_repository):
        await code_repository.issue(code_for("old@x.com", "111111", expires_at=NOW - timedelta(minutes=1)))
        await code_repository.issue(code_for("new@x.com", "222222", expires_at=NOW + timedelta(minutes=5)))

        deleted = await code_repository.purge_expired(now=NOW)

        assert deleted == 1
        assert await count_code_rows(code_repository.db, "old@x.com") == 0
        assert await count_code_rows(code_repository.db, "new@x.com") == 1

    @pytest.mark.asyncio
    async def test_backend_failure_becomes_storage_error(self, code_repository, db_session, monkeypatch):
        async def broken_commit():
            raise OperationalError("INSERT", {}, Exception("database is locked"))

        monkeypatch.setattr(db_session, "commit", broken_commit)

        with pytest.raises(StorageException):
            await code_repository.issue(code_for("a@x.com", "123456"))
