from datetime import datetime, timedelta, timezone

from app.utils.code_generator import generate_verification_code


def test_code_is_six_digits_without_leading_zero():
    for _ in range(500):
        code, _ = generate_verification_code()
        assert len(code) == 6
        assert code.isdigit()
        assert 100000 <= int(code) <= 999999


def test_expiry_is_ten_minutes_from_now():
    now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    _, expires_at = generate_verification_code(now=now)
    assert expires_at == now + timedelta(minutes=10)


def test_custom_ttl():
    now = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)
    _, expires_at = generate_verification_code(ttl_minutes=3, now=now)
    assert expires_at - now == timedelta(minutes=3)


def test_expiry_defaults_to_current_time():
    before = datetime.now(timezone.utc)
    _, expires_at = generate_verification_code()
    assert before + timedelta(minutes=10) <= expires_at <= datetime.now(timezone.utc) + timedelta(minutes=10)
