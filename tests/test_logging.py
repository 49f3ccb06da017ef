import json
import logging

from src.shared.infrastructure.logging import CustomJsonFormatter, redact_credentials


def make_record(message, **extra):
    record = logging.LogRecord("test", logging.ERROR, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_redact_credentials_masks_password_only():
    text = "failed: mysql+aiomysql://app:p%40ss@db:3306/blog (timeout)"

    assert redact_credentials(text) == "failed: mysql+aiomysql://app:***@db:3306/blog (timeout)"


def test_redact_credentials_leaves_plain_text_alone():
    assert redact_credentials("user@example.com at http://host/path") == "user@example.com at http://host/path"


def test_formatter_masks_urls_in_any_field():
    formatter = CustomJsonFormatter("%(message)s", environment="test")
    record = make_record(
        "connect to postgresql://root:hunter2@db/test_db failed",
        error="postgresql+asyncpg://root:hunter2@db:5432/test_db refused",
        db_password="hunter2",
    )

    output = formatter.format(record)
    data = json.loads(output)

    assert "hunter2" not in output
    assert data["error"] == "postgresql+asyncpg://root:***@db:5432/test_db refused"
    assert data["db_password"] == "***REDACTED***"
    assert data["environment"] == "test"
