import logging

from trackmint.utils.logging_redaction import RedactingFilter, redact_message


def test_query_tokens_are_redacted():
    message = "GET https://finnhub.io/api/v1/quote?symbol=AAPL&token=abc123 failed"
    assert "abc123" not in redact_message(message)
    assert "token=[REDACTED]" in redact_message(message)


def test_gemini_key_is_redacted():
    message = "POST https://generativelanguage.googleapis.com/v1beta/models/x:generateContent?key=AIzaSECRET"
    assert "AIzaSECRET" not in redact_message(message)


def test_bearer_and_config_keys_are_redacted():
    assert "s3cr3t" not in redact_message("Authorization: Bearer s3cr3t")
    assert "xyz" not in redact_message("FINNHUB_API_KEY=xyz")


def test_filter_rewrites_record_with_args():
    record = logging.LogRecord(
        "test", logging.INFO, __file__, 1, "calling %s", ("https://x?token=zzz",), None
    )
    assert RedactingFilter().filter(record) is True
    assert record.getMessage() == "calling https://x?token=[REDACTED]"
