"""EmailSpy: the in-memory client double used by applications under test."""

from __future__ import annotations

import pytest

from poodle.adapters.email.message import Message
from poodle.adapters.memory.email import TEST_MODE_MESSAGE, EmailSpy
from poodle.domain.errors import RateLimitError, ValidationError

SENDER = "sender@example.com"


@pytest.fixture
def spy() -> EmailSpy:
    return EmailSpy()


@pytest.mark.os_agnostic
def test_send_records_every_field(spy: EmailSpy) -> None:
    """A delivery stores addresses, subject, bodies, and a UTC timestamp."""
    spy.send(SENDER, "a@example.com", "Welcome", html="<b>Hi</b>", text="Hi")

    delivery = spy.last_delivery
    assert delivery is not None
    assert delivery["from"] == SENDER
    assert delivery["to"] == "a@example.com"
    assert (delivery["html"], delivery["text"]) == ("<b>Hi</b>", "Hi")
    assert delivery["sent_at"].tzinfo is not None


@pytest.mark.os_agnostic
def test_results_are_test_mode_with_running_ids(spy: EmailSpy) -> None:
    """Each result is successful and numbered by delivery order."""
    first = spy.send_text(SENDER, "a@example.com", "One", "x")
    second = spy.send_html(SENDER, "b@example.com", "Two", "<p>x</p>")

    assert first.message == TEST_MODE_MESSAGE
    assert first.data == {"test_mode": True, "delivery_id": 1}
    assert second.data["delivery_id"] == 2


@pytest.mark.os_agnostic
def test_send_email_accepts_message_and_mapping(spy: EmailSpy) -> None:
    """Both message forms the real client accepts are accepted."""
    spy.send_email(Message(SENDER, "a@example.com", "S", text="x"))
    spy.send_email({"from": SENDER, "to": "b@example.com", "subject": "S", "text": "x"})

    spy.assert_email_sent(count=2)


@pytest.mark.os_agnostic
def test_invalid_message_is_rejected_and_not_recorded(spy: EmailSpy) -> None:
    """The double validates exactly like the real client."""
    with pytest.raises(ValidationError):
        spy.send(SENDER, "not-an-email", "S", text="x")

    spy.assert_no_emails_sent()


@pytest.mark.os_agnostic
def test_should_fail_reports_unsuccessful_result(spy: EmailSpy) -> None:
    """should_fail flips success while still recording."""
    spy.should_fail = True

    result = spy.send_text(SENDER, "a@example.com", "S", "x")

    assert result.success is False
    assert len(spy.deliveries) == 1


@pytest.mark.os_agnostic
def test_raise_exception_fires_after_recording(spy: EmailSpy) -> None:
    """A configured exception is raised once the delivery is captured."""
    spy.raise_exception = RateLimitError.exceeded(retry_after=5)

    with pytest.raises(RateLimitError):
        spy.send_text(SENDER, "a@example.com", "S", "x")

    assert spy.sent_to("a@example.com")


@pytest.mark.os_agnostic
def test_queries_filter_deliveries(spy: EmailSpy) -> None:
    """Deliveries can be looked up by recipient and subject fragment."""
    spy.send_text(SENDER, "a@example.com", "Order shipped", "x")
    spy.send_text(SENDER, "a@example.com", "Invoice", "x")
    spy.send_text(SENDER, "b@example.com", "Order delayed", "x")

    assert len(spy.deliveries_to("a@example.com")) == 2
    assert [d["to"] for d in spy.deliveries_with_subject("Order")] == ["a@example.com", "b@example.com"]
    spy.assert_email_sent_with_subject("Invoice")


@pytest.mark.os_agnostic
def test_assertion_helpers_fail_with_descriptive_messages(spy: EmailSpy) -> None:
    """Failed expectations raise AssertionError naming what was expected."""
    with pytest.raises(AssertionError, match="Expected 1 email"):
        spy.assert_email_sent()
    with pytest.raises(AssertionError, match="nobody@example.com"):
        spy.assert_email_sent_to("nobody@example.com")
    with pytest.raises(AssertionError, match="Welcome"):
        spy.assert_email_sent_with_subject("Welcome")


@pytest.mark.os_agnostic
def test_clear_resets_everything(spy: EmailSpy) -> None:
    """clear() forgets deliveries, settings, and the configured exception."""
    spy.send_text(SENDER, "a@example.com", "S", "x")
    spy.raise_exception = RuntimeError("boom")

    spy.clear()

    assert spy.last_delivery is None
    assert spy.raise_exception is None
    spy.assert_no_emails_sent()
