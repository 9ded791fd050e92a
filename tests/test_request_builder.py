import pytest

from helpbridge import config, request_builder
from helpbridge.error_codes import TransportError
from helpbridge.models import SupportTicket

BOUNDARY = "----WebKitFormBoundaryq0qKH8apUNfyKGNp"


def _ticket(**overrides: str) -> SupportTicket:
    fields = {
        "name": "John Doe",
        "email": "john@example.com",
        "type": "2",
        "subject": "Test",
        "message": "Test message",
    }
    fields.update(overrides)
    return SupportTicket(**fields)


def test_build_ticket_url_appends_fixed_path() -> None:
    url = request_builder.build_ticket_url("https://mockserver.com")
    assert url == "https://mockserver.com/en/customer/create-ticket/"


@pytest.mark.parametrize(
    "base_url",
    ["", "not a url", "mockserver.com", "https://mock server.com", "https://[::1", "https://exa%zzmple.com", "http://"],
)
def test_build_ticket_url_rejects_invalid(base_url: str) -> None:
    with pytest.raises(TransportError) as excinfo:
        request_builder.build_ticket_url(base_url)
    assert excinfo.value == TransportError("Invalid URL")


def test_headers_match_browser_form_post() -> None:
    headers = request_builder.build_headers("https://mockserver.com")

    assert headers == {
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-GB,en;q=0.9",
        "Priority": "u=0, i",
        "User-Agent": (
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
            "(KHTML, like Gecko) Version/17.4.1 Safari/605.1.15"
        ),
        "Content-Type": f"multipart/form-data; boundary={BOUNDARY}",
        "Referer": "https://mockserver.com",
    }


def test_headers_do_not_leak_between_requests() -> None:
    first = request_builder.build_headers("https://one.example")
    first["Accept"] = "changed"

    second = request_builder.build_headers("https://two.example")
    assert second["Accept"] == config.COMMON_HEADERS["Accept"]
    assert second["Referer"] == "https://two.example"


def test_body_has_five_parts_in_order() -> None:
    body = request_builder.build_body(_ticket()).decode("utf-8")

    expected = (
        f"--{BOUNDARY}\r\n"
        'Content-Disposition: form-data; name="name"\r\n\r\nJohn Doe\r\n'
        f"--{BOUNDARY}\r\n"
        'Content-Disposition: form-data; name="from"\r\n\r\njohn@example.com\r\n'
        f"--{BOUNDARY}\r\n"
        'Content-Disposition: form-data; name="type"\r\n\r\n2\r\n'
        f"--{BOUNDARY}\r\n"
        'Content-Disposition: form-data; name="subject"\r\n\r\nTest\r\n'
        f"--{BOUNDARY}\r\n"
        'Content-Disposition: form-data; name="reply"\r\n\r\nTest message\r\n'
        f"--{BOUNDARY}--\r\n"
    )
    assert body == expected
    assert body.count(f"--{BOUNDARY}\r\n") == 5
    assert body.count("Content-Disposition: form-data;") == 5


def test_body_inserts_values_verbatim() -> None:
    message = "Lorem ipsum <b>dolor</b> & \"sit\"\nzażółć 🎫"
    body = request_builder.build_body(_ticket(message=message, name="a=b; c"))

    text = body.decode("utf-8")
    assert f'name="reply"\r\n\r\n{message}\r\n' in text
    assert 'name="name"\r\n\r\na=b; c\r\n' in text
    assert text.endswith(f"--{BOUNDARY}--\r\n")


def test_build_request_is_post_with_body() -> None:
    ticket = _ticket()
    request = request_builder.build_request(ticket, "https://mockserver.com")

    assert request.method == "POST"
    assert request.url == "https://mockserver.com/en/customer/create-ticket/"
    assert request.body == request_builder.build_body(ticket)
    assert request.headers["Referer"] == "https://mockserver.com"
