"""Helpers for reading and displaying parsed messages."""

from email import policy as email_policy
from email.message import EmailMessage, Message
from email.parser import BytesHeaderParser
from email.policy import Policy
from pathlib import Path

SUMMARY_HEADERS = ("Date", "From", "To", "Cc", "Subject")


def parse_header_file(path: Path, policy: Policy = email_policy.default) -> Message:
    """Parse only the header block of the message file at ``path``."""
    with open(path, "rb") as f:
        return BytesHeaderParser(policy=policy).parse(f)


def extract_body_text(msg: Message) -> str:
    """Extract the plain text body of a parsed message.

    Prefers text/plain parts. Falls back to empty string if no text found.
    """
    if isinstance(msg, EmailMessage):
        part = msg.get_body(preferencelist=("plain",))
        if part is None:
            return ""
        try:
            body = part.get_content()
        except (LookupError, UnicodeError):
            return ""
        return body if isinstance(body, str) else ""

    # Messages parsed with the compat32 policy
    for part in msg.walk():
        if part.get_content_type() == "text/plain":
            payload = part.get_payload(decode=True) or b""
            charset = part.get_content_charset() or "utf-8"
            try:
                return payload.decode(charset, errors="replace")
            except LookupError:
                return payload.decode("utf-8", errors="replace")
    return ""


def summary_headers(msg: Message) -> list[tuple[str, str]]:
    """The headers worth showing in a short listing, in display order."""
    return [(name, str(msg[name])) for name in SUMMARY_HEADERS if msg[name] is not None]
