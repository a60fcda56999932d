"""
Challenge message composer.

Renders a Challenge into the canonical sign-in text the wallet signs, and
parses that text back. parse() is the exact left inverse of compose().

Message layout (one field per line, no trailing newline):

    {domain} wants you to sign in with your {Chain} account:
    {address}

    {statement}

    URI: {uri}
    Version: {version}
    Chain ID: {network}
    Nonce: {nonce}
    Issued At: {issued_at}
    Expiration Time: {expiration_time}
"""

import re
from datetime import datetime, timezone

from sceau.domain.entities.challenge import Challenge
from sceau.domain.exceptions import MalformedMessageError

HEADER_PATTERN = re.compile(
    r"^(?P<domain>\S+) wants you to sign in with your (?P<chain>\S+) account:$"
)
TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")

FIELD_KEYS = (
    ("uri", "URI"),
    ("version", "Version"),
    ("network", "Chain ID"),
    ("nonce", "Nonce"),
    ("issued_at", "Issued At"),
    ("expiration_time", "Expiration Time"),
)

LINE_COUNT = 5 + len(FIELD_KEYS)


def chain_label(network: str) -> str:
    """Human label for a network id ("solana-devnet" -> "Solana")."""
    return network.split("-", 1)[0].capitalize()


def format_timestamp(value: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and 'Z' suffix."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S") + f".{value.microsecond // 1000:03d}Z"


def parse_timestamp(text: str) -> datetime:
    """
    Parse a timestamp produced by format_timestamp().

    Raises:
        ValueError: If text is not in the canonical form
    """
    if not TIMESTAMP_PATTERN.match(text):
        raise ValueError(f"Non-canonical timestamp: {text!r}")
    parsed = datetime.strptime(text[:-1], "%Y-%m-%dT%H:%M:%S.%f")
    return parsed.replace(tzinfo=timezone.utc)


def compose(challenge: Challenge) -> str:
    """
    Render challenge into canonical message text.

    Args:
        challenge: Validated challenge

    Returns:
        Message text, byte-for-byte reproducible from the same fields
    """
    values = {
        "uri": challenge.uri,
        "version": challenge.version,
        "network": challenge.network,
        "nonce": challenge.nonce,
        "issued_at": format_timestamp(challenge.issued_at),
        "expiration_time": format_timestamp(challenge.expiration_time),
    }

    lines = [
        f"{challenge.domain} wants you to sign in with your "
        f"{chain_label(challenge.network)} account:",
        challenge.address,
        "",
        challenge.statement,
        "",
    ]
    lines.extend(f"{label}: {values[name]}" for name, label in FIELD_KEYS)
    return "\n".join(lines)


def parse(message: str) -> Challenge:
    """
    Parse canonical message text back into challenge fields.

    Only used to locate the nonce; security decisions compare against the
    stored challenge, never against parsed values.

    Args:
        message: Message text as signed by the wallet

    Returns:
        Challenge carrying the parsed fields

    Raises:
        MalformedMessageError: If text does not follow the grammar
    """
    lines = message.split("\n")
    if len(lines) != LINE_COUNT:
        raise MalformedMessageError(
            f"expected {LINE_COUNT} lines, got {len(lines)}"
        )

    header = HEADER_PATTERN.match(lines[0])
    if header is None:
        raise MalformedMessageError("invalid header line")

    if lines[2] != "" or lines[4] != "":
        raise MalformedMessageError("missing blank separator line")

    values = {}
    for line, (name, label) in zip(lines[5:], FIELD_KEYS):
        prefix = f"{label}: "
        if not line.startswith(prefix):
            raise MalformedMessageError(f"expected '{label}' field")
        values[name] = line[len(prefix):]

    if header.group("chain") != chain_label(values["network"]):
        raise MalformedMessageError("chain label does not match Chain ID")

    try:
        return Challenge(
            address=lines[1],
            network=values["network"],
            domain=header.group("domain"),
            uri=values["uri"],
            statement=lines[3],
            nonce=values["nonce"],
            issued_at=parse_timestamp(values["issued_at"]),
            expiration_time=parse_timestamp(values["expiration_time"]),
            version=values["version"],
        )
    except ValueError as e:
        raise MalformedMessageError(str(e)) from e
