import hmac
import secrets
import string
import time

ID_ALPHABET = string.digits + string.ascii_lowercase


def now_ms() -> int:
    return int(time.time() * 1000)


def generate_bundle_id(length: int = 8) -> str:
    """Return a random base-36 identifier of exactly ``length`` characters."""
    value = int.from_bytes(secrets.token_bytes(length), "big")
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(ID_ALPHABET[rem])
    rendered = "".join(reversed(digits))
    return rendered.rjust(length, "0")[:length]


def extract_api_token(x_api_key: str | None, authorization: str | None) -> str:
    header = x_api_key or authorization or ""
    if header.startswith("Bearer "):
        return header[len("Bearer "):].strip()
    return header


def api_key_matches(token: str, expected: str) -> bool:
    return hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))
