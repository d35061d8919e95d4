from bech32 import bech32_decode, bech32_encode, convertbits

from .errors import InvalidKey


def is_hex_len(s, n: int) -> bool:
    """ Return True if s is a hex string of length n """
    if not isinstance(s, str) or len(s) != n:
        return False
    try:
        bytes.fromhex(s)
        return True
    except ValueError:
        return False


def is_lower_hex(s, n: int) -> bool:
    """ NIP-01 ids, pubkeys and sigs are lowercase hex """
    return is_hex_len(s, n) and s == s.lower()


def is_32byte_hex(s: str | None) -> bool:
    if not s:
        return False
    return is_hex_len(s.strip().lower(), 64)


def require_32byte_hex(s: str | None, label: str) -> str:
    """
    Validate and return normalized lowercase 64-hex (32 bytes).
    """
    if not is_32byte_hex(s):
        raise InvalidKey(f"{label} must be 64-hex (32 bytes)")
    return s.strip().lower()


def decode_nip19(bech: str) -> tuple[str, bytes]:
    hrp, data = bech32_decode(bech)
    if hrp is None or data is None:
        raise InvalidKey("Invalid bech32 string")
    decoded = convertbits(data, 5, 8, False)
    if decoded is None:
        raise InvalidKey("convertbits failed")
    return hrp, bytes(decoded)


def encode_nip19(hrp: str, raw: bytes) -> str:
    data = convertbits(raw, 8, 5, True)
    if data is None:
        raise InvalidKey("convertbits failed")
    return bech32_encode(hrp, data)


def decode_nip19_key(bech: str, hrp: str) -> bytes:
    """
    Decode an npub1... / nsec1... string, checking the prefix and that it
    carries exactly 32 bytes.
    """
    got_hrp, data = decode_nip19((bech or "").strip())
    if got_hrp != hrp or len(data) != 32:
        raise InvalidKey(f"Invalid {hrp} (must decode to 32 bytes and hrp '{hrp}')")
    return data


def normalize_pubkey_input(s: str) -> str:
    """
    Accepts either:
      - 64-hex pubkey
      - npub1... (NIP-19)
    Returns 64-hex pubkey (lowercase).
    """
    s = (s or "").strip()

    # If user pasted hex already
    if is_32byte_hex(s):
        return s.lower()

    # If user pasted npub
    if s.startswith("npub1"):
        return decode_nip19_key(s, "npub").hex()

    raise InvalidKey("pubkey must be 64-hex or npub1...")
