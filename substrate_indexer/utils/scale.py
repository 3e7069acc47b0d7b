# substrate_indexer/utils/scale.py
"""
Small helpers for the SCALE-encoded fragments found in digest items
"""

from typing import Optional, Union


def hex_to_bytes(value: Union[str, bytes, list, None]) -> bytes:
    if value is None:
        return b""
    if isinstance(value, bytes):
        return value
    if isinstance(value, list):
        return bytes(value)
    if value.startswith("0x"):
        value = value[2:]
    return bytes.fromhex(value)


def bytes_to_hex(value: Union[str, bytes, list, None]) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return "0x" + bytes(value).hex()


def decode_engine_id(value: Union[str, bytes, list, None]) -> Optional[str]:
    """Consensus engine ids are four ASCII bytes, e.g. b'aura' or 0x42414245 ('BABE')"""
    if value is None:
        return None
    if isinstance(value, str) and not value.startswith("0x"):
        return value
    raw = hex_to_bytes(value)
    try:
        return raw.decode("ascii")
    except UnicodeDecodeError:
        return bytes_to_hex(raw)


def decode_u32(data: bytes, offset: int = 0) -> int:
    return int.from_bytes(data[offset:offset + 4], "little")


def decode_u64(data: bytes, offset: int = 0) -> int:
    return int.from_bytes(data[offset:offset + 8], "little")
