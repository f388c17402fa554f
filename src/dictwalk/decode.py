"""Transcript byte decoding with BOM sniffing and a Windows-1257 fallback."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

UTF16_LE_BOM = b"\xff\xfe"
UTF16_BE_BOM = b"\xfe\xff"


class DecodeError(ValueError):
    """Raised when bytes cannot be decoded with the attempted codec."""


def _strict_decode(data: bytes, codec: str, label: str) -> str:
    try:
        return data.decode(codec, errors="strict")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Failed to read bytes as {label}: \"{e}\"") from e


def decode_windows_1257(data: bytes) -> str:
    return _strict_decode(data, "cp1257", "Windows 1257")


def decode_utf16_le(data: bytes) -> str:
    return _strict_decode(data, "utf-16-le", "UTF-16LE")


def decode_utf16_be(data: bytes) -> str:
    return _strict_decode(data, "utf-16-be", "UTF-16BE")


def decode_bytes(data: bytes, path: str | Path | None = None) -> str:
    """Decode transcript bytes, trying UTF-8 first.

    Falls back to UTF-16 when a byte-order mark is present (the BOM itself
    is not part of the decoded text), and finally to Windows-1257 over the
    whole buffer. Only the last attempt's failure is raised.

    Raises:
        DecodeError: if even the Windows-1257 fallback fails.
    """
    where = path if path is not None else "<bytes>"
    try:
        return data.decode("utf-8", errors="strict")
    except UnicodeDecodeError as e:
        logger.debug(f"Failed to read {where} as UTF-8 ({e}), checking for a BOM")

    if data[:2] == UTF16_LE_BOM:
        logger.debug("0xFF 0xFE bytes detected, trying UTF-16LE")
        try:
            return decode_utf16_le(data[2:])
        except DecodeError as e:
            logger.debug(f"{e}; will try Windows 1257")
    elif data[:2] == UTF16_BE_BOM:
        logger.debug("0xFE 0xFF bytes detected, trying UTF-16BE")
        try:
            return decode_utf16_be(data[2:])
        except DecodeError as e:
            logger.debug(f"{e}; will try Windows 1257")
    else:
        logger.debug("No byte-order mark, trying Windows 1257")

    return decode_windows_1257(data)
