from __future__ import annotations

import logging
import os

from . import crypto
from .errors import Utf8Error
from .savedata import SaveData, decode

logger = logging.getLogger(__name__)


def read_save_bytes(path: os.PathLike | str, *, unencrypted: bool = False) -> bytes:
    """Return the plaintext bytes of a save file.

    Steam saves are encrypted; other releases store the XML as is, which is
    what ``unencrypted`` is for.
    """
    if unencrypted:
        return crypto.read_file(path)
    return crypto.decrypt_file(path)


def decode_text(data: bytes) -> str:
    try:
        # utf-8-sig drops the byte order mark .NET writers like to emit
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise Utf8Error(f"Save data is not valid UTF-8 (byte {e.start})") from e


def load_save(path: os.PathLike | str, *, unencrypted: bool = False, strict: bool = True) -> SaveData:
    """Read, decrypt and decode a save file in one go."""
    data = read_save_bytes(path, unencrypted=unencrypted)
    savedata = decode(decode_text(data), strict=strict)
    logger.info("Loaded save for %s from %s", savedata.player_name or "<unnamed>", path)
    return savedata
