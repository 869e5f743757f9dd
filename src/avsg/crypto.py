"""Encryption used by the Steam release of Axiom Verge for its save files.

Save files are AES-128-CBC encrypted with PKCS#7 padding under a key and IV
that are baked into the game. Both are constants here; nothing about them is
configurable because the game does not support anything else.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path

from Crypto.Cipher import AES
from Crypto.Util.Padding import pad, unpad

from .errors import CipherError, SaveIOError

logger = logging.getLogger(__name__)


BLOCK_SIZE = AES.block_size

SAVEGAME_KEY = bytes([
    0xBA, 0xAD, 0xF0, 0x0D,
    0x00, 0x00, 0x00, 0x00,
    0x20, 0x30, 0x44, 0xC2,
    0x13, 0xE4, 0x1F, 0xFF,
])

SAVEGAME_IV = bytes([
    0xE5, 0xFF, 0xFF, 0xFF,
    0xE5, 0xBA, 0x07, 0x00,
    0xBA, 0xAD, 0xF0, 0x0D,
    0xFF, 0x00, 0xFF, 0x00,
])


def _cipher():
    # CBC cipher objects are stateful, a fresh one is needed per operation.
    return AES.new(SAVEGAME_KEY, AES.MODE_CBC, iv=SAVEGAME_IV)


def decode(data: bytes) -> bytes:
    """Decrypt ``data`` and strip its padding.

    Raises:
        CipherError: if ``data`` is not a whole number of blocks, or if the
            padding of the final block is inconsistent. Either means the file
            was not encrypted with the game's key.
    """
    if len(data) == 0 or len(data) % BLOCK_SIZE != 0:
        raise CipherError(
            f"Ciphertext length {len(data)} is not a positive multiple of {BLOCK_SIZE}"
        )
    plain = _cipher().decrypt(data)
    try:
        return unpad(plain, BLOCK_SIZE, style="pkcs7")
    except ValueError as e:
        raise CipherError(f"Bad padding after decryption: {e}") from e


def encode(data: bytes) -> bytes:
    """Pad and encrypt ``data``. Always succeeds."""
    return _cipher().encrypt(pad(data, BLOCK_SIZE, style="pkcs7"))


def read_file(path: os.PathLike | str) -> bytes:
    p = Path(path)
    try:
        with p.open("rb") as f:
            data = f.read()
    except OSError as e:
        raise SaveIOError(f"Unable to read {p}: {e.strerror or e}") from e
    logger.debug("Read %d bytes from %s", len(data), p)
    return data


def write_new_file(path: os.PathLike | str, data: bytes) -> None:
    """Write ``data`` to ``path``, refusing to replace an existing file."""
    p = Path(path)
    try:
        f = p.open("xb")
    except FileExistsError as e:
        raise SaveIOError(f"Refusing to overwrite existing file: {p}") from e
    except OSError as e:
        raise SaveIOError(f"Unable to write {p}: {e.strerror or e}") from e
    try:
        with f:
            f.write(data)
    except OSError as e:
        # The file is ours; do not leave a truncated copy behind.
        p.unlink(missing_ok=True)
        raise SaveIOError(f"Unable to write {p}: {e.strerror or e}") from e
    logger.debug("Wrote %d bytes to %s", len(data), p)


def decrypt_file(path: os.PathLike | str) -> bytes:
    """Read and decrypt a Steam save file."""
    return decode(read_file(path))


def encrypt_file(input_path: os.PathLike | str, output_path: os.PathLike | str) -> None:
    """Encrypt ``input_path`` into a new file at ``output_path``.

    The output is checked before the input is read so an existing file is
    never touched.
    """
    out = Path(output_path)
    if out.exists():
        raise SaveIOError(f"Refusing to overwrite existing file: {out}")
    data = encode(read_file(input_path))
    write_new_file(out, data)
    logger.info("Encrypted %s to %s", input_path, out)
