class AvsgError(Exception):
    """Base error for save file handling."""


class CipherError(AvsgError):
    """Raised when ciphertext has a bad length or bad padding (wrong key or corrupt file)."""


class SaveIOError(AvsgError):
    """Raised when a file cannot be read, or an output file already exists."""


class DecodeError(AvsgError):
    """Raised when the XML document does not match the save data schema."""


class Utf8Error(AvsgError):
    """Raised when decrypted bytes are not valid UTF-8 text."""


class SettingsError(AvsgError):
    """Raised when a settings file cannot be parsed or fails validation."""
