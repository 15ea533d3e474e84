import os
from dataclasses import dataclass
from logging import getLogger
from typing import Callable

from rctsea.crypto.SEA import EncryptionKey, get_encryption_key, decrypt

logger = getLogger(__name__)

# [payload, encrypted][4 bytes: checksum, u32le]
SEA_CHECKSUM_SIZE = 4

ChecksumFunc = Callable[[bytes], int]


class SEAInvalidInputSizeException(Exception):
    needed: int
    current: int

    def __init__(self, needed, current):
        self.needed = needed
        self.current = current
        super().__init__(
            f"Needed at least {needed} bytes for the checksum trailer, but only {current} bytes available."
        )

    def __reduce__(self):
        return self.__class__, (self.needed, self.current)


class SEAChecksumMismatchException(Exception):
    expected: int
    actual: int

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(
            "Checksum mismatch. Stored %08X, computed %08X" % (expected, actual)
        )

    def __reduce__(self):
        return self.__class__, (self.expected, self.actual)


@dataclass
class SEAFile:
    name: str
    key: EncryptionKey
    data: bytearray
    checksum: int
    # None if never verified
    checksum_ok: bool | None = None


def split_checksum(buffer: bytes) -> tuple[bytearray, int]:
    """Splits a raw SEA buffer into its encrypted payload and the stored checksum.

    Args:
        buffer (bytes): Raw file contents. Not modified.

    Raises:
        SEAInvalidInputSizeException: If the buffer can't hold the checksum trailer.

    Returns:
        (bytearray, int): A copy of the payload, and the checksum as a little endian u32
    """
    if len(buffer) < SEA_CHECKSUM_SIZE:
        raise SEAInvalidInputSizeException(SEA_CHECKSUM_SIZE, len(buffer))
    size = len(buffer) - SEA_CHECKSUM_SIZE
    checksum = int.from_bytes(buffer[size:], "little")
    return bytearray(buffer[:size]), checksum


def decrypt_sea(filename: str | bytes, buffer: bytes) -> bytearray:
    """Decrypts a SEA container.

    Args:
        filename (str | bytes): File name or path. Only the base name is used for the key.
        buffer (bytes): Raw file contents, checksum trailer included.

    Raises:
        SEAInvalidInputSizeException: If the buffer is shorter than the checksum trailer.

    Returns:
        bytearray: Decrypted payload. The checksum is dropped.
    """
    return read_sea(filename, buffer).data


def read_sea(
    filename: str | bytes,
    buffer: bytes,
    checksum_func: ChecksumFunc = None,
    strict: bool = False,
) -> SEAFile:
    """Decrypts a SEA container, keeping the stored checksum around.

    The checksum algorithm of the format is not known. Pass ``checksum_func`` to verify
    against one; otherwise the result is left unverified (``checksum_ok`` is None).

    Args:
        filename (str | bytes): File name or path. Only the base name is used for the key.
        buffer (bytes): Raw file contents, checksum trailer included.
        checksum_func (ChecksumFunc, optional): Computes the checksum of the decrypted payload. Defaults to None.
        strict (bool, optional): Raise on checksum mismatch instead of warning. Defaults to False.

    Raises:
        SEAInvalidInputSizeException: If the buffer is shorter than the checksum trailer.
        SEAChecksumMismatchException: On mismatch, if ``strict`` is set.

    Returns:
        SEAFile: The decrypted container
    """
    name = os.path.basename(filename)
    payload, checksum = split_checksum(buffer)
    key = get_encryption_key(name)
    logger.debug(
        "%s: key=(%08X, %08X), payload=%d bytes, checksum=%08X",
        name,
        key.seed0,
        key.seed1,
        len(payload),
        checksum,
    )
    result = SEAFile(
        name=os.fsdecode(name), key=key, data=decrypt(payload, key), checksum=checksum
    )
    if checksum_func:
        actual = checksum_func(bytes(result.data)) & 0xFFFFFFFF
        result.checksum_ok = actual == checksum
        if not result.checksum_ok:
            if strict:
                raise SEAChecksumMismatchException(checksum, actual)
            logger.warning(
                "%s: checksum mismatch (stored %08X, computed %08X). Data may be corrupt",
                result.name,
                checksum,
                actual,
            )
    return result


def read_sea_file(path: str | os.PathLike, **kwargs) -> SEAFile:
    """Reads and decrypts a SEA file from disk. See ``read_sea`` for the keyword arguments."""
    with open(path, "rb") as f:
        buffer = f.read()
    return read_sea(os.path.basename(os.fspath(path)), buffer, **kwargs)
