import os

from coloredlogs import install
from logging import getLogger, DEBUG

install(level=DEBUG)
logger = getLogger("tests")

import rctsea

logger.info("rctsea Version: %s" % rctsea.__version__)

SOURCE_DIR = os.path.dirname(__file__)
sample_file_path = lambda *args: os.path.join(SOURCE_DIR, *args)
TEMP_DIR = sample_file_path(".temp")

# tests/sea/Forest Frontiers.SEA
# Plaintext byte i is (i * 31 + (i >> 8)) & 0xFF. The trailer is the byte sum of the plaintext.
GOLDEN_SEA_NAME = "Forest Frontiers.SEA"
GOLDEN_SEA_SIZE = 5000
GOLDEN_SEA_CHECKSUM = 0x0009B83C
golden_plaintext = lambda: bytes(
    (i * 31 + (i >> 8)) & 0xFF for i in range(GOLDEN_SEA_SIZE)
)


class NamedDict(dict):
    def __getattribute__(self, name: str):
        try:
            return super().__getattribute__(name)
        except AttributeError:
            return self.get(name, None)
