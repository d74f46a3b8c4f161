from enum import Enum


class IrmType(str, Enum):
    GPCM2 = "gpcm2"
