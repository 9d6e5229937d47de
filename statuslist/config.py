"""
Codec settings, optionally loaded from a YAML file:

    mtime: 1686912970
    compresslevel: 9
    strict: false
"""
from dataclasses import dataclass, fields

import yaml

from statuslist.codec import COMPRESS_LEVEL, GZIP_MTIME
from statuslist.errors import StatusListError


@dataclass(frozen=True)
class CodecConfig:
    # gzip header modification time, seconds since the epoch
    mtime: int = GZIP_MTIME
    compresslevel: int = COMPRESS_LEVEL
    # reject non-zero padding and length mismatches when decoding
    strict: bool = False

    def __post_init__(self):
        if not isinstance(self.mtime, int) or not 0 <= self.mtime < 2**32:
            raise StatusListError(f"mtime must fit in 32 bits, got {self.mtime!r}")
        if not isinstance(self.compresslevel, int) or not 0 <= self.compresslevel <= 9:
            raise StatusListError(
                f"compresslevel must be between 0 and 9, got {self.compresslevel!r}"
            )
        if not isinstance(self.strict, bool):
            raise StatusListError(f"strict must be a boolean, got {self.strict!r}")


DEFAULT_CONFIG = CodecConfig()


def load_config(config_path) -> CodecConfig:
    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}
    if not isinstance(config, dict):
        raise StatusListError(f"Config in {config_path} must be a mapping")

    known = {f.name for f in fields(CodecConfig)}
    unknown = set(config) - known
    if unknown:
        raise StatusListError(f"Unknown config keys: {', '.join(sorted(unknown))}")
    return CodecConfig(**config)
