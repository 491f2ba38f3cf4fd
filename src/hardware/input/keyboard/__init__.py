from .key_decoder import KeyDecoder

__all__ = [
    "KeyDecoder",
]
