"""
Codecs for consent tokens
Matrix compression, wire shape discrimination and JSON/base64 envelopes
"""

from .compression import CompressedMatrix, EnabledDisabled, compress_consents, expand_consents
from .envelope import dump_json, load_json, encode_base64, decode_base64
from .shape import WireShape, detect_wire_shape

__all__ = [
    "CompressedMatrix",
    "EnabledDisabled",
    "compress_consents",
    "expand_consents",
    "dump_json",
    "load_json",
    "encode_base64",
    "decode_base64",
    "WireShape",
    "detect_wire_shape",
]
