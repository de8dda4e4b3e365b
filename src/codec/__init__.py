"""
Codec utilities for transporting opaque tickets as compact strings.

Modules:
- compression: asymmetric deflate/inflate transform
- framing: standard base64 framing
- objects: secure object codec (serialize, compress, encrypt and back)
- errors: typed exceptions shared by the modules above
"""

__all__ = [
    "compression",
    "framing",
    "objects",
    "errors",
]
