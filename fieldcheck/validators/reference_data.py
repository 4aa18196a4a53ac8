"""Reference data — date-format tokens and file signatures.

Static tables only; the predicates and the MIME resolver read from here.
"""

# ──────────────────────────────────────────────────────────────────────
# DATE FORMAT TOKENS (format letters → strptime directives)
# ──────────────────────────────────────────────────────────────────────

# Non-padded tokens parse with the padded directive (strptime accepts both)
# and are rendered without padding, so "3/1/2021" round-trips under "n/j/Y".
DATE_FORMAT_TOKENS: dict[str, str] = {
    # Day
    "d": "%d",
    "j": "%d",
    "D": "%a",
    "l": "%A",
    # Month
    "m": "%m",
    "n": "%m",
    "M": "%b",
    "F": "%B",
    # Year
    "Y": "%Y",
    "y": "%y",
    # Time
    "H": "%H",
    "G": "%H",
    "h": "%I",
    "g": "%I",
    "i": "%M",
    "s": "%S",
    "A": "%p",
    "a": "%p",
}

# ──────────────────────────────────────────────────────────────────────
# FILE SIGNATURES (leading bytes → MIME type)
# ──────────────────────────────────────────────────────────────────────

# Longer signatures first so a specific match wins over a generic prefix.
MAGIC_BYTES: list[tuple[bytes, str]] = [
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1", "application/vnd.ms-office"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"7z\xbc\xaf\x27\x1c", "application/x-7z-compressed"),
    (b"%PDF-", "application/pdf"),
    (b"{\\rtf", "text/rtf"),
    (b"<?xml", "text/xml"),
    (b"PK\x03\x04", "application/zip"),
    (b"II*\x00", "image/tiff"),
    (b"MM\x00*", "image/tiff"),
    (b"OggS", "audio/ogg"),
    (b"%!PS", "application/postscript"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"ID3", "audio/mpeg"),
    (b"\x1f\x8b", "application/gzip"),
    (b"BM", "image/bmp"),
]

# RIFF containers carry their real type at offset 8.
RIFF_SUBTYPES: dict[bytes, str] = {
    b"WEBP": "image/webp",
    b"WAVE": "audio/wav",
    b"AVI ": "video/x-msvideo",
}

EMPTY_MIME_TYPE = "application/x-empty"
TEXT_MIME_TYPE = "text/plain"
BINARY_MIME_TYPE = "application/octet-stream"
