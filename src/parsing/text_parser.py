"""Plain text decoding."""


def parse_text(file_content: bytes) -> str:
    """Decode UTF-8 text, replacing invalid byte sequences."""
    return file_content.decode("utf-8", errors="replace")
