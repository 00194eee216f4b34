# summarizer_api/utils/io.py
from pathlib import Path

def decode_transcript_bytes(data: bytes | None) -> str:
    """Uploaded .txt -> text. UTF-8, BOM and NULs dropped, undecodable bytes ignored."""
    if not data:
        return ""
    text = data.decode("utf-8", errors="ignore")
    return text.lstrip("\ufeff").replace("\x00", "")

def is_txt_upload(filename: str | None, mime: str | None = None) -> bool:
    ext = Path((filename or "").strip().lower()).suffix
    if ext:
        return ext == ".txt"
    # some browsers leave the name bare; trust an explicit text/plain
    return (mime or "").strip().lower().startswith("text/plain")
