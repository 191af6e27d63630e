# vigenere/routers/cipher.py
from fastapi import APIRouter, UploadFile, File, Form, HTTPException, Request
from fastapi.responses import StreamingResponse
from typing import Optional
from vigenere.engine import Engine
from vigenere.errors import InvalidKey, InvalidConfiguration, MalformedCiphertext
import io, os, logging
import time, uuid

router = APIRouter()
logger = logging.getLogger(__name__)

DEFAULT_IV_LENGTH = int(os.getenv("VIGENERE_IV_LENGTH", "16"))
DEFAULT_WORD_SIZE = int(os.getenv("VIGENERE_WORD_SIZE", "1"))
RANDOM_SOURCE = os.getenv("VIGENERE_RANDOM", "secure")

STORE: dict[str, dict] = {}
STORE_TTL_SEC = int(os.getenv("VIGENERE_STORE_TTL", "600"))

def _put(data: bytes, mime: str = "application/octet-stream", filename: str = "data.bin") -> str:
    token = uuid.uuid4().hex
    STORE[token] = {"data": data, "mime": mime, "ts": time.time(), "filename": filename}
    now = time.time()
    dead = [k for k, v in STORE.items() if now - v["ts"] > STORE_TTL_SEC]
    for k in dead:
        STORE.pop(k, None)
    return token

def _engine(iv_length: Optional[int], word_size: Optional[int], widen: bool) -> Engine:
    try:
        return Engine(
            iv_length=DEFAULT_IV_LENGTH if iv_length is None else iv_length,
            word_size=DEFAULT_WORD_SIZE if word_size is None else word_size,
            widen=widen,
            random_source=RANDOM_SOURCE,
        )
    except InvalidConfiguration as e:
        raise HTTPException(422, str(e))

def _key_bytes(key: str, key_format: str) -> bytes:
    if key_format == "hex":
        try:
            return bytes.fromhex(key)
        except ValueError:
            raise HTTPException(422, "key is not valid hex")
    if key_format in ("utf-8", "utf8"):
        return key.encode("utf-8")
    raise HTTPException(422, "keyFormat must be utf-8 or hex")

def _url(request: Request, token: str) -> str:
    base = str(request.base_url).rstrip("/")
    return f"{base}/api/download/{token}"

@router.get("/download/{token}")
def download(token: str):
    item = STORE.get(token)
    if not item:
        raise HTTPException(404, "Not found")
    headers = {
        "Content-Disposition": f'attachment; filename="{item["filename"]}"',
        "Content-Length": str(len(item["data"])),
    }
    return StreamingResponse(io.BytesIO(item["data"]), media_type=item["mime"], headers=headers)

@router.post("/generate-key")
def generate_key(
    length: Optional[int] = Form(None),
    wordSize: Optional[int] = Form(None),
):
    """Random key as hex. Not secure unless the server uses the "secure" source."""
    engine = _engine(None, wordSize, False)
    try:
        key = engine.generate_key(length)
    except InvalidKey as e:
        raise HTTPException(422, str(e))
    return {"key": key.hex(), "length": len(key)}

@router.post("/encrypt")
async def encrypt(
    request: Request,
    plaintext: UploadFile = File(...),
    key: str = Form(...),
    keyFormat: str = Form("utf-8"),
    ivLength: Optional[int] = Form(None),
    wordSize: Optional[int] = Form(None),
    widen: bool = Form(False),
):
    engine = _engine(ivLength, wordSize, widen)
    kb = _key_bytes(key, keyFormat)
    data = await plaintext.read()
    try:
        out = engine.encrypt(data, kb)
    except InvalidKey as e:
        raise HTTPException(422, str(e))

    name = (plaintext.filename or "plaintext") + ".vig"
    token = _put(out, filename=name)
    logger.info("encrypted %d bytes -> %d bytes", len(data), len(out))
    return {
        "success": True,
        "ciphertextUrl": _url(request, token),
        "fileSize": len(out),
        "ivLength": engine.config.iv_length,
        "wordSize": engine.config.word_size,
        "message": "OK",
    }

@router.post("/decrypt")
async def decrypt(
    request: Request,
    ciphertext: UploadFile = File(...),
    key: str = Form(...),
    keyFormat: str = Form("utf-8"),
    ivLength: Optional[int] = Form(None),
    wordSize: Optional[int] = Form(None),
    widen: bool = Form(False),
):
    engine = _engine(ivLength, wordSize, widen)
    kb = _key_bytes(key, keyFormat)
    blob = await ciphertext.read()
    try:
        out = engine.decrypt(blob, kb)
    except InvalidKey as e:
        raise HTTPException(422, str(e))
    except MalformedCiphertext as e:
        raise HTTPException(400, f"Malformed ciphertext: {e}")

    # no integrity check: a wrong key still "succeeds" with garbage
    name = ciphertext.filename or "plaintext.bin"
    if name.endswith(".vig"):
        name = name[:-4]
    token = _put(out, filename=name)
    return {
        "success": True,
        "plaintextUrl": _url(request, token),
        "fileSizeBytes": len(out),
        "message": "OK",
    }
