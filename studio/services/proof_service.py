import base64
import binascii
from dataclasses import dataclass
from io import BytesIO

from PIL import Image
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from studio.errors import ValidationError

ALLOWED_EXTENSIONS = {"png": "image/png", "jpg": "image/jpeg", "jpeg": "image/jpeg", "pdf": "application/pdf"}
ALLOWED_MIMETYPES = {"image/png", "image/jpeg", "application/pdf"}
IMAGE_FORMATS = {"PNG": "image/png", "JPEG": "image/jpeg"}
DEFAULT_MAX_BYTES = 10 * 1024 * 1024

TOO_LARGE_MESSAGE = "Ukuran file tidak boleh melebihi 10MB."
BAD_TYPE_MESSAGE = "Format bukti pembayaran harus PNG, JPG, atau PDF."


@dataclass(frozen=True)
class UploadedProof:
    filename: str
    mimetype: str
    content: bytes


class ProofService:
    @staticmethod
    def _sniff(content):
        """Work out the real type from the bytes to avoid extension spoofing."""
        if content.startswith(b"%PDF-"):
            return "application/pdf"
        try:
            img = Image.open(BytesIO(content))
            img.verify()
        except Exception as exc:
            raise ValidationError("File bukti pembayaran tidak valid.") from exc
        mimetype = IMAGE_FORMATS.get(img.format)
        if mimetype is None:
            raise ValidationError(BAD_TYPE_MESSAGE)
        return mimetype

    @classmethod
    def _build(cls, filename, declared_type, content, max_bytes):
        if len(content) > max_bytes:
            raise ValidationError(TOO_LARGE_MESSAGE)
        if not content:
            raise ValidationError("File bukti pembayaran kosong.")
        if declared_type not in ALLOWED_MIMETYPES:
            raise ValidationError(BAD_TYPE_MESSAGE)
        actual_type = cls._sniff(content)
        if actual_type != declared_type:
            raise ValidationError(BAD_TYPE_MESSAGE)
        return UploadedProof(filename=filename, mimetype=actual_type, content=content)

    @classmethod
    def from_upload(cls, storage: FileStorage, max_bytes=DEFAULT_MAX_BYTES):
        if not storage or not storage.filename:
            return None

        filename = secure_filename(storage.filename)
        extension = filename.rsplit(".", 1)[1].lower() if "." in filename else ""
        if extension not in ALLOWED_EXTENSIONS:
            raise ValidationError(BAD_TYPE_MESSAGE)

        # Read one byte past the cap so oversize files are detected without loading them whole.
        content = storage.stream.read(max_bytes + 1)
        return cls._build(filename, ALLOWED_EXTENSIONS[extension], content, max_bytes)

    @classmethod
    def from_data_url(cls, data_url, max_bytes=DEFAULT_MAX_BYTES):
        if not data_url:
            return None
        if not data_url.startswith("data:") or ";base64," not in data_url:
            raise ValidationError("File bukti pembayaran tidak valid.")

        header, encoded = data_url.split(";base64,", 1)
        declared_type = header[len("data:"):].lower()
        # base64 inflates by 4/3; reject before decoding anything huge.
        if len(encoded) > (max_bytes * 4) // 3 + 4:
            raise ValidationError(TOO_LARGE_MESSAGE)
        try:
            content = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValidationError("File bukti pembayaran tidak valid.") from exc
        return cls._build("bukti-dp", declared_type, content, max_bytes)

    @staticmethod
    def to_data_uri(proof):
        encoded = base64.b64encode(proof.content).decode("ascii")
        return f"data:{proof.mimetype};base64,{encoded}"
