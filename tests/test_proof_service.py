import base64
from io import BytesIO

import pytest
from PIL import Image
from werkzeug.datastructures import FileStorage

from studio.errors import ValidationError
from studio.services.proof_service import ProofService


def png_bytes():
    buffer = BytesIO()
    Image.new("RGB", (4, 4), color=(200, 10, 10)).save(buffer, format="PNG")
    return buffer.getvalue()


def upload(content, filename):
    return FileStorage(stream=BytesIO(content), filename=filename)


def test_png_upload_is_accepted():
    proof = ProofService.from_upload(upload(png_bytes(), "bukti.png"))
    assert proof.mimetype == "image/png"
    assert ProofService.to_data_uri(proof).startswith("data:image/png;base64,")


def test_pdf_upload_is_accepted():
    proof = ProofService.from_upload(upload(b"%PDF-1.4\n%test\n", "bukti.pdf"))
    assert proof.mimetype == "application/pdf"


def test_missing_upload_is_none():
    assert ProofService.from_upload(None) is None
    assert ProofService.from_data_url("") is None


def test_oversize_upload_is_rejected():
    with pytest.raises(ValidationError) as excinfo:
        ProofService.from_upload(upload(b"%PDF-" + b"0" * 64, "bukti.pdf"), max_bytes=32)
    assert excinfo.value.message == "Ukuran file tidak boleh melebihi 10MB."


def test_wrong_extension_is_rejected():
    with pytest.raises(ValidationError):
        ProofService.from_upload(upload(b"hello", "bukti.txt"))


def test_spoofed_type_is_rejected():
    with pytest.raises(ValidationError):
        ProofService.from_upload(upload(b"%PDF-1.4", "bukti.png"))
    with pytest.raises(ValidationError):
        ProofService.from_upload(upload(b"not an image", "bukti.jpg"))


def test_data_url_proof():
    encoded = base64.b64encode(png_bytes()).decode("ascii")
    proof = ProofService.from_data_url(f"data:image/png;base64,{encoded}")
    assert proof.mimetype == "image/png"

    with pytest.raises(ValidationError):
        ProofService.from_data_url("data:image/png;base64,!!!")
    with pytest.raises(ValidationError):
        ProofService.from_data_url("https://example.com/bukti.png")
