import base64
import io
import json

import pytest

from SCTAPE.bridge import convert_rom_b64_json, create_app
from SCTAPE.convert import convert


@pytest.fixture
def client():
    app = create_app()
    app.config["TESTING"] = True
    return app.test_client()


def test_json_entry_point(address_rom):
    out = json.loads(convert_rom_b64_json(base64.b64encode(address_rom).decode()))
    wav = base64.b64decode(out["wav_b64"])
    assert wav == convert(address_rom).wav_bytes
    assert out["sample_rate"] == 44100
    assert out["n_samples"] == len(wav) - 44
    assert "\taddress: 1234" in out["report"]


def test_json_entry_point_reports_errors():
    out = json.loads(convert_rom_b64_json(base64.b64encode(bytes(5)).decode()))
    assert out["error"] == "unsupported size (5)"
    assert "UnsupportedSizeError" in out["traceback"]


def test_health(client):
    res = client.get("/py-bridge/health")
    assert res.status_code == 200
    assert res.get_json() == {"status": "ok"}


def test_convert_upload(client, address_rom):
    res = client.post(
        "/py-bridge/convert",
        data={"rom": (io.BytesIO(address_rom), "game.bin")},
        content_type="multipart/form-data",
    )
    assert res.status_code == 200
    assert res.mimetype == "audio/wav"
    assert "game.wav" in res.headers["Content-Disposition"]
    assert res.data == convert(address_rom).wav_bytes


def test_convert_upload_wrong_size(client):
    res = client.post(
        "/py-bridge/convert",
        data={"rom": (io.BytesIO(bytes(10)), "tiny.bin")},
        content_type="multipart/form-data",
    )
    assert res.status_code == 400
    assert res.get_json()["error"] == "unsupported size (10)"


def test_convert_upload_missing_field(client):
    res = client.post("/py-bridge/convert", data={}, content_type="multipart/form-data")
    assert res.status_code == 400
