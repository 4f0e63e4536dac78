# =============================================================================
# SCTAPE/bridge.py — ROM → WAV bridge (JSON entry point + local HTTP server)
# =============================================================================
#
# Entry points:
#
#   convert_rom_b64_json(rom_b64) -> str
#       rom_b64 : base64-encoded 4K game image
#       returns : JSON string {wav_b64, sample_rate, n_samples, report}
#                 or {error, traceback} on failure — never raises.
#                 Suitable for calling from Pyodide (py.runPython).
#
#   create_app() -> flask.Flask
#       POST /py-bridge/convert   multipart field `rom` → audio/wav download
#       GET  /py-bridge/health    {"status": "ok"}
#
# Run the server:
#   python -m SCTAPE.bridge            (127.0.0.1:5000)
# =============================================================================

import base64
import io
import json
import os

from flask import Flask, request, send_file, jsonify

from SCTAPE.SGM.wav_writer import WAV_HEADER_SIZE
from SCTAPE.SMM.constants import SAMPLE_RATE
from SCTAPE.convert import convert, wav_path_for, UnsupportedSizeError


def convert_rom_b64(rom_b64):
    """
    Convert a base64 game image.

    Returns
    -------
    dict  {wav_b64, sample_rate, n_samples, report}
    """
    rom    = base64.b64decode(rom_b64)
    result = convert(rom)
    return {
        "wav_b64":     base64.b64encode(result.wav_bytes).decode("ascii"),
        "sample_rate": SAMPLE_RATE,
        "n_samples":   len(result.wav_bytes) - WAV_HEADER_SIZE,
        "report":      result.report,
    }


def convert_rom_b64_json(rom_b64):
    """
    Safe Pyodide entry point.  Always returns a JSON string.
    On error returns {error, traceback}.
    """
    try:
        return json.dumps(convert_rom_b64(rom_b64))
    except Exception as _exc:
        import traceback as _tb
        return json.dumps({
            "error":     str(_exc),
            "traceback": _tb.format_exc(),
        })


def create_app():
    app = Flask(__name__)

    @app.route('/py-bridge/convert', methods=['POST'])
    def convert_upload():
        if 'rom' not in request.files:
            return jsonify({'error': 'missing file field `rom`'}), 400
        f = request.files['rom']
        try:
            result = convert(f.read())
        except UnsupportedSizeError as e:
            return jsonify({'error': str(e)}), 400

        name = os.path.basename(wav_path_for(f.filename or 'rom.bin'))
        return send_file(
            io.BytesIO(result.wav_bytes),
            mimetype='audio/wav',
            as_attachment=True,
            download_name=name,
        )

    @app.route('/py-bridge/health', methods=['GET'])
    def health():
        return jsonify({'status': 'ok'})

    return app


if __name__ == '__main__':
    # Run on localhost:5000 by default
    create_app().run(host='127.0.0.1', port=5000)
