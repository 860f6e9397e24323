"""
Fake Gemini server for testing GeminiGateway without network access or a real key.

Serves POST /v1beta/models/<model>:generateContent on port 9100.
Image requests get the next phrase from a fixed script; text-only requests
(summaries) get one sentence back.

Usage:
    python tolopani/scripts/fake_gemini_server.py
"""

import itertools
import time
import uvicorn
from fastapi import FastAPI, Request

app = FastAPI(title="fake-gemini-server")

_PHRASES = itertools.cycle(["Halo", "halo", "", "Terima kasih", "Sama sama"])


def _reply(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


@app.post("/v1beta/models/{model_action}")
async def generate_content(model_action: str, request: Request):
    body = await request.json()
    parts = body["contents"][0]["parts"]
    has_image = any("inline_data" in p for p in parts)
    time.sleep(0.3)  # model latency
    if has_image:
        text = next(_PHRASES)
        print(f"[gemini] {model_action} image -> {text!r}")
        return _reply(text)
    print(f"[gemini] {model_action} summary")
    return _reply("Halo, terima kasih, sama sama.")


if __name__ == "__main__":
    print("Fake Gemini server starting on http://localhost:9100")
    uvicorn.run(app, host="0.0.0.0", port=9100)
