"""
Server entrypoint.

    uvicorn tolopani.web.app:app --port 8000
"""
import uvicorn

from tolopani.services.api import create_app
from tolopani.services.config import load_settings

settings = load_settings()
app = create_app(settings)

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
