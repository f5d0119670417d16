"""Development server.

Runs single-threaded so each request (and the storage writes it makes)
completes before the next one starts.
"""

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(ROOT / "src" / "rfid_attendance"))

from rfid_attendance.main import create_app  # noqa: E402

app = create_app()

if __name__ == "__main__":
    app.run(
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "5000")),
        debug=bool(app.config.get("DEBUG")),
        threaded=False,
        use_reloader=False,
    )
