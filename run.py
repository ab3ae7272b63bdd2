"""
Development entry point. In production run:
    uvicorn posadmin.app:app --host 0.0.0.0 --port 8000
"""

import uvicorn

from posadmin.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "posadmin.app:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.debug,
    )
