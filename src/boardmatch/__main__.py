"""Allow running with: python -m boardmatch"""

import uvicorn

from .config import settings

uvicorn.run(
    "boardmatch.main:app",
    host=settings.host,
    port=settings.port,
    reload=settings.reload,
)
