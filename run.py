# run.py

import uvicorn
from tds.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "tds.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        workers=1,
    )
