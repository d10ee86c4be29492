# backend/run.py
import sys

import uvicorn

from flipbook.config import settings


def main():
    try:
        uvicorn.run(
            "flipbook.main:app",
            host=settings.HOST,
            port=settings.PORT,
            proxy_headers=settings.TRUST_PROXY,
            forwarded_allow_ips="*" if settings.TRUST_PROXY else None
        )
    except Exception as e:
        print(f"Error starting the server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
