from __future__ import annotations

import uvicorn

from moneytransfer.core.config import settings


def main() -> None:
    uvicorn.run("moneytransfer.main:app", host=settings.server_host, port=settings.server_port)


if __name__ == "__main__":
    main()
