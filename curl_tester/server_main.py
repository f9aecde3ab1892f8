from __future__ import annotations

import logging

import uvicorn

from curl_tester.config import get_settings


def main() -> int:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logger = logging.getLogger("curl_tester.server_main")
    logger.info("server_starting host=%s port=%s env=%s", settings.host, settings.port, settings.app_env)

    uvicorn.run(
        "curl_tester.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
