"""Run the service with uvicorn: ``python -m kube_suitability``."""

import uvicorn

from kube_suitability.settings import Settings


def main() -> None:
    settings = Settings()
    uvicorn.run(
        "kube_suitability.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
