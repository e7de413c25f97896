"""Bootstrap shared by the maintenance scripts."""

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable

from . import blobs, config, store

log = logging.getLogger("clientdb.runner")

LOG_FORMAT = "%(asctime)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None):
    logging.basicConfig(level=(level or config.LOG_LEVEL).upper(), format=LOG_FORMAT)


def open_store() -> store.FirestoreStore:
    return store.connect(config.GCP_PROJECT)


def open_blobs() -> blobs.BlobStore:
    if not config.STORAGE_BUCKET:
        raise store.StoreUnavailable("Storage bucket not configured")
    return blobs.connect(config.STORAGE_BUCKET)


def run(main: Callable[[], Awaitable[int | None]], verbose: bool = False):
    """Run an async script body and exit.

    Any exception ends the run with status 1; nothing is retried.
    """
    setup_logging("DEBUG" if verbose else None)
    try:
        code = asyncio.run(main())
    except KeyboardInterrupt:
        log.warning("Interrupted")
        sys.exit(130)
    except store.StoreUnavailable as e:
        log.error("%s", e)
        sys.exit(1)
    except Exception:
        log.exception("Run aborted")
        sys.exit(1)
    sys.exit(code or 0)
