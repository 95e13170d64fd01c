import ssl
from pathlib import Path

import structlog

from src.core.exceptions import TLSSetupError

logger = structlog.get_logger()


def load_tls_context(cert_path: str, key_path: str) -> ssl.SSLContext:
    """Build a server-side TLS context from a PEM certificate chain and key."""
    for name, path in (("certificate", cert_path), ("private key", key_path)):
        if not Path(path).is_file():
            raise TLSSetupError(f"TLS {name} file not found: {path}")

    context = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
    try:
        context.load_cert_chain(certfile=cert_path, keyfile=key_path)
    except (OSError, ssl.SSLError) as e:
        raise TLSSetupError(f"Unable to load TLS certificate/key: {e}") from e

    logger.info("tls_context_loaded", cert_path=cert_path, key_path=key_path)
    return context
