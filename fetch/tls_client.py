import ssl
import logging
import platform

# Cipher string used when retrying servers with outdated TLS setups
RELAXED_CIPHERS = "DEFAULT@SECLEVEL=1"

def relaxed_ssl_context() -> ssl.SSLContext:
    """
    Builds an SSL context for a second attempt at sites with broken TLS.

    Certificate and hostname verification are disabled. On Linux the OpenSSL
    security level is lowered as well, since distributions ship with a strict
    default that rejects many older servers.

    Returns:
        ssl.SSLContext usable as httpx's ``verify`` argument
    """
    logger = logging.getLogger(__name__)
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE

    if platform.system() == "Linux":
        try:
            context.set_ciphers(RELAXED_CIPHERS)
        except ssl.SSLError as e:
            logger.debug(f"Could not apply cipher list {RELAXED_CIPHERS}: {e}")

    return context
