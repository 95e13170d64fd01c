class ConfigError(Exception):
    """The image source configuration is missing, unreadable or invalid."""


class TLSSetupError(Exception):
    """The TLS certificate or private key could not be loaded."""


class FetchError(Exception):
    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        self.detail = detail
        super().__init__(f"{url}: {detail}")
