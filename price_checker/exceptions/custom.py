class NotConfiguredError(Exception):
    def __init__(self, site_code: str):
        self.site_code = site_code
        self.message = "Site not configured properly"
        super().__init__(f"{self.message}: {site_code}")


class SiteNotFoundError(Exception):
    def __init__(self, site_code: str | None = None):
        self.site_code = site_code
        self.message = "Site not configured"
        super().__init__(self.message)


class UpstreamError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InvalidRequestError(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class RateLimitError(Exception):
    def __init__(self, client_ip: str):
        self.client_ip = client_ip
        super().__init__(f"Rate limit exceeded for {client_ip}")
