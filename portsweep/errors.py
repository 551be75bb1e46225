class ResolveError(ValueError):
    """Raised when CLI input cannot be turned into a scan target."""


class HostResolutionError(ResolveError):
    def __init__(self, host: str, reason: str = ""):
        self.host = host
        msg = f"Could not resolve hostname '{host}'."
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class NoAddressError(ResolveError):
    def __init__(self, host: str):
        self.host = host
        super().__init__(f"Could not get ip for '{host}'.")


class InvalidPortFormatError(ResolveError):
    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Invalid port: {text!r}")


class PortOutOfRangeError(ResolveError):
    def __init__(self, port: int):
        self.port = port
        super().__init__(f"Port out of range: {port} (expected 0-65535)")
