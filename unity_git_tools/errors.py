"""Error taxonomy.  Each error carries the exit code the CLI reports for it."""

from __future__ import annotations

from pathlib import Path


class GitSetupError(Exception):
    """Base class for failures that abort a unity-git command."""

    exit_code = 1


class GitAbsent(GitSetupError):
    """The project root has no ``.git`` directory; writes are refused."""

    exit_code = 1

    def __init__(self, root: Path) -> None:
        self.root = root
        super().__init__(
            f"No .git directory in {root}. Run 'git init' first; "
            "nothing was written."
        )


class UnknownSnippetError(GitSetupError):
    exit_code = 1

    def __init__(self, names: list[str], available: list[str]) -> None:
        self.names = names
        self.available = available
        super().__init__(
            f"Unknown snippet(s): {', '.join(names)}. "
            f"Available: {', '.join(available) or '(none)'}"
        )


class IOFailure(GitSetupError):
    """A filesystem operation on *path* failed."""

    exit_code = 2

    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"I/O failure on {path}: {reason}")


class SettingsFormatError(GitSetupError):
    """A Unity settings asset cannot be read or edited as text."""

    exit_code = 2

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class EncodeFailure(GitSetupError):
    """Content has characters the target encoding cannot represent."""

    exit_code = 2

    def __init__(self, path: Path, encoding: str, cause: UnicodeEncodeError) -> None:
        self.path = path
        self.encoding = encoding
        self.cause = cause
        super().__init__(
            f"Cannot encode {path} as {encoding}: {cause.reason} "
            f"at position {cause.start}; nothing was written"
        )


class FetchError(GitSetupError):
    """Downloading the ignore template failed."""

    exit_code = 3


class NetworkError(FetchError):
    """Transport-level failure: refused connection, DNS, timeout."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"<NetworkError> {message}")


class HTTPStatusError(FetchError):
    """The server answered with anything other than 200."""

    def __init__(self, code: int, url: str = "") -> None:
        self.code = code
        self.url = url
        super().__init__(f"<Response Error> responseCode: {code}")


class ConfigError(GitSetupError):
    """unity-git.yaml holds a value the command cannot use."""

    exit_code = 1
