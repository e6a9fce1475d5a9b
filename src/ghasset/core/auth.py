"""
Credential Providers
====================

Sources of the bearer token attached to attachment downloads.

The default provider asks an already-authenticated GitHub CLI for its token
(``gh auth token``). Providers are passed to the downloader explicitly, so
tests and embedding applications can substitute their own.
"""

import subprocess
from typing import List, Optional, Protocol

from ghasset.core.errors import AuthError
from ghasset.core.logger import get_logger

logger = get_logger(__name__)

LOGIN_HINT = "Run 'gh auth login' to authenticate the GitHub CLI."


class CredentialProvider(Protocol):
    """Anything that can hand out a GitHub token."""

    def get_token(self) -> str:
        """
        Return a non-empty token.

        Raises:
            AuthError: If no token is available
        """
        ...


class StaticCredentialProvider:
    """Provider returning a token supplied up front."""

    def __init__(self, token: str) -> None:
        self._token = (token or "").strip()

    def get_token(self) -> str:
        if not self._token:
            raise AuthError("No GitHub token was provided.", hint=LOGIN_HINT)
        return self._token

    def __repr__(self) -> str:
        return "StaticCredentialProvider(token=***)"


class GhCliCredentialProvider:
    """
    Provider that shells out to the GitHub CLI.

    Args:
        executable: Name or path of the ``gh`` binary
        hostname: GitHub host to request a token for (None = gh default)
        timeout: Seconds to wait for ``gh`` before giving up

    Example:
        >>> provider = GhCliCredentialProvider()
        >>> token = provider.get_token()  # raises AuthError when logged out
    """

    def __init__(
        self,
        executable: str = "gh",
        hostname: Optional[str] = None,
        timeout: float = 30,
    ) -> None:
        self.executable = executable
        self.hostname = hostname
        self.timeout = timeout

    def command(self) -> List[str]:
        """The command line used to fetch the token."""
        cmd = [self.executable, "auth", "token"]
        if self.hostname:
            cmd.extend(["--hostname", self.hostname])
        return cmd

    def get_token(self) -> str:
        cmd = self.command()
        logger.debug(f"Requesting token with: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise AuthError(
                f"Failed to execute gh command: {e}.",
                hint="Make sure GitHub CLI is installed and authenticated.",
            ) from e
        except subprocess.TimeoutExpired as e:
            raise AuthError(
                f"GitHub CLI did not return a token within {self.timeout} seconds.",
            ) from e
        except OSError as e:
            raise AuthError(f"Failed to execute gh command: {e}") from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip() or f"exit status {result.returncode}"
            raise AuthError(f"GitHub CLI authentication failed: {stderr}", hint=LOGIN_HINT)

        token = (result.stdout or "").strip()
        if not token:
            raise AuthError("GitHub CLI token is empty.", hint=LOGIN_HINT)

        return token
