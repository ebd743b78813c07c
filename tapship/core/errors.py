"""Exit codes for the tapship CLI.

Every failure of a release run converges on one non-zero status. The kind
of failure is carried by the printed error, not by the exit code.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    - 0: Success
    - 1: Any error (bad manifest or config, missing credential or binary,
      archive, checksum or git failure, filesystem failure)
    """

    OK = 0
    ERROR = 1

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
