"""Exception definitions for pages-deploy API"""

from typing import Optional

from ..constants import ErrorCode


class PagesDeployError(Exception):
    """Base exception for pages-deploy"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class UnconfiguredSiteError(PagesDeployError):
    """Site identifier is not present in the registry"""

    def __init__(self, site_id: str):
        super().__init__("Site not configured for GitHub deployment",
                         ErrorCode.SITE_NOT_CONFIGURED)
        self.site_id = site_id


class ValidationError(PagesDeployError):
    """Validation error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.VALIDATION_FAILED)


class ConfigError(PagesDeployError):
    """Configuration error"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_FORMAT_ERROR)


class RemoteError(PagesDeployError):
    """Failure reported by, or while talking to, the content repository"""

    def __init__(self,
                 message: str,
                 cause: Optional[BaseException] = None,
                 status_code: Optional[int] = None,
                 error_code: str = ErrorCode.REMOTE_REQUEST_FAILED):
        super().__init__(message, error_code)
        self.cause = cause
        self.status_code = status_code


class RemoteNotFoundError(RemoteError):
    """Requested file or resource does not exist"""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        super().__init__(f"Not found: {path}", cause, 404, ErrorCode.REMOTE_NOT_FOUND)
        self.path = path


class ConflictError(RemoteError):
    """Write rejected because the expected revision is stale"""

    def __init__(self,
                 path: str,
                 expected_revision: Optional[str] = None,
                 cause: Optional[BaseException] = None,
                 status_code: Optional[int] = 409,
                 detail: Optional[str] = None):
        message = f"Revision conflict writing {path}"
        if expected_revision:
            message += f" (expected {expected_revision[:7]})"
        if detail:
            message += f": {detail}"
        super().__init__(message, cause, status_code, ErrorCode.REVISION_CONFLICT)
        self.path = path
        self.expected_revision = expected_revision


class RemoteAuthError(RemoteError):
    """Authentication or permission failure"""

    def __init__(self, message: str, cause: Optional[BaseException] = None,
                 status_code: Optional[int] = None):
        super().__init__(message, cause, status_code, ErrorCode.PERMISSION_DENIED)


class RateLimitError(RemoteError):
    """Remote API rate limit exhausted"""

    def __init__(self, message: str, cause: Optional[BaseException] = None,
                 status_code: Optional[int] = None,
                 retry_after: Optional[float] = None):
        super().__init__(message, cause, status_code, ErrorCode.RATE_LIMITED)
        self.retry_after = retry_after
