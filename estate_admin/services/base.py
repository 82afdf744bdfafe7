"""
Service plumbing: errors surfaced to staff, save results, step runner.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from ..api.client import BackendClient, BackendAPIError
from ..api.config import Config
from ..i18n import normalize_language, translate
from ..images.processor import InvalidImageError


LOGGER = logging.getLogger(__name__)


class ServiceError(Exception):
    """An operation failed; ``message`` is ready to show to staff"""
    def __init__(self, message: str, cause: Exception = None):
        self.message = message
        self.cause = cause
        super().__init__(self.message)


class NotFoundError(ServiceError):
    """The record being edited does not exist"""


class SaveError(ServiceError):
    """A save pipeline step failed; steps before it are not rolled back"""
    def __init__(self, message: str, step: str, cause: Exception = None):
        self.step = step
        super().__init__(message, cause)


class DeploymentError(ServiceError):
    """The rebuild trigger was refused"""


@dataclass
class SaveResult:
    """Outcome of a successful save"""
    record: Any
    message: str
    warnings: List[str] = field(default_factory=list)


class BaseService:
    """Holds the injected backend client and the message language"""

    def __init__(self, client: BackendClient, lang: Optional[str] = None):
        self.client = client
        self.lang = normalize_language(lang or Config.DEFAULT_LANGUAGE)

    def _t(self, key: str, **vars: Any) -> str:
        return translate(key, self.lang, **vars)

    def _run_step(self, step: str, call: Callable[[], Any], message_key: str, **vars: Any) -> Any:
        """
        Run one save step, turning backend/upload failures into SaveError.

        Args:
            step: Step name (for logs and SaveError.step)
            call: The work to do
            message_key: i18n key of the failure message; receives ``error``
            **vars: Extra template variables for the message
        """
        LOGGER.info("Save step: %s", step)
        try:
            return call()
        except BackendAPIError as e:
            message = self._t(message_key, error=e.message, **vars)
            LOGGER.error(message)
            raise SaveError(message, step=step, cause=e) from e
        except InvalidImageError as e:
            message = self._t('upload.invalid_image', name=e.name)
            LOGGER.error(message)
            raise SaveError(message, step=step, cause=e) from e

    def _fail(self, message_key: str, error: BackendAPIError, **vars: Any) -> ServiceError:
        message = self._t(message_key, error=error.message, **vars)
        LOGGER.error(message)
        return ServiceError(message, cause=error)
