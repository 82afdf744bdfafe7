"""
Site rebuild trigger. Inserting a row into ``Build`` starts a deployment
of the public site; no build status is tracked here.
"""
import logging

from .base import BaseService, DeploymentError
from ..api.client import BackendAPIError


LOGGER = logging.getLogger(__name__)

BUILD_TABLE = 'Build'

_RLS_MARKERS = ('permission denied', 'row-level security')


class DeploymentService(BaseService):

    def trigger(self) -> str:
        """
        Request a rebuild of the public site.

        Returns:
            Success message

        Raises:
            DeploymentError: The insert was refused; permission failures get a policy hint
        """
        LOGGER.info(self._t('deploy.started'))
        try:
            self.client.insert(BUILD_TABLE, [{}], returning=False)
        except BackendAPIError as e:
            message = self._t('deploy.failed', error=e.message)
            lowered = (e.message or '').lower()
            if any(marker in lowered for marker in _RLS_MARKERS):
                message = f"{message}\n\n{self._t('deploy.rls_hint')}"
            LOGGER.error(message)
            raise DeploymentError(message, cause=e) from e

        message = self._t('deploy.success')
        LOGGER.info(message)
        return message
