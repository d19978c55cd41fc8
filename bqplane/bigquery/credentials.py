"""
Credential resolution for BigQuery clients.

Picks one of three strategies, in priority order:
- impersonate a service account using ambient credentials
- load a service account key file
- use ambient (application default) credentials
"""

import json
import logging

import google.auth
from google.auth import impersonated_credentials
from google.auth.credentials import Credentials
from google.auth.exceptions import GoogleAuthError
from google.cloud import bigquery
from google.oauth2 import service_account

from ..exceptions import AuthenticationFailure
from ..params import RequestParams

IAM_SCOPE = "https://www.googleapis.com/auth/iam"
BIGQUERY_SCOPE = "https://www.googleapis.com/auth/bigquery"
DEFAULT_TOKEN_LIFETIME = 300


class CredentialResolver:
    """Turns request parameters into an authenticated BigQuery client."""

    def __init__(self, token_lifetime: int = DEFAULT_TOKEN_LIFETIME) -> None:
        self.token_lifetime = token_lifetime
        self.logger = logging.getLogger(self.__class__.__name__)

    def resolve_credentials(self, params: RequestParams) -> Credentials:
        """
        Resolve credentials for the given parameters.

        Args:
            params: Request parameters holding the auth selectors

        Returns:
            Google credentials scoped for BigQuery

        Raises:
            AuthenticationFailure: If credentials cannot be loaded or derived
        """
        try:
            if params.service_account_name:
                return self._impersonated(params.service_account_name)
            if params.service_account_file:
                return self._from_key_file(params.service_account_file)
            credentials, _ = google.auth.default(scopes=[BIGQUERY_SCOPE])
            self.logger.debug("Using application default credentials")
            return credentials
        except GoogleAuthError as e:
            raise AuthenticationFailure(f"Cannot resolve credentials: {e}") from e

    def create_client(self, params: RequestParams) -> bigquery.Client:
        """Create a BigQuery client bound to the configured project."""
        credentials = self.resolve_credentials(params)
        try:
            return bigquery.Client(project=params.project, credentials=credentials)
        except GoogleAuthError as e:
            raise AuthenticationFailure(f"Cannot create BigQuery client: {e}") from e

    def _impersonated(self, target_principal: str) -> Credentials:
        self.logger.debug(f"Impersonating service account {target_principal}")
        source_credentials, _ = google.auth.default(scopes=[IAM_SCOPE])
        # Token refresh is handled by the credentials object itself
        return impersonated_credentials.Credentials(
            source_credentials=source_credentials,
            target_principal=target_principal,
            target_scopes=[BIGQUERY_SCOPE],
            lifetime=self.token_lifetime,
        )

    def _from_key_file(self, path: str) -> Credentials:
        self.logger.debug(f"Loading service account key file {path}")
        try:
            with open(path, encoding="utf-8") as f:
                info = json.load(f)
            if not isinstance(info, dict):
                raise AuthenticationFailure(
                    f"Service account key file {path} must contain a JSON object"
                )
            return service_account.Credentials.from_service_account_info(
                info, scopes=[BIGQUERY_SCOPE]
            )
        except (OSError, ValueError) as e:
            raise AuthenticationFailure(
                f"Cannot load service account key file {path}: {e}"
            ) from e
