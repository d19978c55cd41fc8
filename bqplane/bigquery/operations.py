"""
BigQuery job and table operations shared by the source and the sink.
"""

import logging
import uuid

from google.api_core.exceptions import GoogleAPICallError, NotFound
from google.auth.exceptions import GoogleAuthError
from google.cloud import bigquery

from ..exceptions import AuthenticationFailure, TransferError

logger = logging.getLogger(__name__)


def run_query_job(
    client: bigquery.Client,
    sql: str,
    failure: type[TransferError],
    labels: dict[str, str] | None = None,
):
    """
    Submit a standard SQL job under a fresh job id and block until it finishes.

    A unique job id per submission lets callers retry safely without
    colliding with an earlier attempt.

    Args:
        client: BigQuery client
        sql: Query or DML statement
        failure: Exception type raised when the job fails
        labels: Optional job labels

    Returns:
        The row iterator of the finished job

    Raises:
        failure: If the job is missing or reports an execution error
        AuthenticationFailure: If the client credentials cannot be refreshed
    """
    job_config = bigquery.QueryJobConfig(use_legacy_sql=False, labels=labels or {})
    job_id = str(uuid.uuid4())
    logger.debug(f"Submitting job {job_id}: {sql[:100]}")

    try:
        job = client.query(sql, job_config=job_config, job_id=job_id)
        rows = job.result()
    except NotFound as e:
        raise failure(f"Job {job_id} no longer exists: {e}") from e
    except GoogleAPICallError as e:
        raise failure(str(e)) from e
    except GoogleAuthError as e:
        raise AuthenticationFailure(f"Cannot authenticate job {job_id}: {e}") from e

    if job.error_result:
        raise failure(str(job.error_result))
    return rows


def table_exists(client: bigquery.Client, table_id: str) -> bool:
    """Check whether a table exists; any lookup failure counts as absent."""
    try:
        client.get_table(table_id)
        return True
    except NotFound:
        return False
    except Exception as e:
        logger.warning(f"Could not check table {table_id}: {e}")
        return False
