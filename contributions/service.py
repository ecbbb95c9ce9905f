import logging

import requests

from .client import FirestoreError
from .store import ContributionStore

logger = logging.getLogger(__name__)


def fetch_contribution(store: ContributionStore, email: str):
    """Fetch the contribution record for one user.

    Returns a Contribution or None. A missing document and a failed fetch both
    come back as None; failures are logged, never raised.
    """
    if not email:
        logger.debug("fetch_contribution skipped: empty email")
        return None
    try:
        record = store.get(email)
    except (FirestoreError, requests.RequestException) as e:
        logger.warning("Failed to fetch contributions for %s: %s", email, str(e))
        return None
    if record is None:
        logger.info("No contribution document for %s", email)
    return record


def list_contributions(store: ContributionStore) -> list:
    try:
        return store.all()
    except (FirestoreError, requests.RequestException) as e:
        logger.warning("Failed to list contributions: %s", str(e))
        return []
