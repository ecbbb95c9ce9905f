import logging

import requests
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from contributions.client import FirestoreClient, FirestoreError
from contributions.models import ContributionRecord
from contributions.records import CATEGORY_KEYS, raw_text
from contributions.store import DEFAULT_COLLECTION

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Copies contribution documents from Firestore into the local ContributionRecord table."

    def add_arguments(self, parser):
        parser.add_argument(
            "--collection",
            default=getattr(settings, "CONTRIBUTIONS_COLLECTION", DEFAULT_COLLECTION),
            help="Firestore collection to read.",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Count documents without writing anything.",
        )

    def handle(self, *args, **options):
        collection = options["collection"]
        dry_run = options["dry_run"]

        client = FirestoreClient.from_settings(settings)
        if not client.project_id:
            client.close()
            raise CommandError("FIREBASE_PROJECT_ID is not configured.")

        self.stdout.write(f"Syncing from collection '{collection}'...")
        count = 0
        try:
            for email, fields in client.list_documents(collection):
                if not email:
                    continue
                count += 1
                if dry_run:
                    continue
                defaults = {
                    # Stored text as-is; splitting happens when records are read
                    key: raw_text(fields.get(key))
                    for key in CATEGORY_KEYS
                }
                ContributionRecord.objects.update_or_create(email=email, defaults=defaults)
        except (FirestoreError, requests.RequestException) as e:
            logger.exception("Contribution sync failed")
            raise CommandError(f"Error during sync: {e}") from e
        finally:
            client.close()

        if dry_run:
            self.stdout.write(self.style.SUCCESS(f"Found {count} documents (dry run, nothing written)."))
        else:
            self.stdout.write(self.style.SUCCESS(f"Successfully synced {count} contributions."))
