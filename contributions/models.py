from django.db import models

from .records import Contribution


class ContributionRecord(models.Model):
    """Local mirror of a document in the contribution collection."""

    email = models.EmailField(unique=True, db_index=True)
    # Newline-delimited free text, same shape as the Firestore documents
    patents = models.TextField(blank=True, default="")
    publications = models.TextField(blank=True, default="")
    conferences = models.TextField(blank=True, default="")
    events = models.TextField(blank=True, default="")

    updated_at = models.DateTimeField(auto_now=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["email"]

    def __str__(self):
        return self.email

    def to_contribution(self) -> Contribution:
        return Contribution.from_fields(
            self.email,
            {
                "patents": self.patents,
                "publications": self.publications,
                "conferences": self.conferences,
                "events": self.events,
            },
        )
