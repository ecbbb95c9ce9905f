import csv
import io

from django.http import HttpResponse

from .records import CATEGORY_KEYS

CSV_COLUMNS = ("email",) + CATEGORY_KEYS
CSV_HEADER = ",".join(CSV_COLUMNS)
CSV_FILENAME = "contributions.csv"


def _row(contribution):
    row = [contribution.email or ""]
    for key in CATEGORY_KEYS:
        row.append(contribution.text(key))
    return row


def contributions_to_csv(contributions) -> str:
    """
    Serialize contributions as CSV text.

    The header line is written bare; every data field is quoted with inner
    quotes doubled. Lines are joined with "\\n" and there is no trailing
    newline, so an empty input yields just the header.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerows(_row(c) for c in contributions)
    rows = buf.getvalue()
    if not rows:
        return CSV_HEADER
    # every row ends with the terminator; drop only the last one
    return CSV_HEADER + "\n" + rows[:-1]


def csv_download(contributions, filename: str = CSV_FILENAME) -> HttpResponse:
    response = HttpResponse(contributions_to_csv(contributions), content_type="text/csv")
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response
