import csv
import io

from contributions.exports import CSV_HEADER, contributions_to_csv, csv_download
from contributions.records import Contribution


def test_empty_export_is_just_the_header():
    assert contributions_to_csv([]) == "email,patents,publications,conferences,events"


def test_every_field_is_quoted_and_quotes_are_doubled():
    c = Contribution.from_fields("r@example.com", {"patents": 'He said "hi"'})
    text = contributions_to_csv([c])
    header, row = text.split("\n", 1)
    assert header == CSV_HEADER
    assert row == '"r@example.com","He said ""hi""","","",""'


def test_rows_are_newline_joined_without_trailing_newline():
    rows = [Contribution("a@example.com"), Contribution("b@example.com")]
    text = contributions_to_csv(rows)
    assert text == (
        "email,patents,publications,conferences,events\n"
        '"a@example.com","","","",""\n'
        '"b@example.com","","","",""'
    )


def test_export_parses_back_with_standard_csv_reader():
    c = Contribution.from_fields(
        "r@example.com",
        {
            "patents": 'He said "hi"',
            "publications": "Paper one, with comma\nPaper two",
            "conferences": None,
            "events": "Workshop",
        },
    )
    parsed = list(csv.reader(io.StringIO(contributions_to_csv([c]))))
    assert parsed[0] == ["email", "patents", "publications", "conferences", "events"]
    assert parsed[1] == [
        "r@example.com",
        'He said "hi"',
        "Paper one, with comma\nPaper two",
        "",
        "Workshop",
    ]
    assert len(parsed) == 2


def test_csv_download_response():
    response = csv_download([Contribution("r@example.com")])
    assert response["Content-Type"] == "text/csv"
    assert response["Content-Disposition"] == 'attachment; filename="contributions.csv"'
    assert response.content.decode("utf-8").startswith(CSV_HEADER + "\n")


def test_export_round_trips_stored_text():
    original = "  Paper A\n\nPaper B  "
    c = Contribution.from_fields("r@example.com", {"publications": original, "events": r"E1\nE2"})
    parsed = list(csv.reader(io.StringIO(contributions_to_csv([c]))))
    assert parsed[1][2] == original
    assert parsed[1][4] == r"E1\nE2"
