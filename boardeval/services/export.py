"""CSV projection of the leaderboard."""

import csv
from io import StringIO

HEADERS = [
    "Rank", "Candidate ID", "First Name", "Last Name", "Email",
    "Application Avg", "Interview Avg", "Character Avg", "Composite Score", "Consistency %",
]


def _fmt(value, places=2):
    if value is None:
        return "N/A"
    return f"{value:.{places}f}"


def leaderboard_rows(leaderboard):
    for entry in leaderboard.entries:
        c = entry.candidate
        yield [
            entry.rank,
            c.candidate_number if c.candidate_number is not None else c.id,
            c.first_name,
            c.last_name,
            c.email or "",
            _fmt(entry.application.average),
            _fmt(entry.interview.average),
            _fmt(entry.character.average),
            _fmt(entry.composite),
            "N/A" if entry.consistency is None else entry.consistency,
        ]


def leaderboard_csv(leaderboard) -> str:
    buf = StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(HEADERS)
    writer.writerows(leaderboard_rows(leaderboard))
    return buf.getvalue()
